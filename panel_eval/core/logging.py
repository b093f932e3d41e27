"""structlog configuration shared by the pytest plugin and embedding callers."""

import structlog

LOG_FORMATS = ("console", "json")


def configure_logging(log_format: str = "console") -> None:
    """Configure structlog for console or JSON rendering.

    Raises:
        ValueError: if log_format is not one of LOG_FORMATS.
    """
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        raise ValueError(
            f"Invalid log format: {log_format!r}. Must be 'console' or 'json'."
        )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )
