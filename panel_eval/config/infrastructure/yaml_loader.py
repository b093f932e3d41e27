"""YAML config loader — parses, interpolates env vars, validates, and emits observer events."""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from panel_eval.config.domain.config import HarnessConfig
from panel_eval.config.domain.observer import ConfigObserver
from panel_eval.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)
from panel_eval.invocation.infrastructure.registry import SUPPORTED_INVOKER_TYPES

_ENV_REFERENCE = re.compile(
    r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>[^}]*))?\}"
)


class YamlConfigLoader:
    """Loads, interpolates, validates, and returns a HarnessConfig from a YAML file."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> HarnessConfig:
        """Load a HarnessConfig.

        Relative ``context_dir`` and ``artifacts_dir`` are resolved against
        the directory containing the config file.

        Raises:
            ConfigLoadError: if the file cannot be read or is not valid YAML.
            MissingEnvVarsError: if any ${ENV_VAR} reference without a default is
                unset (every such variable is reported at once).
            ConfigValidationError: if the schema is violated, an invoker type is
                unknown, or a domain has no rubric.
        """
        raw = _parse_yaml(path=path)
        interpolated = _interpolate_env(raw=raw, environ=os.environ)
        _check_invoker_types(interpolated=interpolated)
        cfg = _build_config(resolved=interpolated, base_dir=path.parent)
        _emit_warnings(cfg=cfg, observer=self._observer)
        self._observer.config_loaded(name=cfg.name, domains=list(cfg.domains))
        return cfg


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigLoadError(path=path, reason=exc.strerror or str(exc)) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason=f"invalid YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigLoadError(path=path, reason="top level must be a mapping")
    return raw


class _EnvResolver:
    """Substitutes ``${NAME}`` and ``${NAME:-default}`` in one walk over the raw tree.

    Unset names without a default are left in place and recorded in
    ``missing`` in first-seen order.
    """

    def __init__(self, environ: Mapping[str, str]) -> None:
        self._environ = environ
        self.missing: list[str] = []

    def resolve(self, value: Any) -> Any:
        if isinstance(value, str):
            return _ENV_REFERENCE.sub(self._substitute, value)
        if isinstance(value, list):
            return [self.resolve(item) for item in value]
        if isinstance(value, dict):
            return {key: self.resolve(item) for key, item in value.items()}
        return value

    def _substitute(self, match: re.Match[str]) -> str:
        name = match["name"]
        if name in self._environ:
            return self._environ[name]
        if match["default"] is not None:
            return match["default"]
        if name not in self.missing:
            self.missing.append(name)
        return match[0]


def _interpolate_env(raw: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    resolver = _EnvResolver(environ=environ)
    resolved = resolver.resolve(raw)
    if resolver.missing:
        raise MissingEnvVarsError(resolver.missing)
    return resolved


def _check_invoker_types(interpolated: dict[str, Any]) -> None:
    """Reject unknown invoker types, listing every offending section at once."""
    unknown: list[str] = []
    for section in ("agent", "judge"):
        data = interpolated.get(section)
        if isinstance(data, dict) and "type" in data:
            if data["type"] not in SUPPORTED_INVOKER_TYPES:
                unknown.append(f"{section}.type '{data['type']}' is not supported")
    if unknown:
        supported = ", ".join(sorted(SUPPORTED_INVOKER_TYPES))
        raise ConfigValidationError(f"{'; '.join(unknown)} (supported: {supported})")


def _build_config(resolved: dict[str, Any], base_dir: Path) -> HarnessConfig:
    try:
        cfg = HarnessConfig.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc
    return cfg.model_copy(
        update={
            "context_dir": _resolve(cfg.context_dir, base_dir),
            "artifacts_dir": _resolve(cfg.artifacts_dir, base_dir),
        }
    )


def _resolve(path: Path, base_dir: Path) -> Path:
    return path if path.is_absolute() else base_dir / path


def _emit_warnings(cfg: HarnessConfig, observer: ConfigObserver) -> None:
    if cfg.judge.temperature > 0.0:
        observer.config_judge_temperature_warning(cfg.judge.temperature)
