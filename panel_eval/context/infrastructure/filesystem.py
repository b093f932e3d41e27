"""FileDomainContextLoader — reads domain context documents from a directory."""

from pathlib import Path

from panel_eval.context.infrastructure.errors import DomainContextLoadError


class FileDomainContextLoader:
    """Loads ``<context_dir>/<domain>.md`` followed by every ``<context_dir>/<domain>/*.md``.

    Files within the domain directory are read in sorted name order and each
    is introduced by a ``### <stem>`` heading so the judge can cite it.
    """

    def __init__(self, context_dir: Path) -> None:
        self._context_dir = context_dir

    def load(self, domain: str) -> str:
        """Return the concatenated context for a domain.

        Raises:
            DomainContextLoadError: if no file exists for the domain or one
                cannot be read as UTF-8 text.
        """
        overview = self._context_dir / f"{domain}.md"
        domain_dir = self._context_dir / domain
        documents = sorted(domain_dir.glob("*.md")) if domain_dir.is_dir() else []

        if not overview.is_file() and not documents:
            raise DomainContextLoadError(
                domain=domain,
                reason=f"neither {overview} nor {domain_dir}/*.md exist",
            )

        sections = [f"# Domain Context: {domain}"]
        try:
            if overview.is_file():
                sections.append(overview.read_text(encoding="utf-8").strip())
            for document in documents:
                body = document.read_text(encoding="utf-8").strip()
                sections.append(f"### {document.stem}\n\n{body}")
        except (OSError, UnicodeDecodeError) as exc:
            raise DomainContextLoadError(domain=domain, reason=str(exc)) from exc

        return "\n\n".join(sections) + "\n"
