"""Base formatter interface."""

from abc import ABC, abstractmethod
from pathlib import Path

from schemas.internal.runs import AuditRunRecord


class BaseFormatter(ABC):
    """Abstract base class for report formatters.

    Formatters are pure: the same record always yields the same bytes, and
    nothing is written to disk here.
    """

    name: str = ""
    extension: str = ""
    media_type: str = "text/plain"

    def __init__(self, template_dir: Path | None = None):
        """
        Initialize formatter.

        Args:
            template_dir: Directory containing templates for this formatter
        """
        self.template_dir = template_dir or self._get_default_template_dir()

    @abstractmethod
    def format(self, record: AuditRunRecord) -> str:
        """
        Format an audit run into the target format.

        Args:
            record: Audit run record; drafts are scored before rendering

        Returns:
            Formatted content
        """
        pass

    def emit(self, record: AuditRunRecord) -> bytes:
        """Encode the formatted content as UTF-8."""
        return self.format(record).encode("utf-8")

    def _get_default_template_dir(self) -> Path:
        """Get default template directory for this formatter."""
        # Default to templates/default in the reporting module
        module_dir = Path(__file__).parent.parent
        return module_dir / "templates" / "default"
