"""Schema package for external and internal contracts."""

from .requests import AuditRunOptions
from .responses import AuditRunResult

__all__ = ["AuditRunOptions", "AuditRunResult"]
