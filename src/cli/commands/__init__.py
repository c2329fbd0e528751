"""CLI command groups."""

__all__ = [
    "config",
    "report",
    "run",
    "validate",
]
