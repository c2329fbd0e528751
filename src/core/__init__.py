"""Core configuration and shared utilities."""

from dotenv import load_dotenv

from .config import Settings, get_settings
from .errors import (
    AuditPipelineError,
    EmissionFailure,
    IncompleteDataError,
    MissingAnalysisError,
)

load_dotenv()

__all__ = [
    "AuditPipelineError",
    "EmissionFailure",
    "IncompleteDataError",
    "MissingAnalysisError",
    "Settings",
    "get_settings",
]
