"""Record validation and completeness reporting."""

from validation.completeness import (
    CompletenessConfig,
    check_page_completeness,
    compute_completeness,
)
from validation.validator import enforce, validate

__all__ = [
    "CompletenessConfig",
    "check_page_completeness",
    "compute_completeness",
    "enforce",
    "validate",
]
