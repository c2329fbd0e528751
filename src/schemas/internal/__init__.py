"""Internal schema definitions."""

from .categories import (  # noqa: F401
    CATEGORY_LABELS,
    CATEGORY_ORDER,
    Category,
    CategoryResult,
)
from .findings import SEVERITY_ORDER, Issue, Severity  # noqa: F401
from .grades import CertificateTier, Grade, grade_for, tier_for  # noqa: F401
from .pages import PAGE_STATUSES, PageRecord, PageStatus  # noqa: F401
from .runs import AuditRunRecord, RunMetadata, Summary  # noqa: F401
from .validation import (  # noqa: F401
    CompletenessReport,
    NormalizationWarning,
    PageCompleteness,
    ValidationEntry,
    ValidationPolicy,
    ValidationReport,
)

__all__ = [
    "AuditRunRecord",
    "CATEGORY_LABELS",
    "CATEGORY_ORDER",
    "Category",
    "CategoryResult",
    "CertificateTier",
    "CompletenessReport",
    "Grade",
    "Issue",
    "NormalizationWarning",
    "PAGE_STATUSES",
    "PageCompleteness",
    "PageRecord",
    "PageStatus",
    "RunMetadata",
    "SEVERITY_ORDER",
    "Severity",
    "Summary",
    "ValidationEntry",
    "ValidationPolicy",
    "ValidationReport",
    "grade_for",
    "tier_for",
]
