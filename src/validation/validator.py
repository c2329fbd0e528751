"""Policy-driven validation gate between normalization and scoring."""

from __future__ import annotations

import logging
from typing import Iterable

from core.errors import IncompleteDataError, MissingAnalysisError
from schemas.internal.categories import CATEGORY_ORDER
from schemas.internal.runs import AuditRunRecord
from schemas.internal.validation import ValidationPolicy, ValidationReport
from validation.structure import check_duplicates, check_required, check_structure

logger = logging.getLogger(__name__)


def validate(
    record: AuditRunRecord,
    policy: ValidationPolicy = "tolerant",
    required_categories: Iterable[str] = (),
) -> ValidationReport:
    """Check ``record`` without mutating it.

    Under ``fail_fast`` structural violations and missing required categories
    are errors; under ``tolerant`` they are warnings and the record is valid.
    Duplicate URLs are always warnings.
    """
    if policy not in ("fail_fast", "tolerant"):
        raise ValueError(f"unknown validation policy: {policy!r}")
    required = list(dict.fromkeys(required_categories))
    unknown = [category for category in required if category not in CATEGORY_ORDER]
    if unknown:
        raise ValueError(f"unknown required categories: {', '.join(unknown)}")

    problems = [*check_structure(record), *check_required(record, required)]
    advisories = check_duplicates(record)

    if policy == "fail_fast":
        report = ValidationReport(
            policy=policy,
            valid=not problems,
            errors=problems,
            warnings=advisories,
        )
    else:
        report = ValidationReport(
            policy=policy,
            valid=True,
            errors=[],
            warnings=[*problems, *advisories],
        )

    logger.info(
        "Validation (%s): valid=%s errors=%d warnings=%d",
        policy,
        report.valid,
        len(report.errors),
        len(report.warnings),
    )
    return report


def enforce(report: ValidationReport) -> None:
    """Raise the matching pipeline error when ``report`` holds errors."""
    if not report.errors:
        return
    missing = [entry for entry in report.errors if entry.kind == "missing_analysis"]
    if missing:
        raise MissingAnalysisError(
            f"{len(missing)} required analysis result(s) missing: "
            + "; ".join(str(entry) for entry in missing[:5]),
            report.errors,
        )
    raise IncompleteDataError(
        f"{len(report.errors)} structural problem(s): "
        + "; ".join(str(entry) for entry in report.errors[:5]),
        report.errors,
    )


__all__ = ["enforce", "validate"]
