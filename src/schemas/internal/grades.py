"""Grade and certificate tier bands shared by models and scoring."""

from __future__ import annotations

from typing import Literal, Optional

Grade = Literal["A", "B", "C", "D", "F"]
CertificateTier = Literal["PLATINUM", "GOLD", "SILVER", "BRONZE", "NEEDS_IMPROVEMENT"]

GRADE_BANDS: tuple[tuple[float, Grade], ...] = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)

TIER_BANDS: tuple[tuple[float, CertificateTier], ...] = (
    (95, "PLATINUM"),
    (85, "GOLD"),
    (70, "SILVER"),
    (50, "BRONZE"),
)

GRADE_ORDER: tuple[Grade, ...] = ("F", "D", "C", "B", "A")


def grade_for(score: Optional[float]) -> Optional[Grade]:
    """Map a 0-100 score to a letter grade; None stays None."""
    if score is None:
        return None
    for threshold, grade in GRADE_BANDS:
        if score >= threshold:
            return grade
    return "F"


def tier_for(score: Optional[float]) -> Optional[CertificateTier]:
    """Map a 0-100 score to a certificate tier; None stays None."""
    if score is None:
        return None
    for threshold, tier in TIER_BANDS:
        if score >= threshold:
            return tier
    return "NEEDS_IMPROVEMENT"


def strip_derived(data: object, *keys: str) -> object:
    """Drop derived keys from raw model input so dumped models re-validate."""
    if isinstance(data, dict) and any(key in data for key in keys):
        return {key: value for key, value in data.items() if key not in keys}
    return data


__all__ = [
    "CertificateTier",
    "GRADE_BANDS",
    "GRADE_ORDER",
    "Grade",
    "TIER_BANDS",
    "grade_for",
    "strip_derived",
    "tier_for",
]
