"""Normalization of raw analyzer output into typed audit records."""

from normalization.decoders import CATEGORY_SPECS, CategorySpec, decode_category
from normalization.normalizer import NormalizedRun, normalize_page, normalize_pages, normalize_run

__all__ = [
    "CATEGORY_SPECS",
    "CategorySpec",
    "NormalizedRun",
    "decode_category",
    "normalize_page",
    "normalize_pages",
    "normalize_run",
]
