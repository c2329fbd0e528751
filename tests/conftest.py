# tests/conftest.py
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from core.config import get_settings
from schemas.internal.categories import CategoryResult
from schemas.internal.findings import Issue
from schemas.internal.pages import PageRecord
from schemas.internal.runs import AuditRunRecord, RunMetadata
from scoring.engine import finalize_run


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path: Path):
    """Keep the developer's environment and .env files out of every test."""
    for name in (
        "AUDIT_VALIDATION_POLICY",
        "AUDIT_REQUIRED_CATEGORIES",
        "AUDIT_NORMALIZE_CONCURRENCY",
        "AUDIT_OUTPUT_FORMATS",
        "AUDIT_OUTPUT_DIR",
        "AUDIT_BADGE_DIR",
        "AUDIT_INCLUDE_PAGE_DETAIL",
        "AUDIT_LOG_LEVEL",
        "AUDIT_TOOL_VERSION",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_page(
    url: str = "https://example.com/",
    *,
    status: str = "passed",
    duration_ms: float | None = 1200.0,
    scores: dict[str, float | None] | None = None,
    issues: dict[str, list[Issue]] | None = None,
    metrics: dict[str, dict[str, float]] | None = None,
    title: str | None = "Example",
    reason: str | None = None,
) -> PageRecord:
    categories: dict[str, CategoryResult] = {}
    keys = set(scores or {}) | set(issues or {}) | set(metrics or {})
    for category in keys:
        categories[category] = CategoryResult(
            category=category,
            score=(scores or {}).get(category),
            issues=(issues or {}).get(category, []),
            metrics=(metrics or {}).get(category, {}),
        )
    return PageRecord(
        url=url,
        title=title,
        status=status,
        duration_ms=duration_ms,
        categories=categories,
        reason=reason,
    )


def make_record(pages: list[PageRecord], *, warnings: list[str] | None = None) -> AuditRunRecord:
    return AuditRunRecord(
        metadata=RunMetadata(
            timestamp=datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc),
            source_url="https://example.com/sitemap.xml",
            duration_ms=5400.0,
            tool_version="2.1.0",
            standard="WCAG2AA",
        ),
        pages=pages,
        warnings=warnings or [],
    )


@pytest.fixture
def sample_record() -> AuditRunRecord:
    """Finalized run: one clean page, one failing page with issues, one skipped page."""
    home = make_page(
        "https://example.com/",
        scores={
            "accessibility": 96,
            "performance": 88,
            "seo": 92,
            "contentWeight": 75,
            "mobileFriendliness": 100,
        },
        metrics={
            "performance": {"largestContentfulPaint": 1850.0, "cumulativeLayoutShift": 0.05},
            "contentWeight": {"totalSize": 1048576.0},
        },
        title="Home",
    )
    contact = make_page(
        "https://example.com/contact",
        status="failed",
        scores={"accessibility": 62, "seo": 70},
        issues={
            "accessibility": [
                Issue(
                    severity="error",
                    code="WCAG2AA.Principle1.Guideline1_1.1_1_1.H37",
                    message="Img element missing an alt attribute.",
                    selector="#main > img.hero",
                    remediation="Add a descriptive alt attribute.",
                ),
                Issue(
                    severity="warning",
                    code="color-contrast",
                    message="Text contrast is below 4.5:1",
                    selector="a.nav-link",
                ),
            ],
            "seo": [Issue(severity="notice", code="meta-description", message="Meta description is short")],
        },
        title="Contact",
    )
    legacy = make_page(
        "https://example.com/legacy.pdf",
        status="skipped",
        duration_ms=0.0,
        title=None,
        reason="non-HTML content",
    )
    return finalize_run(make_record([home, contact, legacy]))


@pytest.fixture
def raw_run() -> dict[str, Any]:
    """Raw analyzer output mixing enhanced, canonical and legacy shapes."""
    return {
        "metadata": {
            "timestamp": "2024-05-01T12:30:00Z",
            "sitemapUrl": "https://example.com/sitemap.xml",
            "durationMs": 5400,
            "toolVersion": "2.1.0",
            "standard": "WCAG2AA",
        },
        "pages": [
            {
                "url": "https://example.com/",
                "title": "Home",
                "status": "passed",
                "duration": 1200,
                "enhancedAccessibility": {
                    "score": 90,
                    "errors": [],
                    "warnings": ["Heading order skips a level"],
                },
                "performance": {
                    "score": 80,
                    "coreWebVitals": {"largestContentfulPaint": 2100, "cumulativeLayoutShift": 0.1},
                },
            },
            {
                "url": "https://example.com/about",
                "title": "About",
                "passed": False,
                "duration": 900,
                "pa11y": {
                    "pa11yScore": 70,
                    "pa11yIssues": [
                        {
                            "type": "error",
                            "code": "WCAG2AA.H37",
                            "message": "Img element missing an alt attribute.",
                            "selector": "img.logo",
                        }
                    ],
                },
                "seo": {"overallScore": 85, "grade": "B"},
            },
            {
                "url": "https://example.com/brochure.pdf",
                "status": "skipped",
                "duration": 0,
                "skipReason": "non-HTML content",
            },
        ],
    }


@pytest.fixture
def raw_run_file(tmp_path: Path, raw_run: dict[str, Any]) -> Path:
    path = tmp_path / "raw.json"
    path.write_text(json.dumps(raw_run), encoding="utf-8")
    return path
