from __future__ import annotations

from conftest import make_page
from validation.completeness import CompletenessConfig, check_page_completeness, compute_completeness


def test_complete_page_scores_full_marks() -> None:
    page = make_page(
        scores={
            "accessibility": 90,
            "performance": 90,
            "seo": 90,
            "contentWeight": 90,
            "mobileFriendliness": 90,
        }
    )

    result = check_page_completeness(page)

    assert result.score == 100
    assert result.is_complete
    assert result.missing_fields == []


def test_missing_categories_are_penalized_by_tier() -> None:
    page = make_page(scores={"seo": 90}, duration_ms=None)

    result = check_page_completeness(page)

    assert result.missing_critical == ["duration"]
    assert result.missing_recommended == ["accessibility", "performance"]
    assert result.missing_optional == ["mobileFriendliness", "contentWeight"]
    assert result.score == 100 - 2 * 15 - 2 * 5
    assert not result.is_complete


def test_custom_penalties() -> None:
    page = make_page(scores={"accessibility": 80, "performance": 80})

    result = check_page_completeness(
        page, config=CompletenessConfig(recommended_penalty=30, optional_penalty=50)
    )

    assert result.score == 0


def test_run_report_counts_common_missing(sample_record) -> None:
    report = compute_completeness(sample_record.pages)

    assert report.total_pages == 3
    assert report.complete_pages == 3
    assert list(report.common_missing) == [
        "contentWeight",
        "mobileFriendliness",
        "performance",
        "accessibility",
    ]
    assert report.common_missing["contentWeight"] == 2


def test_empty_run_completeness_is_zero() -> None:
    report = compute_completeness([])

    assert report.overall_score == 0.0
    assert report.pages == []
