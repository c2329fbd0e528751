from __future__ import annotations

import pytest

from conftest import make_page, make_record
from scoring.engine import (
    CATEGORY_WEIGHTS,
    category_average,
    finalize_run,
    overall_score,
    page_composite,
    score,
)


def test_weights_sum_to_one() -> None:
    assert sum(CATEGORY_WEIGHTS.values()) == pytest.approx(1.0)


def test_absent_categories_redistribute_weight() -> None:
    page = make_page(scores={"accessibility": 90, "performance": 80})

    composite = page_composite(page)

    assert composite == pytest.approx((90 * 0.35 + 80 * 0.25) / 0.6)
    summary = score([page])
    assert summary.overall_score == 85.83
    assert summary.overall_grade == "B"
    assert summary.certificate_tier == "GOLD"


def test_fully_scored_page_uses_every_weight() -> None:
    page = make_page(
        scores={
            "accessibility": 100,
            "performance": 50,
            "seo": 80,
            "contentWeight": 40,
            "mobileFriendliness": 60,
        }
    )

    assert page_composite(page) == pytest.approx(35 + 12.5 + 16 + 4 + 6)


def test_skipped_pages_are_excluded_from_mean_and_tested_count() -> None:
    full = make_page(
        scores={
            "accessibility": 100,
            "performance": 100,
            "seo": 100,
            "contentWeight": 100,
            "mobileFriendliness": 100,
        }
    )
    skipped = make_page("https://example.com/skip", status="skipped", scores={})

    summary = score([full, skipped])

    assert summary.overall_score == 100
    assert summary.total_pages == 2
    assert summary.tested_pages == 1
    assert summary.skipped_pages == 1
    assert summary.overall_grade == "A"
    assert summary.certificate_tier == "PLATINUM"


def test_pages_without_scores_do_not_drag_the_mean() -> None:
    scored = make_page(scores={"seo": 70})
    crashed = make_page("https://example.com/broken", status="crashed", scores={})
    unscored = make_page("https://example.com/partial", scores={"performance": None})

    assert overall_score([scored, crashed, unscored]) == 70
    assert page_composite(unscored) is None


def test_no_scored_pages_yields_absent_score() -> None:
    summary = score([make_page(status="crashed", scores={})])

    assert summary.overall_score is None
    assert summary.overall_grade is None
    assert summary.certificate_tier is None
    assert score([]).total_pages == 0


def test_summary_counts(sample_record) -> None:
    summary = sample_record.summary

    assert summary.total_pages == 3
    assert summary.tested_pages == 2
    assert (summary.passed_pages, summary.failed_pages, summary.crashed_pages) == (1, 1, 0)
    assert summary.scored_pages == 2
    assert (summary.total_errors, summary.total_warnings, summary.total_notices) == (1, 1, 1)
    assert summary.overall_score == 78.2
    assert summary.overall_grade == "C"
    assert summary.certificate_tier == "SILVER"


def test_finalize_run_returns_new_record() -> None:
    draft = make_record([make_page(scores={"seo": 88})])

    finalized = finalize_run(draft)

    assert draft.summary is None
    assert finalized.summary is not None
    assert finalized.summary.overall_score == 88
    assert finalized.pages == draft.pages


def test_score_is_deterministic(sample_record) -> None:
    assert score(sample_record.pages) == score(list(sample_record.pages))
    assert score(sample_record.pages) == sample_record.summary


def test_category_average_excludes_skipped_and_unscored_pages(sample_record) -> None:
    assert category_average(sample_record.pages, "accessibility") == 79.0
    assert category_average(sample_record.pages, "performance") == 88.0
    assert category_average([make_page(status="skipped", scores={})], "seo") is None


def test_skipped_page_with_categories_is_left_out_of_overall() -> None:
    tested = make_page(scores={"seo": 60})
    stray = make_page("https://example.com/old.pdf", status="skipped", scores={"seo": 100})

    summary = score([tested, stray])

    assert overall_score([tested, stray]) == 60
    assert summary.overall_score == category_average([tested, stray], "seo") == 60
    assert summary.scored_pages == 1
