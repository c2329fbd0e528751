from __future__ import annotations

import json

import pytest

from conftest import make_page, make_record
from reporting.formatters import JSONFormatter, load_record


def test_json_is_deterministic(sample_record) -> None:
    formatter = JSONFormatter()

    assert formatter.emit(sample_record) == formatter.emit(sample_record)


def test_json_layout(sample_record) -> None:
    payload = json.loads(JSONFormatter().emit(sample_record))

    assert payload["metadata"]["sourceUrl"] == "https://example.com/sitemap.xml"
    assert payload["summary"]["overallScore"] == 78.2
    assert payload["summary"]["overallGrade"] == "C"
    assert payload["summary"]["certificateTier"] == "SILVER"
    assert payload["partial"] is False

    home, contact, skipped = payload["pages"]
    assert home["performance"]["metrics"]["largestContentfulPaint"] == 1850.0
    assert contact["performance"] is None
    assert contact["accessibility"]["issues"][0]["selector"] == "#main > img.hero"
    assert skipped["status"] == "skipped"
    assert skipped["reason"] == "non-HTML content"


def test_json_round_trips_through_load_record(sample_record) -> None:
    text = JSONFormatter().format(sample_record)

    assert load_record(text) == sample_record


def test_json_scores_draft_records() -> None:
    draft = make_record([make_page(scores={"seo": 64})], warnings=["https://example.com/ duration: missing"])

    payload = json.loads(JSONFormatter().emit(draft))

    assert payload["summary"]["overallScore"] == 64
    assert payload["partial"] is True
    assert payload["warnings"] == ["https://example.com/ duration: missing"]


def test_metrics_only_projection(sample_record) -> None:
    formatter = JSONFormatter(metrics_only=["performance"])

    payload = json.loads(formatter.emit(sample_record))

    home = payload["pages"][0]
    assert set(home) == {"url", "title", "status", "duration", "performance"}
    assert home["performance"] == {
        "score": 88.0,
        "grade": "B",
        "metrics": {"largestContentfulPaint": 1850.0, "cumulativeLayoutShift": 0.05},
    }
    with pytest.raises(ValueError):
        load_record(payload)


def test_metrics_only_rejects_unknown_category() -> None:
    with pytest.raises(ValueError):
        JSONFormatter(metrics_only=["speed"])
