from __future__ import annotations

import pytest

from conftest import make_page, make_record
from core.errors import IncompleteDataError, MissingAnalysisError
from schemas.internal.runs import Summary
from services import audit_runner
from validation.validator import enforce, validate


def _missing_accessibility_record():
    return make_record(
        [
            make_page("https://example.com/", scores={"accessibility": 95, "seo": 90}),
            make_page("https://example.com/blog", scores={"seo": 80}),
        ]
    )


def test_fail_fast_missing_required_category_is_invalid() -> None:
    report = validate(
        _missing_accessibility_record(),
        policy="fail_fast",
        required_categories=["accessibility"],
    )

    assert report.valid is False
    assert [entry.kind for entry in report.errors] == ["missing_analysis"]
    assert report.errors[0].page_url == "https://example.com/blog"
    with pytest.raises(MissingAnalysisError) as excinfo:
        enforce(report)
    assert excinfo.value.entries == report.errors


def test_fail_fast_pipeline_stops_before_scoring(monkeypatch) -> None:
    calls: list[object] = []
    monkeypatch.setattr(audit_runner, "finalize_run", lambda record: calls.append(record))
    raw = {
        "pages": [
            {"url": "https://example.com/", "status": "passed", "duration": 10, "seo": {"score": 80}},
        ]
    }

    with pytest.raises(MissingAnalysisError):
        audit_runner.run_audit(
            raw,
            {"validation_policy": "fail_fast", "required_categories": ["accessibility"]},
        )

    assert calls == []


def test_tolerant_policy_downgrades_problems_to_warnings() -> None:
    report = validate(
        _missing_accessibility_record(),
        policy="tolerant",
        required_categories=["accessibility"],
    )

    assert report.valid is True
    assert report.errors == []
    assert [entry.kind for entry in report.warnings] == ["missing_analysis"]


def test_skipped_pages_are_exempt_from_required_categories() -> None:
    record = make_record(
        [
            make_page("https://example.com/", scores={"accessibility": 90}),
            make_page("https://example.com/doc.pdf", status="skipped", scores={}),
        ]
    )

    report = validate(record, policy="fail_fast", required_categories=["accessibility"])

    assert report.valid is True


def test_structural_problems_raise_incomplete_data() -> None:
    record = make_record(
        [
            make_page("", scores={"seo": 90}),
            make_page("https://example.com/slow", duration_ms=-5, scores={"seo": 90}),
            make_page("https://example.com/nodur", duration_ms=None, scores={"seo": 90}),
        ]
    )

    report = validate(record, policy="fail_fast")

    assert report.valid is False
    assert {entry.field for entry in report.errors} == {"url", "duration"}
    assert len(report.errors) == 3
    with pytest.raises(IncompleteDataError):
        enforce(report)


def test_skipped_page_with_categories_is_structural_error() -> None:
    record = make_record(
        [make_page("https://example.com/skip", status="skipped", scores={"seo": 50})]
    )

    report = validate(record, policy="fail_fast")

    assert [entry.field for entry in report.errors] == ["categories"]


def test_summary_mismatch_is_detected(sample_record) -> None:
    tampered_summary = Summary.model_validate(
        {**sample_record.summary.model_dump(), "total_errors": 99}
    )
    tampered = sample_record.model_copy(update={"summary": tampered_summary})

    report = validate(tampered, policy="fail_fast")

    assert report.valid is False
    assert "total_errors" in report.errors[0].message


def test_finalized_record_validates_clean(sample_record) -> None:
    report = validate(sample_record, policy="fail_fast", required_categories=["seo"])

    assert report.valid is True
    assert report.errors == []


def test_duplicate_urls_are_warnings_under_both_policies() -> None:
    record = make_record(
        [
            make_page("https://example.com/", scores={"seo": 90}),
            make_page("https://example.com/", scores={"seo": 80}),
        ]
    )

    strict = validate(record, policy="fail_fast")
    lenient = validate(record, policy="tolerant")

    assert strict.valid is True
    assert [entry.message for entry in strict.warnings] == ["URL appears 2 times"]
    assert len(lenient.warnings) == 1


def test_validate_does_not_mutate(sample_record) -> None:
    before = sample_record.model_dump()

    validate(sample_record, policy="fail_fast", required_categories=["performance"])

    assert sample_record.model_dump() == before


def test_unknown_policy_or_category_is_rejected(sample_record) -> None:
    with pytest.raises(ValueError):
        validate(sample_record, policy="strict")  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        validate(sample_record, required_categories=["speed"])
