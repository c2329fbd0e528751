from __future__ import annotations

import csv
import io
import json
from pathlib import Path

from reporting.formatters import MarkdownFormatter, load_record, parse_markdown_issues
from services.audit_runner import run_audit
from validation.validator import validate


def test_raw_run_to_reports(tmp_path: Path, raw_run) -> None:
    out = tmp_path / "reports"

    result = run_audit(
        raw_run,
        {"output_formats": ["json", "csv", "markdown", "html"], "output_dir": str(out)},
        write_reports=True,
    )

    summary = result.record.summary
    assert summary is not None
    assert summary.total_pages == 3
    assert summary.tested_pages == 2
    assert summary.skipped_pages == 1
    assert summary.overall_grade == "B"
    assert result.validation.valid
    assert set(result.artifacts) == {"json", "csv", "markdown", "html"}
    assert result.completeness is not None
    assert result.completeness.total_pages == 3

    saved = load_record(Path(result.artifacts["json"]).read_text(encoding="utf-8"))
    assert saved == result.record
    assert validate(saved, "fail_fast").valid

    markdown = Path(result.artifacts["markdown"]).read_text(encoding="utf-8")
    assert MarkdownFormatter().format(saved) == markdown
    parsed = parse_markdown_issues(markdown)
    assert [(url, issue.code, issue.selector) for url, issue in parsed if issue.severity == "error"] == [
        ("https://example.com/about", "WCAG2AA.H37", "img.logo")
    ]

    html = Path(result.artifacts["html"]).read_text(encoding="utf-8")
    assert "https://example.com/brochure.pdf" in html


def test_partial_input_flows_into_every_format(tmp_path: Path, raw_run) -> None:
    raw_run["pages"].append(dict(raw_run["pages"][0]))
    raw_run["pages"][1]["seo"] = {"overallScore": "not a number"}

    result = run_audit(
        raw_run,
        {"output_formats": ["json", "csv", "markdown"], "output_dir": str(tmp_path)},
        write_reports=True,
    )

    assert result.warnings
    assert result.record.warnings == result.warnings
    payload = json.loads(Path(result.artifacts["json"]).read_text(encoding="utf-8"))
    assert payload["partial"] is True

    csv_text = Path(result.artifacts["csv"]).read_text(encoding="utf-8")
    comments = [line for line in csv_text.splitlines() if line.startswith("# ")]
    assert len(comments) == len(result.warnings)
    rows = list(csv.DictReader(io.StringIO("\n".join(l for l in csv_text.splitlines() if not l.startswith("#")))))
    assert rows[1]["SeoScore"] == "N/A"

    markdown = Path(result.artifacts["markdown"]).read_text(encoding="utf-8")
    assert "> **Partial data.**" in markdown
