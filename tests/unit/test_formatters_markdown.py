from __future__ import annotations

from conftest import make_page, make_record
from reporting.formatters import MarkdownFormatter, parse_markdown_issues
from reporting.formatters.markdown import issue_line
from schemas.internal.findings import Issue


def _key(url: str, issue: Issue) -> tuple:
    return (url, issue.severity, issue.code, issue.message, issue.selector)


def test_issue_line_format() -> None:
    with_selector = Issue(severity="error", code="H37", message="Missing alt", selector="img.hero")
    without_selector = Issue(severity="notice", code="meta", message="Short description")

    assert issue_line(with_selector) == "- Missing alt (code=H37, selector=img.hero)"
    assert issue_line(without_selector) == "- Short description (code=meta)"


def test_narrative_layout(sample_record) -> None:
    text = MarkdownFormatter().format(sample_record)

    assert "## Page: https://example.com/contact" in text
    assert "### Errors" in text
    assert "### Notices" in text
    assert "  > Fix: Add a descriptive alt attribute." in text
    assert "- https://example.com/legacy.pdf: non-HTML content" in text
    assert "## Page: https://example.com/legacy.pdf" not in text
    assert "Partial data" not in text


def test_narrative_round_trip(sample_record) -> None:
    text = MarkdownFormatter().format(sample_record)

    expected = [
        _key(page.url, issue)
        for page in sample_record.pages
        if not page.is_skipped
        for severity in ("error", "warning", "notice")
        for _, issue in page.iter_issues()
        if issue.severity == severity
    ]
    parsed = [_key(url, issue) for url, issue in parse_markdown_issues(text)]

    assert parsed == expected
    assert len(parsed) == 3


def test_round_trip_survives_awkward_text() -> None:
    tricky = [
        Issue(severity="error", code="x", message="line one\nline two", selector="a:not(.b)"),
        Issue(severity="warning", code="y", message="back\\slash (code=fake)", selector=None),
        Issue(severity="notice", code="z", message="ends with paren)", selector="div, span"),
    ]
    record = make_record(
        [make_page("https://example.com/odd?q=1", scores={"accessibility": 50}, issues={"accessibility": tricky})]
    )

    parsed = parse_markdown_issues(MarkdownFormatter().format(record))

    assert [issue for _, issue in parsed] == tricky
    assert {url for url, _ in parsed} == {"https://example.com/odd?q=1"}


def test_partial_notice_lists_warnings() -> None:
    record = make_record([make_page(scores={"seo": 80})], warnings=["https://example.com/ status: inferred"])

    text = MarkdownFormatter().format(record)

    assert "> **Partial data.**" in text
    assert "> - https://example.com/ status: inferred" in text


def test_without_page_detail_no_issue_sections(sample_record) -> None:
    text = MarkdownFormatter(include_page_detail=False).format(sample_record)

    assert "## Page: " not in text
    assert parse_markdown_issues(text) == []
    assert "| Accessibility | 79 | C | 2 |" in text


def test_markdown_is_deterministic(sample_record) -> None:
    assert MarkdownFormatter().emit(sample_record) == MarkdownFormatter().emit(sample_record)


def test_delimiters_inside_fields_round_trip() -> None:
    tricky = [
        Issue(severity="error", code="c", message="m", selector='a[title=" (code=b)"]'),
        Issue(severity="error", code="odd, selector=x", message="msg, selector=y)"),
        Issue(severity="warning", code="w (code=v)", message="(code=) alone", selector="p, selector=q"),
    ]
    record = make_record(
        [make_page(scores={"accessibility": 50}, issues={"accessibility": tricky})]
    )

    text = MarkdownFormatter().format(record)

    assert issue_line(tricky[0]) == '- m (code=c, selector=a[title=" \\(code=b)"])'
    assert [issue for _, issue in parse_markdown_issues(text)] == tricky
