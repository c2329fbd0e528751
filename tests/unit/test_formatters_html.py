from __future__ import annotations

import base64
from pathlib import Path

from conftest import make_page, make_record
from reporting.assets import BadgeAssets, fallback_badge
from reporting.formatters import HTMLFormatter
from schemas.internal.findings import Issue


def test_html_sections(sample_record) -> None:
    html = HTMLFormatter().format(sample_record)

    for category in ("accessibility", "performance", "seo", "contentWeight", "mobileFriendliness"):
        assert f'id="category-{category}"' in html
    assert 'id="skipped-pages"' in html
    assert "https://example.com/legacy.pdf" in html
    assert "non-HTML content" in html
    assert "<strong>79</strong>" in html
    assert "<style>" in html


def test_skipped_section_placeholder_when_nothing_skipped() -> None:
    record = make_record([make_page(scores={"seo": 90})])

    html = HTMLFormatter().format(record)

    assert "No pages were skipped." in html
    assert 'id="partial-data"' not in html


def test_fallback_badge_when_no_assets(sample_record) -> None:
    html = HTMLFormatter().format(sample_record)

    assert fallback_badge("SILVER") in html
    assert base64.b64decode(fallback_badge("SILVER").split(",", 1)[1]).startswith(b"<svg")


def test_injected_badge_assets(tmp_path: Path, sample_record) -> None:
    (tmp_path / "silver.svg").write_text("<svg id='silver'/>", encoding="utf-8")
    badges = BadgeAssets.from_directory(tmp_path)

    html = HTMLFormatter(badges=badges).format(sample_record)

    assert badges.images["SILVER"] in html
    assert "GOLD" not in badges.images
    assert badges.badge_for("GOLD") == fallback_badge("GOLD")


def test_missing_badge_directory_yields_empty_assets(tmp_path: Path) -> None:
    assert BadgeAssets.from_directory(tmp_path / "absent").images == {}
    assert BadgeAssets.from_directory(None).images == {}


def test_issue_text_is_escaped() -> None:
    issue = Issue(severity="error", code="xss", message="<script>alert(1)</script>")
    record = make_record([make_page(scores={"accessibility": 40}, issues={"accessibility": [issue]})])

    html = HTMLFormatter().format(record)

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html


def test_partial_notice(sample_record) -> None:
    record = sample_record.model_copy(update={"warnings": ["https://example.com/ seo: ignored"]})

    html = HTMLFormatter().format(record)

    assert 'id="partial-data"' in html
    assert "https://example.com/ seo: ignored" in html


def test_html_is_deterministic(sample_record) -> None:
    assert HTMLFormatter().emit(sample_record) == HTMLFormatter().emit(sample_record)
