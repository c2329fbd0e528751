"""HTML formatter with certificate badge and category sections."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from schemas.internal.runs import AuditRunRecord
from reporting.assets import BadgeAssets
from reporting.context import build_report_context
from reporting.formatters.base import BaseFormatter
from reporting.utils import (
    format_number,
    format_timestamp,
    get_grade_color,
    get_tier_label,
    or_placeholder,
)


class HTMLFormatter(BaseFormatter):
    """Formatter for self-contained HTML reports."""

    name = "html"
    extension = "html"
    media_type = "text/html"

    def __init__(
        self,
        template_dir: Path | None = None,
        inline_assets: bool = True,
        *,
        badges: BadgeAssets | None = None,
        include_page_detail: bool = True,
    ):
        """
        Initialize HTML formatter.

        Args:
            template_dir: Directory containing HTML templates
            inline_assets: Whether to inline CSS (default: True)
            badges: Certificate badge images; generated badges are used when absent
            include_page_detail: Render per-page issue listings
        """
        super().__init__(template_dir)
        self.inline_assets = inline_assets
        self.badges = badges or BadgeAssets()
        self.include_page_detail = include_page_detail
        self._setup_jinja_env()

    def _setup_jinja_env(self) -> None:
        """Setup Jinja2 environment with custom filters."""
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

        # Register custom filters
        self.jinja_env.filters["grade_color"] = get_grade_color
        self.jinja_env.filters["tier_label"] = get_tier_label
        self.jinja_env.filters["num"] = format_number
        self.jinja_env.filters["or_no_data"] = or_placeholder
        self.jinja_env.filters["format_timestamp"] = lambda dt: format_timestamp(
            dt, "display"
        )

    def format(self, record: AuditRunRecord) -> str:
        """Format an audit run as HTML."""
        template = self.jinja_env.get_template("report.html.j2")
        context = build_report_context(record, include_page_detail=self.include_page_detail)

        css_content = ""
        if self.inline_assets:
            css_path = self.template_dir / "styles.css"
            if css_path.exists():
                css_content = css_path.read_text(encoding="utf-8")

        return template.render(
            data=context,
            badge_src=self.badges.badge_for(context["summary"].certificate_tier),
            inline_css=css_content if self.inline_assets else None,
        )
