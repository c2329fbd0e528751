"""Report generation configuration and output schemas."""

from datetime import datetime
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from schemas.internal.categories import Category


class ReportOptions(BaseModel):
    """Configuration options for report generation."""

    output_dir: Path | None = None
    output_formats: list[str] = Field(default_factory=lambda: ["json"])
    include_page_detail: bool = True
    csv_layout: Literal["wide", "long"] = "wide"
    metrics_only: list[Category] | None = None
    badge_dir: Path | None = None
    template_dir: Path | None = None
    filename_pattern: str = "site_audit_{timestamp}"
    json_indent: int | None = Field(default=2, ge=0)

    model_config = ConfigDict(extra="forbid")


class ReportMetadata(BaseModel):
    """Metadata about the generated report."""

    generated_at: datetime | None = None
    tool_version: str
    formats_requested: list[str]
    file_sizes: dict[str, int] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class ReportBundle(BaseModel):
    """Container for generated report outputs."""

    metadata: ReportMetadata
    paths: dict[str, Path] = Field(default_factory=dict)
    contents: dict[str, bytes] = Field(default_factory=dict)
    formats_generated: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


__all__ = ["ReportBundle", "ReportMetadata", "ReportOptions"]
