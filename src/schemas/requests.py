"""External request schemas for audit runs."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.internal.categories import Category


def _split(value: object) -> object:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


class AuditRunOptions(BaseModel):
    """Per-run overrides. All fields are optional and validated."""

    # Validation
    validation_policy: Literal["fail_fast", "tolerant"] | None = None
    required_categories: list[Category] | None = None

    # Normalization
    normalize_concurrency: int | None = Field(default=None, ge=1)
    tool_version: str | None = None

    # Output controls
    output_formats: list[Literal["json", "csv", "markdown", "html"]] | None = None
    output_dir: str | None = None
    badge_dir: str | None = None
    include_page_detail: bool | None = None
    csv_layout: Literal["wide", "long"] | None = None
    metrics_only: list[Category] | None = None
    include_completeness: bool | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("required_categories", "output_formats", "metrics_only", mode="before")
    @classmethod
    def _split_comma_lists(cls, value: object) -> object:
        return _split(value)


__all__ = ["AuditRunOptions"]
