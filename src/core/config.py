"""Application configuration and .env loading."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralized runtime configuration."""

    validation_policy: Literal["fail_fast", "tolerant"] = Field(
        default="tolerant", validation_alias="AUDIT_VALIDATION_POLICY"
    )
    required_categories: str = Field(
        default="", validation_alias="AUDIT_REQUIRED_CATEGORIES"
    )
    normalize_concurrency: int = Field(
        default=4, ge=1, validation_alias="AUDIT_NORMALIZE_CONCURRENCY"
    )

    output_formats: str = Field(default="json", validation_alias="AUDIT_OUTPUT_FORMATS")
    output_dir: str = Field(default="results", validation_alias="AUDIT_OUTPUT_DIR")
    badge_dir: str | None = Field(default=None, validation_alias="AUDIT_BADGE_DIR")
    include_page_detail: bool = Field(
        default=True, validation_alias="AUDIT_INCLUDE_PAGE_DETAIL"
    )

    log_level: str = Field(default="INFO", validation_alias="AUDIT_LOG_LEVEL")
    tool_version: str | None = Field(default=None, validation_alias="AUDIT_TOOL_VERSION")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def required_category_list(self) -> list[str]:
        return split_csv(self.required_categories)

    @property
    def output_format_list(self) -> list[str]:
        return split_csv(self.output_formats)


def split_csv(value: str | None) -> list[str]:
    """Split a comma separated setting, dropping blanks and duplicates."""
    if not value:
        return []
    items: list[str] = []
    for part in value.split(","):
        item = part.strip()
        if item and item not in items:
            items.append(item)
    return items


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once from .env/environment."""
    return Settings()


__all__ = ["Settings", "get_settings", "split_csv"]
