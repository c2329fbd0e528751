"""Unit tests for the core configuration module."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from core.config import Settings, get_settings, split_csv


def test_settings_defaults():
    """Test that Settings initializes with expected defaults."""
    settings = Settings()

    assert settings.validation_policy == "tolerant"
    assert settings.required_category_list == []
    assert settings.normalize_concurrency == 4

    assert settings.output_format_list == ["json"]
    assert settings.output_dir == "results"
    assert settings.badge_dir is None
    assert settings.include_page_detail is True

    assert settings.log_level == "INFO"
    assert settings.tool_version is None


def test_settings_with_env_vars(monkeypatch):
    """Test that Settings properly loads values from environment variables."""
    monkeypatch.setenv("AUDIT_VALIDATION_POLICY", "fail_fast")
    monkeypatch.setenv("AUDIT_REQUIRED_CATEGORIES", "accessibility, seo")
    monkeypatch.setenv("AUDIT_NORMALIZE_CONCURRENCY", "8")
    monkeypatch.setenv("AUDIT_INCLUDE_PAGE_DETAIL", "false")

    settings = Settings()

    assert settings.validation_policy == "fail_fast"
    assert settings.required_category_list == ["accessibility", "seo"]
    assert settings.normalize_concurrency == 8
    assert settings.include_page_detail is False


def test_settings_reads_dotenv(tmp_path):
    """The autouse fixture runs each test inside tmp_path, so .env is local."""
    (tmp_path / ".env").write_text("AUDIT_OUTPUT_FORMATS=csv,html\n", encoding="utf-8")

    assert Settings().output_format_list == ["csv", "html"]


def test_settings_validation(monkeypatch):
    monkeypatch.setenv("AUDIT_VALIDATION_POLICY", "lenient")
    with pytest.raises(ValidationError):
        Settings()

    monkeypatch.setenv("AUDIT_VALIDATION_POLICY", "tolerant")
    monkeypatch.setenv("AUDIT_NORMALIZE_CONCURRENCY", "0")
    with pytest.raises(ValidationError):
        Settings()


def test_get_settings_singleton():
    """Test that get_settings returns the same instance each time."""
    settings1 = get_settings()
    settings2 = get_settings()

    assert settings1 is settings2
    assert isinstance(settings1, Settings)


def test_settings_extra_field_handling():
    """Test that settings ignores extra fields."""
    with patch.dict(os.environ, {"AUDIT_UNKNOWN_FIELD": "value"}):
        settings = Settings()

    assert hasattr(settings, "validation_policy")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, []),
        ("", []),
        ("json", ["json"]),
        (" json , csv,,json ", ["json", "csv"]),
    ],
)
def test_split_csv(value, expected):
    assert split_csv(value) == expected
