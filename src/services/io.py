"""Service-layer helpers for input handling."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

YAML_SUFFIXES = {".yaml", ".yml"}


def load_document(path: Path) -> Any:
    """Read a JSON or YAML document; the suffix picks the parser."""
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"{path}: invalid YAML: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path}: invalid JSON: {exc}") from exc


def load_raw_run(path: Path) -> Any:
    """Load raw analyzer output: ``{metadata?, pages: [...]}`` or a bare page list."""
    payload = load_document(path)
    if not isinstance(payload, (dict, list)):
        raise ValueError(f"{path}: expected an object or a list of pages")
    return payload


__all__ = ["load_document", "load_raw_run"]
