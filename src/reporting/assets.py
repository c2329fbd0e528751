"""Certificate badge assets injected into the HTML formatter."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

TIERS = ("PLATINUM", "GOLD", "SILVER", "BRONZE", "NEEDS_IMPROVEMENT")

TIER_COLORS = {
    "PLATINUM": "#6c7a89",
    "GOLD": "#c9a227",
    "SILVER": "#9ea7ad",
    "BRONZE": "#b0703c",
    "NEEDS_IMPROVEMENT": "#dc3545",
}

_MEDIA_TYPES = {".svg": "image/svg+xml", ".png": "image/png"}


@dataclass(frozen=True)
class BadgeAssets:
    """Tier → image data URI. Missing tiers fall back to a generated badge."""

    images: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_directory(cls, directory: Optional[Path]) -> "BadgeAssets":
        """Load ``<tier>.svg`` / ``<tier>.png`` files; unreadable files are skipped."""
        if directory is None or not directory.is_dir():
            return cls()
        images: dict[str, str] = {}
        for tier in TIERS:
            for suffix, media_type in _MEDIA_TYPES.items():
                path = directory / f"{tier.lower()}{suffix}"
                if not path.exists():
                    continue
                try:
                    payload = path.read_bytes()
                except OSError as exc:
                    logger.warning("Badge asset unreadable %s: %s", path, exc)
                    continue
                images[tier] = _data_uri(payload, media_type)
                break
        return cls(images=images)

    def badge_for(self, tier: Optional[str]) -> str:
        if tier is not None and tier in self.images:
            return self.images[tier]
        return fallback_badge(tier)


def fallback_badge(tier: Optional[str]) -> str:
    """Inline SVG badge used when no asset is available."""
    label = (tier or "NO DATA").replace("_", " ")
    color = TIER_COLORS.get(tier or "", "#6c757d")
    width = 24 + 8 * len(label)
    svg = (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="28">'
        f'<rect width="{width}" height="28" rx="6" fill="{color}"/>'
        f'<text x="{width // 2}" y="19" font-family="sans-serif" font-size="13" '
        f'fill="#ffffff" text-anchor="middle">{label}</text></svg>'
    )
    return _data_uri(svg.encode("utf-8"), "image/svg+xml")


def _data_uri(payload: bytes, media_type: str) -> str:
    return f"data:{media_type};base64,{base64.b64encode(payload).decode('ascii')}"


__all__ = ["BadgeAssets", "TIERS", "TIER_COLORS", "fallback_badge"]
