"""Report generator coordinating formatters and output."""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

from core.errors import EmissionFailure
from reporting.assets import BadgeAssets
from reporting.formatters import BaseFormatter, get_formatter, resolve_format
from reporting.schemas import ReportBundle, ReportMetadata, ReportOptions
from reporting.utils import format_timestamp, sanitize_filename
from schemas.internal.runs import AuditRunRecord

logger = logging.getLogger(__name__)


@contextmanager
def open_destination(path: Path, *, fmt: str | None = None) -> Iterator[IO[bytes]]:
    """Write to ``path`` atomically.

    Content goes to a temporary sibling that replaces ``path`` only when the
    block exits cleanly, so a failed write never leaves a truncated artifact.
    Any ``OSError`` is re-raised as ``EmissionFailure``.
    """
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handle = tempfile.NamedTemporaryFile(
            "wb", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        )
        tmp_name = handle.name
        with handle:
            yield handle
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as exc:
        raise EmissionFailure(f"cannot write {path}: {exc}", path=str(path), fmt=fmt) from exc
    finally:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)


def write_artifact(path: Path, payload: bytes, *, fmt: str | None = None) -> int:
    with open_destination(path, fmt=fmt) as handle:
        handle.write(payload)
    return len(payload)


class ReportGenerator:
    """Main report generator coordinating format conversion."""

    def __init__(self, options: ReportOptions, badges: BadgeAssets | None = None):
        """
        Initialize report generator.

        Args:
            options: Report generation configuration
            badges: Certificate badge images; loaded from ``options.badge_dir`` when omitted
        """
        self.options = options
        self.formats = list(dict.fromkeys(resolve_format(fmt) for fmt in options.output_formats))
        self.badges = badges if badges is not None else BadgeAssets.from_directory(options.badge_dir)

    def formatter_for(self, fmt: str) -> BaseFormatter:
        key = resolve_format(fmt)
        kwargs: dict = {"template_dir": self.options.template_dir}
        if key == "json":
            kwargs.update(metrics_only=self.options.metrics_only, indent=self.options.json_indent)
        elif key == "csv":
            kwargs.update(
                layout=self.options.csv_layout,
                include_page_detail=self.options.include_page_detail,
            )
        elif key == "markdown":
            kwargs.update(include_page_detail=self.options.include_page_detail)
        elif key == "html":
            kwargs.update(badges=self.badges, include_page_detail=self.options.include_page_detail)
        return get_formatter(key, **kwargs)

    def render(self, record: AuditRunRecord) -> dict[str, bytes]:
        """Render every configured format in memory."""
        return {fmt: self.formatter_for(fmt).emit(record) for fmt in self.formats}

    def generate(self, record: AuditRunRecord) -> ReportBundle:
        """
        Generate reports in configured formats.

        Args:
            record: Audit run to render

        Returns:
            ReportBundle with written paths, or in-memory contents when no
            output directory is configured

        Raises:
            EmissionFailure: a destination could not be written
        """
        bundle_metadata = ReportMetadata(
            generated_at=record.metadata.timestamp,
            tool_version=record.metadata.tool_version,
            formats_requested=list(self.formats),
        )
        bundle = ReportBundle(metadata=bundle_metadata)

        timestamp = format_timestamp(record.metadata.timestamp, "file")
        base_filename = sanitize_filename(self.options.filename_pattern.format(timestamp=timestamp))

        for fmt in self.formats:
            formatter = self.formatter_for(fmt)
            payload = formatter.emit(record)
            if self.options.output_dir is None:
                bundle.contents[fmt] = payload
            else:
                path = self.options.output_dir / f"{base_filename}.{formatter.extension}"
                bundle.metadata.file_sizes[fmt] = write_artifact(path, payload, fmt=fmt)
                bundle.paths[fmt] = path
                logger.info("Wrote %s report: %s", fmt, path)
            bundle.formats_generated.append(fmt)

        return bundle


__all__ = ["ReportGenerator", "open_destination", "write_artifact"]
