"""Serverless entry point for scheduled pipeline runs."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from core.config import IbovConfig
from ingest.pipeline import run_pipeline
from ingest.source_locator import DownloadSource, LocalDownloadDirectory, StaticSourceFile


def handler(event: Mapping[str, Any] | None, context: Any = None) -> dict[str, Any]:
    """Publish the downloaded report for one invocation.

    Args:
        event: Invocation payload; an optional ``source_path`` selects the CSV.
        context: Runtime context, unused.

    Returns:
        Status payload with the published key and row count.

    Raises:
        IbovError: The first fatal pipeline error, so the runtime records a failure.
    """
    config = IbovConfig.from_env()
    source = _resolve_source(event or {}, config)
    result = run_pipeline(config, source=source)
    return {
        "status": "published",
        "date": result.iso_date,
        "bucket": result.bucket,
        "key": result.key,
        "row_count": result.row_count,
    }


def _resolve_source(event: Mapping[str, Any], config: IbovConfig) -> DownloadSource:
    source_path = event.get("source_path")
    if source_path:
        return StaticSourceFile(Path(str(source_path)))
    return LocalDownloadDirectory(config.download_dir)
