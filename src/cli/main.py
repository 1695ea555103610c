"""IBOV lake CLI entry points.
This module exposes commands to publish or preview a composition report.
It maps argparse commands onto pipeline calls.
"""

from __future__ import annotations

import argparse
from dataclasses import asdict, replace
import json
from pathlib import Path
from typing import Any, Sequence

from core.config import IbovConfig
from core.constants import PREVIEW_DEFAULT_LIMIT
from core.errors import IbovError
from ingest.date_extractor import extract_iso_date
from ingest.pipeline import run_pipeline
from ingest.record_normalizer import normalize_source_file
from ingest.source_locator import DownloadSource, LocalDownloadDirectory, StaticSourceFile
from store.partition_publisher import build_artifact_key


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="ibov-lake",
        description="Publish the daily IBOV composition report as partitioned Parquet",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_publish_command(subparsers)
    _add_preview_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the IBOV lake CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args)
        if args.command == "publish":
            return _run_publish_command(config, args)
        if args.command == "preview":
            return _run_preview_command(config, args)
    except IbovError as error:
        print(f"error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace) -> IbovConfig:
    """Build runtime config with CLI overrides applied.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured runtime settings.
    """
    config = IbovConfig.from_env()
    overrides: dict[str, Any] = {}
    scratch_root = getattr(args, "scratch_root", None)
    if scratch_root:
        overrides["scratch_root"] = Path(scratch_root).expanduser().resolve()
    for arg_name, field_name in (
        ("bucket", "bucket"),
        ("region", "s3_region"),
        ("profile", "s3_profile"),
    ):
        value = getattr(args, arg_name, None)
        if value:
            overrides[field_name] = value
    download_dir = getattr(args, "download_dir", None)
    if download_dir:
        overrides["download_dir"] = Path(download_dir).expanduser().resolve()
    return replace(config, **overrides) if overrides else config


def _run_publish_command(config: IbovConfig, args: argparse.Namespace) -> int:
    """Handle publish command.

    Args:
        config: Runtime config.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    source: DownloadSource
    if args.source:
        source = StaticSourceFile(Path(args.source).expanduser())
    else:
        source = LocalDownloadDirectory(config.download_dir)
    result = run_pipeline(config, source=source)
    print(f"s3://{result.bucket}/{result.key}")
    print(f"row_count={result.row_count}")
    return 0


def _run_preview_command(config: IbovConfig, args: argparse.Namespace) -> int:
    """Handle preview command.

    Args:
        config: Runtime config.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    source_path = StaticSourceFile(Path(args.source).expanduser()).trigger_download()
    iso_date = extract_iso_date(source_path)
    normalization = normalize_source_file(source_path)
    print(f"date={iso_date}")
    print(f"key={build_artifact_key(iso_date, args.artifact_name or config.artifact_name)}")
    print(f"validated={len(normalization.records)} dropped={normalization.dropped_count}")
    for record in normalization.records[: max(args.limit, 0)]:
        print(json.dumps(asdict(record), ensure_ascii=False))
    return 0


def _add_publish_command(subparsers: Any) -> None:
    """Register publish subcommand."""
    parser = subparsers.add_parser("publish", help="Normalize, encode, and upload a report")
    parser.add_argument(
        "source",
        nargs="?",
        help="Report CSV path; defaults to the first CSV in the download directory",
    )
    parser.add_argument("--download-dir", help="Override IBOV_DOWNLOAD_DIR")
    parser.add_argument("--bucket", help="Override IBOV_S3_BUCKET")
    parser.add_argument("--region", help="Override IBOV_S3_REGION")
    parser.add_argument("--profile", help="Override IBOV_S3_PROFILE")
    parser.add_argument("--scratch-root", help="Override IBOV_SCRATCH_ROOT")


def _add_preview_command(subparsers: Any) -> None:
    """Register preview subcommand."""
    parser = subparsers.add_parser("preview", help="Show normalized records without publishing")
    parser.add_argument("source", help="Report CSV path")
    parser.add_argument(
        "--limit",
        type=int,
        default=PREVIEW_DEFAULT_LIMIT,
        help="Maximum records to print",
    )
    parser.add_argument(
        "--artifact-name",
        default=None,
        help="Override IBOV_ARTIFACT_NAME for the displayed key",
    )
