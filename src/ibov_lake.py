"""Public SDK surface for the IBOV lake pipeline.

This module provides a stable import path for library users.
It re-exports the pipeline entry points, collaborators, and errors.
"""

from __future__ import annotations

from core.config import IbovConfig
from core.errors import (
    DateNotFoundError,
    EncodingError,
    IbovConfigError,
    IbovDependencyError,
    IbovError,
    PublishError,
    SourceReadError,
)
from core.types import NormalizationResult, PipelineResult, PipelineState, ValidatedRecord
from ingest.date_extractor import extract_iso_date, extract_partition_date
from ingest.pipeline import PipelineRunner, run_pipeline
from ingest.record_normalizer import normalize_records, normalize_source_file
from ingest.source_locator import DownloadSource, LocalDownloadDirectory, StaticSourceFile
from store.object_store import ObjectStore, S3ObjectStore, create_s3_object_store
from store.parquet_encoder import encode_records
from store.partition_publisher import build_artifact_key, publish_artifact

__all__ = [
    "DateNotFoundError",
    "DownloadSource",
    "EncodingError",
    "IbovConfig",
    "IbovConfigError",
    "IbovDependencyError",
    "IbovError",
    "LocalDownloadDirectory",
    "NormalizationResult",
    "ObjectStore",
    "PipelineResult",
    "PipelineRunner",
    "PipelineState",
    "PublishError",
    "S3ObjectStore",
    "SourceReadError",
    "StaticSourceFile",
    "ValidatedRecord",
    "build_artifact_key",
    "create_s3_object_store",
    "encode_records",
    "extract_iso_date",
    "extract_partition_date",
    "normalize_records",
    "normalize_source_file",
    "publish_artifact",
    "run_pipeline",
]
