"""Parquet encoding for validated records.

This module writes records under a fixed five-column schema. Output
is written to a partial file and renamed into place, so a visible
artifact is always fully finalized.
"""

from __future__ import annotations

import contextlib
from dataclasses import asdict
import os
from pathlib import Path
from typing import Any, Sequence

from core.constants import ARTIFACT_EXTENSION
from core.errors import EncodingError, IbovDependencyError
from core.logging_config import get_logger
from core.types import EncodedArtifact, ValidatedRecord

_LOGGER = get_logger(__name__)
_PARTIAL_SUFFIX = ".partial"


def build_artifact_schema() -> Any:
    """Return the static Arrow schema of the published artifact."""
    pa, _ = _import_pyarrow()
    return pa.schema(
        [
            pa.field("codigo", pa.string(), nullable=False),
            pa.field("acao", pa.string(), nullable=False),
            pa.field("tipo", pa.string(), nullable=False),
            pa.field("qtde_teorica", pa.string(), nullable=False),
            pa.field("part", pa.float64(), nullable=False),
        ]
    )


def encode_records(
    records: Sequence[ValidatedRecord],
    output_dir: Path,
    artifact_name: str,
) -> EncodedArtifact:
    """Write records to ``<output_dir>/<artifact_name>.parquet``.

    Args:
        records: Validated records in output order.
        output_dir: Scratch directory owned by the current run.
        artifact_name: File stem of the artifact.

    Returns:
        Finalized artifact path and row count.

    Raises:
        EncodingError: If Arrow rejects a value or the write fails.
    """
    pa, pq = _import_pyarrow()
    schema = build_artifact_schema()
    try:
        table = pa.Table.from_pylist([asdict(record) for record in records], schema=schema)
    except (pa.ArrowException, TypeError, ValueError) as error:
        raise EncodingError(
            f"Failed to build Parquet table from {len(records)} records: {error}. "
            "A record escaped validation; inspect the source row."
        ) from error
    output_path = output_dir / f"{artifact_name}{ARTIFACT_EXTENSION}"
    partial_path = output_path.with_name(output_path.name + _PARTIAL_SUFFIX)
    try:
        pq.write_table(table, str(partial_path))
        os.replace(partial_path, output_path)
    except (pa.ArrowException, OSError) as error:
        with contextlib.suppress(OSError):
            partial_path.unlink(missing_ok=True)
        raise EncodingError(
            f"Failed to write Parquet artifact at {output_path}: {error}. "
            "Check scratch directory permissions and available disk space."
        ) from error
    _LOGGER.info("artifact_encoded", path=str(output_path), row_count=table.num_rows)
    return EncodedArtifact(path=output_path, row_count=table.num_rows)


def _import_pyarrow() -> tuple[Any, Any]:
    """Import pyarrow and its Parquet module.

    Raises:
        IbovDependencyError: If pyarrow is missing.
    """
    try:
        import pyarrow as pa
        import pyarrow.parquet as pq
    except ImportError as error:
        raise IbovDependencyError(
            "Parquet encoding requires pyarrow, but it is not installed. "
            "Install pyarrow to encode index composition artifacts."
        ) from error
    return pa, pq
