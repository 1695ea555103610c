"""Candidate validation and numeric coercion.

This module applies the row filtering policy: trailing summary rows
are sliced off, ``part`` is coerced from comma-decimal text, and any
candidate missing a text field or a finite ``part`` is dropped.
"""

from __future__ import annotations

import math
import re
from pathlib import Path
from typing import BinaryIO, Sequence, TypeVar

from core.constants import (
    DECIMAL_SEPARATOR,
    DECIMAL_TEXT_PATTERN,
    NUMERIC_FIELD,
    TEXT_FIELDS,
    TRAILING_SUMMARY_ROW_COUNT,
)
from core.errors import SourceReadError
from core.logging_config import get_logger
from core.types import CandidateRecord, NormalizationResult, NumberedCandidate, ValidatedRecord
from ingest.csv_reader import read_numbered_candidates

_LOGGER = get_logger(__name__)
_DECIMAL_TEXT = re.compile(DECIMAL_TEXT_PATTERN)

T = TypeVar("T")


def remove_trailing_rows(rows: Sequence[T], count: int = TRAILING_SUMMARY_ROW_COUNT) -> list[T]:
    """Return all rows except the last ``count``.

    Args:
        rows: Fully materialized rows.
        count: Number of trailing rows to discard.

    Returns:
        New list without the trailing rows; empty when ``count`` covers all.
    """
    if count <= 0:
        return list(rows)
    return list(rows[:-count])


def coerce_part(raw_value: str | None) -> float | None:
    """Parse a comma-decimal participation value.

    Only the first comma becomes a period, so ``"1,2,3"`` turns into
    ``"1.2,3"`` and is rejected. Only plain signed decimals match,
    so exponents and ``_`` digit separators are rejected.

    Args:
        raw_value: Source text, or None when the column is absent.

    Returns:
        Finite float, or None when the text does not parse.
    """
    if raw_value is None:
        return None
    normalized = raw_value.replace(DECIMAL_SEPARATOR, ".", 1).strip()
    if _DECIMAL_TEXT.fullmatch(normalized) is None:
        return None
    value = float(normalized)
    if not math.isfinite(value):
        return None
    return value


def validate_candidate(candidate: CandidateRecord) -> ValidatedRecord | None:
    """Promote a candidate to a validated record, or return None.

    Args:
        candidate: Canonical field name to raw value mapping.

    Returns:
        Typed record when every text field is non-empty and ``part``
        parses to a finite number, else None.
    """
    text_values = [candidate.get(field_name) for field_name in TEXT_FIELDS]
    if not all(text_values):
        return None
    part = coerce_part(candidate.get(NUMERIC_FIELD))
    if part is None:
        return None
    codigo, acao, tipo, qtde_teorica = text_values
    return ValidatedRecord(
        codigo=str(codigo),
        acao=str(acao),
        tipo=str(tipo),
        qtde_teorica=str(qtde_teorica),
        part=part,
    )


def validate_candidates(candidates: Sequence[NumberedCandidate]) -> NormalizationResult:
    """Validate candidates in order, logging each dropped row.

    Args:
        candidates: ``(line_number, candidate)`` pairs with trailing rows
            already removed.

    Returns:
        Validated records plus candidate and drop counts.
    """
    records: list[ValidatedRecord] = []
    for line_number, candidate in candidates:
        record = validate_candidate(candidate)
        if record is None:
            _LOGGER.info("row_dropped", line_number=line_number, row=dict(candidate))
            continue
        records.append(record)
    return NormalizationResult(
        records=tuple(records),
        candidate_count=len(candidates),
        dropped_count=len(candidates) - len(records),
    )


def normalize_records(stream: BinaryIO) -> NormalizationResult:
    """Run the full normalize stage over a report byte stream.

    Args:
        stream: Binary stream of the Latin-1 report.

    Returns:
        Normalization outcome with validated records in source order.

    Raises:
        SourceReadError: If the stream cannot be read.
    """
    candidates = remove_trailing_rows(read_numbered_candidates(stream))
    result = validate_candidates(candidates)
    _LOGGER.info(
        "records_normalized",
        candidate_count=result.candidate_count,
        validated_count=len(result.records),
        dropped_count=result.dropped_count,
    )
    return result


def normalize_source_file(source_path: Path) -> NormalizationResult:
    """Open a local report file and normalize it.

    Args:
        source_path: Path to the downloaded CSV.

    Returns:
        Normalization outcome.

    Raises:
        SourceReadError: If the file cannot be opened or read.
    """
    try:
        with source_path.open("rb") as stream:
            return normalize_records(stream)
    except OSError as error:
        raise SourceReadError(
            f"Failed to open source file {source_path}: {error}. "
            "Check that the download completed and the path is readable."
        ) from error
