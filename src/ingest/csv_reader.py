"""Delimited text parsing for the composition report.

This module turns the raw Latin-1 byte stream into candidate records
keyed by canonical field names. It drops the title row, remaps the
localized header, and tokenizes every physical line on its own so a
malformed line can only spoil itself.
"""

from __future__ import annotations

import csv
import io
from typing import BinaryIO, Iterator, Sequence

from core.constants import FIELD_DELIMITER, HEADER_MAP, SOURCE_ENCODING, TITLE_ROW_COUNT
from core.errors import SourceReadError
from core.logging_config import get_logger
from core.types import CandidateRecord, NumberedCandidate

_LOGGER = get_logger(__name__)
_LINE_TERMINATORS = "\r\n"


def map_header(header: str) -> str:
    """Map one localized header label to its canonical field name.

    Matching is exact, so case and accents must agree. Unknown labels
    are returned unchanged.
    """
    mapped_header = HEADER_MAP.get(header, header)
    _LOGGER.debug("header_mapped", header=header, mapped_header=mapped_header)
    return mapped_header


def map_headers(headers: Sequence[str]) -> list[str]:
    """Map every token of a header row, preserving order."""
    return [map_header(header) for header in headers]


def read_candidate_records(stream: BinaryIO) -> list[CandidateRecord]:
    """Parse a report byte stream into ordered candidate records.

    Args:
        stream: Binary stream positioned at the title row.

    Returns:
        One candidate per non-blank data line, trailing rows included.

    Raises:
        SourceReadError: If the stream cannot be read.
    """
    return [candidate for _, candidate in read_numbered_candidates(stream)]


def read_numbered_candidates(stream: BinaryIO) -> list[NumberedCandidate]:
    """Parse a report byte stream into candidates with source line numbers.

    Args:
        stream: Binary stream positioned at the title row.

    Returns:
        ``(line_number, candidate)`` pairs, one-based, in source order.

    Raises:
        SourceReadError: If the stream cannot be read.
    """
    text_stream = io.TextIOWrapper(stream, encoding=SOURCE_ENCODING, newline="")
    try:
        return list(_iter_candidates(text_stream))
    except OSError as error:
        raise SourceReadError(
            f"Failed to read source stream: {error}. "
            "Check that the downloaded file is complete and readable."
        ) from error
    finally:
        text_stream.detach()


def _iter_candidates(text_stream: io.TextIOWrapper) -> Iterator[NumberedCandidate]:
    """Yield numbered candidates after skipping title and header rows."""
    headers: list[str] | None = None
    for line_number, raw_line in enumerate(text_stream, 1):
        if line_number <= TITLE_ROW_COUNT:
            continue
        line = raw_line.rstrip(_LINE_TERMINATORS)
        if not line:
            continue
        values = _split_line(line, line_number)
        if headers is None:
            if values is None:
                _LOGGER.warning("malformed_header", line_number=line_number)
                return
            headers = map_headers(values)
            continue
        yield line_number, _build_candidate(headers, values, line_number)
    if headers is None:
        _LOGGER.warning("header_missing")


def _split_line(line: str, line_number: int) -> list[str] | None:
    """Tokenize one physical line, or return None if csv rejects it."""
    try:
        return next(csv.reader([line], delimiter=FIELD_DELIMITER), [])
    except csv.Error as error:
        _LOGGER.warning("malformed_row", line_number=line_number, error=str(error))
        return None


def _build_candidate(
    headers: list[str], values: list[str] | None, line_number: int
) -> CandidateRecord:
    """Zip one data line with the header.

    An untokenizable line or a column-count mismatch yields an empty
    candidate, which still occupies a slot for trailing-row removal.
    """
    if values is None:
        return {}
    if len(values) != len(headers):
        _LOGGER.warning(
            "malformed_row",
            line_number=line_number,
            expected_columns=len(headers),
            actual_columns=len(values),
        )
        return {}
    return dict(zip(headers, values))
