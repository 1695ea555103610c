"""Shared typed models.

This module defines immutable data models passed between the
normalize, encode, and publish stages to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from core.constants import CENTURY_PREFIX

CandidateRecord = dict[str, str]
NumberedCandidate = tuple[int, CandidateRecord]


@dataclass(frozen=True)
class PartitionDate:
    """Two-digit date tokens recovered from a source filename.

    Attributes:
        day: Two-digit day token, kept verbatim.
        month: Two-digit month token, kept verbatim.
        year: Two-digit year token, kept verbatim.
    """

    day: str
    month: str
    year: str

    @property
    def iso_date(self) -> str:
        """Return the ``YYYY-MM-DD`` form with a hardcoded ``20`` century."""
        return f"{CENTURY_PREFIX}{self.year}-{self.month}-{self.day}"


@dataclass(frozen=True)
class ValidatedRecord:
    """One index-composition row that passed field validation.

    Attributes:
        codigo: Ticker code.
        acao: Company short name.
        tipo: Share class label.
        qtde_teorica: Theoretical quantity, kept as source text.
        part: Index participation percentage.
    """

    codigo: str
    acao: str
    tipo: str
    qtde_teorica: str
    part: float


@dataclass(frozen=True)
class NormalizationResult:
    """Outcome of normalizing one source file.

    Attributes:
        records: Validated records in source order.
        candidate_count: Candidates left after trailing-row removal.
        dropped_count: Candidates rejected by validation.
    """

    records: tuple[ValidatedRecord, ...]
    candidate_count: int
    dropped_count: int


@dataclass(frozen=True)
class EncodedArtifact:
    """Finalized Parquet file on local scratch storage."""

    path: Path
    row_count: int


@dataclass(frozen=True)
class PublishedArtifact:
    """Object written to storage by the partition publisher."""

    bucket: str
    key: str
    size_bytes: int


@dataclass(frozen=True)
class PipelineResult:
    """Summary returned by a successful pipeline run.

    Attributes:
        iso_date: Partition date derived from the source filename.
        bucket: Destination bucket name.
        key: Object key the artifact was written to.
        row_count: Number of rows in the published artifact.
    """

    iso_date: str
    bucket: str
    key: str
    row_count: int


class PipelineState(Enum):
    """Pipeline lifecycle states. ``DONE`` and ``FAILED`` are terminal."""

    FETCHING = "fetching"
    NORMALIZING = "normalizing"
    ENCODING = "encoding"
    PUBLISHING = "publishing"
    DONE = "done"
    FAILED = "failed"
