"""Unit tests for record validation and numeric coercion."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from core.errors import SourceReadError
import ingest.record_normalizer as record_normalizer
from ingest.record_normalizer import (
    coerce_part,
    normalize_records,
    normalize_source_file,
    remove_trailing_rows,
    validate_candidate,
    validate_candidates,
)
from tests.fixture_paths import fixture_path, report_bytes


def _candidate(**overrides: str) -> dict[str, str]:
    candidate = {
        "codigo": "ABEV3",
        "acao": "AMBEV S/A",
        "tipo": "ON",
        "qtde_teorica": "4.394.835.131",
        "part": "2,249",
    }
    candidate.update(overrides)
    return candidate


def test_coerce_part_uses_comma_as_decimal_separator() -> None:
    """Comma decimal text should parse as a float."""
    assert coerce_part("12,34") == pytest.approx(12.34)


def test_coerce_part_rejects_non_numeric_text() -> None:
    """Non-numeric text should fail coercion without raising."""
    assert coerce_part("abc") is None


def test_coerce_part_only_replaces_first_comma() -> None:
    """Multiple commas should leave an unparseable value."""
    assert coerce_part("1,2,3") is None


@pytest.mark.parametrize("raw_value", ["nan", "inf", "-Infinity", None, ""])
def test_coerce_part_rejects_non_finite_or_missing(raw_value: str | None) -> None:
    """Only finite numbers should be accepted."""
    assert coerce_part(raw_value) is None


def test_remove_trailing_rows_slices_last_two() -> None:
    """Trailing summary rows should be removed from a new list."""
    rows = ["a", "b", "c", "d"]

    trimmed = remove_trailing_rows(rows)

    assert trimmed == ["a", "b"] and rows == ["a", "b", "c", "d"]


def test_remove_trailing_rows_empties_short_sequences() -> None:
    """Fewer rows than the trailing count should yield an empty list."""
    assert remove_trailing_rows(["only"]) == []


def test_remove_trailing_rows_with_zero_count_keeps_everything() -> None:
    """A zero trailing count should keep every row."""
    assert remove_trailing_rows(["a", "b"], count=0) == ["a", "b"]


def test_validate_candidate_promotes_complete_row() -> None:
    """A complete candidate should become a typed record."""
    record = validate_candidate(_candidate())

    assert record is not None
    assert record.part == pytest.approx(2.249)
    assert record.qtde_teorica == "4.394.835.131"


@pytest.mark.parametrize("field_name", ["codigo", "acao", "tipo", "qtde_teorica"])
def test_validate_candidate_drops_empty_text_fields(field_name: str) -> None:
    """Every text field must be non-empty."""
    assert validate_candidate(_candidate(**{field_name: ""})) is None


def test_validate_candidate_drops_rows_relying_on_unmapped_headers() -> None:
    """Unmapped header names never populate canonical fields."""
    candidate = {"Foo": "ABEV3", "acao": "AMBEV", "tipo": "ON", "qtde_teorica": "1", "part": "1,0"}

    assert validate_candidate(candidate) is None


def test_validate_candidate_drops_empty_candidate() -> None:
    """Malformed lines arrive as empty candidates and are dropped."""
    assert validate_candidate({}) is None


def test_normalize_records_counts_data_lines_minus_trailing_rows() -> None:
    """Clean file should yield one record per data line."""
    with fixture_path("IBOVDia_19-11-24.csv").open("rb") as stream:
        result = normalize_records(stream)

    assert len(result.records) == 6
    assert result.dropped_count == 0
    assert [record.codigo for record in result.records][:2] == ["ALOS3", "ABEV3"]


def test_normalize_records_filters_invalid_rows_in_order() -> None:
    """Dirty file should keep only valid rows and preserve their order."""
    result = normalize_source_file(fixture_path("IBOVDia_02-01-25.csv"))

    assert [record.codigo for record in result.records] == ["PETR4", "BBDC4"]
    assert result.candidate_count == 6
    assert result.dropped_count == 4


def test_normalize_records_with_no_data_lines_yields_zero_records() -> None:
    """Title, header, and trailing rows alone produce no records."""
    result = normalize_records(io.BytesIO(report_bytes([])))

    assert result.records == ()


def test_normalize_records_three_line_file_yields_zero_records() -> None:
    """A single trailing line is consumed by the trailing-row discard."""
    payload = "Title\nCódigo;Ação;Tipo;Qtde. Teórica;Part. (%);\nRedutor;1;;\n".encode("latin-1")

    result = normalize_records(io.BytesIO(payload))

    assert result.records == () and result.candidate_count == 0


def test_normalize_source_file_raises_for_missing_file(tmp_path: Path) -> None:
    """Unreadable source should be fatal."""
    with pytest.raises(SourceReadError):
        normalize_source_file(tmp_path / "IBOVDia_19-11-24.csv")


class _RecordingLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, object]]] = []

    def info(self, event: str, **fields: object) -> None:
        self.events.append((event, fields))


@pytest.mark.parametrize("raw_value", ["1_000,5", "1e3", "0x1A", "12,", " ,5"])
def test_coerce_part_applies_strict_decimal_grammar(raw_value: str) -> None:
    """Only plain signed decimals should parse."""
    expected = {"12,": 12.0, " ,5": 0.5}.get(raw_value)

    assert coerce_part(raw_value) == expected


def test_coerce_part_accepts_signed_values_with_surrounding_space() -> None:
    """Signs and surrounding spaces should be tolerated."""
    assert coerce_part(" -0,458 ") == pytest.approx(-0.458)


def test_normalize_records_keeps_rows_after_unbalanced_quote() -> None:
    """One malformed line should not cost neighbouring rows."""
    payload = report_bytes(
        [
            "PETR4;PETROBRAS;PN;1;7,8;",
            "BBDC4;BRADESCO;PN;2;3,0;",
            '"BAD;X;ON;1;1,0;',
            "VALE3;VALE;ON;3;11,3;",
        ]
    )

    result = normalize_records(io.BytesIO(payload))

    assert [record.codigo for record in result.records] == ["PETR4", "BBDC4", "VALE3"]
    assert result.dropped_count == 1


def test_validate_candidates_logs_source_line_number(monkeypatch: pytest.MonkeyPatch) -> None:
    """Dropped rows should be reported with their source line number."""
    recorder = _RecordingLogger()
    monkeypatch.setattr(record_normalizer, "_LOGGER", recorder)

    result = validate_candidates([(3, _candidate()), (4, _candidate(part="abc"))])

    assert len(result.records) == 1
    assert recorder.events == [
        ("row_dropped", {"line_number": 4, "row": _candidate(part="abc")})
    ]
