"""Unit tests for CLI command handling."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cli.main import main
from tests.fakes import FakeObjectStore
from tests.fixture_paths import fixture_path, write_report


def test_cli_publish_prints_destination(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """CLI publish should print the object URI and row count."""
    store = FakeObjectStore()
    monkeypatch.setattr("ingest.pipeline.create_s3_object_store", lambda config: store)

    exit_code = main(
        ["publish", str(fixture_path("IBOVDia_19-11-24.csv")), "--bucket", "demo-bucket"]
    )
    output = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    assert output[0] == "s3://demo-bucket/Raw/date=2024-11-19/IBOVDia.parquet"
    assert output[1] == "row_count=6"


def test_cli_publish_reports_fatal_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """CLI should exit non-zero with the first fatal error."""
    store = FakeObjectStore()
    monkeypatch.setattr("ingest.pipeline.create_s3_object_store", lambda config: store)
    source_path = write_report(tmp_path, "IBOVDia.csv", ["PETR4;PETROBRAS;PN;1;7,8;"])

    exit_code = main(["publish", str(source_path)])
    output = capsys.readouterr().out

    assert exit_code == 1 and output.startswith("error=")
    assert store.calls == []


def test_cli_preview_prints_records(capsys: pytest.CaptureFixture[str]) -> None:
    """CLI preview should print key, counts, and JSON records."""
    exit_code = main(["preview", str(fixture_path("IBOVDia_02-01-25.csv")), "--limit", "1"])
    output = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    assert output[:3] == [
        "date=2025-01-02",
        "key=Raw/date=2025-01-02/IBOVDia.parquet",
        "validated=2 dropped=4",
    ]
    assert json.loads(output[3])["codigo"] == "PETR4"
    assert len(output) == 4


def test_cli_publish_accepts_scratch_root_option(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Publish should take --scratch-root after the subcommand."""
    store = FakeObjectStore()
    monkeypatch.setattr("ingest.pipeline.create_s3_object_store", lambda config: store)
    scratch_root = tmp_path / "cli-scratch"

    exit_code = main(
        [
            "publish",
            str(fixture_path("IBOVDia_19-11-24.csv")),
            "--scratch-root",
            str(scratch_root),
        ]
    )

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines()[1] == "row_count=6"
    assert scratch_root.is_dir() and list(scratch_root.iterdir()) == []
