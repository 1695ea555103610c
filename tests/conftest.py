"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Point scratch and download directories at per-test temp paths."""
    for env_name in (
        "IBOV_S3_BUCKET",
        "IBOV_S3_REGION",
        "IBOV_S3_PROFILE",
        "IBOV_ARTIFACT_NAME",
    ):
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.setenv("IBOV_SCRATCH_ROOT", str(tmp_path / "scratch"))
    monkeypatch.setenv("IBOV_DOWNLOAD_DIR", str(tmp_path / "downloads"))
