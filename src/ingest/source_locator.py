"""Source file location for downloaded reports.

The browser automation that triggers the download lives outside this
package. These helpers only resolve the CSV it leaves on local disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from core.constants import SOURCE_FILE_EXTENSION
from core.errors import SourceReadError


class DownloadSource(Protocol):
    """Collaborator that yields a readable local CSV path."""

    def trigger_download(self) -> Path:
        """Return the local path of the downloaded report."""


class LocalDownloadDirectory:
    """Resolve the report from a download directory.

    The first ``.csv`` file by name is selected.
    """

    def __init__(self, download_dir: Path) -> None:
        self._download_dir = download_dir

    def trigger_download(self) -> Path:
        """Return the first CSV file in the download directory.

        Raises:
            SourceReadError: If the directory is missing or has no CSV.
        """
        if not self._download_dir.is_dir():
            raise SourceReadError(
                f"Download directory {self._download_dir} does not exist. "
                "Run the downloader first or set IBOV_DOWNLOAD_DIR."
            )
        csv_files = sorted(
            path
            for path in self._download_dir.iterdir()
            if path.is_file() and path.suffix.lower() == SOURCE_FILE_EXTENSION
        )
        if not csv_files:
            raise SourceReadError(
                f"No CSV file found in download directory {self._download_dir}. "
                "Check that the report download completed."
            )
        return csv_files[0]


class StaticSourceFile:
    """Use an already-downloaded report file."""

    def __init__(self, source_path: Path) -> None:
        self._source_path = source_path

    def trigger_download(self) -> Path:
        """Return the configured path if it exists."""
        if not self._source_path.is_file():
            raise SourceReadError(
                f"Source file {self._source_path} does not exist. "
                "Provide the path of a downloaded report CSV."
            )
        return self._source_path
