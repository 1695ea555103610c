"""Per-invocation scratch directories.

Each pipeline run writes its intermediate artifact into its own
directory so concurrent runs never share mutable files.
"""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from types import TracebackType

from core.constants import SCRATCH_DIR_PREFIX
from core.errors import EncodingError


class ScratchWorkspace:
    """Context manager owning a unique scratch directory."""

    def __init__(self, scratch_root: Path) -> None:
        self._scratch_root = scratch_root
        self._path: Path | None = None

    @property
    def path(self) -> Path:
        """Return the active scratch directory.

        Raises:
            RuntimeError: If the workspace has not been entered.
        """
        if self._path is None:
            raise RuntimeError("ScratchWorkspace is not active; use it as a context manager.")
        return self._path

    def __enter__(self) -> "ScratchWorkspace":
        try:
            self._scratch_root.mkdir(parents=True, exist_ok=True)
            self._path = Path(tempfile.mkdtemp(prefix=SCRATCH_DIR_PREFIX, dir=self._scratch_root))
        except OSError as error:
            raise EncodingError(
                f"Failed to create scratch workspace under {self._scratch_root}: {error}. "
                "Check IBOV_SCRATCH_ROOT permissions and available disk space."
            ) from error
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if self._path is not None:
            shutil.rmtree(self._path, ignore_errors=True)
            self._path = None
