"""Pipeline orchestration for the daily composition report.

This module sequences source location, date extraction, record
normalization, Parquet encoding, and partitioned publishing. Stages
run strictly in order and any failure ends the run in ``FAILED``.
"""

from __future__ import annotations

from core.config import IbovConfig
from core.logging_config import get_logger
from core.types import PipelineResult, PipelineState
from ingest.date_extractor import extract_partition_date
from ingest.record_normalizer import normalize_source_file
from ingest.source_locator import DownloadSource, LocalDownloadDirectory
from store.object_store import ObjectStore, create_s3_object_store
from store.parquet_encoder import encode_records
from store.partition_publisher import publish_artifact
from store.scratch_workspace import ScratchWorkspace

_LOGGER = get_logger(__name__)

_TERMINAL_STATES = frozenset({PipelineState.DONE, PipelineState.FAILED})


class PipelineRunner:
    """Single-use runner for one pipeline invocation.

    Collaborators are injected so each run owns its own source,
    storage handle, and scratch workspace.
    """

    def __init__(
        self,
        source: DownloadSource,
        object_store: ObjectStore,
        config: IbovConfig,
    ) -> None:
        self._source = source
        self._object_store = object_store
        self._config = config
        self._state = PipelineState.FETCHING
        self._history: list[PipelineState] = [PipelineState.FETCHING]

    @property
    def state(self) -> PipelineState:
        """Return the current lifecycle state."""
        return self._state

    @property
    def history(self) -> tuple[PipelineState, ...]:
        """Return every state visited, in order."""
        return tuple(self._history)

    def run(self) -> PipelineResult:
        """Execute all stages and return the published artifact summary.

        Returns:
            Partition date, destination key, and row count.

        Raises:
            IbovError: The first fatal stage error, after entering ``FAILED``.
            RuntimeError: If the runner was already used.
        """
        if len(self._history) > 1:
            raise RuntimeError("PipelineRunner is single-use; create a new runner per invocation.")
        try:
            return self._run_stages()
        except Exception as error:
            failed_state = self._state
            self._transition(PipelineState.FAILED)
            _LOGGER.error(
                "pipeline_failed",
                failed_state=failed_state.value,
                error_type=type(error).__name__,
                error=str(error),
            )
            raise

    def _run_stages(self) -> PipelineResult:
        source_path = self._source.trigger_download()
        iso_date = extract_partition_date(source_path).iso_date
        self._transition(PipelineState.NORMALIZING)
        normalization = normalize_source_file(source_path)
        self._transition(PipelineState.ENCODING)
        with ScratchWorkspace(self._config.scratch_root) as workspace:
            artifact = encode_records(
                normalization.records, workspace.path, self._config.artifact_name
            )
            self._transition(PipelineState.PUBLISHING)
            published = publish_artifact(
                self._object_store,
                iso_date,
                artifact,
                self._config.artifact_name,
                bucket=self._config.bucket,
            )
        self._transition(PipelineState.DONE)
        result = PipelineResult(
            iso_date=iso_date,
            bucket=published.bucket,
            key=published.key,
            row_count=artifact.row_count,
        )
        _log_pipeline_completion(str(source_path), normalization.dropped_count, result)
        return result

    def _transition(self, next_state: PipelineState) -> None:
        if self._state in _TERMINAL_STATES:
            raise RuntimeError(f"Cannot leave terminal pipeline state {self._state.value}.")
        _LOGGER.debug(
            "pipeline_state_changed",
            from_state=self._state.value,
            to_state=next_state.value,
        )
        self._state = next_state
        self._history.append(next_state)


def run_pipeline(
    config: IbovConfig,
    source: DownloadSource | None = None,
    object_store: ObjectStore | None = None,
) -> PipelineResult:
    """Run the normalize-and-publish pipeline once.

    Args:
        config: Runtime configuration.
        source: Report source; defaults to the configured download directory.
        object_store: Destination store; defaults to S3 for the configured bucket.

    Returns:
        Summary of the published artifact.

    Raises:
        DateNotFoundError: If the source filename has no date token.
        SourceReadError: If the source cannot be located or read.
        EncodingError: If records cannot be written as Parquet.
        PublishError: If the upload fails.
    """
    resolved_source = source or LocalDownloadDirectory(config.download_dir)
    resolved_store = object_store or create_s3_object_store(config)
    runner = PipelineRunner(resolved_source, resolved_store, config)
    return runner.run()


def _log_pipeline_completion(source_path: str, dropped_count: int, result: PipelineResult) -> None:
    """Log pipeline completion with contextual metadata."""
    _LOGGER.info(
        "pipeline_completed",
        source_path=source_path,
        iso_date=result.iso_date,
        bucket=result.bucket,
        key=result.key,
        row_count=result.row_count,
        dropped_count=dropped_count,
    )
