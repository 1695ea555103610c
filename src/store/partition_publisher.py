"""Date-partitioned artifact publishing.

Object keys take the form ``Raw/date=YYYY-MM-DD/<name>.parquet`` and
depend only on the partition date and artifact name, so a rerun for
the same date overwrites the earlier object.
"""

from __future__ import annotations

from core.constants import ARTIFACT_EXTENSION, PARTITION_KEY_NAME, PARTITION_ROOT
from core.errors import PublishError
from core.logging_config import get_logger
from core.types import EncodedArtifact, PublishedArtifact
from store.object_store import ObjectStore

_LOGGER = get_logger(__name__)


def build_artifact_key(iso_date: str, artifact_name: str) -> str:
    """Build the partitioned object key for an artifact.

    Args:
        iso_date: Partition date in ``YYYY-MM-DD`` form.
        artifact_name: Artifact file stem.

    Returns:
        Object key string.
    """
    return f"{PARTITION_ROOT}/{PARTITION_KEY_NAME}={iso_date}/{artifact_name}{ARTIFACT_EXTENSION}"


def publish_artifact(
    object_store: ObjectStore,
    iso_date: str,
    artifact: EncodedArtifact,
    artifact_name: str,
    bucket: str = "",
) -> PublishedArtifact:
    """Upload an encoded artifact under its partition key.

    Args:
        object_store: Destination store.
        iso_date: Partition date.
        artifact: Finalized local artifact.
        artifact_name: Artifact file stem.
        bucket: Bucket name, recorded in the result only.

    Returns:
        Published object description.

    Raises:
        PublishError: If the artifact cannot be read or uploaded.
    """
    key = build_artifact_key(iso_date, artifact_name)
    try:
        body = artifact.path.read_bytes()
    except OSError as error:
        raise PublishError(
            f"Failed to read encoded artifact {artifact.path}: {error}. "
            "The scratch workspace may have been removed; rerun the pipeline."
        ) from error
    try:
        object_store.put_object(key, body)
    except PublishError:
        raise
    except Exception as error:
        raise PublishError(
            f"Failed to publish artifact to {key}: {error}. "
            "Check object storage availability, then rerun the pipeline."
        ) from error
    _LOGGER.info(
        "artifact_published",
        bucket=bucket or None,
        key=key,
        size_bytes=len(body),
        row_count=artifact.row_count,
    )
    return PublishedArtifact(bucket=bucket, key=key, size_bytes=len(body))
