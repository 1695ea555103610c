"""Object storage clients for artifact publishing.

This module encapsulates boto3 client creation and single-object
uploads. Upload failures surface as ``PublishError`` without retry.
"""

from __future__ import annotations

from typing import Any, Protocol

from core.config import IbovConfig
from core.errors import IbovDependencyError, PublishError


class ObjectStore(Protocol):
    """Blob store keyed by caller-supplied paths."""

    def put_object(self, key: str, body: bytes) -> None:
        """Write ``body`` under ``key``, replacing any existing object."""


class S3ObjectStore:
    """S3-backed object store bound to a single bucket."""

    def __init__(self, s3_client: Any, bucket: str) -> None:
        self._s3_client = s3_client
        self._bucket = bucket

    @property
    def bucket(self) -> str:
        """Return the destination bucket name."""
        return self._bucket

    def put_object(self, key: str, body: bytes) -> None:
        """Upload one object.

        Args:
            key: Destination object key.
            body: Object payload.

        Raises:
            PublishError: If the S3 call fails.
        """
        try:
            self._s3_client.put_object(Bucket=self._bucket, Key=key, Body=body)
        except Exception as error:
            raise PublishError(
                f"Failed to publish artifact to s3://{self._bucket}/{key}: {error}. "
                "Check AWS credentials and bucket permissions, then rerun the pipeline."
            ) from error


def create_s3_client(config: IbovConfig) -> Any:
    """Create boto3 S3 client for publishing.

    Args:
        config: Runtime config with optional session settings.

    Returns:
        Boto3 S3 client.

    Raises:
        IbovDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise IbovDependencyError(
            "S3 publishing requires boto3, but it is not installed. "
            "Install boto3 to publish artifacts to S3."
        ) from error
    session_kwargs: dict[str, str] = {}
    if config.s3_profile:
        session_kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        session_kwargs["region_name"] = config.s3_region
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")


def create_s3_object_store(config: IbovConfig) -> S3ObjectStore:
    """Build an S3 object store for the configured bucket."""
    return S3ObjectStore(create_s3_client(config), config.bucket)
