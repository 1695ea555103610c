"""Runtime configuration model for the IBOV lake pipeline.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_ARTIFACT_NAME,
    DEFAULT_DOWNLOAD_DIR,
    DEFAULT_S3_BUCKET,
    DEFAULT_S3_REGION,
    DEFAULT_SCRATCH_ROOT,
)
from core.errors import IbovConfigError


@dataclass(frozen=True)
class IbovConfig:
    """Validated runtime configuration.

    Attributes:
        bucket: Destination S3 bucket for published artifacts.
        s3_region: AWS region used for the S3 session.
        s3_profile: Optional AWS profile for boto3 session initialization.
        scratch_root: Parent directory for per-run scratch workspaces.
        download_dir: Directory where the downloader leaves the source CSV.
        artifact_name: Artifact file stem used in the object key.
    """

    bucket: str
    s3_region: str | None
    s3_profile: str | None
    scratch_root: Path
    download_dir: Path
    artifact_name: str = DEFAULT_ARTIFACT_NAME

    @classmethod
    def from_env(cls) -> "IbovConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            IbovConfigError: If environment values are invalid.
        """
        bucket = _require_non_blank("IBOV_S3_BUCKET", os.getenv("IBOV_S3_BUCKET", DEFAULT_S3_BUCKET))
        artifact_name = _parse_artifact_name(
            os.getenv("IBOV_ARTIFACT_NAME", DEFAULT_ARTIFACT_NAME)
        )
        scratch_root_value = os.getenv("IBOV_SCRATCH_ROOT", str(DEFAULT_SCRATCH_ROOT))
        download_dir_value = os.getenv("IBOV_DOWNLOAD_DIR", str(DEFAULT_DOWNLOAD_DIR))
        return cls(
            bucket=bucket,
            s3_region=os.getenv("IBOV_S3_REGION", DEFAULT_S3_REGION) or None,
            s3_profile=os.getenv("IBOV_S3_PROFILE") or None,
            scratch_root=Path(scratch_root_value).expanduser().resolve(),
            download_dir=Path(download_dir_value).expanduser().resolve(),
            artifact_name=artifact_name,
        )


def _require_non_blank(env_name: str, raw_value: str) -> str:
    """Reject empty or whitespace-only environment values.

    Args:
        env_name: Environment variable name for error context.
        raw_value: Raw string from environment.

    Returns:
        The unchanged value.

    Raises:
        IbovConfigError: If value is blank.
    """
    if not raw_value.strip():
        raise IbovConfigError(
            f"Invalid {env_name} value: expected a non-empty string. "
            f"Unset {env_name} to use the default or provide a value."
        )
    return raw_value


def _parse_artifact_name(raw_value: str) -> str:
    """Validate the artifact stem used as a single object key segment.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Validated artifact name.

    Raises:
        IbovConfigError: If value is blank or contains a path separator.
    """
    artifact_name = _require_non_blank("IBOV_ARTIFACT_NAME", raw_value)
    if "/" in artifact_name or "\\" in artifact_name:
        raise IbovConfigError(
            f"Invalid IBOV_ARTIFACT_NAME value '{artifact_name}': path separators are not allowed. "
            "Provide a plain file stem such as IBOVDia."
        )
    return artifact_name
