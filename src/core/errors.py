"""IBOV lake exception hierarchy.

This module defines traceable pipeline errors with clear boundaries.
Each pipeline stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class IbovError(Exception):
    """Base exception for all pipeline failures."""


class IbovConfigError(IbovError):
    """Raised for invalid runtime configuration."""


class IbovDependencyError(IbovError):
    """Raised when an optional runtime dependency is missing."""


class DateNotFoundError(IbovError):
    """Raised when a source filename carries no DD-MM-YY date token."""


class SourceReadError(IbovError):
    """Raised when the source CSV cannot be located or read."""


class EncodingError(IbovError):
    """Raised when validated records cannot be written as Parquet."""


class PublishError(IbovError):
    """Raised when object storage rejects or fails the put-object call."""
