"""Artifact encoding and publishing.

This package writes validated records to Parquet in an isolated
scratch workspace and publishes the result to object storage.
"""
