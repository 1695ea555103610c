"""Source ingestion for the index-composition report.

This package locates the downloaded CSV, parses it into candidate
rows, and validates them into typed records for the encoder.
"""
