"""Core constants used across pipeline modules.

This module centralizes source layout and output naming constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

SOURCE_ENCODING = "latin-1"
SOURCE_FILE_EXTENSION = ".csv"
FIELD_DELIMITER = ";"
DECIMAL_SEPARATOR = ","
TITLE_ROW_COUNT = 1
TRAILING_SUMMARY_ROW_COUNT = 2
HEADER_MAP = {
    "Código": "codigo",
    "Ação": "acao",
    "Tipo": "tipo",
    "Qtde. Teórica": "qtde_teorica",
    "Part. (%)": "part",
}
TEXT_FIELDS = ("codigo", "acao", "tipo", "qtde_teorica")
NUMERIC_FIELD = "part"
DECIMAL_TEXT_PATTERN = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)"
CANONICAL_FIELDS = (*TEXT_FIELDS, NUMERIC_FIELD)
DATE_TOKEN_PATTERN = r"(\d{2})-(\d{2})-(\d{2})"
CENTURY_PREFIX = "20"
PARTITION_ROOT = "Raw"
PARTITION_KEY_NAME = "date"
ARTIFACT_EXTENSION = ".parquet"
DEFAULT_ARTIFACT_NAME = "IBOVDia"
DEFAULT_S3_BUCKET = "data-lake-tc2-data"
DEFAULT_S3_REGION = "us-east-1"
DEFAULT_DOWNLOAD_DIR = Path("/tmp/downloads")
DEFAULT_SCRATCH_ROOT = Path(tempfile.gettempdir()) / "ibov-lake"
SCRATCH_DIR_PREFIX = "run-"
PREVIEW_DEFAULT_LIMIT = 20
