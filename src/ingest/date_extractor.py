"""Partition date extraction from source filenames.

The report filename embeds its trading date as ``DD-MM-YY``. The
two-digit year is widened by prefixing ``20``, so only 2000-2099 are
representable. No calendar validation is applied to the tokens.
"""

from __future__ import annotations

import re
from pathlib import Path

from core.constants import DATE_TOKEN_PATTERN
from core.errors import DateNotFoundError
from core.types import PartitionDate

_DATE_TOKEN = re.compile(DATE_TOKEN_PATTERN)


def extract_partition_date(filename: str | Path) -> PartitionDate:
    """Locate the first ``DD-MM-YY`` token in a filename.

    Args:
        filename: Bare filename or path of the source file.

    Returns:
        Day, month, and year tokens as found.

    Raises:
        DateNotFoundError: If the filename has no date token.
    """
    name = Path(filename).name
    match = _DATE_TOKEN.search(name)
    if match is None:
        raise DateNotFoundError(
            f"No DD-MM-YY date token found in source filename '{name}'. "
            "Rename the file to include its trading date, e.g. IBOVDia_19-11-24.csv."
        )
    day, month, year = match.groups()
    return PartitionDate(day=day, month=month, year=year)


def extract_iso_date(filename: str | Path) -> str:
    """Return the ISO partition date embedded in a filename."""
    return extract_partition_date(filename).iso_date
