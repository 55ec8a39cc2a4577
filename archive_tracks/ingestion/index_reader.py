"""Reader for the export's activities.csv index."""

from __future__ import annotations

import csv
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from loguru import logger

from archive_tracks.models.activity import ActivityRecord

DATE_FORMAT = "%b %d, %Y, %I:%M:%S %p"  # e.g. "Jan 2, 2006, 3:04:05 PM"

# Column positions in the export's activities.csv
DATE_COLUMN = 1
TITLE_COLUMN = 2
TYPE_COLUMN = 3
DESCRIPTION_COLUMN = 4
FILENAME_COLUMN = 10
ELAPSED_TIME_COLUMN = 13
MOVING_TIME_COLUMN = 14
DISTANCE_COLUMN = 15
ELEVATION_GAIN_COLUMN = 18
ELEVATION_LOSS_COLUMN = 19
ELEVATION_MIN_COLUMN = 20
ELEVATION_MAX_COLUMN = 21

MIN_COLUMNS = ELEVATION_MAX_COLUMN + 1


class IndexFormatError(ValueError):
    """Raised when a row of the activity index cannot be parsed.

    Attributes:
        row_number: 1-based line number in the CSV (header is row 1)
    """

    def __init__(self, row_number: int, message: str) -> None:
        self.row_number = row_number
        self.message = message
        super().__init__(f"row {row_number}: {message}")


def _clean_number(text: str) -> str:
    return text.replace(",", "").strip()


def _parse_float(text: str, column: str, row_number: int) -> float | None:
    cleaned = _clean_number(text)
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError as e:
        raise IndexFormatError(row_number, f"invalid {column} value {text!r}") from e


def _parse_seconds(text: str, column: str, row_number: int) -> int | None:
    value = _parse_float(text, column, row_number)
    return int(value) if value is not None else None


def _parse_date(text: str, row_number: int) -> datetime | None:
    if not text.strip():
        return None
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT)
    except ValueError as e:
        raise IndexFormatError(row_number, f"invalid activity date {text!r}") from e


def parse_activity_row(row: list[str], row_number: int) -> ActivityRecord:
    """Map one CSV row onto an ActivityRecord."""
    if len(row) < MIN_COLUMNS:
        raise IndexFormatError(row_number, f"expected at least {MIN_COLUMNS} columns, got {len(row)}")

    return ActivityRecord(
        date=_parse_date(row[DATE_COLUMN], row_number),
        title=row[TITLE_COLUMN],
        activity_type=row[TYPE_COLUMN],
        description=row[DESCRIPTION_COLUMN],
        filename=row[FILENAME_COLUMN].strip(),
        distance=_parse_float(row[DISTANCE_COLUMN], "distance", row_number),
        elapsed_time=_parse_seconds(row[ELAPSED_TIME_COLUMN], "elapsed time", row_number),
        moving_time=_parse_seconds(row[MOVING_TIME_COLUMN], "moving time", row_number),
        elevation_gain=_parse_float(row[ELEVATION_GAIN_COLUMN], "elevation gain", row_number),
        elevation_loss=_parse_float(row[ELEVATION_LOSS_COLUMN], "elevation loss", row_number),
        elevation_min=_parse_float(row[ELEVATION_MIN_COLUMN], "elevation min", row_number),
        elevation_max=_parse_float(row[ELEVATION_MAX_COLUMN], "elevation max", row_number),
    )


def parse_activity_rows(lines: Iterable[str]) -> list[ActivityRecord]:
    """Parse CSV lines (header first) into activity records."""
    reader = csv.reader(lines)
    next(reader, None)  # Header

    return [parse_activity_row(row, row_number) for row_number, row in enumerate(reader, start=2) if row]


def read_activity_index(path: Path | str) -> list[ActivityRecord]:
    """Read the export's activity index.

    Args:
        path: Path to activities.csv

    Returns:
        One ActivityRecord per data row, in file order

    Raises:
        OSError: If the file cannot be opened
        IndexFormatError: If a row is malformed
    """
    with Path(path).open(newline="", encoding="utf-8-sig") as handle:
        records = parse_activity_rows(handle)

    logger.info(f"Read {len(records)} activities from {path}")
    return records
