"""Price history loading from local OHLCV files.

Supported formats:
- ``.json``: array of objects with timestamp/open/high/low/close/volume
  (the ``ohlcv.json`` layout chart front-ends ship)
- ``.csv``: header row with the same column names
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Any, Iterator

import orjson
from pydantic import ValidationError

from bollinger.models.price import PriceBuffer, PricePoint

logger = logging.getLogger(__name__)


class PriceDataError(ValueError):
    """Raised when a price file cannot be parsed."""


def _iter_json_records(path: Path) -> Iterator[dict[str, Any]]:
    try:
        data = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as e:
        raise PriceDataError(f"{path}: invalid JSON ({e})") from e
    if not isinstance(data, list):
        raise PriceDataError(f"{path}: expected a JSON array of bars")
    yield from data


def _iter_csv_records(path: Path) -> Iterator[dict[str, Any]]:
    with open(path, newline="", encoding="utf-8") as f:
        yield from csv.DictReader(f)


_READERS = {
    ".json": _iter_json_records,
    ".csv": _iter_csv_records,
}


def load_price_series(path: Path, max_size: int | None = None) -> list[PricePoint]:
    """Load a price series from a JSON or CSV file.

    Bars are passed through a PriceBuffer, so the result is ordered by
    timestamp with duplicates collapsed to the last bar seen.

    Args:
        path: File to read
        max_size: Keep only the most recent ``max_size`` bars

    Returns:
        List of PricePoint, oldest first

    Raises:
        FileNotFoundError: If ``path`` does not exist
        PriceDataError: If the format is unsupported or a record is malformed
    """
    if not path.exists():
        raise FileNotFoundError(path)

    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise PriceDataError(f"{path}: unsupported file type '{path.suffix}'")

    buffer = PriceBuffer(max_size=max_size)
    count = 0
    try:
        for index, record in enumerate(reader(path)):
            try:
                buffer.add(PricePoint.model_validate(record))
            except ValidationError as e:
                raise PriceDataError(f"{path}: bad record at index {index}: {e}") from e
            count += 1
    except (UnicodeDecodeError, csv.Error) as e:
        raise PriceDataError(f"{path}: unreadable file ({e})") from e

    if count != len(buffer):
        logger.warning(
            "%s: %d records read, %d bars kept",
            path,
            count,
            len(buffer),
        )
    logger.info("Loaded %d bars from %s", len(buffer), path)
    return list(buffer.points)
