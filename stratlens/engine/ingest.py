"""Raw provider records -> validated, date-sorted PriceSample list.

Market-data providers hand over loosely typed records (dates as strings or
timestamps, numbers sometimes as strings). This is the one place they are
checked; the indicator functions trust PriceSample.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal
from typing import Any

from stratlens.engine.errors import InvalidInputError
from stratlens.engine.indicators import sort_samples
from stratlens.engine.types import PriceSample
from stratlens.utils.logging import get_logger
from stratlens.utils.time import parse_date

logger = get_logger(__name__)


def _to_float(value: Any, field: str, index: int) -> float:
    # bool is an int subclass; a True close is a contract violation, not 1.0
    if isinstance(value, bool) or not isinstance(value, int | float | Decimal | str):
        raise InvalidInputError(
            f"{field} must be numeric, got {type(value).__name__}", index
        )
    try:
        return float(value)
    except (ValueError, OverflowError) as e:
        raise InvalidInputError(f"{field} is not a number: {value!r}", index) from e


def parse_sample(record: Mapping[str, Any], index: int = 0) -> PriceSample:
    """Convert one raw record into a PriceSample.

    Raises:
        InvalidInputError: If date or close is missing or malformed, or
            volume is present but not numeric.
    """
    if not isinstance(record, Mapping):
        raise InvalidInputError(
            f"expected a mapping, got {type(record).__name__}", index
        )
    if record.get("date") is None:
        raise InvalidInputError("missing date", index)
    if record.get("close") is None:
        raise InvalidInputError("missing close", index)

    try:
        sample_date = parse_date(record["date"])
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"unparseable date {record['date']!r}", index) from e

    close = _to_float(record["close"], "close", index)
    volume = record.get("volume")
    return PriceSample(
        date=sample_date,
        close=close,
        volume=None if volume is None else _to_float(volume, "volume", index),
    )


def parse_samples(records: Iterable[Mapping[str, Any]]) -> list[PriceSample]:
    """Validate raw records and return them sorted ascending by date.

    Raises:
        InvalidInputError: On the first malformed record, or when two
            records share a date.
    """
    seen: dict[date, int] = {}
    samples: list[PriceSample] = []
    for index, record in enumerate(records):
        sample = parse_sample(record, index)
        if sample.date in seen:
            raise InvalidInputError(
                f"duplicate date {sample.date.isoformat()} "
                f"(first seen at record {seen[sample.date]})",
                index,
            )
        seen[sample.date] = index
        samples.append(sample)

    logger.debug("samples_parsed", count=len(samples))
    return sort_samples(samples)
