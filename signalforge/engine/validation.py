"""Boundary validation for incoming price series.

The indicator functions assume a well-formed series.  Callers that receive
data from outside (API bodies, files) run it through :func:`parse_series`
and :func:`validate_series` once, so the math modules can keep that
assumption.
"""

import math
from collections.abc import Iterable, Mapping, Sequence

from signalforge.engine.models import PricePoint

_PRICE_FIELDS = ("open", "high", "low", "close")
_REQUIRED_FIELDS = ("timestamp",) + _PRICE_FIELDS

# Epoch ms range that maps onto a UTC datetime (1970-01-01 to 9999-12-31).
MIN_TIMESTAMP_MS = 0
MAX_TIMESTAMP_MS = 253_402_300_799_999


class SeriesValidationError(ValueError):
    """Raised when a price series violates the input contract."""


def _as_number(row: Mapping, name: str, index: int) -> float:
    try:
        value = float(row[name])
    except (TypeError, ValueError) as exc:
        raise SeriesValidationError(
            f"Candle {index}: field '{name}' is not numeric ({row[name]!r})"
        ) from exc
    return value


def parse_series(rows: Iterable[Mapping]) -> list[PricePoint]:
    """Convert raw candle mappings into ``PricePoint`` objects.

    Each mapping needs ``timestamp``, ``open``, ``high``, ``low`` and
    ``close``; ``volume`` defaults to 0.

    Raises ``SeriesValidationError`` for a missing or non-numeric field.
    """
    series: list[PricePoint] = []
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise SeriesValidationError(
                f"Candle {index}: expected an object, got {type(row).__name__}"
            )
        missing = [f for f in _REQUIRED_FIELDS if row.get(f) is None]
        if missing:
            raise SeriesValidationError(
                f"Candle {index}: missing field(s): {', '.join(missing)}"
            )
        timestamp = _as_number(row, "timestamp", index)
        if not math.isfinite(timestamp):
            raise SeriesValidationError(
                f"Candle {index}: timestamp must be finite, got {timestamp}"
            )
        volume = _as_number(row, "volume", index) if row.get("volume") is not None else 0.0
        series.append(
            PricePoint(
                timestamp=int(timestamp),
                open=_as_number(row, "open", index),
                high=_as_number(row, "high", index),
                low=_as_number(row, "low", index),
                close=_as_number(row, "close", index),
                volume=volume,
            )
        )
    return series


def validate_series(series: Sequence[PricePoint]) -> None:
    """Check ordering and value ranges of *series*.

    Raises ``SeriesValidationError`` naming the first offending candle when:
        - a timestamp is outside 1970-01-01 .. 9999-12-31 UTC,
        - a timestamp is not strictly greater than the previous one,
        - open/high/low/close is non-finite or not positive,
        - volume is negative or non-finite.
    """
    prev_ts = None
    for index, point in enumerate(series):
        if not MIN_TIMESTAMP_MS <= point.timestamp <= MAX_TIMESTAMP_MS:
            raise SeriesValidationError(
                f"Candle {index}: timestamp {point.timestamp} is outside the supported "
                f"range {MIN_TIMESTAMP_MS}..{MAX_TIMESTAMP_MS}"
            )
        if prev_ts is not None and point.timestamp <= prev_ts:
            raise SeriesValidationError(
                f"Candle {index}: timestamp {point.timestamp} is not after "
                f"previous timestamp {prev_ts}"
            )
        prev_ts = point.timestamp

        for name in _PRICE_FIELDS:
            value = getattr(point, name)
            if not math.isfinite(value) or value <= 0:
                raise SeriesValidationError(
                    f"Candle {index}: {name} must be a positive number, got {value}"
                )

        if not math.isfinite(point.volume) or point.volume < 0:
            raise SeriesValidationError(
                f"Candle {index}: volume must be non-negative, got {point.volume}"
            )


def parse_price(value, name: str = "current_price") -> float:
    """Convert a caller-supplied price to a positive finite float.

    Raises ``SeriesValidationError`` naming *name* for booleans, non-numeric
    values, NaN/infinity and prices <= 0.
    """
    if isinstance(value, bool):
        raise SeriesValidationError(f"'{name}' must be a number, got {value!r}")
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise SeriesValidationError(f"'{name}' is not numeric ({value!r})") from None
    if not math.isfinite(price) or price <= 0:
        raise SeriesValidationError(f"'{name}' must be a positive number, got {value!r}")
    return price
