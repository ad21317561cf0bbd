"""Moving averages — SMA and EMA over close prices. Pure functions, no I/O.

Short series never raise: when fewer than *period* closes are available the
last close is returned (``0.0`` for an empty series).
"""

from collections.abc import Sequence


def check_period(period: int) -> None:
    if period < 1:
        raise ValueError(f"Period must be a positive integer, got {period}")


def _last_or_zero(closes: Sequence[float]) -> float:
    return float(closes[-1]) if closes else 0.0


def sma(closes: Sequence[float], period: int) -> float:
    """Simple Moving Average of the last *period* closes."""
    check_period(period)
    if len(closes) < period:
        return _last_or_zero(closes)
    recent = closes[-period:]
    return sum(recent) / period


def ema_series(closes: Sequence[float], period: int) -> list[float]:
    """Running EMA values for every index from ``period - 1`` onward.

    ``ema_series(closes, p)[j]`` equals ``ema(closes[: p + j], p)`` exactly,
    which lets MACD build its history in one pass.  Returns an empty list
    when fewer than *period* closes are available.
    """
    check_period(period)
    if len(closes) < period:
        return []

    multiplier = 2 / (period + 1)
    value = sma(closes[:period], period)
    values = [value]
    for i in range(period, len(closes)):
        value = (closes[i] - value) * multiplier + value
        values.append(value)
    return values


def ema(closes: Sequence[float], period: int) -> float:
    """Exponential Moving Average seeded with the SMA of the first *period* closes.

    ``EMA_i = (close_i - EMA_{i-1}) × k + EMA_{i-1}`` with
    ``k = 2 / (period + 1)``.
    """
    values = ema_series(closes, period)
    if not values:
        return _last_or_zero(closes)
    return values[-1]
