"""Volatility and trend-strength indicators — Bollinger Bands, ATR, ADX.

Pure functions, no I/O.
"""

import math
from collections.abc import Sequence

from signalforge.engine.models import BollingerBands, PricePoint
from signalforge.engine.moving_averages import check_period, sma

BOLLINGER_STD_DEV = 2.0

# The ADX proxy scales the mean fractional close change onto 0-100.
ADX_SCALE = 1000.0
ADX_MAX = 100.0


def bollinger_bands(closes: Sequence[float], period: int = 20) -> BollingerBands:
    """Bollinger Bands: SMA(*period*) ± 2 population standard deviations.

    With fewer than *period* closes all three bands collapse onto the last
    close (``0.0`` for an empty series).
    """
    check_period(period)
    if len(closes) < period:
        last = float(closes[-1]) if closes else 0.0
        return BollingerBands(upper=last, middle=last, lower=last)

    middle = sma(closes, period)
    window = closes[-period:]
    variance = sum((p - middle) ** 2 for p in window) / period
    sigma = math.sqrt(variance)

    return BollingerBands(
        upper=middle + BOLLINGER_STD_DEV * sigma,
        middle=middle,
        lower=middle - BOLLINGER_STD_DEV * sigma,
    )


def atr(candles: Sequence[PricePoint], period: int = 14) -> float:
    """Average True Range over the last *period* candles.

    TR = max(high - low, |high - prev_close|, |low - prev_close|)

    Averages over every available true range when fewer than *period*
    exist.  Returns 0 for fewer than two candles.
    """
    check_period(period)
    if len(candles) < 2:
        return 0.0

    true_ranges: list[float] = []
    for i in range(1, len(candles)):
        high = candles[i].high
        low = candles[i].low
        prev_close = candles[i - 1].close
        true_ranges.append(
            max(high - low, abs(high - prev_close), abs(low - prev_close))
        )

    recent = true_ranges[-period:]
    return sum(recent) / len(recent)


def adx(candles: Sequence[PricePoint], period: int = 14) -> float:
    """Trend-strength proxy on a 0-100 scale.

    This is not Wilder's directional-movement ADX: it is the mean absolute
    fractional close-to-close change over the last *period* steps, scaled by
    1000 and capped at 100.  Returns 0 for fewer than two candles.
    """
    check_period(period)
    if len(candles) < 2:
        return 0.0

    changes = [
        abs(candles[i].close - candles[i - 1].close) / candles[i - 1].close
        for i in range(1, len(candles))
    ]
    recent = changes[-period:]
    avg_change = sum(recent) / len(recent)
    return min(ADX_MAX, avg_change * ADX_SCALE)
