"""Trend analysis — SMA-based direction, support/resistance and pivot points.

Pure functions, no I/O.
"""

from collections.abc import Sequence

from signalforge.engine.models import PivotPoints, PricePoint, TrendAnalysis
from signalforge.engine.moving_averages import sma

SR_LOOKBACK = 20
NEUTRAL_STRENGTH = 50.0
MAX_STRENGTH = 100.0
# Percentage distance from price, scaled onto the strength range.
STRENGTH_SCALE = 1000.0

# Band used when there is no history to measure.
_EMPTY_SR_PCT = 0.05
_EMPTY_PIVOT_STEP_PCT = 0.02


def pivot_points(high: float, low: float, close: float) -> PivotPoints:
    """Classic floor-trader pivots from one candle's high, low and close."""
    pp = (high + low + close) / 3
    return PivotPoints(
        pp=pp,
        r1=2 * pp - low,
        r2=pp + (high - low),
        r3=high + 2 * (pp - low),
        s1=2 * pp - high,
        s2=pp - (high - low),
        s3=low - 2 * (high - pp),
    )


def _empty_trend(current_price: float) -> TrendAnalysis:
    step = _EMPTY_PIVOT_STEP_PCT
    return TrendAnalysis(
        direction="NEUTRAL",
        strength=NEUTRAL_STRENGTH,
        support=current_price * (1 - _EMPTY_SR_PCT),
        resistance=current_price * (1 + _EMPTY_SR_PCT),
        pivot_points=PivotPoints(
            pp=current_price,
            r1=current_price * (1 + step),
            r2=current_price * (1 + 2 * step),
            r3=current_price * (1 + 3 * step),
            s1=current_price * (1 - step),
            s2=current_price * (1 - 2 * step),
            s3=current_price * (1 - 3 * step),
        ),
    )


def analyze_trend(candles: Sequence[PricePoint], current_price: float) -> TrendAnalysis:
    """Classify the trend of *candles* as seen from *current_price*.

    Rules:
        - **Bullish**: price > SMA20 > SMA50.
        - **Bearish**: price < SMA20 < SMA50.
        - **Neutral**: everything else (strength 50).

    Strength is the distance of price from SMA50 in tenths of a percent,
    offset by 50 and capped at 100.  Support and resistance are the lowest
    low and highest high of the last 20 candles; pivots come from the last
    candle.  An empty series yields a neutral band of ±5% around
    *current_price*.
    """
    if not candles:
        return _empty_trend(current_price)

    closes = [c.close for c in candles]
    n = len(closes)
    sma20 = sma(closes, min(20, n))
    sma50 = sma(closes, min(50, n))

    recent = candles[-SR_LOOKBACK:]
    support = min(c.low for c in recent)
    resistance = max(c.high for c in recent)

    last = candles[-1]
    pivots = pivot_points(last.high, last.low, last.close)

    if current_price > sma20 > sma50:
        direction = "BULLISH"
        strength = min(MAX_STRENGTH, (current_price - sma50) / sma50 * STRENGTH_SCALE + 50)
    elif current_price < sma20 < sma50:
        direction = "BEARISH"
        strength = min(MAX_STRENGTH, (sma50 - current_price) / sma50 * STRENGTH_SCALE + 50)
    else:
        direction = "NEUTRAL"
        strength = NEUTRAL_STRENGTH

    return TrendAnalysis(
        direction=direction,
        strength=strength,
        support=support,
        resistance=resistance,
        pivot_points=pivots,
    )
