"""Momentum oscillators — RSI, MACD, Stochastic. Pure functions, no I/O."""

import math
from collections.abc import Sequence

from signalforge.engine.models import MACDResult, PricePoint, StochasticResult
from signalforge.engine.moving_averages import check_period, ema, ema_series

NEUTRAL_RSI = 50.0
NEUTRAL_STOCHASTIC = 50.0

MACD_FAST = 12
MACD_SLOW = 26
MACD_SIGNAL = 9

# Number of shifted %K windows averaged into %D.
STOCHASTIC_D_WINDOWS = 3


# ── RSI ──────────────────────────────────────────────────────────────────


def rsi(closes: Sequence[float], period: int = 14) -> float:
    """Relative Strength Index over the last *period* price changes.

    Uses plain (not Wilder-smoothed) averages:
        avg_gain = sum(gains) / period
        avg_loss = sum(|losses|) / period
        RSI = 100 - 100 / (1 + avg_gain / avg_loss)

    Returns 50 when fewer than ``period + 1`` closes are available and
    100 when there were no losses in the window.
    """
    check_period(period)
    if len(closes) < period + 1:
        return NEUTRAL_RSI

    gains = 0.0
    losses = 0.0
    for i in range(1, period + 1):
        change = closes[-i] - closes[-i - 1]
        if change > 0:
            gains += change
        else:
            losses -= change

    avg_gain = gains / period
    avg_loss = losses / period

    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


# ── MACD ─────────────────────────────────────────────────────────────────


def macd(closes: Sequence[float]) -> MACDResult:
    """MACD line, signal line and histogram (12/26/9).

    The signal line is the 9-period EMA of the MACD line evaluated at every
    prefix of at least 26 closes.  With fewer than 9 such prefixes the
    signal line equals the current MACD value.

    Returns all zeros when fewer than 26 closes are available.
    """
    if len(closes) < MACD_SLOW:
        return MACDResult(value=0.0, signal=0.0, histogram=0.0)

    fast = ema_series(closes, MACD_FAST)
    slow = ema_series(closes, MACD_SLOW)

    # fast[j] covers the prefix closes[: MACD_FAST + j]; align both on
    # prefix length.
    history = [
        fast[length - MACD_FAST] - slow[length - MACD_SLOW]
        for length in range(MACD_SLOW, len(closes) + 1)
    ]
    value = history[-1]

    if len(history) >= MACD_SIGNAL:
        signal = ema(history, MACD_SIGNAL)
    else:
        signal = value

    return MACDResult(value=value, signal=signal, histogram=value - signal)


# ── Stochastic ───────────────────────────────────────────────────────────


def _percent_k(window: Sequence[PricePoint]) -> float:
    """%K for one window; 50 when the high/low range is zero."""
    lowest_low = min(c.low for c in window)
    highest_high = max(c.high for c in window)
    price_range = highest_high - lowest_low
    if price_range == 0:
        return NEUTRAL_STOCHASTIC
    return (window[-1].close - lowest_low) / price_range * 100


def _bounded(value: float) -> float:
    if math.isnan(value):
        return NEUTRAL_STOCHASTIC
    return min(100.0, max(0.0, value))


def stochastic(candles: Sequence[PricePoint], period: int = 14) -> StochasticResult:
    """Stochastic oscillator %K and %D.

    %K compares the last close to the high/low range of the last *period*
    candles.  %D is the mean of %K over up to three windows, each shifted one
    candle further back; windows that would start before the first candle
    are skipped.

    Returns ``k = d = 50`` when fewer than *period* candles are available.
    """
    check_period(period)
    n = len(candles)
    if n < period:
        return StochasticResult(k=NEUTRAL_STOCHASTIC, d=NEUTRAL_STOCHASTIC)

    k = _percent_k(candles[n - period:])

    k_values: list[float] = []
    for shift in range(STOCHASTIC_D_WINDOWS):
        start = n - period - shift
        if start < 0:
            break
        k_values.append(_percent_k(candles[start:n - shift]))

    d = sum(k_values) / len(k_values) if k_values else k

    return StochasticResult(k=_bounded(k), d=_bounded(d))
