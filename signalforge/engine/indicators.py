"""Indicator bundle — every technical indicator for one price series snapshot."""

from collections.abc import Sequence

from signalforge.engine.models import MovingAverages, PricePoint, TechnicalIndicators
from signalforge.engine.moving_averages import ema, sma
from signalforge.engine.oscillators import macd, rsi, stochastic
from signalforge.engine.volatility import adx, atr, bollinger_bands


def closes_of(series: Sequence[PricePoint]) -> list[float]:
    """Close prices of *series*, oldest first."""
    return [p.close for p in series]


def compute_indicators(series: Sequence[PricePoint]) -> TechnicalIndicators:
    """Compute the full indicator bundle from *series* (oldest first).

    The 50 and 200 period SMAs shrink to the series length when it is
    shorter, so they always average real data instead of falling back to
    the last close.
    """
    closes = closes_of(series)
    n = len(closes)

    moving_averages = MovingAverages(
        sma20=sma(closes, 20),
        sma50=sma(closes, max(1, min(50, n))),
        sma200=sma(closes, max(1, min(200, n))),
        ema12=ema(closes, 12),
        ema26=ema(closes, 26),
    )

    return TechnicalIndicators(
        rsi=rsi(closes),
        macd=macd(closes),
        moving_averages=moving_averages,
        bollinger_bands=bollinger_bands(closes),
        stochastic=stochastic(series),
        atr=atr(series),
        adx=adx(series),
    )
