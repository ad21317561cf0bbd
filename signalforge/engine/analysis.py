"""Analysis facade — indicators, signal and trend for one asset snapshot."""

import logging
from collections.abc import Sequence
from typing import Optional

from signalforge.engine.indicators import compute_indicators
from signalforge.engine.models import MarketAnalysis, PricePoint
from signalforge.engine.signals import generate_signal
from signalforge.engine.trend import analyze_trend
from signalforge.engine.validation import validate_series

logger = logging.getLogger("signalforge")

# Below this many candles every indicator is running on a fallback value.
FULL_HISTORY_POINTS = 200


def analyze(
    series: Sequence[PricePoint],
    asset_name: str,
    current_price: Optional[float] = None,
    validate: bool = True,
) -> MarketAnalysis:
    """Run the whole engine over *series*.

    Args:
        series: OHLCV candles, oldest first.
        asset_name: Display name used in the signal's action message.
        current_price: Live price; defaults to the last close (0 when the
            series is empty).
        validate: Check ordering and value ranges first.

    Raises ``SeriesValidationError`` when *validate* is set and the series
    breaks the input contract.
    """
    if validate:
        validate_series(series)

    if current_price is None:
        current_price = series[-1].close if series else 0.0

    if len(series) < FULL_HISTORY_POINTS:
        logger.debug(
            "%s: %d candle(s) available, some indicators use short-series fallbacks",
            asset_name,
            len(series),
        )

    indicators = compute_indicators(series)
    return MarketAnalysis(
        asset=asset_name,
        current_price=current_price,
        indicators=indicators,
        signal=generate_signal(indicators, current_price, asset_name),
        trend=analyze_trend(series, current_price),
    )
