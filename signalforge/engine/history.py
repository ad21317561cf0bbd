"""Signal history — signals as they would have been issued earlier in a series."""

import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from signalforge.engine.indicators import compute_indicators
from signalforge.engine.models import PricePoint, Signal
from signalforge.engine.signals import generate_signal

logger = logging.getLogger("signalforge")

DEFAULT_MAX_SIGNALS = 5
DEFAULT_MIN_POINTS = 20


def _candle_time(point: PricePoint) -> datetime:
    return datetime.fromtimestamp(point.timestamp / 1000, tz=timezone.utc)


def signal_history(
    series: Sequence[PricePoint],
    asset_name: str,
    max_signals: int = DEFAULT_MAX_SIGNALS,
    min_points: int = DEFAULT_MIN_POINTS,
) -> list[Signal]:
    """Replay the signal pipeline at evenly spaced cut-off points.

    The series is truncated at up to *max_signals* points, ``n // count``
    candles apart and working back from the latest candle.  Each truncated
    slice gets the full indicator bundle and a signal at its last close,
    stamped with that candle's time.  Cut-offs leaving fewer than
    *min_points* candles are dropped.

    Returns:
        Signals newest first; empty when the series is shorter than
        *min_points*.
    """
    if max_signals < 1:
        raise ValueError(f"max_signals must be at least 1, got {max_signals}")

    n = len(series)
    if n < min_points:
        logger.debug(
            "%s: %d candle(s) is below the %d needed for signal history",
            asset_name, n, min_points,
        )
        return []

    count = min(max_signals, n // 4)
    if count == 0:
        return []
    step = max(1, n // count)

    signals: list[Signal] = []
    for i in range(count):
        end = n - i * step
        if end < min_points:
            break
        window = series[:end]
        last = window[-1]
        signals.append(
            generate_signal(
                compute_indicators(window),
                last.close,
                asset_name,
                timestamp=_candle_time(last),
            )
        )
    return signals
