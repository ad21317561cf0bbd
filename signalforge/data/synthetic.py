"""Synthetic daily OHLCV series for demos and tests.

A seeded random walk.  Randomness lives here only: the engine never imports
this module, so indicator output stays a pure function of its input.
"""

import time
from typing import Optional

import numpy as np

from signalforge.engine.models import PricePoint

DAY_MS = 24 * 60 * 60 * 1000

# Max wick beyond the candle body, as a fraction of price.
_WICK_PCT = 0.02
_MIN_VOLUME = 500_000
_VOLUME_SPAN = 1_000_000


def generate_price_history(
    base_price: float,
    volatility: float,
    days: int = 30,
    seed: Optional[int] = None,
    end_timestamp: Optional[int] = None,
) -> list[PricePoint]:
    """Generate ``days + 1`` daily candles ending at *end_timestamp*.

    Args:
        base_price: Reference price; the walk starts within ±5% of it.
        volatility: Max daily move as a fraction of price (e.g. 0.015).
        days: Number of daily steps back from the last candle.
        seed: Seed for ``numpy.random.default_rng``; same seed and
            *end_timestamp* reproduce the same series.
        end_timestamp: Epoch ms of the last candle (default: now).

    Raises ``ValueError`` for a non-positive *base_price*, negative
    *volatility* or negative *days*.
    """
    if base_price <= 0:
        raise ValueError(f"base_price must be positive, got {base_price}")
    if volatility < 0:
        raise ValueError(f"volatility must be non-negative, got {volatility}")
    if days < 0:
        raise ValueError(f"days must be non-negative, got {days}")

    rng = np.random.default_rng(seed)
    if end_timestamp is None:
        end_timestamp = int(time.time() * 1000)

    price = base_price * (0.95 + rng.random() * 0.1)
    history: list[PricePoint] = []

    for i in range(days, -1, -1):
        daily_change = (rng.random() - 0.5) * volatility * price
        open_ = price
        close = price + daily_change
        high = max(open_, close) * (1 + rng.random() * _WICK_PCT)
        low = min(open_, close) * (1 - rng.random() * _WICK_PCT)
        volume = int(rng.integers(_MIN_VOLUME, _MIN_VOLUME + _VOLUME_SPAN))

        history.append(
            PricePoint(
                timestamp=end_timestamp - i * DAY_MS,
                open=float(open_),
                high=float(high),
                low=float(low),
                close=float(close),
                volume=float(volume),
            )
        )
        price = close

    return history
