"""Deterministic tests for Bollinger Bands, ATR and the ADX proxy."""

import math

import pytest

from signalforge.engine.models import PricePoint
from signalforge.engine.volatility import adx, atr, bollinger_bands


def _make_candle(i: int, o: float, h: float, l: float, c: float, vol: float = 1000) -> PricePoint:
    return PricePoint(timestamp=1_700_000_000_000 + i * 86_400_000,
                      open=o, high=h, low=l, close=c, volume=vol)


# ── Bollinger Bands ──────────────────────────────────────────────────────


class TestBollingerBands:
    def test_constant_series_collapses(self):
        bands = bollinger_bands([100.0] * 25)
        assert bands.upper == bands.middle == bands.lower == 100.0

    def test_short_series_uses_last_price(self):
        bands = bollinger_bands([10.0, 11.0, 12.0])
        assert bands.upper == bands.middle == bands.lower == 12.0

    def test_empty_series_is_zero(self):
        bands = bollinger_bands([])
        assert (bands.upper, bands.middle, bands.lower) == (0.0, 0.0, 0.0)

    def test_population_std_dev(self):
        # Period-4 window over 2, 4, 4, 6
        closes = [99.0, 2.0, 4.0, 4.0, 6.0]
        bands = bollinger_bands(closes, period=4)
        # mean = 4, population variance = (4 + 0 + 0 + 4) / 4 = 2
        sigma = math.sqrt(2)
        assert bands.middle == pytest.approx(4.0)
        assert bands.upper == pytest.approx(4.0 + 2 * sigma)
        assert bands.lower == pytest.approx(4.0 - 2 * sigma)

    def test_bands_are_symmetric(self):
        closes = [100 + (i % 5) for i in range(30)]
        bands = bollinger_bands(closes)
        assert bands.upper - bands.middle == pytest.approx(bands.middle - bands.lower)


# ── ATR ──────────────────────────────────────────────────────────────────


class TestATR:
    def test_fewer_than_two_candles_is_zero(self):
        assert atr([]) == 0
        assert atr([_make_candle(0, 10, 11, 9, 10)]) == 0

    def test_uniform_ranges(self):
        # Each candle range 2.0, closes flat so gaps never dominate
        candles = [_make_candle(i, 10, 11, 9, 10) for i in range(20)]
        assert atr(candles) == pytest.approx(2.0)

    def test_gap_uses_previous_close(self):
        candles = [
            _make_candle(0, 10, 11, 9, 10),
            _make_candle(1, 15, 16, 15, 16),  # |16 - 10| = 6 > range 1
        ]
        assert atr(candles) == pytest.approx(6.0)

    def test_averages_available_ranges_when_short(self):
        candles = [
            _make_candle(0, 10, 11, 9, 10),
            _make_candle(1, 10, 12, 9, 10),  # TR 3
            _make_candle(2, 10, 11, 10, 10),  # TR 1
        ]
        assert atr(candles) == pytest.approx(2.0)

    def test_only_last_period_ranges(self):
        candles = [_make_candle(0, 10, 11, 9, 10), _make_candle(1, 10, 60, 5, 10)]
        candles += [_make_candle(i, 10, 11, 9, 10) for i in range(2, 20)]
        assert atr(candles, period=14) == pytest.approx(2.0)


# ── ADX proxy ────────────────────────────────────────────────────────────


class TestADX:
    def test_fewer_than_two_candles_is_zero(self):
        assert adx([]) == 0
        assert adx([_make_candle(0, 10, 11, 9, 10)]) == 0

    def test_flat_closes_is_zero(self):
        candles = [_make_candle(i, 10, 11, 9, 10) for i in range(20)]
        assert adx(candles) == 0

    def test_scaled_mean_change(self):
        # Every step moves 1% → 0.01 * 1000 = 10
        closes = [100.0 * 1.01 ** i for i in range(20)]
        candles = [_make_candle(i, c, c, c, c) for i, c in enumerate(closes)]
        assert adx(candles) == pytest.approx(10.0)

    def test_capped_at_100(self):
        closes = [100.0 * (1.5 if i % 2 else 1.0) for i in range(20)]
        candles = [_make_candle(i, c, c, c, c) for i, c in enumerate(closes)]
        assert adx(candles) == 100
