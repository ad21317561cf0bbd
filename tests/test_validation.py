"""Tests for parsing and validating incoming price series."""

import math

import pytest

from signalforge.engine.models import PricePoint
from signalforge.engine.validation import (
    MAX_TIMESTAMP_MS,
    SeriesValidationError,
    parse_price,
    parse_series,
    validate_series,
)


def _row(ts: int = 1_700_000_000_000, **overrides) -> dict:
    row = {"timestamp": ts, "open": 10, "high": 11, "low": 9, "close": 10.5, "volume": 100}
    row.update(overrides)
    return row


def _make_candle(i: int, o: float = 10, h: float = 11, l: float = 9, c: float = 10,
                 vol: float = 1000) -> PricePoint:
    return PricePoint(timestamp=1_700_000_000_000 + i * 86_400_000,
                      open=o, high=h, low=l, close=c, volume=vol)


class TestParseSeries:
    def test_parses_rows(self):
        series = parse_series([_row(), _row(1_700_086_400_000, close="12.5")])
        assert len(series) == 2
        assert series[0] == PricePoint(1_700_000_000_000, 10.0, 11.0, 9.0, 10.5, 100.0)
        assert series[1].close == 12.5

    def test_volume_defaults_to_zero(self):
        row = _row()
        del row["volume"]
        assert parse_series([row])[0].volume == 0.0

    def test_empty_input(self):
        assert parse_series([]) == []

    def test_missing_field(self):
        row = _row()
        del row["close"]
        with pytest.raises(SeriesValidationError, match="close"):
            parse_series([row])

    def test_non_numeric_field(self):
        with pytest.raises(SeriesValidationError, match="Candle 0.*high"):
            parse_series([_row(high="abc")])

    def test_non_mapping_row(self):
        with pytest.raises(SeriesValidationError, match="expected an object"):
            parse_series([[1, 2, 3, 4, 5]])

    def test_non_finite_timestamp(self):
        with pytest.raises(SeriesValidationError, match="timestamp"):
            parse_series([_row(ts=float("inf"))])

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_series([_row(open=None)])


class TestValidateSeries:
    def test_well_formed_passes(self):
        validate_series([_make_candle(i) for i in range(5)])

    def test_empty_passes(self):
        validate_series([])

    def test_duplicate_timestamp(self):
        with pytest.raises(SeriesValidationError, match="Candle 1: timestamp"):
            validate_series([_make_candle(0), _make_candle(0)])

    def test_descending_timestamp(self):
        with pytest.raises(SeriesValidationError, match="timestamp"):
            validate_series([_make_candle(1), _make_candle(0)])

    @pytest.mark.parametrize("field", ["o", "h", "l", "c"])
    def test_non_positive_price(self, field):
        with pytest.raises(SeriesValidationError, match="positive"):
            validate_series([_make_candle(0, **{field: 0})])

    def test_nan_price(self):
        with pytest.raises(SeriesValidationError, match="close"):
            validate_series([_make_candle(0, c=math.nan)])

    def test_negative_volume(self):
        with pytest.raises(SeriesValidationError, match="volume"):
            validate_series([_make_candle(0, vol=-1)])

    def test_zero_volume_allowed(self):
        validate_series([_make_candle(0, vol=0)])

    def test_timestamp_beyond_year_9999(self):
        point = PricePoint(MAX_TIMESTAMP_MS + 1, 10, 11, 9, 10, 0)
        with pytest.raises(SeriesValidationError, match="Candle 0: timestamp.*outside"):
            validate_series([point])

    def test_negative_timestamp(self):
        with pytest.raises(SeriesValidationError, match="outside"):
            validate_series([PricePoint(-1, 10, 11, 9, 10, 0)])

    def test_last_supported_timestamp_passes(self):
        validate_series([PricePoint(MAX_TIMESTAMP_MS, 10, 11, 9, 10, 0)])


class TestParsePrice:
    @pytest.mark.parametrize("value,expected", [(50, 50.0), ("12.5", 12.5), (0.01, 0.01)])
    def test_accepts_positive_numbers(self, value, expected):
        assert parse_price(value) == expected

    @pytest.mark.parametrize("value", ["nan", "inf", "-inf", float("nan"), 0, -50, "-1"])
    def test_rejects_non_finite_and_non_positive(self, value):
        with pytest.raises(SeriesValidationError, match="current_price.*positive"):
            parse_price(value)

    @pytest.mark.parametrize("value", ["abc", [], {}])
    def test_rejects_non_numeric(self, value):
        with pytest.raises(SeriesValidationError, match="not numeric"):
            parse_price(value)

    def test_rejects_bool(self):
        with pytest.raises(SeriesValidationError, match="must be a number"):
            parse_price(True)

    def test_names_the_argument(self):
        with pytest.raises(SeriesValidationError, match="--price"):
            parse_price("nan", "--price")
