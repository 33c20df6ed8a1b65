"""Tests for the NumPy indicator formulas and library output shapes."""

import numpy as np
import pytest

from tradetools.schemas.indicators import PriceSeries
from tradetools.schemas.market import IndicatorKind, IndicatorPeriods
from tradetools.services.indicators.calculations import atr, ema, macd, rsi, sma, vwap
from tradetools.services.indicators.library import NumpyIndicatorLibrary, trim_series


def _prices(closes):
    closes = np.asarray(closes, dtype=float)
    return PriceSeries(
        highs=closes + 1,
        lows=closes - 1,
        closes=closes,
        volumes=np.full(len(closes), 10.0),
    )


@pytest.fixture
def trending():
    # Deterministic zig-zag uptrend
    return _prices([100 + i * 0.5 + (i % 3) for i in range(70)])


class TestFormulas:
    def test_sma(self):
        result = sma(np.array([1.0, 2.0, 3.0, 4.0]), 2)
        assert np.isnan(result[0])
        assert list(result[1:]) == [1.5, 2.5, 3.5]

    def test_ema_seeded_with_sma(self):
        result = ema(np.array([1.0, 2.0, 3.0, 4.0]), 3)
        assert np.isnan(result[1])
        assert result[2] == pytest.approx(2.0)
        assert result[3] == pytest.approx(3.0)

    def test_ema_skips_leading_nans(self):
        data = np.array([np.nan, np.nan, 1.0, 2.0, 3.0])
        result = ema(data, 2)
        assert result[3] == pytest.approx(1.5)
        assert np.isfinite(result[4])

    def test_rsi_all_gains_is_100(self):
        result = rsi(np.arange(1.0, 20.0), 14)
        assert np.isnan(result[13])
        assert result[14] == 100.0
        assert result[-1] == 100.0

    def test_macd_signal_is_defined(self, trending):
        line, signal, histogram = macd(trending.closes, 12, 26, 9)
        assert np.isnan(line[24])
        assert np.isfinite(line[25])
        assert np.isnan(signal[32])
        assert np.isfinite(signal[33])
        assert histogram[-1] == pytest.approx(line[-1] - signal[-1])

    def test_atr_first_value_at_period(self, trending):
        result = atr(trending.highs, trending.lows, trending.closes, 14)
        assert np.isnan(result[13])
        assert np.isfinite(result[14])

    def test_vwap_with_zero_volume_uses_typical_price(self):
        highs = np.array([11.0, 12.0])
        lows = np.array([9.0, 10.0])
        closes = np.array([10.0, 11.0])
        result = vwap(highs, lows, closes, np.zeros(2))
        assert list(result) == [10.0, 11.0]


def test_trim_series_drops_warmup_prefix():
    assert trim_series(np.array([np.nan, np.nan, 1.0, np.inf, 2.0])) == [1.0, None, 2.0]
    assert trim_series(np.array([np.nan, np.nan])) == []


class TestNumpyIndicatorLibrary:
    @pytest.mark.parametrize(
        "kind, expected_length",
        [
            (IndicatorKind.SMA, 70 - 19),
            (IndicatorKind.EMA, 70 - 19),
            (IndicatorKind.RSI, 70 - 14),
            (IndicatorKind.ATR, 70 - 14),
            (IndicatorKind.MACD, 70 - 25),
            (IndicatorKind.BOLLINGER_BANDS, 70 - 19),
            (IndicatorKind.VWAP, 70),
        ],
    )
    def test_output_lengths(self, trending, kind, expected_length):
        output = NumpyIndicatorLibrary().compute(kind, trending, IndicatorPeriods())
        assert len(output) == expected_length

    def test_macd_records(self, trending):
        output = NumpyIndicatorLibrary().compute(IndicatorKind.MACD, trending, IndicatorPeriods())
        assert set(output[0]) == {"macd", "signal", "histogram"}
        assert output[0]["signal"] is None
        assert output[-1]["signal"] is not None

    def test_bollinger_records(self, trending):
        output = NumpyIndicatorLibrary().compute(IndicatorKind.BOLLINGER_BANDS, trending, IndicatorPeriods())
        last = output[-1]
        assert set(last) == {"middle", "upper", "lower", "percentB"}
        assert last["lower"] < last["middle"] < last["upper"]

    def test_flat_series_has_no_percent_b(self):
        output = NumpyIndicatorLibrary().compute(
            IndicatorKind.BOLLINGER_BANDS, _prices([5.0] * 25), IndicatorPeriods()
        )
        assert output[-1]["percentB"] is None
        assert output[-1]["middle"] == 5.0

    def test_short_series_yields_empty_output(self):
        output = NumpyIndicatorLibrary().compute(IndicatorKind.EMA, _prices([1.0, 2.0]), IndicatorPeriods())
        assert output == []
