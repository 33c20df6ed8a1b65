import pytest

from tradetools.schemas.market import Candle

BASE_TIME = 1_700_000_000_000
HOUR = 3_600_000


def make_candle(index, close, high=None, low=None, open_=None, volume="100", symbol="BTC", interval="1h"):
    """Wire-format candle closing `index` hours after BASE_TIME."""
    close = float(close)
    return Candle.model_validate(
        {
            "t": BASE_TIME + (index - 1) * HOUR,
            "T": BASE_TIME + index * HOUR - 1,
            "s": symbol,
            "i": interval,
            "o": str(open_ if open_ is not None else close),
            "c": str(close),
            "h": str(high if high is not None else close + 1),
            "l": str(low if low is not None else close - 1),
            "v": volume,
            "n": 10,
        }
    )


def make_series(closes, **kwargs):
    return [make_candle(i, c, **kwargs) for i, c in enumerate(closes)]


@pytest.fixture
def candle_factory():
    return make_candle


@pytest.fixture
def series_factory():
    return make_series
