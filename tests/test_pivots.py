"""Tests for confirmed pivot detection."""

from tradetools.services.indicators.pivots import detect_pivots, pct_from_close
from tests.conftest import make_candle


def _candles(highs, lows):
    return [make_candle(i, 10, high=h, low=l) for i, (h, l) in enumerate(zip(highs, lows))]


def test_later_equal_high_invalidates_earlier_pivot():
    candles = _candles(
        highs=[10, 12, 11, 15, 9, 15, 10],
        lows=[8, 9, 7, 12, 6, 13, 9],
    )

    result = detect_pivots(candles, left=1, right=1, current_close=12)

    assert [p.bars_ago for p in result.pivot_highs] == [1]
    high = result.pivot_highs[0]
    assert high.price == 15
    assert high.timestamp == candles[5].close_time
    assert high.pct_from_current_close == 25.0

    assert [p.bars_ago for p in result.pivot_lows] == [2]
    assert result.pivot_lows[0].price == 6
    assert result.pivot_lows[0].pct_from_current_close == -50.0


def test_equal_neighbour_does_not_block_candidacy():
    candles = _candles(highs=[10, 15, 15, 10], lows=[5, 5, 5, 5])

    result = detect_pivots(candles, left=1, right=1, current_close=10)

    # Index 1 is a candidate but index 2 matches it later; index 2 survives
    assert [p.timestamp for p in result.pivot_highs] == [candles[2].close_time]


def test_edges_are_never_pivots():
    candles = _candles(highs=[20, 10, 11, 10, 30], lows=[1, 5, 4, 5, 0])

    result = detect_pivots(candles, left=1, right=1, current_close=10)

    assert all(p.timestamp not in (candles[0].close_time, candles[4].close_time)
               for p in result.pivot_highs + result.pivot_lows)


def test_series_shorter_than_window():
    candles = _candles(highs=[1, 2, 3], lows=[0, 1, 2])
    result = detect_pivots(candles, left=3, right=3, current_close=2)
    assert result.pivot_highs == []
    assert result.pivot_lows == []


def test_pivots_are_ordered_oldest_first():
    candles = _candles(
        highs=[1, 9, 1, 8, 1, 7, 1],
        lows=[0, 0, 0, 0, 0, 0, 0],
    )
    result = detect_pivots(candles, left=1, right=1, current_close=1)
    assert [p.bars_ago for p in result.pivot_highs] == [5, 3, 1]


def test_pct_from_close():
    assert pct_from_close(110, 100) == 10.0
    assert pct_from_close(101, 100) == 1.0
    assert pct_from_close(4, 3) == 33.33
    assert pct_from_close(2, 3) == -33.33
    assert pct_from_close(5, 0) == 0


def test_to_dict_formats_price():
    candles = _candles(highs=[1, 2.5, 1], lows=[0, 0.5, 0])
    result = detect_pivots(candles, left=1, right=1, current_close=1)
    payload = result.pivot_highs[0].to_dict()
    assert payload["price"] == "2.5"
    assert payload["barsAgo"] == 1
    assert payload["timestampIso"].endswith("Z")
