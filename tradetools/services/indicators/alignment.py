"""
Indicator Alignment Engine

Each indicator output is shorter than the candle series by its own warm-up
length. Map every output back onto the candle index it belongs to and merge
the overlays into the requested display window.
"""

import math
from typing import Optional, Sequence

import numpy as np

from tradetools.core.decimal_codec import (
    candle_type,
    format_decimal,
    parse_decimal,
    to_iso,
)
from tradetools.schemas.market import Candle, IndicatorKind, IndicatorPeriods
from tradetools.schemas.indicators import IndicatorSeries, IndicatorValue, PriceSeries
from tradetools.services.indicators.interface import IndicatorLibraryInterface


def local_index(global_index: int, series_length: int, output_length: int) -> Optional[int]:
    """
    Position of candle `global_index` inside an indicator output.

    An output of length m over n candles starts at candle n - m. Returns None
    while the candle is still in the indicator's warm-up.
    """
    local = global_index - (series_length - output_length)
    if local < 0 or local >= output_length:
        return None
    return local


def value_at(series: IndicatorSeries, global_index: int, series_length: int) -> IndicatorValue:
    """Indicator value aligned to a candle, or None."""
    local = local_index(global_index, series_length, len(series))
    if local is None:
        return None
    return series[local]


def format_value(value: IndicatorValue):
    """Decimal-string formatting; each record sub-field is independently nullable."""
    if value is None:
        return None
    if isinstance(value, dict):
        return {name: format_value(sub) for name, sub in value.items()}
    if not math.isfinite(value):
        return None
    return format_decimal(value)


def price_series(candles: Sequence[Candle]) -> PriceSeries:
    """Candles to numeric arrays via the decimal codec."""
    return PriceSeries(
        highs=np.array([parse_decimal(c.high) for c in candles], dtype=float),
        lows=np.array([parse_decimal(c.low) for c in candles], dtype=float),
        closes=np.array([parse_decimal(c.close) for c in candles], dtype=float),
        volumes=np.array([parse_decimal(c.volume) for c in candles], dtype=float),
    )


def candle_row(candle: Candle) -> dict:
    """Base response row for a candle, without indicator fields."""
    open_ = parse_decimal(candle.open)
    high = parse_decimal(candle.high)
    low = parse_decimal(candle.low)
    close = parse_decimal(candle.close)
    return {
        "symbol": candle.symbol,
        "interval": candle.interval,
        "closeTime": candle.close_time,
        "closeTimeIso": to_iso(candle.close_time),
        "open": format_decimal(open_),
        "high": format_decimal(high),
        "low": format_decimal(low),
        "close": format_decimal(close),
        "volume": format_decimal(parse_decimal(candle.volume)),
        "candleType": candle_type(open_, high, low, close),
    }


def align_indicators(
    candles: Sequence[Candle],
    kinds: Sequence[IndicatorKind],
    periods: IndicatorPeriods,
    library: IndicatorLibraryInterface,
    count: int,
) -> list[dict]:
    """
    Evaluate indicators over the full series and emit the last `count` rows.

    Candles fetched only for warm-up are dropped after alignment. If fewer
    than `count` candles are available, all of them are emitted.
    """
    n = len(candles)
    if n == 0:
        return []

    inputs = price_series(candles)
    outputs = {kind: library.compute(kind, inputs, periods) for kind in kinds}

    rows = []
    for g in range(max(0, n - count), n):
        row = candle_row(candles[g])
        for kind, series in outputs.items():
            row[kind.value] = format_value(value_at(series, g, n))
        rows.append(row)

    return rows
