"""
CONTRACT 2: Indicator Engine

Input:  Candle series (from the market data adapter)
Output: Aligned indicator rows / confirmed pivot points

Value types shared by the alignment engine, the indicator library and the
pivot detector.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

import numpy as np

from tradetools.core.decimal_codec import format_decimal


# A single indicator output: a number, a record of optional numbers
# (MACD, Bollinger Bands) or None while warming up.
IndicatorValue = Union[float, dict[str, Optional[float]], None]
IndicatorSeries = list[IndicatorValue]


@dataclass
class PriceSeries:
    """Numeric OHLCV arrays for calculations (oldest first)."""

    highs: np.ndarray
    lows: np.ndarray
    closes: np.ndarray
    volumes: np.ndarray

    def __len__(self) -> int:
        return len(self.closes)


@dataclass
class PivotPoint:
    """A confirmed local extremum."""

    timestamp: int
    timestamp_iso: str
    bars_ago: int
    price: float
    pct_from_current_close: float

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "timestampIso": self.timestamp_iso,
            "barsAgo": self.bars_ago,
            "price": format_decimal(self.price),
            "pctFromCurrentClose": self.pct_from_current_close,
        }


@dataclass
class PivotResult:
    """Pivot highs and lows, oldest to newest."""

    pivot_highs: list[PivotPoint] = field(default_factory=list)
    pivot_lows: list[PivotPoint] = field(default_factory=list)
