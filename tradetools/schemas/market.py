"""
CONTRACT 1: Market Data

Input:  MarketDataRequest / PivotRequest (tool-call arguments)
Output: Candle series from the exchange

Candles are kept exactly as the exchange returns them (decimal strings);
numeric conversion happens in the analytics layer via the decimal codec.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class Interval(str, Enum):
    M1 = "1m"
    M3 = "3m"
    M5 = "5m"
    M15 = "15m"
    M30 = "30m"
    H1 = "1h"
    H2 = "2h"
    H4 = "4h"
    H8 = "8h"
    H12 = "12h"
    D1 = "1d"
    D3 = "3d"
    W1 = "1w"
    MO1 = "1M"


INTERVAL_MS = {
    Interval.M1: 60_000,
    Interval.M3: 3 * 60_000,
    Interval.M5: 5 * 60_000,
    Interval.M15: 15 * 60_000,
    Interval.M30: 30 * 60_000,
    Interval.H1: 3_600_000,
    Interval.H2: 2 * 3_600_000,
    Interval.H4: 4 * 3_600_000,
    Interval.H8: 8 * 3_600_000,
    Interval.H12: 12 * 3_600_000,
    Interval.D1: 86_400_000,
    Interval.D3: 3 * 86_400_000,
    Interval.W1: 7 * 86_400_000,
    # Longest calendar month, so N intervals always span N monthly candles
    Interval.MO1: 31 * 86_400_000,
}


class IndicatorKind(str, Enum):
    RSI = "rsi"
    MACD = "macd"
    ATR = "atr"
    BOLLINGER_BANDS = "bollingerBands"
    EMA = "ema"
    SMA = "sma"
    VWAP = "vwap"


# =============================================================================
# CANDLE
# =============================================================================


class Candle(BaseModel):
    """
    Single OHLCV candle as returned by the Hyperliquid candleSnapshot API.

    Wire keys: t (open time), T (close time), s, i, o, c, h, l, v, n.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    open_time: int = Field(default=0, alias="t")
    close_time: int = Field(..., alias="T")
    symbol: str = Field(default="", alias="s")
    interval: str = Field(default="", alias="i")
    open: str = Field(..., alias="o")
    close: str = Field(..., alias="c")
    high: str = Field(..., alias="h")
    low: str = Field(..., alias="l")
    volume: str = Field(default="0", alias="v")
    trades: int = Field(default=0, alias="n")


# =============================================================================
# INPUT: Tool arguments
# =============================================================================


class IndicatorPeriods(BaseModel):
    """Per-indicator parameters with their allowed bounds."""

    model_config = ConfigDict(populate_by_name=True)

    rsi_period: int = Field(default=14, ge=2, le=30, alias="rsiPeriod")
    macd_fast: int = Field(default=12, ge=2, le=50, alias="macdFast")
    macd_slow: int = Field(default=26, ge=2, le=100, alias="macdSlow")
    macd_signal: int = Field(default=9, ge=2, le=50, alias="macdSignal")
    atr_period: int = Field(default=14, ge=2, le=50, alias="atrPeriod")
    bb_period: int = Field(default=20, ge=2, le=50, alias="bbPeriod")
    bb_std_dev: float = Field(default=2.0, ge=0.5, le=5.0, alias="bbStdDev")
    ema_period: int = Field(default=20, ge=2, le=50, alias="emaPeriod")
    sma_period: int = Field(default=20, ge=2, le=50, alias="smaPeriod")

    @model_validator(mode="after")
    def _check_macd_order(self) -> "IndicatorPeriods":
        if self.macd_fast >= self.macd_slow:
            raise ValueError("macdFast must be smaller than macdSlow")
        return self

    def params_for(self, kinds: list[IndicatorKind]) -> dict:
        """Only the parameters relevant to the requested indicators, keyed by wire name."""
        fields = {
            IndicatorKind.RSI: ["rsiPeriod"],
            IndicatorKind.MACD: ["macdFast", "macdSlow", "macdSignal"],
            IndicatorKind.ATR: ["atrPeriod"],
            IndicatorKind.BOLLINGER_BANDS: ["bbPeriod", "bbStdDev"],
            IndicatorKind.EMA: ["emaPeriod"],
            IndicatorKind.SMA: ["smaPeriod"],
            IndicatorKind.VWAP: [],
        }
        dumped = self.model_dump(by_alias=True)
        return {name: dumped[name] for kind in kinds for name in fields[kind]}


class MarketDataRequest(IndicatorPeriods):
    """Arguments for get_market_data."""

    coin: str = Field(..., min_length=1, description="Coin symbol, e.g. BTC, ETH, HYPE")
    interval: Interval = Field(..., description="Candle interval")
    count: int = Field(default=20, ge=1, le=30, description="Number of candles to return")
    indicators: Optional[list[IndicatorKind]] = Field(
        default=None,
        description="Indicators to overlay on each candle",
    )

    def requested_kinds(self) -> list[IndicatorKind]:
        """Requested indicators, de-duplicated, in request order."""
        return list(dict.fromkeys(self.indicators or []))


class PivotRequest(BaseModel):
    """Arguments for get_pivot_highs_and_lows."""

    model_config = ConfigDict(populate_by_name=True)

    coin: str = Field(..., min_length=1, description="Coin symbol, e.g. BTC, ETH, HYPE")
    interval: Interval = Field(..., description="Candle interval")
    left: int = Field(default=3, ge=1, le=10, description="Bars to the left of a pivot")
    right: int = Field(default=3, ge=1, le=10, description="Bars to the right of a pivot")
