"""
Lookback Sizer

How many extra candles to fetch before the display window so every requested
indicator is warmed up by the most recent candle.
"""

from typing import Iterable, Optional

from tradetools.schemas.market import IndicatorKind, IndicatorPeriods

DEFAULT_INDICATOR_LOOKBACK = 50

# Internal smoothing window of the RSI moving average, independent of rsiPeriod
RSI_SMOOTHING_LENGTH = 14

MAX_FETCH_CANDLES = 100


def _warmup(kind: IndicatorKind, periods: IndicatorPeriods) -> int:
    if kind == IndicatorKind.RSI:
        return periods.rsi_period + RSI_SMOOTHING_LENGTH + (RSI_SMOOTHING_LENGTH - 1)
    if kind == IndicatorKind.MACD:
        return periods.macd_slow + periods.macd_signal
    if kind == IndicatorKind.ATR:
        return periods.atr_period
    if kind == IndicatorKind.BOLLINGER_BANDS:
        return periods.bb_period
    if kind == IndicatorKind.EMA:
        return periods.ema_period
    if kind == IndicatorKind.SMA:
        return periods.sma_period
    if kind == IndicatorKind.VWAP:
        return 1
    return 0


def required_lookback(
    indicators: Optional[Iterable[IndicatorKind]],
    periods: IndicatorPeriods,
) -> int:
    """
    Extra candles needed ahead of the display window.

    Warm-ups are a high-water mark, not a sum: all indicators run over the
    same fetched series.
    """
    kinds = list(indicators or [])
    if not kinds:
        return DEFAULT_INDICATOR_LOOKBACK

    lookback = max(_warmup(IndicatorKind(kind), periods) for kind in kinds)
    return lookback or DEFAULT_INDICATOR_LOOKBACK


def fetch_size(count: int, lookback: int, ceiling: int = MAX_FETCH_CANDLES) -> int:
    """Candles to request: display window plus lookback, capped at the ceiling."""
    return min(count + lookback, ceiling)
