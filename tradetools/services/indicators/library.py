"""
NumPy Indicator Library

Default implementation of the indicator formula capability on top of
calculations.py. Full-length NaN-padded arrays are trimmed to the
"output starts at first valid value" shape expected by the alignment engine.
"""

import math
from typing import Optional

import numpy as np

from tradetools.schemas.market import IndicatorKind, IndicatorPeriods
from tradetools.schemas.indicators import IndicatorSeries, PriceSeries
from tradetools.services.indicators.interface import IndicatorLibraryInterface
from tradetools.services.indicators.calculations import (
    atr,
    bollinger_bands,
    ema,
    macd,
    rsi,
    sma,
    vwap,
)


def _clean(value: float) -> Optional[float]:
    value = float(value)
    return value if math.isfinite(value) else None


def _leading_invalid(primary: np.ndarray) -> int:
    finite = np.flatnonzero(np.isfinite(primary))
    return int(finite[0]) if len(finite) else len(primary)


def trim_series(values: np.ndarray) -> IndicatorSeries:
    """Drop the warm-up prefix of a NaN-padded array."""
    start = _leading_invalid(values)
    return [_clean(v) for v in values[start:]]


def trim_records(primary: np.ndarray, fields: dict[str, np.ndarray]) -> IndicatorSeries:
    """Drop the warm-up prefix (judged on `primary`) and zip fields into records."""
    start = _leading_invalid(primary)
    return [
        {name: _clean(arr[i]) for name, arr in fields.items()}
        for i in range(start, len(primary))
    ]


class NumpyIndicatorLibrary(IndicatorLibraryInterface):
    """Indicator formulas evaluated with NumPy."""

    def compute(
        self,
        kind: IndicatorKind,
        inputs: PriceSeries,
        params: IndicatorPeriods,
    ) -> IndicatorSeries:
        closes = inputs.closes

        with np.errstate(divide="ignore", invalid="ignore"):
            if kind == IndicatorKind.RSI:
                return trim_series(rsi(closes, params.rsi_period))

            if kind == IndicatorKind.EMA:
                return trim_series(ema(closes, params.ema_period))

            if kind == IndicatorKind.SMA:
                return trim_series(sma(closes, params.sma_period))

            if kind == IndicatorKind.ATR:
                return trim_series(
                    atr(inputs.highs, inputs.lows, closes, params.atr_period)
                )

            if kind == IndicatorKind.VWAP:
                return trim_series(
                    vwap(inputs.highs, inputs.lows, closes, inputs.volumes)
                )

            if kind == IndicatorKind.MACD:
                line, signal, histogram = macd(
                    closes, params.macd_fast, params.macd_slow, params.macd_signal
                )
                return trim_records(
                    line,
                    {"macd": line, "signal": signal, "histogram": histogram},
                )

            if kind == IndicatorKind.BOLLINGER_BANDS:
                upper, middle, lower, percent_b = bollinger_bands(
                    closes, params.bb_period, params.bb_std_dev
                )
                return trim_records(
                    middle,
                    {
                        "middle": middle,
                        "upper": upper,
                        "lower": lower,
                        "percentB": percent_b,
                    },
                )

        raise ValueError(f"Unknown indicator kind: {kind}")
