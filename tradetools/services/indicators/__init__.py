"""
Indicator Engine

CONTRACT:
    Input:  Candle series + requested indicators / pivot window
    Output: Aligned indicator rows, confirmed pivot points

RESPONSIBILITIES:
    - Size the warm-up lookback for a set of indicators
    - Evaluate indicator formulas (pluggable library, NumPy by default)
    - Align each indicator output back onto candle timestamps
    - Detect confirmed pivot highs/lows

Pure computation, no I/O. All math is deterministic and reproducible.
"""

from tradetools.services.indicators.interface import IndicatorLibraryInterface
from tradetools.services.indicators.library import NumpyIndicatorLibrary
from tradetools.services.indicators.lookback import (
    DEFAULT_INDICATOR_LOOKBACK,
    fetch_size,
    required_lookback,
)
from tradetools.services.indicators.alignment import align_indicators, local_index
from tradetools.services.indicators.pivots import detect_pivots

__all__ = [
    "IndicatorLibraryInterface",
    "NumpyIndicatorLibrary",
    "DEFAULT_INDICATOR_LOOKBACK",
    "fetch_size",
    "required_lookback",
    "align_indicators",
    "local_index",
    "detect_pivots",
]
