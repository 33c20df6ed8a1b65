"""
Tradetools Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from tradetools.schemas.market import (
    Candle,
    IndicatorKind,
    IndicatorPeriods,
    Interval,
    INTERVAL_MS,
    MarketDataRequest,
    PivotRequest,
)
from tradetools.schemas.indicators import (
    IndicatorSeries,
    IndicatorValue,
    PivotPoint,
    PivotResult,
    PriceSeries,
)
from tradetools.schemas.rpc import (
    JsonRpcRequest,
    rpc_error,
    rpc_result,
)

__all__ = [
    # Market
    "Candle",
    "IndicatorKind",
    "IndicatorPeriods",
    "Interval",
    "INTERVAL_MS",
    "MarketDataRequest",
    "PivotRequest",
    # Indicators
    "IndicatorSeries",
    "IndicatorValue",
    "PivotPoint",
    "PivotResult",
    "PriceSeries",
    # JSON-RPC
    "JsonRpcRequest",
    "rpc_error",
    "rpc_result",
]
