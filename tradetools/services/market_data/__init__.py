"""
Market Data Service

CONTRACT:
    Input:  MarketDataRequest / PivotRequest
    Output: JSON-ready dict (candles with indicators, or pivot points)

RESPONSIBILITIES:
    - Size the fetch window (display count + indicator warm-up, capped)
    - Fetch candles once per request from Hyperliquid
    - Run the indicator alignment engine or the pivot detector
"""

from tradetools.services.market_data.interface import CandleSourceInterface
from tradetools.services.market_data.hyperliquid_adapter import HyperliquidClient
from tradetools.services.market_data.service import (
    MarketDataService,
    get_market_data_service,
)

__all__ = [
    "CandleSourceInterface",
    "HyperliquidClient",
    "MarketDataService",
    "get_market_data_service",
]
