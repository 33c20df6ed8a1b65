"""
Trading Service

CONTRACT:
    Input:  action name + loose JSON arguments from the agent
    Output: decoded Katoshi signal API response

RESPONSIBILITIES:
    - Normalize camelCase arguments and validate required fields per action
    - Build a payload holding only well-typed values
    - Forward it with the caller's API key and user id
"""

from tradetools.services.trading.actions import (
    FIELDS,
    TRADING_ACTIONS,
    TradingAction,
    build_payload,
    normalize_args,
    require_size,
)
from tradetools.services.trading.client import KatoshiClient
from tradetools.services.trading.service import TradingService, get_trading_service

__all__ = [
    "FIELDS",
    "TRADING_ACTIONS",
    "TradingAction",
    "build_payload",
    "normalize_args",
    "require_size",
    "KatoshiClient",
    "TradingService",
    "get_trading_service",
]
