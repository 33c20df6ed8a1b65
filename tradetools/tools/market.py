"""
Market data tools: candles with indicators, pivot points and mid prices.
"""

import json

from tradetools.core.validation import parse_args
from tradetools.schemas.market import MarketDataRequest, PivotRequest
from tradetools.services.market_data import get_market_data_service
from tradetools.tools.registry import ToolDefinition

INTERVAL_HINT = "Use one of: 1m, 3m, 5m, 15m, 30m, 1h, 2h, 4h, 8h, 12h, 1d, 3d, 1w, 1M."

MARKET_DATA_HINTS = {
    "coin": "Provide coin (e.g. BTC, ETH, HYPE).",
    "interval": INTERVAL_HINT,
    "count": "Provide count between 1 and 30.",
    "indicators": "Use any of: rsi, macd, atr, bollingerBands, ema, sma, vwap.",
    "*": "Check the indicator period bounds (macdFast must be smaller than macdSlow).",
}

PIVOT_HINTS = {
    "coin": "Provide coin (e.g. BTC, ETH, HYPE).",
    "interval": INTERVAL_HINT,
    "left": "Provide left between 1 and 10.",
    "right": "Provide right between 1 and 10.",
}


async def get_market_data(args: dict) -> str:
    request = parse_args(MarketDataRequest, args, MARKET_DATA_HINTS)
    result = await get_market_data_service().execute(request)
    return json.dumps(result, indent=2)


async def get_pivot_highs_and_lows(args: dict) -> str:
    request = parse_args(PivotRequest, args, PIVOT_HINTS)
    result = await get_market_data_service().pivots(request)
    return json.dumps(result, indent=2)


async def get_all_mids(args: dict) -> str:
    dex = args.get("dex")
    mids = await get_market_data_service().source.all_mids(dex if isinstance(dex, str) else "")
    return json.dumps(mids, indent=2)


MARKET_TOOLS = [
    ToolDefinition(
        name="get_market_data",
        title="Get Market Data",
        description=(
            "Get recent OHLCV candles for a coin, optionally with technical indicators "
            "(rsi, macd, atr, bollingerBands, ema, sma, vwap) computed over enough history "
            "to be warmed up and aligned to each candle. Prices are decimal strings."
        ),
        input_schema=MarketDataRequest.model_json_schema(by_alias=True),
        handler=get_market_data,
    ),
    ToolDefinition(
        name="get_pivot_highs_and_lows",
        title="Get Pivot Highs and Lows",
        description=(
            "Find confirmed pivot highs and lows over the most recent 100 candles. A pivot is "
            "a local extreme over `left` bars before and `right` bars after that no later "
            "candle has reached. Each pivot includes bars ago and % distance from the current close."
        ),
        input_schema=PivotRequest.model_json_schema(by_alias=True),
        handler=get_pivot_highs_and_lows,
    ),
    ToolDefinition(
        name="get_all_mids",
        title="Get All Mids",
        description=(
            "Retrieve mid prices for all coins from Hyperliquid. If the book is empty, "
            "the last trade price is used as a fallback."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "dex": {
                    "type": "string",
                    "description": "Perp dex name. Omit for the first perp dex.",
                }
            },
        },
        handler=get_all_mids,
    ),
]
