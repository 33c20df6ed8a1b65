"""
Katoshi trading tools, one per signal API action.
"""

import json

from tradetools.services.trading import TRADING_ACTIONS, TradingAction, get_trading_service
from tradetools.tools.registry import ToolDefinition, ToolHandler


def _handler(action: TradingAction) -> ToolHandler:
    async def handle(args: dict) -> str:
        result = await get_trading_service().execute((action.name, args))
        return json.dumps(result, indent=2)

    return handle


TRADING_TOOLS = [
    ToolDefinition(
        name=action.name,
        title=action.title,
        description=action.description,
        input_schema=action.input_schema(),
        handler=_handler(action),
    )
    for action in TRADING_ACTIONS
]
