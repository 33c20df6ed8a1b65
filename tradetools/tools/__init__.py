"""
Tools

All JSON-RPC tools, market data first, then trading actions.
"""

from tradetools.tools.market import MARKET_TOOLS
from tradetools.tools.registry import ToolDefinition, ToolRegistry, text_result
from tradetools.tools.trading import TRADING_TOOLS

registry = ToolRegistry([*MARKET_TOOLS, *TRADING_TOOLS])

__all__ = ["ToolDefinition", "ToolRegistry", "registry", "text_result"]
