"""
Trading Service Implementation

Validates a trading action's arguments, builds the signal payload and
forwards it with the caller's credentials.
"""

import logging
from typing import Any, Optional

from tradetools.core.context import get_request_context
from tradetools.services.base import BaseService, ValidationError
from tradetools.services.trading.actions import TRADING_ACTIONS, TradingAction, build_payload
from tradetools.services.trading.client import KatoshiClient

logger = logging.getLogger(__name__)


class TradingService(BaseService[tuple[str, dict], Any]):
    """Trading Service. Input is an (action name, raw arguments) pair."""

    def __init__(self, client: Optional[KatoshiClient] = None):
        self.client = client or KatoshiClient()
        self.actions: dict[str, TradingAction] = {a.name: a for a in TRADING_ACTIONS}

    @property
    def name(self) -> str:
        return "TradingService"

    async def execute(self, input_data: tuple[str, dict]) -> Any:
        action_name, args = input_data
        action = self.actions.get(action_name)
        if action is None:
            raise ValidationError(self.name, f"Unknown trading action: {action_name}")

        validated = action.validate(args)
        payload = build_payload(action.name, validated)
        logger.info(f"Trading action {action.name} for bot {payload.get('bot_id')}")
        return await self.client.execute(payload, get_request_context())

    async def health_check(self) -> bool:
        return bool(self.client.base_url)


# Singleton instance
_service_instance: Optional[TradingService] = None


def get_trading_service() -> TradingService:
    """Get or create trading service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = TradingService()
    return _service_instance
