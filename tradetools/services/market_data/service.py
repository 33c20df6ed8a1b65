"""
Market Data Service Implementation

Fetches a bounded candle window once per request and runs the analytics
engine over it: aligned indicator overlays or confirmed pivot points.
"""

import logging
import time
from typing import Callable, Optional

from tradetools.core.config import settings
from tradetools.core.decimal_codec import parse_decimal
from tradetools.schemas.market import (
    INTERVAL_MS,
    Candle,
    Interval,
    MarketDataRequest,
    PivotRequest,
)
from tradetools.services.base import BaseService
from tradetools.services.indicators import (
    IndicatorLibraryInterface,
    NumpyIndicatorLibrary,
    align_indicators,
    detect_pivots,
    fetch_size,
    required_lookback,
)
from tradetools.services.market_data.interface import CandleSourceInterface
from tradetools.services.market_data.hyperliquid_adapter import HyperliquidClient

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class MarketDataService(BaseService[MarketDataRequest, dict]):
    """
    Market Data Service.

    Candle source and indicator library are injected so the analytics can be
    exercised with deterministic fakes.
    """

    def __init__(
        self,
        source: Optional[CandleSourceInterface] = None,
        library: Optional[IndicatorLibraryInterface] = None,
        max_candles: Optional[int] = None,
        clock: Callable[[], int] = _now_ms,
    ):
        self.source = source or HyperliquidClient()
        self.library = library or NumpyIndicatorLibrary()
        self.max_candles = max_candles or settings.max_fetch_candles
        self.clock = clock

    @property
    def name(self) -> str:
        return "MarketDataService"

    async def _fetch_recent(self, coin: str, interval: Interval, candles: int) -> list[Candle]:
        """Most recent `candles` candles, oldest first."""
        end_ms = self.clock()
        # One extra interval covers the partially elapsed current candle
        start_ms = end_ms - (candles + 1) * INTERVAL_MS[interval]
        series = await self.source.fetch_candles(coin, interval, start_ms, end_ms)
        return list(series[-candles:]) if candles else []

    async def execute(self, input_data: MarketDataRequest) -> dict:
        """Candles with indicator overlays for the requested display window."""
        request = input_data
        kinds = request.requested_kinds()

        lookback = required_lookback(kinds, request)
        size = fetch_size(request.count, lookback, self.max_candles)
        candles = await self._fetch_recent(request.coin, request.interval, size)

        logger.info(
            f"Market data {request.coin} {request.interval.value}: "
            f"count={request.count} lookback={lookback} fetched={len(candles)}"
        )

        result: dict = {}
        if kinds:
            result["meta"] = {
                "indicators": [kind.value for kind in kinds],
                "params": request.params_for(kinds),
            }

        if not candles:
            result["candles"] = []
            result["message"] = (
                f"No candle data returned for {request.coin} {request.interval.value}"
            )
            return result

        result["candles"] = align_indicators(
            candles, kinds, request, self.library, request.count
        )
        return result

    async def pivots(self, request: PivotRequest) -> dict:
        """Confirmed pivot highs and lows over the most recent candles."""
        candles = await self._fetch_recent(request.coin, request.interval, self.max_candles)

        if not candles:
            return {
                "coin": request.coin,
                "interval": request.interval.value,
                "currentClose": 0,
                "candlesAnalyzed": 0,
                "pivotHighs": [],
                "pivotLows": [],
                "message": f"No candle data returned for {request.coin} {request.interval.value}",
            }

        current_close = parse_decimal(candles[-1].close)
        found = detect_pivots(candles, request.left, request.right, current_close)

        logger.info(
            f"Pivots {request.coin} {request.interval.value}: candles={len(candles)} "
            f"highs={len(found.pivot_highs)} lows={len(found.pivot_lows)}"
        )

        return {
            "coin": request.coin,
            "interval": request.interval.value,
            "currentClose": current_close,
            "candlesAnalyzed": len(candles),
            "pivotHighs": [p.to_dict() for p in found.pivot_highs],
            "pivotLows": [p.to_dict() for p in found.pivot_lows],
        }

    async def health_check(self) -> bool:
        """Analytics are pure computation; health depends on the candle source only."""
        return True


# Singleton instance
_service_instance: Optional[MarketDataService] = None


def get_market_data_service() -> MarketDataService:
    """Get or create market data service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = MarketDataService()
    return _service_instance
