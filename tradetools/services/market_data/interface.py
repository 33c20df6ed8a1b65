"""
Market Data Source Interface

Defines the contract for the candle fetch adapter and mid prices.
"""

from abc import ABC, abstractmethod

from tradetools.schemas.market import Candle, Interval


class CandleSourceInterface(ABC):
    """
    Candle Source Contract.

    INPUT: coin, interval, [start_ms, end_ms] time range

    OUTPUT: list[Candle]
        - Ordered oldest to newest by close time
        - Empty list when the exchange has no data for the range

    Raises ExternalAPIError on transport / upstream failures. No retries.
    """

    @abstractmethod
    async def fetch_candles(
        self,
        coin: str,
        interval: Interval,
        start_ms: int,
        end_ms: int,
    ) -> list[Candle]:
        """Fetch candles covering the time range."""
        pass

    @abstractmethod
    async def all_mids(self, dex: str = "") -> dict:
        """Mid price per coin, as decimal strings."""
        pass
