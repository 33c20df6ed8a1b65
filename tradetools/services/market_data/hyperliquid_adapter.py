"""
Hyperliquid Info API Adapter

Candle snapshots and mid prices from the public Hyperliquid info endpoint.

API Documentation: https://hyperliquid.gitbook.io/hyperliquid-docs/for-developers/api/info-endpoint
"""

import asyncio
import logging
import time
from typing import Any, Optional

import aiohttp
from pydantic import ValidationError as PydanticValidationError

from tradetools.core.config import settings
from tradetools.schemas.market import Candle, Interval
from tradetools.services.base import ExternalAPIError
from tradetools.services.market_data.interface import CandleSourceInterface

logger = logging.getLogger(__name__)

SERVICE_NAME = "HyperliquidClient"


class HyperliquidClient(CandleSourceInterface):
    """
    Hyperliquid info API client.

    Stateless: a fresh session per call, bounded by a total timeout.
    """

    def __init__(self, base_url: Optional[str] = None, timeout_seconds: Optional[float] = None):
        self.base_url = base_url or settings.hyperliquid_api_url
        self.timeout = aiohttp.ClientTimeout(
            total=timeout_seconds or settings.exchange_timeout_seconds
        )

    async def _post(self, body: dict, operation: str) -> Any:
        """POST a JSON body to the info endpoint and return the decoded JSON."""
        start = time.monotonic()
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(
                    self.base_url,
                    json=body,
                    headers={"Content-Type": "application/json"},
                ) as resp:
                    if resp.status != 200:
                        text = await resp.text()
                        raise ExternalAPIError(
                            SERVICE_NAME,
                            f"Failed to {operation}: Hyperliquid API error: "
                            f"{resp.status} {resp.reason} - {text[:500]}",
                            details={"status": resp.status},
                        )
                    return await resp.json(content_type=None)
        except ExternalAPIError:
            raise
        except asyncio.TimeoutError as e:
            logger.error(f"Hyperliquid {body.get('type')} timed out after {time.monotonic() - start:.1f}s")
            raise ExternalAPIError(SERVICE_NAME, f"Failed to {operation}: request timed out") from e
        except (aiohttp.ClientError, ValueError) as e:
            logger.error(f"Hyperliquid {body.get('type')} failed: {e}")
            raise ExternalAPIError(SERVICE_NAME, f"Failed to {operation}: {e}") from e

    async def fetch_candles(
        self,
        coin: str,
        interval: Interval,
        start_ms: int,
        end_ms: int,
    ) -> list[Candle]:
        """Fetch a candle snapshot for [start_ms, end_ms]."""
        body = {
            "type": "candleSnapshot",
            "req": {
                "coin": coin,
                "interval": Interval(interval).value,
                "startTime": start_ms,
                "endTime": end_ms,
            },
        }
        data = await self._post(body, "fetch candles")
        if not isinstance(data, list):
            raise ExternalAPIError(
                SERVICE_NAME, f"Failed to fetch candles: unexpected response {str(data)[:200]}"
            )

        try:
            candles = [Candle.model_validate(row) for row in data]
        except PydanticValidationError as e:
            raise ExternalAPIError(
                SERVICE_NAME, f"Failed to fetch candles: malformed candle data ({e.error_count()} errors)"
            ) from e

        candles.sort(key=lambda c: c.close_time)
        logger.debug(f"Fetched {len(candles)} {interval} candles for {coin}")
        return candles

    async def all_mids(self, dex: str = "") -> dict:
        """Mid prices for all coins; the last trade price is used when a book is empty."""
        data = await self._post({"type": "allMids", "dex": dex}, "retrieve mids")
        if not isinstance(data, dict):
            raise ExternalAPIError(
                SERVICE_NAME, f"Failed to retrieve mids: unexpected response {str(data)[:200]}"
            )
        return data
