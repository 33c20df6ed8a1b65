"""
Katoshi Signal API Client

Forwards trading actions to the Katoshi signal endpoint.

API Documentation: https://katoshi.gitbook.io/katoshi-docs/api/actions
"""

import asyncio
import json
import logging
import time
from typing import Any, Optional
from urllib.parse import urlencode

import aiohttp

from tradetools.core.config import settings
from tradetools.core.context import RequestContext
from tradetools.core.logging import mask_api_key
from tradetools.services.base import (
    ConfigurationError,
    ExternalAPIError,
    ValidationError,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "KatoshiClient"


class KatoshiClient:
    """Katoshi signal API client. One POST per action, no retries."""

    def __init__(self, base_url: Optional[str] = None, timeout_seconds: Optional[float] = None):
        self.base_url = base_url if base_url is not None else settings.katoshi_api_base_url
        self.timeout = aiohttp.ClientTimeout(
            total=timeout_seconds or settings.trading_timeout_seconds
        )

    async def _post(self, url: str, payload: dict) -> tuple[int, str, str]:
        """POST the payload; returns (status, reason, body text)."""
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
            ) as resp:
                return resp.status, resp.reason or "", await resp.text()

    async def execute(self, payload: dict, context: RequestContext) -> Any:
        """
        Send one trading action.

        `payload` must already contain "action" and the validated fields;
        the caller's API key is added here.
        """
        if not self.base_url:
            logger.error("KATOSHI_API_BASE_URL environment variable is not set")
            raise ConfigurationError(
                SERVICE_NAME, "KATOSHI_API_BASE_URL environment variable is not set"
            )
        if not context.user_id:
            raise ValidationError(
                SERVICE_NAME,
                "user_id is required (should be provided as 'id' query parameter in the request URL)",
            )
        if not context.api_key:
            raise ValidationError(
                SERVICE_NAME,
                "api_key is required (should be provided via Authorization bearer token)",
            )

        action = payload.get("action")
        body = {**payload, "api_key": context.api_key}
        start = time.monotonic()

        try:
            status, reason, text = await self._post(
                f"{self.base_url}?{urlencode({'id': context.user_id})}", body
            )
        except asyncio.TimeoutError as e:
            raise ExternalAPIError(
                SERVICE_NAME, "Failed to execute trading action: request timed out"
            ) from e
        except aiohttp.ClientError as e:
            raise ExternalAPIError(
                SERVICE_NAME, f"Failed to execute trading action: {e}"
            ) from e

        elapsed_ms = int((time.monotonic() - start) * 1000)

        if status < 200 or status >= 300:
            logger.error(
                {
                    "message": "Katoshi API error",
                    "action": action,
                    "userId": context.user_id,
                    "botId": payload.get("bot_id"),
                    "statusCode": status,
                    "errorText": text[:500],
                    "responseTimeMs": elapsed_ms,
                }
            )
            raise ExternalAPIError(
                SERVICE_NAME,
                f"Katoshi API error: {status} {reason} - {text}",
                details={"status": status},
            )

        try:
            data = json.loads(text)
        except ValueError as e:
            logger.error(f"Failed to parse Katoshi API response for {action}: {e}")
            raise ExternalAPIError(
                SERVICE_NAME, f"Failed to parse Katoshi API response: {e}"
            ) from e

        logger.info(
            {
                "message": "Trading action completed",
                "action": action,
                "userId": context.user_id,
                "botId": payload.get("bot_id"),
                "apiKey": mask_api_key(context.api_key),
                "responseTimeMs": elapsed_ms,
            }
        )
        return data
