"""
Tradetools MCP Server - FastAPI Application

Main entry point: JSON-RPC tool gateway for Hyperliquid market data and
Katoshi trading actions.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tradetools.core.config import settings
from tradetools.core.logging import setup_logging
from tradetools.api.v1 import router as api_v1_router
from tradetools.services.market_data import get_market_data_service
from tradetools.services.trading import get_trading_service
from tradetools.tools import registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    setup_logging()
    logger.info(
        {
            "message": f"Starting {settings.app_name} v{settings.app_version}",
            "environment": settings.environment,
            "tools": len(registry),
        }
    )
    if not settings.katoshi_api_base_url:
        logger.warning("KATOSHI_API_BASE_URL is not set - trading tools will fail")

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Tradetools MCP Server

    ## Tools
    - **Market Data**: Hyperliquid candles with aligned indicators, pivot points, mid prices
    - **Trading**: Katoshi signal API actions (orders, positions, TP/SL, bots)

    ## Transport
    - JSON-RPC 2.0 over POST /mcp (or POST /)
    - API key via Authorization: Bearer, X-Api-Key, or api_key query parameter
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["GET", "POST", "OPTIONS", "DELETE"],
    allow_headers=["Content-Type", "Authorization", "X-Api-Key", "Api-Key", "Mcp-Session-Id", "Accept"],
    expose_headers=["Mcp-Session-Id"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint, with per-service health."""
    services = {}
    for service in (get_market_data_service(), get_trading_service()):
        services[service.name] = {"healthy": await service.health_check()}

    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
        "tools": len(registry),
        "availableTools": registry.names(),
        "services": services,
    }


# Include API routes
app.include_router(api_v1_router)
