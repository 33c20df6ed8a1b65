"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "tradetools-mcp-server"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS
    allowed_origins: list[str] = ["*"]

    # Hyperliquid info API (candles, mids)
    hyperliquid_api_url: str = "https://api.hyperliquid.xyz/info"
    exchange_timeout_seconds: float = 10.0

    # Katoshi signal API (trading actions)
    katoshi_api_base_url: Optional[str] = None
    trading_timeout_seconds: float = 30.0

    # Slightly under typical client timeouts so we respond before the client cancels
    request_timeout_seconds: float = 55.0

    # Hard ceiling on candles fetched per request
    max_fetch_candles: int = 100

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
