"""
Run the tradetools MCP server.
"""
import os

# Load environment
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), ".env"))

# Run uvicorn
import uvicorn

from tradetools.core.config import settings

if __name__ == "__main__":
    print(f"Starting {settings.app_name}...")
    print(f"MCP endpoint: http://{settings.host}:{settings.port}/mcp")
    print("-" * 50)

    uvicorn.run(
        "tradetools.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
