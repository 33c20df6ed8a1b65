"""
Live smoke test against the public Hyperliquid info API.
Run with: python smoke_test.py [COIN]
"""

import asyncio
import os
import sys

from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), ".env"))


async def smoke_test(coin: str):
    """Exercise the market data service end to end."""
    print("\n" + "=" * 60)
    print("TRADETOOLS - LIVE SMOKE TEST")
    print("=" * 60)

    from tradetools.schemas.market import MarketDataRequest, PivotRequest
    from tradetools.services.market_data import get_market_data_service

    service = get_market_data_service()

    # Test 1: Mid prices
    print("\n[1] Testing All Mids...")
    print("-" * 40)
    mids = await service.source.all_mids()
    print(f"Coins: {len(mids)}")
    print(f"{coin} mid: {mids.get(coin, 'N/A')}")

    # Test 2: Candles with indicators
    print("\n[2] Testing Market Data with Indicators...")
    print("-" * 40)
    request = MarketDataRequest(
        coin=coin,
        interval="1h",
        count=5,
        indicators=["rsi", "macd", "bollingerBands"],
    )
    result = await service.execute(request)
    print(f"Params: {result.get('meta', {}).get('params')}")
    for row in result["candles"]:
        print(
            f"  {row['closeTimeIso']} C={row['close']} RSI={row['rsi']} "
            f"MACD={(row['macd'] or {}).get('macd')} type={row['candleType']}"
        )

    # Test 3: Pivots
    print("\n[3] Testing Pivot Highs and Lows...")
    print("-" * 40)
    pivots = await service.pivots(PivotRequest(coin=coin, interval="4h"))
    print(f"Current close: {pivots['currentClose']} ({pivots['candlesAnalyzed']} candles)")
    for label in ("pivotHighs", "pivotLows"):
        for point in pivots[label]:
            print(f"  {label}: {point['price']} ({point['pctFromCurrentClose']:+.2f}%, {point['barsAgo']} bars ago)")

    print("\n" + "=" * 60)
    print("SMOKE TEST COMPLETE")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    asyncio.run(smoke_test(sys.argv[1] if len(sys.argv) > 1 else "BTC"))
