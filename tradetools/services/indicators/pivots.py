"""
Pivot Detector

Finds confirmed pivot highs and lows: local extrema within a symmetric
window that no later candle has revisited.
"""

import math
from typing import Sequence

from tradetools.core.decimal_codec import parse_decimal, to_iso
from tradetools.schemas.market import Candle
from tradetools.schemas.indicators import PivotPoint, PivotResult


def pct_from_close(price: float, current_close: float) -> float:
    """Signed % distance from the current close, 2 decimals; 0 when close is 0."""
    if current_close == 0:
        return 0
    return math.floor(((price - current_close) / current_close) * 10000 + 0.5) / 100


def detect_pivots(
    candles: Sequence[Candle],
    left: int,
    right: int,
    current_close: float,
) -> PivotResult:
    """
    Scan centres i in [left, n-1-right].

    Candidacy uses strict comparison (an equal neighbour does not disqualify);
    clearance uses >= / <= (an equal later candle invalidates).
    O(n * (left + right)) plus O(n^2) worst case for clearance; n <= 100.
    """
    n = len(candles)
    highs = [parse_decimal(c.high) for c in candles]
    lows = [parse_decimal(c.low) for c in candles]
    result = PivotResult()

    for i in range(left, n - right):
        hi = highs[i]
        lo = lows[i]

        is_high = True
        is_low = True
        for j in range(i - left, i + right + 1):
            if j == i:
                continue
            if highs[j] > hi:
                is_high = False
            if lows[j] < lo:
                is_low = False
            if not is_high and not is_low:
                break

        if not is_high and not is_low:
            continue

        high_cleared = not is_high
        low_cleared = not is_low
        for j in range(i + 1, n):
            if highs[j] >= hi:
                high_cleared = True
            if lows[j] <= lo:
                low_cleared = True
            if high_cleared and low_cleared:
                break

        bars_ago = n - 1 - i
        close_time = candles[i].close_time

        if is_high and not high_cleared:
            result.pivot_highs.append(
                PivotPoint(
                    timestamp=close_time,
                    timestamp_iso=to_iso(close_time),
                    bars_ago=bars_ago,
                    price=hi,
                    pct_from_current_close=pct_from_close(hi, current_close),
                )
            )
        if is_low and not low_cleared:
            result.pivot_lows.append(
                PivotPoint(
                    timestamp=close_time,
                    timestamp_iso=to_iso(close_time),
                    bars_ago=bars_ago,
                    price=lo,
                    pct_from_current_close=pct_from_close(lo, current_close),
                )
            )

    return result
