"""
Decimal Codec

Exchange quantities arrive as decimal strings. Parse them to floats for the
maths and format results back to compact decimal strings for the response.
"""

import math
from datetime import datetime, timezone
from typing import Optional, Union

import numpy as np

FRACTION_DIGITS = 6


def parse_decimal(value: Optional[Union[str, float, int]]) -> float:
    """Parse a decimal string to float. Empty, invalid or non-finite input yields 0."""
    if value is None or value == "":
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def format_decimal(value: float) -> str:
    """
    Format a number with at most 6 fractional digits.

    If rounding to 6 digits is lossless, the shortest representation is
    returned ("1.5", "100"); otherwise the fixed 6-digit form ("1.000000").
    """
    if value is None or not math.isfinite(value):
        return "0"
    fixed = f"{value:.{FRACTION_DIGITS}f}"
    if float(fixed) != value:
        return fixed
    if value == 0:
        return "0"
    return np.format_float_positional(value, trim="-")


def to_iso(timestamp_ms: int) -> str:
    """Epoch milliseconds to ISO-8601 UTC with millisecond precision."""
    dt = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def candle_type(open_: float, high: float, low: float, close: float) -> str:
    """Classify a single candle's shape from its OHLC values."""
    candle_range = high - low
    if candle_range <= 0 or not math.isfinite(candle_range):
        return "doji"

    body = abs(close - open_)
    body_ratio = body / candle_range
    upper_wick = high - max(open_, close)
    lower_wick = min(open_, close) - low
    min_body = candle_range * 0.02

    if body_ratio < 0.1:
        return "doji"
    if lower_wick >= 2 * body and upper_wick <= max(min_body, body * 0.5):
        return "hammer"
    if upper_wick >= 2 * body and lower_wick <= max(min_body, body * 0.5):
        return "inverted_hammer"
    return "bullish" if close >= open_ else "bearish"
