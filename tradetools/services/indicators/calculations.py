"""
Technical Indicator Calculations

Pure NumPy implementations of the indicator formulas.
Every function returns an array of the same length as its input, with NaN
for positions that are still warming up.
"""

import numpy as np


def _first_valid(data: np.ndarray) -> int:
    """Index of the first finite value, or len(data) if there is none."""
    finite = np.flatnonzero(np.isfinite(data))
    return int(finite[0]) if len(finite) else len(data)


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: np.ndarray, period: int) -> np.ndarray:
    """Simple Moving Average."""
    result = np.full(len(data), np.nan)
    if len(data) < period:
        return result

    for i in range(period - 1, len(data)):
        result[i] = np.mean(data[i - period + 1 : i + 1])
    return result


def ema(data: np.ndarray, period: int) -> np.ndarray:
    """
    Exponential Moving Average.

    Seeded with the SMA of the first `period` valid values, so leading NaNs
    (e.g. a MACD line) are skipped rather than poisoning the recurrence.
    """
    result = np.full(len(data), np.nan)
    start = _first_valid(data)
    if len(data) - start < period:
        return result

    multiplier = 2 / (period + 1)
    seed = start + period - 1
    result[seed] = np.mean(data[start : seed + 1])

    for i in range(seed + 1, len(data)):
        result[i] = (data[i] - result[i - 1]) * multiplier + result[i - 1]

    return result


def rma(data: np.ndarray, period: int) -> np.ndarray:
    """Wilder's smoothed moving average."""
    result = np.full(len(data), np.nan)
    if len(data) < period:
        return result

    result[period - 1] = np.mean(data[:period])
    for i in range(period, len(data)):
        result[i] = (result[i - 1] * (period - 1) + data[i]) / period

    return result


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: np.ndarray, period: int = 14) -> np.ndarray:
    """Relative Strength Index (Wilder smoothing)."""
    result = np.full(len(closes), np.nan)
    if len(closes) < period + 1:
        return result

    deltas = np.diff(closes)
    gains = np.where(deltas > 0, deltas, 0)
    losses = np.where(deltas < 0, -deltas, 0)

    avg_gain = np.mean(gains[:period])
    avg_loss = np.mean(losses[:period])

    def _value(gain: float, loss: float) -> float:
        if loss == 0:
            return 100.0
        return 100 - (100 / (1 + gain / loss))

    result[period] = _value(avg_gain, avg_loss)

    for i in range(period, len(deltas)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        result[i + 1] = _value(avg_gain, avg_loss)

    return result


def macd(
    closes: np.ndarray,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    MACD (Moving Average Convergence Divergence).

    Returns: (macd_line, signal_line, histogram)
    """
    macd_line = ema(closes, fast_period) - ema(closes, slow_period)
    signal_line = ema(macd_line, signal_period)
    histogram = macd_line - signal_line

    return macd_line, signal_line, histogram


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def true_range(highs: np.ndarray, lows: np.ndarray, closes: np.ndarray) -> np.ndarray:
    """True Range; the first bar has no previous close and uses high - low."""
    tr = highs - lows
    if len(closes) > 1:
        prev_close = closes[:-1]
        tr[1:] = np.maximum.reduce(
            [
                highs[1:] - lows[1:],
                np.abs(highs[1:] - prev_close),
                np.abs(lows[1:] - prev_close),
            ]
        )
    return tr


def atr(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, period: int = 14
) -> np.ndarray:
    """Average True Range."""
    if len(closes) < 2:
        return np.full(len(closes), np.nan)

    # Skip the first bar: its TR has no previous close
    result = np.full(len(closes), np.nan)
    result[1:] = rma(true_range(highs, lows, closes)[1:], period)
    return result


def bollinger_bands(
    closes: np.ndarray, period: int = 20, std_dev: float = 2.0
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Bollinger Bands.

    Returns: (upper, middle, lower, percent_b)
    """
    middle = sma(closes, period)

    std = np.full(len(closes), np.nan)
    for i in range(period - 1, len(closes)):
        std[i] = np.std(closes[i - period + 1 : i + 1])

    upper = middle + (std_dev * std)
    lower = middle - (std_dev * std)

    # Flat window: upper == lower, %B is undefined
    with np.errstate(divide="ignore", invalid="ignore"):
        percent_b = (closes - lower) / (upper - lower)

    return upper, middle, lower, percent_b


# =============================================================================
# VOLUME INDICATORS
# =============================================================================


def vwap(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, volumes: np.ndarray
) -> np.ndarray:
    """Volume Weighted Average Price, cumulative over the window."""
    typical_price = (highs + lows + closes) / 3
    cumulative_tpv = np.cumsum(typical_price * volumes)
    cumulative_volume = np.cumsum(volumes)

    with np.errstate(divide="ignore", invalid="ignore"):
        result = cumulative_tpv / cumulative_volume
        result[cumulative_volume == 0] = typical_price[cumulative_volume == 0]

    return result
