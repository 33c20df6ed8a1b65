"""Tests for tool argument validation."""

import pytest

from tradetools.core.validation import parse_args, require_field
from tradetools.schemas.market import IndicatorKind, MarketDataRequest, PivotRequest
from tradetools.services.base import ValidationError
from tradetools.tools.market import MARKET_DATA_HINTS, PIVOT_HINTS


def test_defaults():
    request = parse_args(MarketDataRequest, {"coin": "BTC", "interval": "1h"}, MARKET_DATA_HINTS)
    assert request.count == 20
    assert request.requested_kinds() == []

    pivots = parse_args(PivotRequest, {"coin": "BTC", "interval": "15m"}, PIVOT_HINTS)
    assert (pivots.left, pivots.right) == (3, 3)


def test_snake_case_and_numeric_strings_are_accepted():
    request = parse_args(
        MarketDataRequest,
        {"coin": "BTC", "interval": "1h", "count": "5", "rsi_period": "21", "indicators": ["rsi", "rsi"]},
        MARKET_DATA_HINTS,
    )
    assert request.count == 5
    assert request.rsi_period == 21
    assert request.requested_kinds() == [IndicatorKind.RSI]


@pytest.mark.parametrize(
    "args, field",
    [
        ({"interval": "1h"}, "coin"),
        ({"coin": "BTC", "interval": "2m"}, "interval"),
        ({"coin": "BTC", "interval": "1h", "count": 31}, "count"),
        ({"coin": "BTC", "interval": "1h", "rsiPeriod": 1}, "rsiPeriod"),
    ],
)
def test_invalid_arguments_name_the_field(args, field):
    with pytest.raises(ValidationError) as exc:
        parse_args(MarketDataRequest, args, MARKET_DATA_HINTS)
    assert str(exc.value).startswith(f"Invalid or missing {field}:")


def test_interval_error_carries_hint():
    with pytest.raises(ValidationError) as exc:
        parse_args(MarketDataRequest, {"coin": "BTC", "interval": "2m"}, MARKET_DATA_HINTS)
    assert "1m, 3m, 5m" in str(exc.value)


def test_macd_fast_must_be_below_slow():
    with pytest.raises(ValidationError) as exc:
        parse_args(MarketDataRequest, {"coin": "BTC", "interval": "1h", "macdFast": 30, "macdSlow": 20}, MARKET_DATA_HINTS)
    assert "macdFast must be smaller than macdSlow" in str(exc.value)


def test_pivot_window_bounds():
    with pytest.raises(ValidationError):
        parse_args(PivotRequest, {"coin": "BTC", "interval": "1h", "left": 11}, PIVOT_HINTS)


def test_require_field_message():
    with pytest.raises(ValidationError) as exc:
        require_field(None, str, "coin", "Provide coin (e.g. BTC, ETH).")
    message = str(exc.value)
    assert message.startswith("Invalid or missing coin:")
    assert message.endswith("Provide coin (e.g. BTC, ETH).")
