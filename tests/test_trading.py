"""Tests for trading action validation, payload building and the signal API client."""

import json

import pytest

from tradetools.core.context import RequestContext, request_context
from tradetools.services.base import ConfigurationError, ExternalAPIError, ValidationError
from tradetools.services.trading import TRADING_ACTIONS, KatoshiClient, TradingService, build_payload

ACTIONS = {action.name: action for action in TRADING_ACTIONS}

CONTEXT = RequestContext(api_key="sk-test-1234567890", user_id="user-42")


class FakeKatoshiClient(KatoshiClient):
    """Records POSTs instead of sending them."""

    def __init__(self, status=200, reason="OK", text='{"status": "ok"}', base_url="https://signals.test/api"):
        super().__init__(base_url=base_url)
        self.response = (status, reason, text)
        self.posts = []

    async def _post(self, url, payload):
        self.posts.append((url, payload))
        return self.response


class TestValidation:
    def test_camel_case_aliases_are_normalized(self):
        args = ACTIONS["open_position"].validate({"botId": 640, "coin": "BTC", "isBuy": True, "sizeUsd": 11})
        assert args["bot_id"] == 640
        assert args["is_buy"] is True
        assert args["size_usd"] == 11

    def test_missing_required_field_names_it_with_hint(self):
        with pytest.raises(ValidationError) as exc:
            ACTIONS["open_position"].validate({"coin": "BTC", "is_buy": True, "size_usd": 11})
        message = str(exc.value)
        assert message.startswith("Invalid or missing bot_id:")
        assert message.endswith("Provide bot_id (e.g. 640).")

    def test_is_buy_must_be_boolean(self):
        with pytest.raises(ValidationError) as exc:
            ACTIONS["market_order"].validate(
                {"bot_id": 1, "coin": "ETH", "is_buy": "yes", "reduce_only": False, "size": 1}
            )
        assert "is_buy" in str(exc.value)

    def test_size_is_required(self):
        with pytest.raises(ValidationError) as exc:
            ACTIONS["open_position"].validate({"bot_id": 1, "coin": "BTC", "is_buy": True})
        assert str(exc.value).startswith("One of size, size_usd, or size_pct is required")

    def test_size_must_be_positive(self):
        with pytest.raises(ValidationError) as exc:
            ACTIONS["open_position"].validate({"bot_id": 1, "coin": "BTC", "is_buy": True, "size_usd": 0})
        assert "must be a positive number" in str(exc.value)

    def test_modify_tpsl_needs_one_level(self):
        with pytest.raises(ValidationError) as exc:
            ACTIONS["modify_tpsl"].validate({"bot_id": 1, "coin": "BTC"})
        assert "at least one of sl_pct, tp_pct, sl, tp" in str(exc.value)

        ACTIONS["modify_tpsl"].validate({"bot_id": 1, "coin": "BTC", "tp_pct": 0.02})

    def test_required_numbers_accept_numeric_strings(self):
        args = ACTIONS["limit_order"].validate(
            {"bot_id": "7", "coin": "SOL", "is_buy": False, "reduce_only": False, "price": "100.5", "size": "2"}
        )
        assert args["price"] == 100.5
        assert args["size"] == 2.0

    def test_non_sized_actions_do_not_require_size(self):
        ACTIONS["start_bot"].validate({"bot_id": 3})
        ACTIONS["cancel_all"].validate({"bot_id": 3})


class TestBuildPayload:
    def test_first_positive_size_wins(self):
        payload = build_payload("open_position", {"bot_id": 1, "size_usd": 11, "size": 0.5, "size_pct": 0.1})
        assert payload["size_usd"] == 11
        assert "size" not in payload
        assert "size_pct" not in payload

        payload = build_payload("open_position", {"bot_id": 1, "size_usd": 0, "size": 0.5})
        assert payload["size"] == 0.5
        assert "size_usd" not in payload

    def test_bot_id_is_sent_as_integer(self):
        assert build_payload("start_bot", {"bot_id": "640"})["bot_id"] == 640
        assert build_payload("start_bot", {"bot_id": 640.9})["bot_id"] == 640

    def test_wrongly_typed_values_are_dropped(self):
        payload = build_payload(
            "cancel_all",
            {
                "bot_id": 1,
                "coin": "",
                "is_buy": "true",
                "tp_pct": "abc",
                "sl": None,
                "coins": [],
                "dexs": ["", 3],
                "order_ids": ["12", 13.7, "x"],
                "type": "bogus",
            },
        )
        assert payload == {"action": "cancel_all", "bot_id": 1, "dexs": [""], "order_ids": [12, 13]}

    def test_tpsl_and_type_are_forwarded(self):
        payload = build_payload("cancel_tpsl", {"bot_id": 1, "coin": "BTC", "type": "sl", "tp_pct": 0.02})
        assert payload == {"action": "cancel_tpsl", "bot_id": 1, "coin": "BTC", "tp_pct": 0.02, "type": "sl"}


def test_input_schema_lists_required_fields():
    schema = ACTIONS["set_leverage"].input_schema()
    assert schema["type"] == "object"
    assert schema["required"] == ["bot_id", "coin", "leverage", "is_cross"]
    assert schema["properties"]["is_cross"]["type"] == "boolean"
    assert "description" in schema["properties"]["leverage"]


def test_all_actions_are_registered():
    assert len(ACTIONS) == 19
    assert {"open_position", "grid_order", "sell_all", "adjust_margin", "cancel_tpsl"} <= set(ACTIONS)


@pytest.mark.asyncio
class TestKatoshiClient:
    async def test_posts_payload_with_api_key_and_user_id(self):
        client = FakeKatoshiClient()

        result = await client.execute({"action": "start_bot", "bot_id": 5}, CONTEXT)

        assert result == {"status": "ok"}
        url, body = client.posts[0]
        assert url == "https://signals.test/api?id=user-42"
        assert body == {"action": "start_bot", "bot_id": 5, "api_key": "sk-test-1234567890"}

    async def test_missing_base_url(self):
        client = FakeKatoshiClient(base_url="")
        with pytest.raises(ConfigurationError):
            await client.execute({"action": "stop_bot", "bot_id": 5}, CONTEXT)
        assert client.posts == []

    async def test_missing_user_id(self):
        client = FakeKatoshiClient()
        with pytest.raises(ValidationError) as exc:
            await client.execute({"action": "stop_bot"}, RequestContext(api_key="k"))
        assert "user_id is required" in str(exc.value)

    async def test_missing_api_key(self):
        client = FakeKatoshiClient()
        with pytest.raises(ValidationError) as exc:
            await client.execute({"action": "stop_bot"}, RequestContext(user_id="u"))
        assert "api_key is required" in str(exc.value)

    async def test_error_status(self):
        client = FakeKatoshiClient(status=400, reason="Bad Request", text="bot not found")
        with pytest.raises(ExternalAPIError) as exc:
            await client.execute({"action": "stop_bot", "bot_id": 5}, CONTEXT)
        assert str(exc.value) == "Katoshi API error: 400 Bad Request - bot not found"

    async def test_unparseable_response(self):
        client = FakeKatoshiClient(text="<html>")
        with pytest.raises(ExternalAPIError) as exc:
            await client.execute({"action": "stop_bot", "bot_id": 5}, CONTEXT)
        assert str(exc.value).startswith("Failed to parse Katoshi API response")


@pytest.mark.asyncio
async def test_trading_service_uses_request_context():
    client = FakeKatoshiClient(text=json.dumps({"order": "placed"}))
    service = TradingService(client=client)

    with request_context(CONTEXT):
        result = await service.execute(
            ("limit_order", {"botId": "9", "coin": "ETH", "isBuy": True, "reduceOnly": False, "price": "2500", "sizeUsd": "20"})
        )

    assert result == {"order": "placed"}
    _, body = client.posts[0]
    assert body == {
        "action": "limit_order",
        "bot_id": 9,
        "coin": "ETH",
        "is_buy": True,
        "reduce_only": False,
        "size_usd": 20.0,
        "price": 2500.0,
        "api_key": "sk-test-1234567890",
    }
