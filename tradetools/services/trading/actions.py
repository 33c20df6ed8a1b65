"""
Trading Actions

Field catalog, per-action requirements and payload building for the Katoshi
signal API. Agents send loose JSON (snake_case or camelCase, numbers as
strings, explicit nulls); only well-typed values are forwarded.
"""

import math
from dataclasses import dataclass, field
from typing import Annotated, Any, Callable, Literal, Optional, Union

from pydantic import Field, StrictBool, TypeAdapter

from tradetools.core.validation import require_field
from tradetools.services.base import ValidationError

SERVICE_NAME = "TradingActions"

FiniteNumber = Annotated[float, Field(allow_inf_nan=False)]
NonEmptyString = Annotated[str, Field(min_length=1)]
TpslType = Literal["tpsl", "tp", "sl"]


@dataclass(frozen=True)
class FieldSpec:
    annotation: Any
    description: str
    hint: str = ""


# =============================================================================
# FIELD CATALOG
# =============================================================================

_SIZE_NOTE = "Provide exactly ONE of size, size_usd, or size_pct. Omit the other two. Do not send 0."
_TPSL_NOTE = "Omit if the user did not specify. Do not send 0."

FIELDS: dict[str, FieldSpec] = {
    # Required-capable fields
    "bot_id": FieldSpec(
        Union[int, str],
        "The bot ID to execute the action for (e.g. 640 or '640'). Sent as integer.",
        "Provide bot_id (e.g. 640).",
    ),
    "coin": FieldSpec(NonEmptyString, "The coin symbol (e.g. 'BTC', 'ETH', 'SOL').", "Provide coin (e.g. BTC, ETH)."),
    "is_buy": FieldSpec(
        StrictBool,
        "Trade direction: true for long/buy, false for short/sell.",
        "Provide is_buy (true for long, false for short).",
    ),
    "reduce_only": FieldSpec(
        StrictBool,
        "If true, only close/reduce. If false, can open or close. Perps only.",
        "Provide reduce_only (true/false).",
    ),
    "price": FieldSpec(FiniteNumber, "Order or trigger price.", "Provide price (number)."),
    "order_id": FieldSpec(Union[int, str], "Order ID (number or string).", "Provide order_id (order ID)."),
    "leverage": FieldSpec(FiniteNumber, "Leverage multiplier (e.g. 5 for 5x).", "Provide leverage (number)."),
    "is_cross": FieldSpec(
        StrictBool,
        "true = cross margin, false = isolated.",
        "Provide is_cross (true = cross, false = isolated).",
    ),
    "amount": FieldSpec(
        FiniteNumber,
        "Amount in USD to add or remove (e.g. 5 for $5).",
        "Provide amount (number).",
    ),
    "is_add": FieldSpec(
        StrictBool,
        "true = add margin, false = remove margin.",
        "Provide is_add (true = add margin, false = remove).",
    ),
    "start_price": FieldSpec(
        FiniteNumber,
        "Price of first order (closest to current price).",
        "Provide start_price (number) for scale_order.",
    ),
    "end_price": FieldSpec(FiniteNumber, "Price of last order.", "Provide end_price (number) for scale_order."),
    "num_orders": FieldSpec(
        FiniteNumber, "Number of limit orders.", "Provide num_orders (number) for scale_order."
    ),
    "price_start": FieldSpec(
        FiniteNumber, "Start of grid price range.", "Provide price_start (number) for grid_order."
    ),
    "price_end": FieldSpec(
        FiniteNumber, "End of grid price range.", "Provide price_end (number) for grid_order."
    ),
    "num_grids": FieldSpec(
        FiniteNumber, "Number of grid orders to place.", "Provide num_grids (number) for grid_order."
    ),
    # Optional fields
    "size": FieldSpec(Optional[float], f"Size in contracts (e.g. 0.005). {_SIZE_NOTE}"),
    "size_usd": FieldSpec(Optional[float], f"Size in USD (e.g. 11). {_SIZE_NOTE}"),
    "size_pct": FieldSpec(Optional[float], f"Size as fraction (e.g. 0.1 for 10%). {_SIZE_NOTE}"),
    "tp_pct": FieldSpec(Optional[float], f"Take-profit as % from entry (e.g. 0.02 for 2%). {_TPSL_NOTE}"),
    "sl_pct": FieldSpec(Optional[float], f"Stop-loss as % from entry (e.g. 0.01 for 1%). {_TPSL_NOTE}"),
    "tp": FieldSpec(Optional[float], f"Take-profit as price. {_TPSL_NOTE}"),
    "sl": FieldSpec(Optional[float], f"Stop-loss as price. {_TPSL_NOTE}"),
    "slippage_pct": FieldSpec(
        Optional[float], "Max slippage % (e.g. 0.05 for 5%). Omit unless the user specifies."
    ),
    "skew": FieldSpec(
        Optional[float], "Size skew between first and last order (e.g. 2 = last 2x first). Default 1."
    ),
    "coins": FieldSpec(Optional[list[str]], "Limit to these coins (e.g. ['BTC','ETH']). Omit for all."),
    "order_ids": FieldSpec(Optional[list[int]], "Specific order IDs (integers). Omit for all."),
    "dexs": FieldSpec(Optional[list[str]], "Limit to these DEXs. Omit for all."),
    "type": FieldSpec(
        Optional[TpslType],
        "'tpsl' = both (default), 'tp' = take-profit only, 'sl' = stop-loss only.",
    ),
}

CAMEL_ALIASES: dict[str, str] = {
    "bot_id": "botId",
    "size_usd": "sizeUsd",
    "size_pct": "sizePct",
    "is_buy": "isBuy",
    "reduce_only": "reduceOnly",
    "slippage_pct": "slippagePct",
    "tp_pct": "tpPct",
    "sl_pct": "slPct",
    "order_id": "orderId",
    "order_ids": "orderIds",
    "start_price": "startPrice",
    "end_price": "endPrice",
    "num_orders": "numOrders",
    "price_start": "priceStart",
    "price_end": "priceEnd",
    "num_grids": "numGrids",
    "is_cross": "isCross",
    "is_add": "isAdd",
}

NUMBER_FIELDS = (
    "price", "tp_pct", "tp", "sl_pct", "sl", "slippage_pct", "leverage", "amount",
    "start_price", "end_price", "num_orders", "skew", "price_start", "price_end", "num_grids",
)
BOOLEAN_FIELDS = ("is_buy", "reduce_only", "is_cross", "is_add")
STRING_LIST_FIELDS = ("coins", "dexs")
TPSL_FIELDS = ("tp_pct", "tp", "sl_pct", "sl")
SIZE_FIELDS = ("size_usd", "size", "size_pct")


def normalize_args(args: dict) -> dict:
    """Accept camelCase aliases for snake_case fields."""
    normalized = dict(args or {})
    for snake, camel in CAMEL_ALIASES.items():
        if normalized.get(snake) is None and normalized.get(camel) is not None:
            normalized[snake] = normalized[camel]
    return normalized


def coerce_numeric_strings(args: dict, names) -> dict:
    """Numeric strings ("11", "0.5") become floats; anything else is left as is."""
    for name in names:
        value = args.get(name)
        if isinstance(value, str):
            try:
                number = float(value)
            except ValueError:
                continue
            if math.isfinite(number):
                args[name] = number
    return args


# =============================================================================
# VALIDATION
# =============================================================================


def _as_positive(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) and number > 0 else None


def require_size(args: dict) -> None:
    """At least one of size, size_usd or size_pct must be a positive number."""
    if all(args.get(name) is None for name in SIZE_FIELDS):
        raise ValidationError(
            SERVICE_NAME,
            "One of size, size_usd, or size_pct is required (e.g. size_usd: 11 for $11 USD)",
        )
    if not any(_as_positive(args.get(name)) for name in SIZE_FIELDS):
        raise ValidationError(
            SERVICE_NAME,
            "One of size, size_usd, or size_pct must be a positive number (e.g. size_usd: 11 for $11 USD)",
        )


def require_tpsl(args: dict) -> None:
    if all(args.get(name) is None for name in TPSL_FIELDS):
        raise ValidationError(
            SERVICE_NAME,
            "Invalid or missing tpsl: at least one of sl_pct, tp_pct, sl, tp is required. "
            "Provide at least one of: sl_pct, tp_pct, sl, tp.",
        )


# =============================================================================
# PAYLOAD
# =============================================================================


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _as_bot_id(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return math.trunc(number) if math.isfinite(number) else None


def _as_string_list(value: Any) -> Optional[list[str]]:
    if not isinstance(value, list):
        return None
    out = [item for item in value if isinstance(item, str)]
    return out or None


def _as_int_list(value: Any) -> Optional[list[int]]:
    if not isinstance(value, list):
        return None
    out = []
    for item in value:
        number = _as_bot_id(item)
        if number is not None:
            out.append(number)
    return out or None


def build_payload(action: str, args: dict) -> dict:
    """Payload for the signal API. Values of the wrong type are dropped, never coerced to 0."""
    payload: dict = {"action": action}

    bot_id = _as_bot_id(args.get("bot_id"))
    if bot_id is not None:
        payload["bot_id"] = bot_id

    coin = args.get("coin")
    if isinstance(coin, str) and coin:
        payload["coin"] = coin

    for name in BOOLEAN_FIELDS:
        if isinstance(args.get(name), bool):
            payload[name] = args[name]

    # At most one size parameter
    for name in SIZE_FIELDS:
        if _is_number(args.get(name)) and args[name] > 0:
            payload[name] = args[name]
            break

    for name in NUMBER_FIELDS:
        if _is_number(args.get(name)):
            payload[name] = args[name]

    order_id = args.get("order_id")
    if order_id is not None and order_id != "":
        payload["order_id"] = order_id

    order_ids = _as_int_list(args.get("order_ids"))
    if order_ids is not None:
        payload["order_ids"] = order_ids

    for name in STRING_LIST_FIELDS:
        values = _as_string_list(args.get(name))
        if values is not None:
            payload[name] = values

    if args.get("type") in ("tpsl", "tp", "sl"):
        payload["type"] = args["type"]

    return payload


# =============================================================================
# ACTIONS
# =============================================================================


@dataclass(frozen=True)
class TradingAction:
    name: str
    title: str
    description: str
    required: tuple = ()
    optional: tuple = ()
    sized: bool = False
    checks: tuple[Callable[[dict], None], ...] = field(default_factory=tuple)

    def validate(self, args: dict) -> dict:
        """Normalize and validate arguments; returns args with required fields parsed."""
        normalized = coerce_numeric_strings(
            normalize_args(args), [n for n in self.optional if n in (*SIZE_FIELDS, *NUMBER_FIELDS)]
        )
        for name in self.required:
            field_spec = FIELDS[name]
            normalized[name] = require_field(normalized.get(name), field_spec.annotation, name, field_spec.hint)
        if self.sized:
            require_size(normalized)
        for check in self.checks:
            check(normalized)
        return normalized

    def input_schema(self) -> dict:
        """JSON schema for the tool's arguments."""
        properties = {}
        for name in (*self.required, *self.optional):
            field_spec = FIELDS[name]
            schema = TypeAdapter(field_spec.annotation).json_schema()
            schema["description"] = field_spec.description
            properties[name] = schema
        return {
            "type": "object",
            "properties": properties,
            "required": list(self.required),
        }


_SIZES = SIZE_FIELDS
_TPSL = (*TPSL_FIELDS, "slippage_pct")

TRADING_ACTIONS: list[TradingAction] = [
    TradingAction(
        "open_position",
        "Open Position",
        "Open a new long or short position for a coin at market. Provide exactly one of size, "
        "size_usd, or size_pct (e.g. size_usd: 11 for $11 USD). Omit tp_pct, tp, sl_pct and sl "
        "entirely unless the user specified take-profit or stop-loss.",
        required=("bot_id", "coin", "is_buy"),
        optional=(*_SIZES, *_TPSL),
        sized=True,
    ),
    TradingAction(
        "close_position",
        "Close Position",
        "Close an existing position (fully or partially). Optionally restrict to long or short "
        "via is_buy; if omitted, closes both.",
        required=("bot_id", "coin"),
        optional=("is_buy", *_SIZES, *_TPSL),
        sized=True,
    ),
    TradingAction(
        "market_order",
        "Market Order",
        "Place a market order (immediate execution at current market price).",
        required=("bot_id", "coin", "is_buy", "reduce_only"),
        optional=(*_SIZES, *_TPSL),
        sized=True,
    ),
    TradingAction(
        "limit_order",
        "Limit Order",
        "Place a limit order at a specific price.",
        required=("bot_id", "coin", "is_buy", "reduce_only", "price"),
        optional=(*_SIZES, *_TPSL),
        sized=True,
    ),
    TradingAction(
        "stop_market_order",
        "Stop Market Order",
        "Place a stop market order that triggers a market order when price reaches the trigger level.",
        required=("bot_id", "coin", "is_buy", "reduce_only", "price"),
        optional=(*_SIZES, *_TPSL),
        sized=True,
    ),
    TradingAction(
        "scale_order",
        "Scale Order (DCA)",
        "Place a scale (DCA) order: multiple limit orders between start_price and end_price.",
        required=("bot_id", "coin", "is_buy", "reduce_only", "start_price", "end_price", "num_orders"),
        optional=("skew", *_SIZES, *_TPSL),
        sized=True,
    ),
    TradingAction(
        "grid_order",
        "Grid Order",
        "Place a grid order: automated orders at multiple price levels between price_start and price_end.",
        required=("bot_id", "coin", "is_buy", "price_start", "price_end", "num_grids"),
        optional=(*_SIZES, *_TPSL),
        sized=True,
    ),
    TradingAction(
        "move_order",
        "Move Order",
        "Move an existing order to a new price.",
        required=("bot_id", "coin", "order_id", "price"),
    ),
    TradingAction(
        "cancel_order",
        "Cancel Order",
        "Cancel resting orders for a coin. Pass order_ids to cancel specific orders; otherwise "
        "cancels all resting orders for the coin.",
        required=("bot_id", "coin"),
        optional=("order_ids",),
    ),
    TradingAction(
        "close_all",
        "Close All",
        "Close all open perpetuals positions. Optionally filter by coins, direction (is_buy), "
        "size_pct, or dexs.",
        required=("bot_id",),
        optional=("coins", "is_buy", "size_pct", "dexs"),
    ),
    TradingAction(
        "sell_all",
        "Sell All",
        "Sell (liquidate) all spot assets. Optionally filter by coins or size_pct.",
        required=("bot_id",),
        optional=("coins", "size_pct"),
    ),
    TradingAction(
        "clear_all",
        "Clear All",
        "Close all perpetuals positions and cancel all orders. Optionally filter by coins or dexs.",
        required=("bot_id",),
        optional=("coins", "dexs"),
    ),
    TradingAction(
        "cancel_all",
        "Cancel All",
        "Cancel all resting orders. Optionally filter by coins, order_ids, or dexs.",
        required=("bot_id",),
        optional=("coins", "order_ids", "dexs"),
    ),
    TradingAction(
        "set_leverage",
        "Set Leverage",
        "Set leverage and margin mode (cross or isolated) for a coin.",
        required=("bot_id", "coin", "leverage", "is_cross"),
    ),
    TradingAction(
        "adjust_margin",
        "Adjust Margin",
        "Add or remove margin for a position.",
        required=("bot_id", "coin", "amount", "is_add"),
    ),
    TradingAction("start_bot", "Start Bot", "Start a trading bot.", required=("bot_id",)),
    TradingAction("stop_bot", "Stop Bot", "Stop a trading bot.", required=("bot_id",)),
    TradingAction(
        "modify_tpsl",
        "Modify TP/SL",
        "Modify take-profit and/or stop-loss levels for a position. Provide at least one of "
        "tp_pct, sl_pct, tp, or sl.",
        required=("bot_id", "coin"),
        optional=TPSL_FIELDS,
        checks=(require_tpsl,),
    ),
    TradingAction(
        "cancel_tpsl",
        "Cancel TP/SL",
        "Cancel take-profit and/or stop-loss orders for a position. Optionally restrict by type: "
        "tpsl (both), tp, or sl.",
        required=("bot_id", "coin"),
        optional=("type",),
    ),
]
