"""Order response model."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from binspot.util import BinanceError, string_to_decimal


def _int(value: Any, name: str, signed: bool = False) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or (not signed and value < 0):
        raise BinanceError(f"field {name!r}: expected an integer, got {value!r}")
    return value


def _text(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise BinanceError(f"field {name!r}: expected a string, got {value!r}")
    return value


@dataclass
class Order:
    symbol: str
    order_id: int
    order_list_id: int
    client_order_id: str
    price: Decimal
    orig_qty: Decimal
    executed_qty: Decimal
    cummulative_quote_qty: Decimal
    status: str
    time_in_force: str
    order_type: str
    side: str
    stop_price: Decimal
    iceberg_qty: Decimal
    time: int
    update_time: int
    is_working: bool
    orig_quote_order_qty: Decimal

    @classmethod
    def from_dict(cls, data: Any) -> Order:
        if not isinstance(data, Mapping):
            raise BinanceError("expected an order object")
        try:
            is_working = data["isWorking"]
            if not isinstance(is_working, bool):
                raise BinanceError(f"field 'isWorking': expected a boolean, got {is_working!r}")
            return cls(
                symbol=_text(data["symbol"], "symbol"),
                order_id=_int(data["orderId"], "orderId"),
                order_list_id=_int(data["orderListId"], "orderListId", signed=True),
                client_order_id=_text(data["clientOrderId"], "clientOrderId"),
                price=string_to_decimal(data["price"]),
                orig_qty=string_to_decimal(data["origQty"]),
                executed_qty=string_to_decimal(data["executedQty"]),
                cummulative_quote_qty=string_to_decimal(data["cummulativeQuoteQty"]),
                status=_text(data["status"], "status"),
                time_in_force=_text(data["timeInForce"], "timeInForce"),
                order_type=_text(data["type"], "type"),
                side=_text(data["side"], "side"),
                stop_price=string_to_decimal(data["stopPrice"]),
                iceberg_qty=string_to_decimal(data["icebergQty"]),
                time=_int(data["time"], "time"),
                update_time=_int(data["updateTime"], "updateTime"),
                is_working=is_working,
                orig_quote_order_qty=string_to_decimal(data["origQuoteOrderQty"]),
            )
        except KeyError as exc:
            raise BinanceError(f"missing field {exc}") from exc