"""Signed account queries: orders, open orders, account information and trades."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Protocol

from binspot.util import (
    BinanceError,
    build_signed_request,
    build_signed_request_p,
    string_to_decimal,
    u64_or_string,
)

ORDER_ENDPOINT = "/api/v3/order"
OPEN_ORDERS_ENDPOINT = "/api/v3/openOrders"
ALL_ORDERS_ENDPOINT = "/api/v3/allOrders"
ACCOUNT_ENDPOINT = "/api/v3/account"
MY_TRADES_ENDPOINT = "/api/v3/myTrades"


class SignedClient(Protocol):
    """The HTTP client operation the account queries need."""

    async def get_signed(self, endpoint: str, request: str) -> Any: ...


def _field(data: Any, key: str) -> Any:
    if not isinstance(data, Mapping):
        raise BinanceError(f"expected an object, got {data!r}")
    try:
        return data[key]
    except KeyError:
        raise BinanceError(f"missing field {key!r}") from None


def _str(data: Any, key: str) -> str:
    value = _field(data, key)
    if not isinstance(value, str):
        raise BinanceError(f"field {key!r}: expected a string, got {value!r}")
    return value


def _int(data: Any, key: str, signed: bool = False) -> int:
    value = _field(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or (not signed and value < 0):
        raise BinanceError(f"field {key!r}: expected an integer, got {value!r}")
    return value


def _bool(data: Any, key: str) -> bool:
    value = _field(data, key)
    if not isinstance(value, bool):
        raise BinanceError(f"field {key!r}: expected a boolean, got {value!r}")
    return value


def _number(data: Any, key: str) -> float:
    value = _field(data, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BinanceError(f"field {key!r}: expected a number, got {value!r}")
    return float(value)


def _decimal(data: Any, key: str) -> Decimal:
    return string_to_decimal(_field(data, key))


def _list(data: Any, key: str | None = None) -> list[Any]:
    value = data if key is None else _field(data, key)
    if not isinstance(value, list):
        raise BinanceError(f"expected a list, got {value!r}")
    return value


@dataclass
class QueryOrder:
    symbol: str
    order_id: str
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
    working_time: int
    orig_quote_order_qty: Decimal
    self_trade_prevention_mode: str

    @classmethod
    def from_dict(cls, data: Any) -> QueryOrder:
        return cls(
            symbol=_str(data, "symbol"),
            order_id=u64_or_string(_field(data, "orderId")),
            order_list_id=_int(data, "orderListId", signed=True),
            client_order_id=_str(data, "clientOrderId"),
            price=_decimal(data, "price"),
            orig_qty=_decimal(data, "origQty"),
            executed_qty=_decimal(data, "executedQty"),
            cummulative_quote_qty=_decimal(data, "cummulativeQuoteQty"),
            status=_str(data, "status"),
            time_in_force=_str(data, "timeInForce"),
            order_type=_str(data, "type"),
            side=_str(data, "side"),
            stop_price=_decimal(data, "stopPrice"),
            iceberg_qty=_decimal(data, "icebergQty"),
            time=_int(data, "time"),
            update_time=_int(data, "updateTime"),
            is_working=_bool(data, "isWorking"),
            working_time=_int(data, "workingTime"),
            orig_quote_order_qty=_decimal(data, "origQuoteOrderQty"),
            self_trade_prevention_mode=_str(data, "selfTradePreventionMode"),
        )


@dataclass
class TradeHistory:
    id: int
    price: Decimal
    qty: Decimal
    commission: str
    commission_asset: str
    time: int
    is_buyer: bool
    is_maker: bool
    is_best_match: bool

    @classmethod
    def from_dict(cls, data: Any) -> TradeHistory:
        return cls(
            id=_int(data, "id"),
            price=_decimal(data, "price"),
            qty=_decimal(data, "qty"),
            commission=_str(data, "commission"),
            commission_asset=_str(data, "commissionAsset"),
            time=_int(data, "time"),
            is_buyer=_bool(data, "isBuyer"),
            is_maker=_bool(data, "isMaker"),
            is_best_match=_bool(data, "isBestMatch"),
        )


@dataclass
class Balance:
    asset: str
    free: Decimal
    locked: Decimal

    @classmethod
    def from_dict(cls, data: Any) -> Balance:
        return cls(asset=_str(data, "asset"), free=_decimal(data, "free"), locked=_decimal(data, "locked"))


@dataclass
class AccountInformation:
    maker_commission: float
    taker_commission: float
    buyer_commission: float
    seller_commission: float
    can_trade: bool
    can_withdraw: bool
    can_deposit: bool
    account_type: str
    update_time: int
    balances: list[Balance] = field(default_factory=list)
    permissions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> AccountInformation:
        permissions = _list(data, "permissions")
        if not all(isinstance(p, str) for p in permissions):
            raise BinanceError(f"field 'permissions': expected strings, got {permissions!r}")
        return cls(
            maker_commission=_number(data, "makerCommission"),
            taker_commission=_number(data, "takerCommission"),
            buyer_commission=_number(data, "buyerCommission"),
            seller_commission=_number(data, "sellerCommission"),
            can_trade=_bool(data, "canTrade"),
            can_withdraw=_bool(data, "canWithdraw"),
            can_deposit=_bool(data, "canDeposit"),
            account_type=_str(data, "accountType"),
            update_time=_int(data, "updateTime", signed=True),
            balances=[Balance.from_dict(b) for b in _list(data, "balances")],
            permissions=list(permissions),
        )


class QueryOrderBuilder:
    """Query the state of one order."""

    def __init__(self, client: SignedClient, symbol: str) -> None:
        self._client = client
        self._payload: dict[str, Any] = {"symbol": symbol, "orderId": None, "origClientOrderId": None}
        self._recv_window = 0

    def order_id(self, order_id: str) -> QueryOrderBuilder:
        self._payload["orderId"] = order_id
        return self

    def orig_client_order_id(self, orig_client_order_id: str) -> QueryOrderBuilder:
        self._payload["origClientOrderId"] = orig_client_order_id
        return self

    def recv_window(self, recv_window: int) -> QueryOrderBuilder:
        self._recv_window = recv_window
        return self

    def params(self) -> str:
        return build_signed_request_p(self._payload, self._recv_window)

    async def send(self) -> QueryOrder:
        return QueryOrder.from_dict(await self._client.get_signed(ORDER_ENDPOINT, self.params()))


class QueryOpenOrdersBuilder:
    """Open orders of one symbol."""

    def __init__(self, client: SignedClient, symbol: str) -> None:
        self._client = client
        self._symbol = symbol
        self._recv_window = 0

    def recv_window(self, recv_window: int) -> QueryOpenOrdersBuilder:
        self._recv_window = recv_window
        return self

    def params(self) -> str:
        return build_signed_request([("symbol", self._symbol)], self._recv_window)

    async def send(self) -> list[QueryOrder]:
        data = await self._client.get_signed(OPEN_ORDERS_ENDPOINT, self.params())
        return [QueryOrder.from_dict(item) for item in _list(data)]


class QueryAllOrdersBuilder:
    """All orders of one symbol: open, cancelled or filled."""

    def __init__(self, client: SignedClient, symbol: str) -> None:
        self._client = client
        self._payload: dict[str, Any] = {
            "symbol": symbol,
            "orderId": None,
            "startTime": None,
            "endTime": None,
            "limit": None,
        }
        self._recv_window = 0

    def order_id(self, order_id: str) -> QueryAllOrdersBuilder:
        self._payload["orderId"] = order_id
        return self

    def start_time(self, start_time: int) -> QueryAllOrdersBuilder:
        self._payload["startTime"] = start_time
        return self

    def end_time(self, end_time: int) -> QueryAllOrdersBuilder:
        self._payload["endTime"] = end_time
        return self

    def limit(self, limit: int) -> QueryAllOrdersBuilder:
        self._payload["limit"] = limit
        return self

    def recv_window(self, recv_window: int) -> QueryAllOrdersBuilder:
        self._recv_window = recv_window
        return self

    def params(self) -> str:
        return build_signed_request_p(self._payload, self._recv_window)

    async def send(self) -> list[QueryOrder]:
        data = await self._client.get_signed(ALL_ORDERS_ENDPOINT, self.params())
        return [QueryOrder.from_dict(item) for item in _list(data)]


class QueryAccountBuilder:
    """Account information and balances."""

    def __init__(self, client: SignedClient) -> None:
        self._client = client
        self._recv_window = 0

    def recv_window(self, recv_window: int) -> QueryAccountBuilder:
        self._recv_window = recv_window
        return self

    def params(self) -> str:
        return build_signed_request([("", "")], self._recv_window)

    async def send(self) -> AccountInformation:
        return AccountInformation.from_dict(await self._client.get_signed(ACCOUNT_ENDPOINT, self.params()))


class QueryMyTradesBuilder:
    """Trades of the account for one symbol."""

    def __init__(self, client: SignedClient, symbol: str) -> None:
        self._client = client
        self._payload: dict[str, Any] = {
            "symbol": symbol,
            "orderId": None,
            "startTime": None,
            "endTime": None,
            "fromId": None,
            "limit": None,
        }
        self._recv_window = 0

    def order_id(self, order_id: str) -> QueryMyTradesBuilder:
        self._payload["orderId"] = order_id
        return self

    def start_time(self, start_time: int) -> QueryMyTradesBuilder:
        self._payload["startTime"] = start_time
        return self

    def end_time(self, end_time: int) -> QueryMyTradesBuilder:
        self._payload["endTime"] = end_time
        return self

    def from_id(self, from_id: int) -> QueryMyTradesBuilder:
        self._payload["fromId"] = from_id
        return self

    def limit(self, limit: int) -> QueryMyTradesBuilder:
        self._payload["limit"] = limit
        return self

    def recv_window(self, recv_window: int) -> QueryMyTradesBuilder:
        self._recv_window = recv_window
        return self

    def params(self) -> str:
        return build_signed_request_p(self._payload, self._recv_window)

    async def send(self) -> list[TradeHistory]:
        data = await self._client.get_signed(MY_TRADES_ENDPOINT, self.params())
        return [TradeHistory.from_dict(item) for item in _list(data)]