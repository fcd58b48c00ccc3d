"""Events delivered over the websocket streams."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from binspot.spot.market.depth import OrderBook
from binspot.util import BinanceError

T = TypeVar("T")


def string_or_float(value: Any) -> float:
    """Accept a number or a string holding a number and return a float."""
    if isinstance(value, bool):
        raise BinanceError(f"expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError as exc:
            raise BinanceError(f"invalid number {value!r}") from exc
    raise BinanceError(f"expected a number or string, got {value!r}")


def _raw(data: Any, *keys: str) -> Any:
    if not isinstance(data, Mapping):
        raise BinanceError(f"expected an object, got {data!r}")
    for key in keys:
        if key in data:
            return data[key]
    raise BinanceError(f"missing field {keys[0]!r}")


def _i64(data: Any, *keys: str) -> int:
    value = _raw(data, *keys)
    if isinstance(value, bool) or not isinstance(value, int):
        raise BinanceError(f"field {keys[0]!r}: expected an integer, got {value!r}")
    return value


def _u64(data: Any, *keys: str) -> int:
    value = _i64(data, *keys)
    if value < 0:
        raise BinanceError(f"field {keys[0]!r}: expected an unsigned integer, got {value!r}")
    return value


def _str(data: Any, *keys: str) -> str:
    value = _raw(data, *keys)
    if not isinstance(value, str):
        raise BinanceError(f"field {keys[0]!r}: expected a string, got {value!r}")
    return value


def _opt_str(data: Any, key: str) -> str | None:
    if not isinstance(data, Mapping):
        raise BinanceError(f"expected an object, got {data!r}")
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise BinanceError(f"field {key!r}: expected a string, got {value!r}")
    return value


def _bool(data: Any, *keys: str) -> bool:
    value = _raw(data, *keys)
    if not isinstance(value, bool):
        raise BinanceError(f"field {keys[0]!r}: expected a boolean, got {value!r}")
    return value


def _float(data: Any, *keys: str) -> float:
    return string_or_float(_raw(data, *keys))


def _list(data: Any, *keys: str) -> list[Any]:
    value = _raw(data, *keys)
    if not isinstance(value, list):
        raise BinanceError(f"field {keys[0]!r}: expected a list, got {value!r}")
    return value


def _levels(data: Any, key: str) -> list[tuple[float, float]]:
    levels = []
    for entry in _list(data, key):
        if not isinstance(entry, (list, tuple)) or len(entry) < 2:
            raise BinanceError(f"invalid price level {entry!r}")
        levels.append((string_or_float(entry[0]), string_or_float(entry[1])))
    return levels


@dataclass
class QueryResult:
    result: str | None
    id: int

    @classmethod
    def from_dict(cls, data: Any) -> QueryResult:
        return cls(result=_opt_str(data, "result"), id=_i64(data, "id"))


@dataclass
class TradesEvent:
    """Aggregated trade."""

    event_time: int
    symbol: str
    aggregated_trade_id: int
    price: str
    qty: str
    first_break_trade_id: int
    last_break_trade_id: int
    trade_order_time: int
    is_buyer_maker: bool
    m_ignore: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> TradesEvent:
        return cls(
            event_time=_u64(data, "E"),
            symbol=_str(data, "s"),
            aggregated_trade_id=_u64(data, "a"),
            price=_str(data, "p"),
            qty=_str(data, "q"),
            first_break_trade_id=_u64(data, "f"),
            last_break_trade_id=_u64(data, "l"),
            trade_order_time=_u64(data, "T"),
            is_buyer_maker=_bool(data, "m"),
        )


@dataclass
class TradeEvent:
    event_time: int
    symbol: str
    trade_id: int
    price: str
    qty: str
    buyer_order_id: int
    seller_order_id: int
    trade_order_time: int
    is_buyer_maker: bool
    m_ignore: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> TradeEvent:
        return cls(
            event_time=_u64(data, "E"),
            symbol=_str(data, "s"),
            trade_id=_u64(data, "t"),
            price=_str(data, "p"),
            qty=_str(data, "q"),
            buyer_order_id=_u64(data, "b"),
            seller_order_id=_u64(data, "a"),
            trade_order_time=_u64(data, "T"),
            is_buyer_maker=_bool(data, "m"),
        )


@dataclass
class DayTickerEvent:
    event_time: int
    symbol: str
    price_change: str
    price_change_percent: str
    average_price: str
    prev_close: str
    current_close: str
    current_close_qty: str
    best_bid: str
    best_bid_qty: str
    best_ask: str
    best_ask_qty: str
    open: str
    high: str
    low: str
    volume: str
    quote_volume: str
    open_time: int
    close_time: int
    first_trade_id: int
    last_trade_id: int
    num_trades: int

    @classmethod
    def from_dict(cls, data: Any) -> DayTickerEvent:
        return cls(
            event_time=_u64(data, "E"),
            symbol=_str(data, "s"),
            price_change=_str(data, "p"),
            price_change_percent=_str(data, "P"),
            average_price=_str(data, "w"),
            prev_close=_str(data, "x"),
            current_close=_str(data, "c"),
            current_close_qty=_str(data, "Q"),
            best_bid=_str(data, "b"),
            best_bid_qty=_str(data, "B"),
            best_ask=_str(data, "a"),
            best_ask_qty=_str(data, "A"),
            open=_str(data, "o"),
            high=_str(data, "h"),
            low=_str(data, "l"),
            volume=_str(data, "v"),
            quote_volume=_str(data, "q"),
            open_time=_u64(data, "O"),
            close_time=_u64(data, "C"),
            first_trade_id=_i64(data, "F"),
            last_trade_id=_i64(data, "L"),
            num_trades=_u64(data, "n"),
        )


@dataclass
class MiniDayTickerEvent:
    event_time: int
    symbol: str
    current_close: str
    open: str
    high: str
    low: str
    volume: str
    quote_volume: str

    @classmethod
    def from_dict(cls, data: Any) -> MiniDayTickerEvent:
        return cls(
            event_time=_u64(data, "E"),
            symbol=_str(data, "s"),
            current_close=_str(data, "c"),
            open=_str(data, "o"),
            high=_str(data, "h"),
            low=_str(data, "l"),
            volume=_str(data, "v"),
            quote_volume=_str(data, "q"),
        )


@dataclass
class Kline:
    start_time: int
    end_time: int
    symbol: str
    interval: str
    first_trade_id: int
    last_trade_id: int
    open: float
    close: float
    high: float
    low: float
    volume: float
    number_of_trades: int
    is_final_bar: bool
    quote_volume: float
    active_buy_volume: float
    active_volume_buy_quote: float
    ignore_me: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Kline:
        return cls(
            start_time=_i64(data, "t"),
            end_time=_i64(data, "T"),
            symbol=_str(data, "s"),
            interval=_str(data, "i"),
            first_trade_id=_i64(data, "f"),
            last_trade_id=_i64(data, "L"),
            open=_float(data, "o"),
            close=_float(data, "c"),
            high=_float(data, "h"),
            low=_float(data, "l"),
            volume=_float(data, "v"),
            number_of_trades=_i64(data, "n"),
            is_final_bar=_bool(data, "x"),
            quote_volume=_float(data, "q"),
            active_buy_volume=_float(data, "V"),
            active_volume_buy_quote=_float(data, "Q"),
        )


@dataclass
class KlineEvent:
    event_time: int
    symbol: str
    kline: Kline

    @classmethod
    def from_dict(cls, data: Any) -> KlineEvent:
        return cls(
            event_time=_u64(data, "E"),
            symbol=_str(data, "s"),
            kline=Kline.from_dict(_raw(data, "k")),
        )


@dataclass
class DepthOrderBookEvent:
    event_time: int
    symbol: str
    first_update_id: int
    final_update_id: int
    bids: list[tuple[float, float]]
    asks: list[tuple[float, float]]

    @classmethod
    def from_dict(cls, data: Any) -> DepthOrderBookEvent:
        return cls(
            event_time=_u64(data, "E"),
            symbol=_str(data, "s"),
            first_update_id=_u64(data, "U"),
            final_update_id=_u64(data, "u"),
            bids=_levels(data, "b"),
            asks=_levels(data, "a"),
        )


@dataclass
class BookTickerEvent:
    update_id: int
    symbol: str
    best_bid: float
    best_bid_qty: float
    best_ask: float
    best_ask_qty: float

    @classmethod
    def from_dict(cls, data: Any) -> BookTickerEvent:
        return cls(
            update_id=_u64(data, "u"),
            symbol=_str(data, "s"),
            best_bid=_float(data, "b"),
            best_bid_qty=_float(data, "B"),
            best_ask=_float(data, "a"),
            best_ask_qty=_float(data, "A"),
        )


@dataclass
class CombinedStreamEvent(Generic[T]):
    """An event from a combined stream, with the name of the stream it came on."""

    stream: str
    data: T

    @classmethod
    def from_dict(
        cls, data: Any, parser: Callable[[Any], T] | None = None
    ) -> CombinedStreamEvent[T]:
        payload = _raw(data, "data")
        return cls(stream=_str(data, "stream"), data=parser(payload) if parser else payload)

    def parse_stream(self) -> tuple[str, str]:
        """Return (stream name, channel)."""
        parsed = self.stream[1:] if self.stream.startswith("!") else self.stream
        name, _, channel = parsed.partition("@")
        return name, channel


@dataclass
class EventBalance:
    asset: str
    free: float
    locked: float

    @classmethod
    def from_dict(cls, data: Any) -> EventBalance:
        return cls(asset=_str(data, "a"), free=_float(data, "f"), locked=_float(data, "l"))


@dataclass
class AccountPositionUpdate:
    event_time: int
    last_update_time: int
    balances: list[EventBalance]

    @classmethod
    def from_dict(cls, data: Any) -> AccountPositionUpdate:
        return cls(
            event_time=_u64(data, "eventTime", "E"),
            last_update_time=_u64(data, "lastUpdateTime", "u"),
            balances=[EventBalance.from_dict(b) for b in _list(data, "balances", "B")],
        )


@dataclass
class AccountUpdate:
    event_time: int
    maker_commission_rate: int
    taker_commission_rate: int
    buyer_commission_rate: int
    seller_commission_rate: int
    can_trade: bool
    can_withdraw: bool
    can_deposit: bool
    balances: list[EventBalance]

    @classmethod
    def from_dict(cls, data: Any) -> AccountUpdate:
        return cls(
            event_time=_u64(data, "eventTime", "E"),
            maker_commission_rate=_u64(data, "makerCommissionRate", "m"),
            taker_commission_rate=_u64(data, "takerCommissionRate", "t"),
            buyer_commission_rate=_u64(data, "buyerCommissionRate", "b"),
            seller_commission_rate=_u64(data, "sellerCommissionRate", "s"),
            can_trade=_bool(data, "canTrade", "T"),
            can_withdraw=_bool(data, "canWithdraw", "W"),
            can_deposit=_bool(data, "canDeposit", "D"),
            balances=[EventBalance.from_dict(b) for b in _list(data, "balances", "B")],
        )


@dataclass
class BalanceUpdate:
    event_time: int
    asset: str
    delta: float
    clear_time: int

    @classmethod
    def from_dict(cls, data: Any) -> BalanceUpdate:
        return cls(
            event_time=_u64(data, "eventTime", "E"),
            asset=_str(data, "a"),
            delta=_float(data, "d"),
            clear_time=_u64(data, "clearTime", "T"),
        )


@dataclass
class OrderUpdate:
    event_time: int
    symbol: str
    client_order_id: str | None
    side: str
    order_type: str
    time_in_force: str
    qty: float
    price: float
    stop_price: float
    iceberg_qty: float
    order_list_id: int
    origin_client_id: str | None
    execution_type: str
    current_order_status: str
    order_reject_reason: str
    order_id: int
    qty_last_executed: float
    cumulative_filled_qty: float
    last_executed_price: float
    commission: float
    commission_asset: str | None
    trade_order_time: int
    trade_id: int
    is_order_on_the_book: bool
    is_buyer_maker: bool
    order_creation_time: int
    cumulative_quote_asset_transacted_qty: float
    last_quote_asset_transacted_qty: float
    quote_order_qty: float
    i_ignore: int = 0
    m_ignore: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> OrderUpdate:
        return cls(
            event_time=_u64(data, "E"),
            symbol=_str(data, "s"),
            client_order_id=_opt_str(data, "c"),
            side=_str(data, "S"),
            order_type=_str(data, "o"),
            time_in_force=_str(data, "f"),
            qty=_float(data, "q"),
            price=_float(data, "p"),
            stop_price=_float(data, "P"),
            iceberg_qty=_float(data, "F"),
            order_list_id=_i64(data, "g"),
            origin_client_id=_opt_str(data, "C"),
            execution_type=_str(data, "x"),
            current_order_status=_str(data, "X"),
            order_reject_reason=_str(data, "r"),
            order_id=_u64(data, "i"),
            qty_last_executed=_float(data, "l"),
            cumulative_filled_qty=_float(data, "z"),
            last_executed_price=_float(data, "L"),
            commission=_float(data, "n"),
            commission_asset=_opt_str(data, "N"),
            trade_order_time=_u64(data, "T"),
            trade_id=_i64(data, "t"),
            is_order_on_the_book=_bool(data, "w"),
            is_buyer_maker=_bool(data, "m"),
            order_creation_time=_u64(data, "O"),
            cumulative_quote_asset_transacted_qty=_float(data, "Z"),
            last_quote_asset_transacted_qty=_float(data, "Y"),
            quote_order_qty=_float(data, "Q"),
        )


@dataclass
class OrderListTransaction:
    symbol: str
    order_id: int
    client_order_id: str

    @classmethod
    def from_dict(cls, data: Any) -> OrderListTransaction:
        return cls(symbol=_str(data, "s"), order_id=_i64(data, "i"), client_order_id=_str(data, "c"))


@dataclass
class OrderListUpdate:
    """OCO order list status event."""

    event_time: int
    symbol: str
    order_list_id: int
    contingency_type: str
    list_status_type: str
    list_order_status: str
    list_reject_reason: str
    list_client_order_id: str
    transaction_time: int
    objects: list[OrderListTransaction] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> OrderListUpdate:
        return cls(
            event_time=_u64(data, "E"),
            symbol=_str(data, "s"),
            order_list_id=_i64(data, "g"),
            contingency_type=_str(data, "c"),
            list_status_type=_str(data, "l"),
            list_order_status=_str(data, "L"),
            list_reject_reason=_str(data, "r"),
            list_client_order_id=_str(data, "C"),
            transaction_time=_u64(data, "T"),
            objects=[OrderListTransaction.from_dict(o) for o in _list(data, "O")],
        )


_EVENT_TYPES: dict[str, Callable[[Any], Any]] = {}
for _names, _cls in (
    (("AggTrade", "aggTrade"), TradesEvent),
    (("Trade", "trade"), TradeEvent),
    (("Kline", "kline"), KlineEvent),
    (("DayTicker", "24hrTicker"), DayTickerEvent),
    (("DayMiniTicker", "24hrMiniTicker"), MiniDayTickerEvent),
    (("DepthOrderBook", "depthUpdate"), DepthOrderBookEvent),
    (("AccountPositionUpdate", "outboundAccountPosition"), AccountPositionUpdate),
    (("BalanceUpdate", "balanceUpdate"), BalanceUpdate),
    (("OrderUpdate", "executionReport"), OrderUpdate),
    (("ListOrderUpdate", "listStatus"), OrderListUpdate),
):
    for _name in _names:
        _EVENT_TYPES[_name] = _cls.from_dict


def parse_websocket_event(data: Any) -> Any:
    """Decode an event tagged by its ``e`` field into the matching event class."""
    tag = _raw(data, "e")
    if not isinstance(tag, str):
        raise BinanceError(f"invalid event type {tag!r}")
    try:
        parser = _EVENT_TYPES[tag]
    except KeyError:
        raise BinanceError(f"unknown event type {tag!r}") from None
    return parser(data)


def parse_untagged_event(data: Any) -> Any:
    """Decode a tagged event, an order book snapshot or a book ticker, whichever fits first."""
    for parser in (parse_websocket_event, OrderBook.from_dict, BookTickerEvent.from_dict):
        try:
            return parser(data)
        except BinanceError:
            continue
    raise BinanceError("data did not match any variant of the untagged event")