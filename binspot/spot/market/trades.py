"""Recent, historical and aggregated trade endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol

from binspot.util import BinanceError, build_request, string_to_decimal

TRADES_ENDPOINT = "/api/v3/trades"
HISTORICAL_TRADES_ENDPOINT = "/api/v3/historicalTrades"
AGG_TRADES_ENDPOINT = "/api/v3/aggTrades"


class MarketClient(Protocol):
    async def get(self, endpoint: str, request: str | None) -> Any: ...


def _field(data: Any, key: str) -> Any:
    if not isinstance(data, Mapping):
        raise BinanceError(f"expected an object, got {data!r}")
    try:
        return data[key]
    except KeyError:
        raise BinanceError(f"missing field {key!r}") from None


def _u64(data: Any, key: str) -> int:
    value = _field(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise BinanceError(f"field {key!r}: expected an unsigned integer, got {value!r}")
    return value


def _bool(data: Any, key: str) -> bool:
    value = _field(data, key)
    if not isinstance(value, bool):
        raise BinanceError(f"field {key!r}: expected a boolean, got {value!r}")
    return value


def _decimal(data: Any, key: str) -> Decimal:
    return string_to_decimal(_field(data, key))


def _list(data: Any) -> list[Any]:
    if not isinstance(data, list):
        raise BinanceError(f"expected a list, got {data!r}")
    return data


def _query(symbol: str, optional: list[tuple[str, int | None]]) -> str:
    pairs = [("symbol", symbol)]
    pairs.extend((key, str(value)) for key, value in optional if value is not None)
    return build_request(pairs)


@dataclass
class Trade:
    id: int
    price: Decimal
    qty: Decimal
    time: int
    is_buyer_maker: bool
    is_best_match: bool

    @classmethod
    def from_dict(cls, data: Any) -> Trade:
        return cls(
            id=_u64(data, "id"),
            price=_decimal(data, "price"),
            qty=_decimal(data, "qty"),
            time=_u64(data, "time"),
            is_buyer_maker=_bool(data, "isBuyerMaker"),
            is_best_match=_bool(data, "isBestMatch"),
        )


@dataclass
class AggTrade:
    """Trades filled at the same time, price and side, compressed into one."""

    time: int
    agg_id: int
    first_id: int
    last_id: int
    maker: bool
    price: Decimal
    qty: Decimal

    @classmethod
    def from_dict(cls, data: Any) -> AggTrade:
        return cls(
            time=_u64(data, "T"),
            agg_id=_u64(data, "a"),
            first_id=_u64(data, "f"),
            last_id=_u64(data, "l"),
            maker=_bool(data, "m"),
            price=_decimal(data, "p"),
            qty=_decimal(data, "q"),
        )


class TradesBuilder:
    """Recent trades of one symbol."""

    def __init__(self, client: MarketClient, symbol: str) -> None:
        self._client = client
        self._symbol = symbol
        self._limit: int | None = None

    def limit(self, limit: int) -> TradesBuilder:
        self._limit = limit
        return self

    def params(self) -> str:
        return _query(self._symbol, [("limit", self._limit)])

    async def send(self) -> list[Trade]:
        data = await self._client.get(TRADES_ENDPOINT, self.params())
        return [Trade.from_dict(item) for item in _list(data)]


class HistoricalTradesBuilder:
    """Older trades of one symbol."""

    def __init__(self, client: MarketClient, symbol: str) -> None:
        self._client = client
        self._symbol = symbol
        self._limit: int | None = None
        self._from_id: int | None = None

    def limit(self, limit: int) -> HistoricalTradesBuilder:
        self._limit = limit
        return self

    def from_id(self, from_id: int) -> HistoricalTradesBuilder:
        self._from_id = from_id
        return self

    def params(self) -> str:
        return _query(self._symbol, [("limit", self._limit), ("fromId", self._from_id)])

    async def send(self) -> list[Trade]:
        data = await self._client.get(HISTORICAL_TRADES_ENDPOINT, self.params())
        return [Trade.from_dict(item) for item in _list(data)]


class AggTradesBuilder:
    """Aggregated trades of one symbol."""

    def __init__(self, client: MarketClient, symbol: str) -> None:
        self._client = client
        self._symbol = symbol
        self._from_id: int | None = None
        self._start_time: int | None = None
        self._end_time: int | None = None
        self._limit: int | None = None

    def from_id(self, from_id: int) -> AggTradesBuilder:
        self._from_id = from_id
        return self

    def start_time(self, start_time: int) -> AggTradesBuilder:
        self._start_time = start_time
        return self

    def end_time(self, end_time: int) -> AggTradesBuilder:
        self._end_time = end_time
        return self

    def limit(self, limit: int) -> AggTradesBuilder:
        self._limit = limit
        return self

    def params(self) -> str:
        return _query(
            self._symbol,
            [
                ("fromId", self._from_id),
                ("startTime", self._start_time),
                ("endTime", self._end_time),
                ("limit", self._limit),
            ],
        )

    async def send(self) -> list[AggTrade]:
        data = await self._client.get(AGG_TRADES_ENDPOINT, self.params())
        return [AggTrade.from_dict(item) for item in _list(data)]