"""Price ticker endpoints: 24h statistics, last price and best book prices."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol

from binspot.util import BinanceError, build_request, string_to_decimal

TICKER_24HR_ENDPOINT = "/api/v3/ticker/24hr"
TICKER_PRICE_ENDPOINT = "/api/v3/ticker/price"
TICKER_BOOK_ENDPOINT = "/api/v3/ticker/bookTicker"


class MarketClient(Protocol):
    async def get(self, endpoint: str, request: str | None) -> Any: ...


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


def _u64(data: Any, key: str) -> int:
    value = _field(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise BinanceError(f"field {key!r}: expected an unsigned integer, got {value!r}")
    return value


def _decimal(data: Any, key: str) -> Decimal:
    return string_to_decimal(_field(data, key))


def _list(data: Any) -> list[Any]:
    if not isinstance(data, list):
        raise BinanceError(f"expected a list, got {data!r}")
    return data


def _symbol_params(symbol: str) -> str:
    return build_request([("symbol", symbol)])


def _symbols_params(symbols: list[str] | None) -> str | None:
    if symbols is None:
        return None
    return build_request([("symbols", json.dumps(symbols, separators=(",", ":")))])


@dataclass
class Ticker:
    """24 hour rolling window statistics of one symbol."""

    price_change: str
    price_change_percent: str
    weighted_avg_price: str
    prev_close_price: Decimal
    last_price: Decimal
    bid_price: Decimal
    ask_price: Decimal
    open_price: Decimal
    high_price: Decimal
    low_price: Decimal
    volume: Decimal
    open_time: int
    close_time: int
    first_id: int
    last_id: int
    count: int

    @classmethod
    def from_dict(cls, data: Any) -> Ticker:
        return cls(
            price_change=_str(data, "priceChange"),
            price_change_percent=_str(data, "priceChangePercent"),
            weighted_avg_price=_str(data, "weightedAvgPrice"),
            prev_close_price=_decimal(data, "prevClosePrice"),
            last_price=_decimal(data, "lastPrice"),
            bid_price=_decimal(data, "bidPrice"),
            ask_price=_decimal(data, "askPrice"),
            open_price=_decimal(data, "openPrice"),
            high_price=_decimal(data, "highPrice"),
            low_price=_decimal(data, "lowPrice"),
            volume=_decimal(data, "volume"),
            open_time=_u64(data, "openTime"),
            close_time=_u64(data, "closeTime"),
            first_id=_u64(data, "firstId"),
            last_id=_u64(data, "lastId"),
            count=_u64(data, "count"),
        )


@dataclass
class LastPrice:
    symbol: str
    price: Decimal

    @classmethod
    def from_dict(cls, data: Any) -> LastPrice:
        return cls(symbol=_str(data, "symbol"), price=_decimal(data, "price"))


@dataclass
class BookTicker:
    """Best bid and ask of one symbol."""

    symbol: str
    bid_price: Decimal
    bid_qty: Decimal
    ask_price: Decimal
    ask_qty: Decimal

    @classmethod
    def from_dict(cls, data: Any) -> BookTicker:
        return cls(
            symbol=_str(data, "symbol"),
            bid_price=_decimal(data, "bidPrice"),
            bid_qty=_decimal(data, "bidQty"),
            ask_price=_decimal(data, "askPrice"),
            ask_qty=_decimal(data, "askQty"),
        )


class Ticker24hBuilder:
    """24 hour statistics of one symbol."""

    def __init__(self, client: MarketClient, symbol: str) -> None:
        self._client = client
        self._symbol = symbol

    def params(self) -> str:
        return _symbol_params(self._symbol)

    async def send(self) -> Ticker:
        return Ticker.from_dict(await self._client.get(TICKER_24HR_ENDPOINT, self.params()))


class Ticker24hMultiBuilder:
    """24 hour statistics of several (or all) symbols."""

    def __init__(self, client: MarketClient) -> None:
        self._client = client
        self._symbols: list[str] | None = None

    def symbols(self, symbols: Iterable[str]) -> Ticker24hMultiBuilder:
        self._symbols = list(symbols)
        return self

    def params(self) -> str | None:
        """Query string for the chosen symbols, or None to ask for all symbols."""
        return _symbols_params(self._symbols)

    async def send(self) -> list[Ticker]:
        data = await self._client.get(TICKER_24HR_ENDPOINT, self.params())
        return [Ticker.from_dict(item) for item in _list(data)]


class LastPriceBuilder:
    """Latest price of one symbol."""

    def __init__(self, client: MarketClient, symbol: str) -> None:
        self._client = client
        self._symbol = symbol

    def params(self) -> str:
        return _symbol_params(self._symbol)

    async def send(self) -> LastPrice:
        return LastPrice.from_dict(await self._client.get(TICKER_PRICE_ENDPOINT, self.params()))


class LastPriceMultiBuilder:
    """Latest prices of several (or all) symbols."""

    def __init__(self, client: MarketClient) -> None:
        self._client = client
        self._symbols: list[str] | None = None

    def symbols(self, symbols: Iterable[str]) -> LastPriceMultiBuilder:
        self._symbols = list(symbols)
        return self

    def params(self) -> str | None:
        """Query string for the chosen symbols, or None to ask for all symbols."""
        return _symbols_params(self._symbols)

    async def send(self) -> list[LastPrice]:
        data = await self._client.get(TICKER_PRICE_ENDPOINT, self.params())
        return [LastPrice.from_dict(item) for item in _list(data)]


class BookTickerBuilder:
    """Best bid and ask of one symbol."""

    def __init__(self, client: MarketClient, symbol: str) -> None:
        self._client = client
        self._symbol = symbol

    def params(self) -> str:
        return _symbol_params(self._symbol)

    async def send(self) -> BookTicker:
        return BookTicker.from_dict(await self._client.get(TICKER_BOOK_ENDPOINT, self.params()))


class BookTickerMultiBuilder:
    """Best bids and asks of several (or all) symbols."""

    def __init__(self, client: MarketClient) -> None:
        self._client = client
        self._symbols: list[str] | None = None

    def symbols(self, symbols: Iterable[str]) -> BookTickerMultiBuilder:
        self._symbols = list(symbols)
        return self

    def params(self) -> str | None:
        """Query string for the chosen symbols, or None to ask for all symbols."""
        return _symbols_params(self._symbols)

    async def send(self) -> list[BookTicker]:
        data = await self._client.get(TICKER_BOOK_ENDPOINT, self.params())
        return [BookTicker.from_dict(item) for item in _list(data)]