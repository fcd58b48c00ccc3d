"""Market and user websocket stream client."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable, Iterable
from typing import Any, Generic, Protocol, TypeVar
from urllib.parse import urlsplit, urlunsplit

import websockets
import websockets.exceptions

from binspot.util import BinanceError

DEFAULT_WS_ENDPOINT = "wss://stream.binance.com:9443"

STREAM_ENDPOINT = "stream"
WS_ENDPOINT = "ws"
OUTBOUND_ACCOUNT_INFO = "outboundAccountInfo"
OUTBOUND_ACCOUNT_POSITION = "outboundAccountPosition"
EXECUTION_REPORT = "executionReport"
KLINE = "kline"
AGGREGATED_TRADE = "aggTrade"
DEPTH_ORDERBOOK = "depthUpdate"
PARTIAL_ORDERBOOK = "lastUpdateId"
DAYTICKER = "24hrTicker"

E = TypeVar("E")


def all_ticker_stream() -> str:
    return "!ticker@arr"


def ticker_stream(symbol: str) -> str:
    return f"{symbol}@ticker"


def agg_trade_stream(symbol: str) -> str:
    return f"{symbol}@aggTrade"


def trade_stream(symbol: str) -> str:
    return f"{symbol}@trade"


def kline_stream(symbol: str, interval: str) -> str:
    return f"{symbol}@kline_{interval}"


def book_ticker_stream(symbol: str) -> str:
    return f"{symbol}@bookTicker"


def all_book_ticker_stream() -> str:
    return "!bookTicker"


def all_mini_ticker_stream() -> str:
    return "!miniTicker@arr"


def mini_ticker_stream(symbol: str) -> str:
    return f"{symbol}@miniTicker"


def partial_book_depth_stream(symbol: str, levels: int, update_speed: int) -> str:
    """Partial book stream; ``levels`` is 5, 10 or 20, ``update_speed`` 1000 or 100."""
    return f"{symbol}@depth{levels}@{update_speed}ms"


def diff_book_depth_stream(symbol: str, update_speed: int) -> str:
    """Diff depth stream; ``update_speed`` is 1000 or 100."""
    return f"{symbol}@depth@{update_speed}ms"


def _check_url(url: str) -> None:
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise BinanceError(f"invalid websocket url {url!r}")


def single_stream_url(ws_endpoint: str, endpoint: str) -> str:
    """URL of a single raw stream."""
    url = f"{ws_endpoint}/{WS_ENDPOINT}/{endpoint}"
    _check_url(url)
    return url


def multiple_stream_url(ws_endpoint: str, endpoints: Iterable[str]) -> str:
    """URL of a combined stream carrying every endpoint given."""
    _check_url(ws_endpoint)
    parts = urlsplit(ws_endpoint)
    path = f"{parts.path.rstrip('/')}/{STREAM_ENDPOINT}"
    query = f"streams={'/'.join(endpoints)}"
    return urlunsplit((parts.scheme, parts.netloc, path, query, ""))


class RunningFlag(Protocol):
    def is_set(self) -> bool: ...


class WebSockets(Generic[E]):
    """Holds a websocket connection and dispatches decoded events to a handler."""

    def __init__(
        self,
        handler: Callable[[E], Any],
        ws_endpoint: str = DEFAULT_WS_ENDPOINT,
        parser: Callable[[Any], E] | None = None,
    ) -> None:
        self.socket: Any = None
        self.ws_endpoint = ws_endpoint
        self._handler = handler
        self._parser = parser

    async def connect(self, endpoint: str) -> None:
        """Connect to one stream endpoint."""
        await self._handle_connect(single_stream_url(self.ws_endpoint, endpoint))

    async def connect_multiple(self, endpoints: Iterable[str]) -> None:
        """Connect to several streams at once; events arrive wrapped with their stream name."""
        await self._handle_connect(multiple_stream_url(self.ws_endpoint, endpoints))

    async def _handle_connect(self, url: str) -> None:
        try:
            self.socket = await websockets.connect(url)
        except (OSError, asyncio.TimeoutError, websockets.exceptions.WebSocketException) as exc:
            raise BinanceError(f"Error during handshake {exc}") from exc

    async def disconnect(self) -> None:
        """Close the connection."""
        if self.socket is None:
            raise BinanceError("Not able to close the connection")
        await self.socket.close()

    def handle_message(self, message: str | bytes) -> bool:
        """Decode one message and pass it to the handler.

        Returns False when the stream signals its end with an empty text message.
        Binary messages are ignored.
        """
        if isinstance(message, (bytes, bytearray, memoryview)):
            return True
        if not message:
            return False
        try:
            data = json.loads(message)
            event = self._parser(data) if self._parser is not None else data
        except (ValueError, KeyError, TypeError) as exc:
            raise BinanceError(f"invalid event: {exc}") from exc
        self._handler(event)
        return True

    async def event_loop(self, running: RunningFlag) -> None:
        """Receive and dispatch messages while ``running`` is set."""
        while running.is_set():
            if self.socket is None:
                await asyncio.sleep(0)
                continue
            try:
                message = await self.socket.recv()
            except websockets.exceptions.ConnectionClosed as exc:
                raise BinanceError(f"Disconnected {exc}") from exc
            if not self.handle_message(message):
                return