"""Order book depth endpoint."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from binspot.util import BinanceError, build_request

DEPTH_ENDPOINT = "/api/v3/depth"

PriceLevel = tuple[float, float]


class MarketClient(Protocol):
    async def get(self, endpoint: str, request: str | None) -> Any: ...


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise BinanceError(f"expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError as exc:
            raise BinanceError(f"invalid number {value!r}") from exc
    raise BinanceError(f"expected a number, got {value!r}")


def _level(entry: Any) -> PriceLevel:
    if not isinstance(entry, (list, tuple)) or len(entry) < 2:
        raise BinanceError(f"invalid price level {entry!r}")
    return _to_float(entry[0]), _to_float(entry[1])


def _levels(entries: Any) -> list[PriceLevel]:
    if not isinstance(entries, list):
        raise BinanceError(f"expected a list of price levels, got {entries!r}")
    return [_level(entry) for entry in entries]


@dataclass
class OrderBook:
    """Snapshot of an order book: (price, quantity) levels on each side."""

    last_update_id: int
    bids: list[PriceLevel] = field(default_factory=list)
    asks: list[PriceLevel] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> OrderBook:
        if not isinstance(data, Mapping):
            raise BinanceError("expected an order book object")
        try:
            last_update_id = data["lastUpdateId"]
            bids = data["bids"]
            asks = data["asks"]
        except KeyError as exc:
            raise BinanceError(f"missing field {exc}") from exc
        if isinstance(last_update_id, bool) or not isinstance(last_update_id, int) or last_update_id < 0:
            raise BinanceError(f"invalid lastUpdateId {last_update_id!r}")
        return cls(last_update_id=last_update_id, bids=_levels(bids), asks=_levels(asks))


class DepthBuilder:
    """Request for the order book of one symbol."""

    def __init__(self, client: MarketClient, symbol: str) -> None:
        self._client = client
        self._symbol = symbol
        self._limit: int | None = None

    def limit(self, limit: int) -> DepthBuilder:
        """Number of levels: 5, 10, 20, 50, 100, 500, 1000 or 5000."""
        self._limit = limit
        return self

    def params(self) -> str:
        pairs = [("symbol", self._symbol)]
        if self._limit is not None:
            pairs.append(("limit", str(self._limit)))
        return build_request(pairs)

    async def send(self) -> OrderBook:
        data = await self._client.get(DEPTH_ENDPOINT, self.params())
        return OrderBook.from_dict(data)