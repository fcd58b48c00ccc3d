"""Candlestick (kline) endpoint."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from binspot.util import BinanceError, build_request, to_f64, to_i64

KLINES_ENDPOINT = "/api/v3/klines"


class MarketClient(Protocol):
    async def get(self, endpoint: str, request: str | None) -> Any: ...


@dataclass
class KlineSummary:
    open_time: int
    open: float
    high: float
    low: float
    close: float
    volume: float
    close_time: int
    quote_asset_volume: float
    number_of_trades: int
    taker_buy_base_asset_volume: float
    taker_buy_quote_asset_volume: float


def parse_kline_row(row: Sequence[Any]) -> KlineSummary:
    """Turn one row of the klines array response into a :class:`KlineSummary`."""
    if not isinstance(row, (list, tuple)) or len(row) < 11:
        raise BinanceError(f"invalid kline row {row!r}")
    return KlineSummary(
        open_time=to_i64(row[0]),
        open=to_f64(row[1]),
        high=to_f64(row[2]),
        low=to_f64(row[3]),
        close=to_f64(row[4]),
        volume=to_f64(row[5]),
        close_time=to_i64(row[6]),
        quote_asset_volume=to_f64(row[7]),
        number_of_trades=to_i64(row[8]),
        taker_buy_base_asset_volume=to_f64(row[9]),
        taker_buy_quote_asset_volume=to_f64(row[10]),
    )


class KlinesBuilder:
    """Request for candlesticks of one symbol and interval."""

    def __init__(self, client: MarketClient, symbol: str, interval: str) -> None:
        self._client = client
        self._symbol = symbol
        self._interval = interval
        self._start_time: int | None = None
        self._end_time: int | None = None
        self._limit: int | None = None

    def start_time(self, start_time: int) -> KlinesBuilder:
        self._start_time = start_time
        return self

    def end_time(self, end_time: int) -> KlinesBuilder:
        self._end_time = end_time
        return self

    def limit(self, limit: int) -> KlinesBuilder:
        self._limit = limit
        return self

    def params(self) -> str:
        optional = (
            ("startTime", self._start_time),
            ("endTime", self._end_time),
            ("limit", self._limit),
        )
        pairs = [("symbol", self._symbol), ("interval", self._interval)]
        pairs.extend((key, str(value)) for key, value in optional if value is not None)
        return build_request(pairs)

    async def send(self) -> list[KlineSummary]:
        rows = await self._client.get(KLINES_ENDPOINT, self.params())
        if not isinstance(rows, list):
            raise BinanceError(f"expected a list of klines, got {rows!r}")
        return [parse_kline_row(row) for row in rows]