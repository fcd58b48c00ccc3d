"""Gateway to the public market data endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from binspot.spot.market.depth import DepthBuilder
from binspot.spot.market.klines import KlinesBuilder
from binspot.spot.market.tickers import (
    BookTickerBuilder,
    BookTickerMultiBuilder,
    LastPriceBuilder,
    LastPriceMultiBuilder,
    Ticker24hBuilder,
    Ticker24hMultiBuilder,
)
from binspot.spot.market.trades import AggTradesBuilder, HistoricalTradesBuilder, TradesBuilder


@dataclass
class Market:
    """Creates request builders for market data."""

    client: Any
    recv_window: int = 0

    def get_depth(self, symbol: str) -> DepthBuilder:
        """Order book; ``limit`` may be 5, 10, 20, 50, 100, 500, 1000 or 5000."""
        return DepthBuilder(self.client, str(symbol))

    def get_trades(self, symbol: str) -> TradesBuilder:
        """Recent trades; ``limit`` up to 1000."""
        return TradesBuilder(self.client, str(symbol))

    def get_historical_trades(self, symbol: str) -> HistoricalTradesBuilder:
        return HistoricalTradesBuilder(self.client, str(symbol))

    def get_agg_trades(self, symbol: str) -> AggTradesBuilder:
        return AggTradesBuilder(self.client, str(symbol))

    def get_klines(self, symbol: str, interval: str) -> KlinesBuilder:
        return KlinesBuilder(self.client, str(symbol), str(interval))

    def get_ticker_24h(self, symbol: str) -> Ticker24hBuilder:
        return Ticker24hBuilder(self.client, str(symbol))

    def get_ticker_24h_multi(self) -> Ticker24hMultiBuilder:
        return Ticker24hMultiBuilder(self.client)

    def get_last_price(self, symbol: str) -> LastPriceBuilder:
        return LastPriceBuilder(self.client, str(symbol))

    def get_last_price_multi(self) -> LastPriceMultiBuilder:
        return LastPriceMultiBuilder(self.client)

    def get_book_ticker(self, symbol: str) -> BookTickerBuilder:
        return BookTickerBuilder(self.client, str(symbol))

    def get_book_ticker_multi(self) -> BookTickerMultiBuilder:
        return BookTickerMultiBuilder(self.client)