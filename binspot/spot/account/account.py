"""Gateway to the signed account endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from binspot.spot.account.query import (
    QueryAccountBuilder,
    QueryAllOrdersBuilder,
    QueryMyTradesBuilder,
    QueryOpenOrdersBuilder,
    QueryOrderBuilder,
)


@dataclass
class Account:
    """Creates request builders for account queries."""

    client: Any
    recv_window: int = 0

    def get_order(self, symbol: str) -> QueryOrderBuilder:
        """Query one order; set ``order_id`` or ``orig_client_order_id``."""
        return QueryOrderBuilder(self.client, str(symbol))

    def get_open_orders(self, symbol: str) -> QueryOpenOrdersBuilder:
        return QueryOpenOrdersBuilder(self.client, str(symbol))

    def get_all_orders(self, symbol: str) -> QueryAllOrdersBuilder:
        return QueryAllOrdersBuilder(self.client, str(symbol))

    def get_account(self) -> QueryAccountBuilder:
        return QueryAccountBuilder(self.client)

    def get_my_trades(self, symbol: str) -> QueryMyTradesBuilder:
        return QueryMyTradesBuilder(self.client, str(symbol))