"""Request payloads for order queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class GetOrderRequest:
    symbol: str = ""
    order_id: int | None = None
    orig_client_order_id: str | None = None
    recv_window: int | None = None

    def to_params(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "orderId": self.order_id,
            "origClientOrderId": self.orig_client_order_id,
            "recvWindow": self.recv_window,
        }


@dataclass
class OrdersQuery:
    symbol: str = ""
    order_id: int | None = None
    start_time: int | None = None
    end_time: int | None = None
    limit: int | None = None
    recv_window: int | None = None

    def to_params(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "orderId": self.order_id,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "limit": self.limit,
            "recvWindow": self.recv_window,
        }