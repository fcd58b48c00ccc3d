"""User data stream listen-key management."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

USER_DATA_STREAM = "/api/v3/userDataStream"


class UserStreamClient(Protocol):
    """The HTTP client operations the user stream needs."""

    async def post(self, endpoint: str, request: Any) -> Any: ...

    async def put(self, endpoint: str, listen_key: str, request: Any) -> Any: ...

    async def delete(self, endpoint: str, listen_key: str, request: Any) -> Any: ...


@dataclass
class UserStream:
    """Gateway to the user data stream endpoints."""

    client: UserStreamClient
    recv_window: int = 0

    async def start(self) -> Any:
        """Obtain a listen key for the stream."""
        return await self.client.post(USER_DATA_STREAM, None)

    async def keep_alive(self, listen_key: str) -> Any:
        """Keep the listen key valid; it expires after 60 minutes otherwise."""
        return await self.client.put(USER_DATA_STREAM, listen_key, None)

    async def close(self, listen_key: str) -> Any:
        """Invalidate the listen key."""
        return await self.client.delete(USER_DATA_STREAM, listen_key, None)