from __future__ import annotations

from typing import Protocol


class EventPublisher(Protocol):
    """Fan-out bus shared by every process serving sockets."""

    async def publish(self, channel: str, message: str) -> None: ...
