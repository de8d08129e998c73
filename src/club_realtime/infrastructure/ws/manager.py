"""In-process registry of live WebSocket connections."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import WebSocket

from club_realtime.domain.value_objects.enums import UserRole
from club_realtime.infrastructure.ws.channel import SocketChannel

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Connection:
    user_id: int
    role: UserRole
    channel: SocketChannel

    @property
    def socket(self) -> WebSocket:
        return self.channel.socket


class ConnectionManager:
    """Maps each user id to the one socket that currently represents it.

    The last bind for a user wins; the socket it replaces is left open and
    simply stops being reachable. Removal is keyed on socket identity so the
    close of a superseded socket never evicts the newer binding.

    The map lives in this process only. Mutations happen on the event loop,
    one callback at a time, so no locking is needed.
    """

    def __init__(self) -> None:
        self._connections: dict[int, Connection] = {}

    def bind(self, user_id: int, role: UserRole, channel: SocketChannel) -> None:
        previous = self._connections.get(user_id)
        self._connections[user_id] = Connection(user_id=user_id, role=role, channel=channel)
        if previous is not None and previous.channel is not channel:
            logger.debug("WS binding for user %s superseded", user_id)
        logger.debug("WS bound: user=%s role=%s (total=%d)", user_id, role, len(self._connections))

    def unbind(self, socket: WebSocket) -> None:
        for user_id, conn in self._connections.items():
            if conn.socket is socket:
                break
        else:
            return
        del self._connections[user_id]
        logger.debug("WS unbound: user=%s (total=%d)", user_id, len(self._connections))

    def by_user(self, user_id: int) -> Connection | None:
        return self._connections.get(user_id)

    def by_role(self, role: UserRole) -> list[Connection]:
        return [c for c in self._connections.values() if c.role == role]

    def connections(self) -> list[Connection]:
        return list(self._connections.values())

    def __len__(self) -> int:
        return len(self._connections)

    async def close_all(self, code: int = 1001) -> None:
        """Close every bound socket and forget all bindings."""
        conns = self.connections()
        self._connections.clear()
        for conn in conns:
            await conn.channel.close(code=code)
        if conns:
            logger.info("Closed %d WS connections", len(conns))
