"""Per-socket inbound frame handling."""
from __future__ import annotations

import logging
from enum import StrEnum

from fastapi import WebSocket
from pydantic import ValidationError

from club_realtime.application.ports.auth import TokenVerifier
from club_realtime.domain.value_objects.enums import EventType, UserRole
from club_realtime.infrastructure.ws.channel import SocketChannel
from club_realtime.infrastructure.ws.manager import ConnectionManager
from club_realtime.infrastructure.ws.protocol import AuthFrame, WsInbound, WsOutbound

logger = logging.getLogger(__name__)


class SocketState(StrEnum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    CLOSED = "closed"


class InboundFrameHandler:
    """Drives one socket through unauthenticated -> authenticated -> closed.

    Only the auth frame changes state. Malformed or unexpected frames are
    dropped without a reply and never close the socket. When a ``verifier`` is
    given, identity comes from the signed token in the auth frame instead of
    the client-asserted ``userId``/``role``.
    """

    def __init__(
        self,
        channel: SocketChannel,
        registry: ConnectionManager,
        *,
        verifier: TokenVerifier | None = None,
    ) -> None:
        self._channel = channel
        self._registry = registry
        self._verifier = verifier
        self.state = SocketState.UNAUTHENTICATED
        self.user_id: int | None = None

    async def handle(self, raw: str) -> None:
        if self.state is SocketState.CLOSED:
            return
        try:
            frame = WsInbound.model_validate_json(raw)
        except ValidationError:
            logger.debug("Ignoring malformed WS frame")
            return

        if frame.type == "ping":
            self._channel.send(WsOutbound(type=EventType.PONG).model_dump_json())
        elif frame.type == "auth" and self.state is SocketState.UNAUTHENTICATED:
            await self._authenticate(frame)
        else:
            logger.debug("Ignoring WS frame type=%r in state %s", frame.type, self.state)

    def close(self) -> None:
        self.state = SocketState.CLOSED
        self._registry.unbind(self._channel.socket)

    def connection_broken(self, socket: WebSocket) -> None:
        """Channel callback: the socket can no longer be written to."""
        logger.info("WS for user %s dropped after a failed or backed-up write", self.user_id)
        self.close()

    async def _authenticate(self, frame: WsInbound) -> None:
        identity = await self._resolve_identity(frame)
        if identity is None:
            return
        user_id, role = identity
        self._registry.bind(user_id, role, self._channel)
        self.user_id = user_id
        self.state = SocketState.AUTHENTICATED

    async def _resolve_identity(self, frame: WsInbound) -> tuple[int, UserRole] | None:
        try:
            auth = AuthFrame.model_validate(frame.model_dump())
        except ValidationError:
            logger.debug("Ignoring invalid auth frame")
            return None

        if self._verifier is not None:
            if not auth.token:
                return None
            try:
                principal = await self._verifier.verify(auth.token)
            except Exception:  # noqa: BLE001
                logger.debug("WS auth failed", exc_info=True)
                return None
            return principal.user_id, principal.role

        if auth.user_id is None or auth.role is None:
            return None
        return auth.user_id, auth.role
