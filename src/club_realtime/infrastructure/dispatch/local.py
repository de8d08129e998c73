from __future__ import annotations

import logging
from collections.abc import Sequence

from club_realtime.application.dto.events import DispatchEvent
from club_realtime.application.ports.dispatch import (
    BroadcastTarget,
    DeliveryTarget,
    RoleTarget,
    UserTarget,
)
from club_realtime.domain.value_objects.enums import UserRole
from club_realtime.infrastructure.ws.manager import Connection, ConnectionManager
from club_realtime.infrastructure.ws.protocol import encode_event

logger = logging.getLogger(__name__)


class LocalDispatcher:
    """Implements application.ports.dispatch.Dispatcher for sockets held by this process."""

    def __init__(self, registry: ConnectionManager) -> None:
        self._registry = registry

    def deliver(self, target: DeliveryTarget, event: DispatchEvent) -> None:
        match target:
            case UserTarget(user_id=user_id):
                self.deliver_to_user(user_id, event)
            case RoleTarget(role=role):
                self.deliver_to_role(role, event)
            case BroadcastTarget():
                self._send(self._registry.connections(), event)

    def deliver_to_user(self, user_id: int, event: DispatchEvent) -> None:
        conn = self._registry.by_user(user_id)
        if conn is None:
            logger.debug("No live connection for user %s, %s not pushed", user_id, event.type)
            return
        self._send([conn], event)

    def deliver_to_role(self, role: UserRole, event: DispatchEvent) -> None:
        self._send(self._registry.by_role(role), event)

    def _send(self, conns: Sequence[Connection], event: DispatchEvent) -> None:
        if not conns:
            return
        raw = encode_event(event.type, event.data)
        for conn in conns:
            if not conn.channel.is_open:
                continue
            try:
                conn.channel.send(raw)
            except Exception:  # noqa: BLE001
                logger.warning("Delivery of %s to user %s failed", event.type, conn.user_id, exc_info=True)
                self._registry.unbind(conn.socket)
