"""Shared test fixtures."""
from __future__ import annotations

import asyncio
import itertools
import json
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

import pytest
import pytest_asyncio
from starlette.websockets import WebSocketState

from club_realtime.application.dto.chat import NewChatMessage
from club_realtime.application.dto.events import DispatchEvent
from club_realtime.application.dto.notification import NotificationDraft
from club_realtime.application.dto.principal import Principal
from club_realtime.application.ports.dispatch import (
    DeliveryTarget,
    RoleTarget,
    UserTarget,
)
from club_realtime.domain.entities.chat_message import ChatMessage
from club_realtime.domain.entities.notification import Notification
from club_realtime.domain.value_objects.enums import UserRole
from club_realtime.infrastructure.ws.channel import SocketChannel
from club_realtime.infrastructure.ws.manager import ConnectionManager


class StoreUnavailable(Exception):
    pass


@pytest.fixture
def admin_principal() -> Principal:
    return Principal(user_id=1, role=UserRole.ADMIN)


@pytest.fixture
def employee_principal() -> Principal:
    return Principal(user_id=42, role=UserRole.CLUB_EMPLOYEE)


class FakeWebSocket:
    """Stands in for a starlette WebSocket on the outbound side."""

    def __init__(self, *, fail: bool = False, stall: bool = False) -> None:
        self.sent: list[str] = []
        self.fail = fail
        self.stall = stall
        self.closed_with: int | None = None
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED

    async def send_text(self, data: str) -> None:
        if self.fail:
            raise RuntimeError("connection reset")
        if self.stall:
            # peer stopped reading
            await asyncio.Event().wait()
        self.sent.append(data)

    async def close(self, code: int = 1000) -> None:
        self.closed_with = code
        self.application_state = WebSocketState.DISCONNECTED

    def events(self) -> list[dict[str, Any]]:
        return [json.loads(raw) for raw in self.sent]


@pytest.fixture
def registry() -> ConnectionManager:
    return ConnectionManager()


@pytest_asyncio.fixture
async def open_channel(registry: ConnectionManager):
    """Factory for started channels wired to ``registry``; closes them on teardown."""
    channels: list[SocketChannel] = []

    def _open(ws: FakeWebSocket | None = None) -> SocketChannel:
        channel = SocketChannel(ws or FakeWebSocket(), on_broken=registry.unbind)  # type: ignore[arg-type]
        channel.start()
        channels.append(channel)
        return channel

    yield _open

    for channel in channels:
        await channel.close()


@dataclass
class RecordingDispatcher:
    """Dispatcher that remembers what it was asked to deliver."""

    delivered: list[tuple[DeliveryTarget, DispatchEvent]] = field(default_factory=list)
    fail: bool = False

    def deliver(self, target: DeliveryTarget, event: DispatchEvent) -> None:
        if self.fail:
            raise RuntimeError("dispatcher down")
        self.delivered.append((target, event))

    def deliver_to_user(self, user_id: int, event: DispatchEvent) -> None:
        self.deliver(UserTarget(user_id), event)

    def deliver_to_role(self, role: UserRole, event: DispatchEvent) -> None:
        self.deliver(RoleTarget(role), event)


@dataclass
class FakeUserReader:
    ids: set[int] = field(default_factory=lambda: {1, 2, 3, 42})

    async def exists(self, user_id: int) -> bool:
        return user_id in self.ids


@dataclass
class FakeChatMessageStore:
    _messages: list[ChatMessage] = field(default_factory=list)
    _ids: Any = field(default_factory=lambda: itertools.count(1))
    fail: bool = False

    async def list_messages(
        self,
        user_id: int,
        *,
        with_user_id: int | None = None,
        club_id: int | None = None,
        limit: int = 100,
    ) -> list[ChatMessage]:
        def visible(m: ChatMessage) -> bool:
            if with_user_id is not None:
                return {m.from_user_id, m.to_user_id} == {user_id, with_user_id}
            return user_id in (m.from_user_id, m.to_user_id) or m.to_user_id is None

        found = [
            m for m in self._messages
            if visible(m) and (club_id is None or m.club_id == club_id)
        ]
        return list(reversed(found))[:limit]

    async def create(self, message: NewChatMessage) -> ChatMessage:
        if self.fail:
            raise StoreUnavailable("chat_messages")
        msg = ChatMessage(
            id=next(self._ids),
            from_user_id=message.from_user_id,
            to_user_id=message.to_user_id,
            club_id=message.club_id,
            message=message.message,
            is_read=False,
            created_at=datetime.now(timezone.utc),
        )
        self._messages.append(msg)
        return msg

    async def mark_read(self, recipient_id: int, sender_id: int) -> int:
        updated = 0
        for i, m in enumerate(self._messages):
            if m.to_user_id == recipient_id and m.from_user_id == sender_id and not m.is_read:
                self._messages[i] = ChatMessage(
                    id=m.id,
                    from_user_id=m.from_user_id,
                    to_user_id=m.to_user_id,
                    club_id=m.club_id,
                    message=m.message,
                    is_read=True,
                    created_at=m.created_at,
                )
                updated += 1
        return updated

    def get(self, message_id: int) -> ChatMessage:
        return next(m for m in self._messages if m.id == message_id)


@dataclass
class FakeNotificationStore:
    _notifications: list[Notification] = field(default_factory=list)
    _ids: Any = field(default_factory=lambda: itertools.count(1))

    async def list_for(
        self,
        *,
        user_id: int | None = None,
        role: UserRole | None = None,
    ) -> list[Notification]:
        found = [
            n for n in self._notifications
            if (user_id is not None and n.target_user_id == user_id)
            or (role is not None and n.target_role == role)
        ]
        return list(reversed(found))

    async def create(self, draft: NotificationDraft, created_by: int) -> Notification:
        notification = Notification(
            id=next(self._ids),
            title=draft.title,
            message=draft.message,
            type=draft.type,
            target_role=draft.target_role,
            target_user_id=draft.target_user_id,
            is_read=False,
            created_by=created_by,
            created_at=datetime.now(timezone.utc),
        )
        self._notifications.append(notification)
        return notification

    async def mark_read(self, notification_id: int) -> bool:
        for i, n in enumerate(self._notifications):
            if n.id == notification_id:
                self._notifications[i] = replace(n, is_read=True)
                return True
        return False


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    users: FakeUserReader = field(default_factory=FakeUserReader)
    messages: FakeChatMessageStore = field(default_factory=FakeChatMessageStore)
    messages_w: FakeChatMessageStore | None = None
    notifications: FakeNotificationStore = field(default_factory=FakeNotificationStore)
    notifications_w: FakeNotificationStore | None = None
    _commits: int = 0

    def __post_init__(self) -> None:
        if self.messages_w is None:
            self.messages_w = self.messages
        if self.notifications_w is None:
            self.notifications_w = self.notifications

    @property
    def _committed(self) -> bool:
        return self._commits > 0

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self._commits += 1

    async def rollback(self) -> None:
        pass
