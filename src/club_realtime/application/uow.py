from __future__ import annotations

from typing import Protocol

from club_realtime.application.repositories.chat_message import (
    ChatMessageReader,
    ChatMessageWriter,
)
from club_realtime.application.repositories.notification import (
    NotificationReader,
    NotificationWriter,
)
from club_realtime.application.repositories.user import UserReader


class UnitOfWork(Protocol):
    users: UserReader
    messages: ChatMessageReader
    messages_w: ChatMessageWriter
    notifications: NotificationReader
    notifications_w: NotificationWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...
