from __future__ import annotations

from typing import Protocol

from club_realtime.application.dto.chat import NewChatMessage
from club_realtime.domain.entities.chat_message import ChatMessage


class ChatMessageReader(Protocol):
    async def list_messages(
        self,
        user_id: int,
        *,
        with_user_id: int | None = None,
        club_id: int | None = None,
        limit: int = 100,
    ) -> list[ChatMessage]:
        """Newest first. With ``with_user_id`` both directions of the pair are returned."""
        ...


class ChatMessageWriter(Protocol):
    async def create(self, message: NewChatMessage) -> ChatMessage:
        """Insert with ``is_read=False``; the store assigns ``id`` and ``created_at``."""
        ...

    async def mark_read(self, recipient_id: int, sender_id: int) -> int:
        """Flip ``is_read`` on every unread message sender -> recipient. Returns the row count."""
        ...
