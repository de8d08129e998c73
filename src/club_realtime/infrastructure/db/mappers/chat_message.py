from __future__ import annotations

from club_realtime.domain.entities.chat_message import ChatMessage
from club_realtime.infrastructure.db.models.chat_message import ChatMessageModel


def model_to_entity(model: ChatMessageModel) -> ChatMessage:
    return ChatMessage(
        id=model.id,
        from_user_id=model.from_user_id,
        to_user_id=model.to_user_id,
        club_id=model.club_id,
        message=model.message,
        is_read=model.is_read,
        created_at=model.created_at,
    )
