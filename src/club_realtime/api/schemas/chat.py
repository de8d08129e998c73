from __future__ import annotations

from datetime import datetime

from club_realtime.api.schemas.common import CamelModel


class SendChatMessageRequest(CamelModel):
    message: str
    to_user_id: int | None = None
    club_id: int | None = None


class ChatMessageResponse(CamelModel):
    id: int
    from_user_id: int
    to_user_id: int | None
    club_id: int | None
    message: str
    is_read: bool
    created_at: datetime


class MarkReadResponse(CamelModel):
    updated: int
