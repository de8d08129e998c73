from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class ChatMessage:
    id: int
    from_user_id: int
    to_user_id: int | None
    club_id: int | None
    message: str
    is_read: bool
    created_at: datetime

    @property
    def is_broadcast(self) -> bool:
        return self.to_user_id is None
