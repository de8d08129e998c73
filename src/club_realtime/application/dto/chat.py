from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NewChatMessage:
    from_user_id: int
    to_user_id: int | None
    message: str
    club_id: int | None = None
