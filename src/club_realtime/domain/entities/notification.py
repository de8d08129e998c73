from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from club_realtime.domain.value_objects.enums import NotificationType, UserRole


@dataclass(frozen=True, slots=True)
class Notification:
    id: int
    title: str
    message: str
    type: NotificationType
    target_role: UserRole | None
    target_user_id: int | None
    is_read: bool
    created_by: int
    created_at: datetime
