from __future__ import annotations

from dataclasses import dataclass

from club_realtime.domain.value_objects.enums import NotificationType, UserRole


@dataclass(frozen=True, slots=True)
class NotificationDraft:
    title: str
    message: str
    type: NotificationType = NotificationType.INFO
    target_role: UserRole | None = None
    target_user_id: int | None = None
