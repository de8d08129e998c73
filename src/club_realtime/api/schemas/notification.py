from __future__ import annotations

from datetime import datetime

from club_realtime.api.schemas.common import CamelModel
from club_realtime.domain.value_objects.enums import NotificationType, UserRole


class CreateNotificationRequest(CamelModel):
    title: str
    message: str
    type: NotificationType = NotificationType.INFO
    target_role: UserRole | None = None
    target_user_id: int | None = None


class NotificationResponse(CamelModel):
    id: int
    title: str
    message: str
    type: NotificationType
    target_role: UserRole | None
    target_user_id: int | None
    is_read: bool
    created_by: int
    created_at: datetime


class BanAlertRequest(CamelModel):
    first_name: str
    last_name: str
    id: int | None = None
    club_id: int | None = None
