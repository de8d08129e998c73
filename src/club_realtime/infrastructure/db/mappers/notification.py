from __future__ import annotations

from club_realtime.domain.entities.notification import Notification
from club_realtime.domain.value_objects.enums import NotificationType
from club_realtime.infrastructure.db.models.notification import NotificationModel


def model_to_entity(model: NotificationModel) -> Notification:
    return Notification(
        id=model.id,
        title=model.title,
        message=model.message,
        type=NotificationType(model.type),
        target_role=model.target_role,
        target_user_id=model.target_user_id,
        is_read=model.is_read,
        created_by=model.created_by,
        created_at=model.created_at,
    )
