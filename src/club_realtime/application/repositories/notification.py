from __future__ import annotations

from typing import Protocol

from club_realtime.application.dto.notification import NotificationDraft
from club_realtime.domain.entities.notification import Notification
from club_realtime.domain.value_objects.enums import UserRole


class NotificationReader(Protocol):
    async def list_for(
        self,
        *,
        user_id: int | None = None,
        role: UserRole | None = None,
    ) -> list[Notification]: ...


class NotificationWriter(Protocol):
    async def create(self, draft: NotificationDraft, created_by: int) -> Notification: ...

    async def mark_read(self, notification_id: int) -> bool:
        """Return False when no notification has that id."""
        ...
