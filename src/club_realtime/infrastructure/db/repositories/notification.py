from __future__ import annotations

from sqlalchemy import insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from club_realtime.application.dto.notification import NotificationDraft
from club_realtime.domain.entities.notification import Notification
from club_realtime.domain.value_objects.enums import UserRole
from club_realtime.infrastructure.db.mappers import notification as mapper
from club_realtime.infrastructure.db.models.notification import NotificationModel


class NotificationReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for(
        self,
        *,
        user_id: int | None = None,
        role: UserRole | None = None,
    ) -> list[Notification]:
        n = NotificationModel
        conditions = []
        if user_id is not None:
            conditions.append(n.target_user_id == user_id)
        if role is not None:
            conditions.append(n.target_role == role)

        stmt = select(n).order_by(n.created_at.desc(), n.id.desc())
        if conditions:
            stmt = stmt.where(or_(*conditions))
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(row) for row in result.scalars().all()]


class NotificationWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, draft: NotificationDraft, created_by: int) -> Notification:
        stmt = (
            insert(NotificationModel)
            .values(
                title=draft.title,
                message=draft.message,
                type=draft.type.value,
                target_role=draft.target_role,
                target_user_id=draft.target_user_id,
                is_read=False,
                created_by=created_by,
            )
            .returning(NotificationModel)
        )
        result = await self._session.execute(stmt)
        return mapper.model_to_entity(result.scalar_one())

    async def mark_read(self, notification_id: int) -> bool:
        stmt = (
            update(NotificationModel)
            .where(NotificationModel.id == notification_id)
            .values(is_read=True)
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount)
