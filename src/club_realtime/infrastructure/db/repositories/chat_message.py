from __future__ import annotations

from sqlalchemy import and_, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from club_realtime.application.dto.chat import NewChatMessage
from club_realtime.domain.entities.chat_message import ChatMessage
from club_realtime.infrastructure.db.mappers import chat_message as mapper
from club_realtime.infrastructure.db.models.chat_message import ChatMessageModel


class ChatMessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_messages(
        self,
        user_id: int,
        *,
        with_user_id: int | None = None,
        club_id: int | None = None,
        limit: int = 100,
    ) -> list[ChatMessage]:
        m = ChatMessageModel
        if with_user_id is not None:
            visible = or_(
                and_(m.from_user_id == user_id, m.to_user_id == with_user_id),
                and_(m.from_user_id == with_user_id, m.to_user_id == user_id),
            )
        else:
            visible = or_(m.from_user_id == user_id, m.to_user_id == user_id, m.to_user_id.is_(None))
        stmt = (
            select(m)
            .where(visible)
            .order_by(m.created_at.desc(), m.id.desc())
            .limit(limit)
        )
        if club_id is not None:
            stmt = stmt.where(m.club_id == club_id)
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(row) for row in result.scalars().all()]


class ChatMessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, message: NewChatMessage) -> ChatMessage:
        stmt = (
            insert(ChatMessageModel)
            .values(
                from_user_id=message.from_user_id,
                to_user_id=message.to_user_id,
                club_id=message.club_id,
                message=message.message,
                is_read=False,
            )
            .returning(ChatMessageModel)
        )
        result = await self._session.execute(stmt)
        return mapper.model_to_entity(result.scalar_one())

    async def mark_read(self, recipient_id: int, sender_id: int) -> int:
        stmt = (
            update(ChatMessageModel)
            .where(
                ChatMessageModel.to_user_id == recipient_id,
                ChatMessageModel.from_user_id == sender_id,
                ChatMessageModel.is_read.is_(False),
            )
            .values(is_read=True)
        )
        result = await self._session.execute(stmt)
        return result.rowcount or 0
