from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from club_realtime.infrastructure.db.models.user import UserModel


class UserReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists(self, user_id: int) -> bool:
        stmt = select(UserModel.id).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None
