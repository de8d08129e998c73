from __future__ import annotations

import logging
from types import TracebackType
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from club_realtime.infrastructure.db.repositories.chat_message import (
    ChatMessageReaderRepo,
    ChatMessageWriterRepo,
)
from club_realtime.infrastructure.db.repositories.notification import (
    NotificationReaderRepo,
    NotificationWriterRepo,
)
from club_realtime.infrastructure.db.repositories.user import UserReaderRepo

logger = logging.getLogger(__name__)


class SqlAlchemyUoW:
    """Unit of work that owns one session for the duration of a request.

    Use as ``async with SqlAlchemyUoW(factory) as uow``. Anything not committed
    when the block exits is rolled back; the session is always closed.
    """

    users: UserReaderRepo
    messages: ChatMessageReaderRepo
    messages_w: ChatMessageWriterRepo
    notifications: NotificationReaderRepo
    notifications_w: NotificationWriterRepo

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

    async def __aenter__(self) -> Self:
        session = self._session = self._session_factory()
        self.users = UserReaderRepo(session)
        self.messages = ChatMessageReaderRepo(session)
        self.messages_w = ChatMessageWriterRepo(session)
        self.notifications = NotificationReaderRepo(session)
        self.notifications_w = NotificationWriterRepo(session)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        assert self._session is not None
        try:
            if exc_type is not None:
                logger.debug("Rolling back unit of work after %s", exc_type.__name__)
            await self._session.rollback()
        finally:
            await self._session.close()
            self._session = None

    async def flush(self) -> None:
        assert self._session is not None
        await self._session.flush()

    async def commit(self) -> None:
        assert self._session is not None
        await self._session.commit()

    async def rollback(self) -> None:
        assert self._session is not None
        await self._session.rollback()
