from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Index, Integer, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from club_realtime.infrastructure.db.base import Base


class ChatMessageModel(Base):
    __tablename__ = "chat_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    from_user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    to_user_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    club_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_read: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )

    __table_args__ = (
        Index("ix_chat_messages_pair", "from_user_id", "to_user_id", "created_at"),
        Index("ix_chat_messages_unread", "to_user_id", "is_read"),
    )
