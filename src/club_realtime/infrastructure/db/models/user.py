from __future__ import annotations

from sqlalchemy import Boolean, Integer, Text
from sqlalchemy.dialects.postgresql import ENUM
from sqlalchemy.orm import Mapped, mapped_column

from club_realtime.domain.value_objects.enums import UserRole
from club_realtime.infrastructure.db.base import Base

# The type is created and migrated together with the users table.
user_role_enum = ENUM(
    UserRole,
    name="user_role",
    values_callable=lambda members: [m.value for m in members],
    create_type=False,
)


class UserModel(Base):
    """Read-only view of the users table owned by the account module."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    full_name: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[UserRole] = mapped_column(user_role_enum, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
