"""Import all models so they register on Base.metadata."""
from club_realtime.infrastructure.db.models.chat_message import ChatMessageModel
from club_realtime.infrastructure.db.models.notification import NotificationModel
from club_realtime.infrastructure.db.models.user import UserModel

__all__ = [
    "ChatMessageModel",
    "NotificationModel",
    "UserModel",
]
