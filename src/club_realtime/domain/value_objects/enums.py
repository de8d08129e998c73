from __future__ import annotations

from enum import StrEnum


class UserRole(StrEnum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    CLUB_MANAGER = "club_manager"
    SECURITY_TEAMLEADER = "security_teamleader"
    SECURITY_PERSONNEL = "security_personnel"
    CLUB_EMPLOYEE = "club_employee"


ADMIN_ROLES: frozenset[UserRole] = frozenset({UserRole.SUPER_ADMIN, UserRole.ADMIN})


class NotificationType(StrEnum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"


class EventType(StrEnum):
    """Tags of events pushed to clients over the socket."""

    NOTIFICATION = "notification"
    CHAT_MESSAGE = "chat_message"
    NEW_MESSAGE = "new_message"
    MESSAGES_READ = "messages_read"
    GUEST_CHECKIN = "guest_checkin"
    PONG = "pong"
    HEARTBEAT = "heartbeat"
