"""Event payloads and best-effort pushes shared by the domain services."""
from __future__ import annotations

import logging
from typing import Any

from club_realtime.application.dto.events import DispatchEvent
from club_realtime.application.ports.dispatch import DeliveryTarget, Dispatcher
from club_realtime.domain.entities.chat_message import ChatMessage
from club_realtime.domain.entities.notification import Notification

logger = logging.getLogger(__name__)


def chat_message_payload(msg: ChatMessage) -> dict[str, Any]:
    return {
        "id": msg.id,
        "fromUserId": msg.from_user_id,
        "toUserId": msg.to_user_id,
        "clubId": msg.club_id,
        "message": msg.message,
        "isRead": msg.is_read,
        "createdAt": msg.created_at.isoformat(),
    }


def notification_payload(notification: Notification) -> dict[str, Any]:
    return {
        "id": notification.id,
        "title": notification.title,
        "message": notification.message,
        "type": str(notification.type),
        "targetRole": str(notification.target_role) if notification.target_role else None,
        "targetUserId": notification.target_user_id,
        "isRead": notification.is_read,
        "createdBy": notification.created_by,
        "createdAt": notification.created_at.isoformat(),
    }


def push(dispatcher: Dispatcher, target: DeliveryTarget, event: DispatchEvent) -> None:
    """Hand an event to the dispatcher. Persisted data is the durable record, so failures are only logged."""
    try:
        dispatcher.deliver(target, event)
    except Exception:  # noqa: BLE001
        logger.warning("Real-time delivery of %s to %s failed", event.type, target, exc_info=True)
