from __future__ import annotations

import logging

from club_realtime.application.dto.events import DispatchEvent
from club_realtime.application.dto.notification import NotificationDraft
from club_realtime.application.dto.principal import Principal
from club_realtime.application.exceptions import NotFoundError, ValidationError
from club_realtime.application.policies.permissions import assert_role
from club_realtime.application.ports.dispatch import Dispatcher, RoleTarget, UserTarget
from club_realtime.application.uow import UnitOfWork
from club_realtime.domain.entities.banned_guest import BannedGuest
from club_realtime.domain.entities.notification import Notification
from club_realtime.domain.value_objects.enums import (
    ADMIN_ROLES,
    EventType,
    NotificationType,
    UserRole,
)
from club_realtime.services.delivery import notification_payload, push

logger = logging.getLogger(__name__)

BAN_ALERT_ROLES = frozenset({
    UserRole.SUPER_ADMIN,
    UserRole.ADMIN,
    UserRole.CLUB_MANAGER,
    UserRole.SECURITY_TEAMLEADER,
})

# Admin tiers hear about every ban, whatever the notification's own target.
BAN_ALERT_RECIPIENTS = (UserRole.SUPER_ADMIN, UserRole.ADMIN)


def notify(notification: Notification, dispatcher: Dispatcher) -> None:
    """Push a stored notification to its target.

    A user target wins over a role target. With neither set nothing is pushed
    and recipients only see it through ``list_notifications``.
    """
    event = DispatchEvent(type=EventType.NOTIFICATION, data=notification_payload(notification))
    if notification.target_user_id is not None:
        push(dispatcher, UserTarget(notification.target_user_id), event)
    elif notification.target_role is not None:
        push(dispatcher, RoleTarget(notification.target_role), event)
    else:
        logger.debug("Notification %s has no target, not pushed", notification.id)


async def create_notification(
    draft: NotificationDraft,
    principal: Principal,
    uow: UnitOfWork,
    dispatcher: Dispatcher,
) -> Notification:
    assert_role(principal, ADMIN_ROLES)
    if not draft.title.strip() or not draft.message.strip():
        raise ValidationError("Notification title and message are required")

    notification = await uow.notifications_w.create(draft, principal.user_id)
    await uow.commit()
    notify(notification, dispatcher)
    return notification


async def raise_ban_alert(
    guest: BannedGuest,
    principal: Principal,
    uow: UnitOfWork,
    dispatcher: Dispatcher,
) -> Notification:
    assert_role(principal, BAN_ALERT_ROLES)
    if not guest.full_name:
        raise ValidationError("Guest name is required")

    notification = await uow.notifications_w.create(
        NotificationDraft(
            title="New Ban Alert",
            message=f"{guest.full_name} has been banned",
            type=NotificationType.WARNING,
        ),
        principal.user_id,
    )
    await uow.commit()
    logger.info("Ban alert %s raised for guest %s by user %s", notification.id, guest.id, principal.user_id)

    event = DispatchEvent(type=EventType.NOTIFICATION, data=notification_payload(notification))
    for role in BAN_ALERT_RECIPIENTS:
        push(dispatcher, RoleTarget(role), event)
    return notification


async def list_notifications(principal: Principal, uow: UnitOfWork) -> list[Notification]:
    return await uow.notifications.list_for(user_id=principal.user_id, role=principal.role)


async def mark_notification_read(notification_id: int, uow: UnitOfWork) -> None:
    if not await uow.notifications_w.mark_read(notification_id):
        raise NotFoundError("Notification not found")
    await uow.commit()
