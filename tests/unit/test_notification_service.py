from __future__ import annotations

import pytest

from club_realtime.application.dto.notification import NotificationDraft
from club_realtime.application.dto.principal import Principal
from club_realtime.application.exceptions import ForbiddenError, NotFoundError, ValidationError
from club_realtime.application.ports.dispatch import RoleTarget, UserTarget
from club_realtime.domain.entities.banned_guest import BannedGuest
from club_realtime.domain.value_objects.enums import EventType, NotificationType, UserRole
from club_realtime.infrastructure.dispatch.local import LocalDispatcher
from club_realtime.services import notification_service
from tests.conftest import FakeUoW, FakeWebSocket, RecordingDispatcher

GUEST = BannedGuest(first_name="Max", last_name="Mustermann", id=17, club_id=3)


@pytest.mark.asyncio
async def test_ban_alert_reaches_admin_tiers_only(registry, open_channel):
    sockets = {role: FakeWebSocket() for role in (UserRole.SUPER_ADMIN, UserRole.ADMIN, UserRole.CLUB_EMPLOYEE)}
    channels = []
    for user_id, (role, ws) in enumerate(sockets.items(), start=1):
        channel = open_channel(ws)
        channels.append(channel)
        registry.bind(user_id, role, channel)
    manager = Principal(user_id=9, role=UserRole.CLUB_MANAGER)

    notification = await notification_service.raise_ban_alert(
        GUEST, manager, FakeUoW(), LocalDispatcher(registry),
    )
    for channel in channels:
        await channel.flush()

    for role in (UserRole.SUPER_ADMIN, UserRole.ADMIN):
        [event] = sockets[role].events()
        assert event["type"] == "notification"
        assert event["data"]["id"] == notification.id
        assert event["data"]["message"] == "Max Mustermann has been banned"
    assert sockets[UserRole.CLUB_EMPLOYEE].sent == []


@pytest.mark.asyncio
async def test_ban_alert_is_persisted_as_warning():
    uow, dispatcher = FakeUoW(), RecordingDispatcher()
    manager = Principal(user_id=9, role=UserRole.SECURITY_TEAMLEADER)

    notification = await notification_service.raise_ban_alert(GUEST, manager, uow, dispatcher)

    assert notification.title == "New Ban Alert"
    assert notification.type == NotificationType.WARNING
    assert notification.created_by == 9
    assert uow._committed is True
    assert [t for t, _ in dispatcher.delivered] == [
        RoleTarget(UserRole.SUPER_ADMIN),
        RoleTarget(UserRole.ADMIN),
    ]


@pytest.mark.asyncio
async def test_ban_alert_forbidden_for_staff(employee_principal):
    uow = FakeUoW()

    with pytest.raises(ForbiddenError):
        await notification_service.raise_ban_alert(GUEST, employee_principal, uow, RecordingDispatcher())

    assert uow.notifications._notifications == []


@pytest.mark.asyncio
async def test_notification_for_user_goes_to_that_user(admin_principal):
    dispatcher = RecordingDispatcher()
    draft = NotificationDraft(title="Shift", message="Your shift starts at 21:00", target_user_id=42)

    await notification_service.create_notification(draft, admin_principal, FakeUoW(), dispatcher)

    [(target, event)] = dispatcher.delivered
    assert target == UserTarget(42)
    assert event.type == EventType.NOTIFICATION


@pytest.mark.asyncio
async def test_notification_for_role_goes_to_that_role(admin_principal):
    dispatcher = RecordingDispatcher()
    draft = NotificationDraft(title="Briefing", message="10 min", target_role=UserRole.SECURITY_PERSONNEL)

    await notification_service.create_notification(draft, admin_principal, FakeUoW(), dispatcher)

    assert [t for t, _ in dispatcher.delivered] == [RoleTarget(UserRole.SECURITY_PERSONNEL)]


@pytest.mark.asyncio
async def test_user_target_wins_over_role_target(admin_principal):
    dispatcher = RecordingDispatcher()
    draft = NotificationDraft(
        title="t", message="m", target_role=UserRole.ADMIN, target_user_id=42,
    )

    await notification_service.create_notification(draft, admin_principal, FakeUoW(), dispatcher)

    assert [t for t, _ in dispatcher.delivered] == [UserTarget(42)]


@pytest.mark.asyncio
async def test_untargeted_notification_is_stored_but_not_pushed(admin_principal):
    uow, dispatcher = FakeUoW(), RecordingDispatcher()

    notification = await notification_service.create_notification(
        NotificationDraft(title="t", message="m"), admin_principal, uow, dispatcher,
    )

    assert uow.notifications._notifications == [notification]
    assert dispatcher.delivered == []


@pytest.mark.asyncio
async def test_create_notification_requires_admin(employee_principal):
    with pytest.raises(ForbiddenError):
        await notification_service.create_notification(
            NotificationDraft(title="t", message="m"), employee_principal, FakeUoW(), RecordingDispatcher(),
        )


@pytest.mark.asyncio
async def test_create_notification_rejects_blank_text(admin_principal):
    with pytest.raises(ValidationError):
        await notification_service.create_notification(
            NotificationDraft(title=" ", message="m"), admin_principal, FakeUoW(), RecordingDispatcher(),
        )


@pytest.mark.asyncio
async def test_list_notifications_matches_user_or_role(admin_principal):
    uow, dispatcher = FakeUoW(), RecordingDispatcher()
    for draft in (
        NotificationDraft(title="mine", message="m", target_user_id=admin_principal.user_id),
        NotificationDraft(title="my role", message="m", target_role=UserRole.ADMIN),
        NotificationDraft(title="other", message="m", target_role=UserRole.CLUB_EMPLOYEE),
    ):
        await notification_service.create_notification(draft, admin_principal, uow, dispatcher)

    found = await notification_service.list_notifications(admin_principal, uow)

    assert [n.title for n in found] == ["my role", "mine"]


@pytest.mark.asyncio
async def test_mark_unknown_notification_read_is_not_found():
    with pytest.raises(NotFoundError):
        await notification_service.mark_notification_read(123, FakeUoW())


@pytest.mark.asyncio
async def test_mark_notification_read_flips_flag(admin_principal):
    uow = FakeUoW()
    created = await notification_service.create_notification(
        NotificationDraft(title="Briefing", message="m", target_user_id=admin_principal.user_id),
        admin_principal, uow, RecordingDispatcher(),
    )

    await notification_service.mark_notification_read(created.id, uow)

    [found] = await notification_service.list_notifications(admin_principal, uow)
    assert found.id == created.id
    assert found.is_read is True
    assert uow._commits == 2
