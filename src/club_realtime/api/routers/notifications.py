from __future__ import annotations

from fastapi import APIRouter

from club_realtime.api.deps import CurrentPrincipal, DispatcherDep, UoWDep
from club_realtime.api.schemas.notification import (
    CreateNotificationRequest,
    NotificationResponse,
)
from club_realtime.application.dto.notification import NotificationDraft
from club_realtime.services import notification_service

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> list[NotificationResponse]:
    notifications = await notification_service.list_notifications(principal, uow)
    return [NotificationResponse.model_validate(n) for n in notifications]


@router.post("", response_model=NotificationResponse, status_code=201)
async def create_notification(
    body: CreateNotificationRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    dispatcher: DispatcherDep,
) -> NotificationResponse:
    draft = NotificationDraft(
        title=body.title,
        message=body.message,
        type=body.type,
        target_role=body.target_role,
        target_user_id=body.target_user_id,
    )
    notification = await notification_service.create_notification(
        draft, principal, uow, dispatcher,
    )
    return NotificationResponse.model_validate(notification)


@router.post("/{notification_id}/read")
async def mark_read(
    notification_id: int,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> dict[str, str]:
    await notification_service.mark_notification_read(notification_id, uow)
    return {"message": "Notification marked as read"}
