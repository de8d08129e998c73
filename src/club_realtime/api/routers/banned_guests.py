from __future__ import annotations

from fastapi import APIRouter

from club_realtime.api.deps import CurrentPrincipal, DispatcherDep, UoWDep
from club_realtime.api.schemas.notification import BanAlertRequest, NotificationResponse
from club_realtime.domain.entities.banned_guest import BannedGuest
from club_realtime.services import notification_service

router = APIRouter(prefix="/api/banned-guests", tags=["bans"])


@router.post("/alerts", response_model=NotificationResponse, status_code=201)
async def raise_ban_alert(
    body: BanAlertRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    dispatcher: DispatcherDep,
) -> NotificationResponse:
    """Called by the ban module once a ban is stored."""
    guest = BannedGuest(
        first_name=body.first_name,
        last_name=body.last_name,
        id=body.id,
        club_id=body.club_id,
    )
    notification = await notification_service.raise_ban_alert(guest, principal, uow, dispatcher)
    return NotificationResponse.model_validate(notification)
