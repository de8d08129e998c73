from __future__ import annotations

from fastapi import APIRouter, Query

from club_realtime.api.deps import CurrentPrincipal, DispatcherDep, UoWDep
from club_realtime.api.schemas.chat import (
    ChatMessageResponse,
    MarkReadResponse,
    SendChatMessageRequest,
)
from club_realtime.services import chat_service

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.get("/messages", response_model=list[ChatMessageResponse])
async def list_messages(
    principal: CurrentPrincipal,
    uow: UoWDep,
    to_user_id: int | None = Query(None, alias="toUserId"),
    club_id: int | None = Query(None, alias="clubId"),
    limit: int = Query(100, ge=1, le=500),
) -> list[ChatMessageResponse]:
    messages = await chat_service.list_messages(
        principal.user_id, to_user_id, club_id, limit, uow,
    )
    return [ChatMessageResponse.model_validate(m) for m in messages]


@router.post("/messages", response_model=ChatMessageResponse, status_code=201)
async def send_message(
    body: SendChatMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    dispatcher: DispatcherDep,
) -> ChatMessageResponse:
    msg = await chat_service.send_chat_message(
        principal.user_id,
        body.to_user_id,
        body.message,
        uow,
        dispatcher,
        club_id=body.club_id,
    )
    return ChatMessageResponse.model_validate(msg)


@router.post("/messages/read/{from_user_id}", response_model=MarkReadResponse)
async def mark_read(
    from_user_id: int,
    principal: CurrentPrincipal,
    uow: UoWDep,
    dispatcher: DispatcherDep,
) -> MarkReadResponse:
    updated = await chat_service.mark_read(principal.user_id, from_user_id, uow, dispatcher)
    return MarkReadResponse(updated=updated)
