"""WebSocket message envelope models."""
from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from club_realtime.domain.value_objects.enums import UserRole

PositiveId = Annotated[StrictInt, Field(gt=0)]


class WsInbound(BaseModel):
    """Client → Server."""

    model_config = ConfigDict(extra="allow")

    type: str  # auth | ping


class AuthFrame(BaseModel):
    """``{"type": "auth", "userId": 7, "role": "admin"}`` or ``{"type": "auth", "token": "<jwt>"}``."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["auth"]
    user_id: PositiveId | None = Field(default=None, alias="userId")
    role: UserRole | None = None
    token: str | None = None


class WsOutbound(BaseModel):
    """Server → Client."""

    type: str  # notification | new_message | messages_read | pong | heartbeat
    data: dict[str, Any] = {}


def encode_event(event_type: str, data: dict[str, Any]) -> str:
    return WsOutbound(type=event_type, data=data).model_dump_json()
