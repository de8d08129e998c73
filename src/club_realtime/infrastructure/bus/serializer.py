from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from club_realtime.application.dto.events import DispatchEvent
from club_realtime.application.ports.dispatch import (
    BroadcastTarget,
    DeliveryTarget,
    RoleTarget,
    UserTarget,
)
from club_realtime.domain.value_objects.enums import UserRole


class _Encoder(json.JSONEncoder):
    def default(self, o: object) -> Any:
        if isinstance(o, datetime):
            return o.isoformat()
        return super().default(o)


def _encode_target(target: DeliveryTarget) -> dict[str, Any]:
    match target:
        case UserTarget(user_id=user_id):
            return {"kind": "user", "userId": user_id}
        case RoleTarget(role=role):
            return {"kind": "role", "role": str(role)}
        case BroadcastTarget():
            return {"kind": "broadcast"}
    raise TypeError(f"Unknown delivery target: {target!r}")


def _decode_target(raw: dict[str, Any]) -> DeliveryTarget:
    kind = raw["kind"]
    if kind == "user":
        return UserTarget(int(raw["userId"]))
    if kind == "role":
        return RoleTarget(UserRole(raw["role"]))
    if kind == "broadcast":
        return BroadcastTarget()
    raise ValueError(f"Unknown delivery target kind: {kind!r}")


def serialize_envelope(target: DeliveryTarget, event: DispatchEvent) -> str:
    envelope = {
        "target": _encode_target(target),
        "event": event.type,
        "data": event.data,
    }
    return json.dumps(envelope, cls=_Encoder)


def deserialize_envelope(raw: str | bytes) -> tuple[DeliveryTarget, DispatchEvent]:
    data = json.loads(raw)
    return _decode_target(data["target"]), DispatchEvent(type=data["event"], data=data["data"])
