"""Best-effort delivery of events to live client connections.

Every method returns ``None``: callers hand the event over and move on. A
recipient without a live connection is a normal outcome, not an error.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from club_realtime.application.dto.events import DispatchEvent
from club_realtime.domain.value_objects.enums import UserRole


@dataclass(frozen=True, slots=True)
class UserTarget:
    user_id: int


@dataclass(frozen=True, slots=True)
class RoleTarget:
    role: UserRole


@dataclass(frozen=True, slots=True)
class BroadcastTarget:
    pass


DeliveryTarget = UserTarget | RoleTarget | BroadcastTarget


class Dispatcher(Protocol):
    def deliver(self, target: DeliveryTarget, event: DispatchEvent) -> None: ...

    def deliver_to_user(self, user_id: int, event: DispatchEvent) -> None: ...

    def deliver_to_role(self, role: UserRole, event: DispatchEvent) -> None: ...
