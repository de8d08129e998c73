from __future__ import annotations

from collections.abc import Iterable

from club_realtime.application.dto.principal import Principal
from club_realtime.application.exceptions import ForbiddenError
from club_realtime.domain.value_objects.enums import UserRole


def assert_role(principal: Principal, allowed: Iterable[UserRole]) -> None:
    if principal.role not in set(allowed):
        raise ForbiddenError("Insufficient permissions")
