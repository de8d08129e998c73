from __future__ import annotations

import jwt

from club_realtime.application.dto.principal import Principal
from club_realtime.domain.value_objects.enums import UserRole


class HS256Verifier:
    """Verify JWTs signed with a shared HS256 secret.

    Expected claims: ``sub`` (user id) and ``role``. Tokens without a known
    role are treated as the least privileged role.
    """

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        self._secret = secret
        self._algorithm = algorithm

    async def verify(self, token: str) -> Principal:
        payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        role_raw = payload.get("role", UserRole.CLUB_EMPLOYEE)
        role = UserRole(role_raw) if role_raw in UserRole.__members__.values() else UserRole.CLUB_EMPLOYEE
        return Principal(
            user_id=int(payload["sub"]),
            role=role,
        )
