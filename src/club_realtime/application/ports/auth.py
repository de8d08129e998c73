from __future__ import annotations

from typing import Protocol

from club_realtime.application.dto.principal import Principal


class TokenVerifier(Protocol):
    """Turns a bearer token into the caller's identity; raises on an invalid token."""

    async def verify(self, token: str) -> Principal: ...
