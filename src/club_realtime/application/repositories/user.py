from __future__ import annotations

from typing import Protocol


class UserReader(Protocol):
    async def exists(self, user_id: int) -> bool: ...
