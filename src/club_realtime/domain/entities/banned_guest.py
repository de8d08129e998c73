from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BannedGuest:
    """The slice of a ban record the alerting path needs.

    Ban records themselves are owned by the ban management module.
    """

    first_name: str
    last_name: str
    id: int | None = None
    club_id: int | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
