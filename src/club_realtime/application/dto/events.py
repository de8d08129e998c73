from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class DispatchEvent:
    """Ephemeral event pushed to live sockets. Never persisted."""

    type: str
    data: dict[str, Any] = field(default_factory=dict)
