"""Root conftest: test settings must be in the environment before ``club_realtime.config`` is imported."""
from __future__ import annotations

import os
from pathlib import Path

for line in (Path(__file__).resolve().parent / ".env.test").read_text().splitlines():
    key, sep, value = line.strip().partition("=")
    if sep and not key.startswith("#"):
        os.environ.setdefault(key.strip(), value.strip())
