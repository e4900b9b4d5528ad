from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Column default; microsecond precision keeps notification ordering stable on SQLite."""
    return datetime.now(timezone.utc)
