from __future__ import annotations

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel

MAX_EXPIRATION_HOURS = 24 * 365 * 10


class NotificationCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=256)
    message: str = Field(..., min_length=1)
    expiration_hours: int | None = Field(
        default=None, ge=1, le=MAX_EXPIRATION_HOURS, description="Hours after creation before it stops showing"
    )


class NotificationRead(CamelModel):
    id: int
    title: str
    message: str
    created_at: datetime
    expiration_hours: int | None = None


class UnreadStatus(CamelModel):
    policy: str
    unread_count: int
    unread_ids: list[int]
    last_viewed_at: datetime | None = None
    persisted: bool = True
