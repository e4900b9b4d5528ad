from __future__ import annotations

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel


class NewsCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=256)
    content: str = Field(..., min_length=1)
    image_url: str | None = Field(default=None, max_length=1024)


class NewsRead(NewsCreate):
    id: int
    created_at: datetime
    author_id: int | None = None
