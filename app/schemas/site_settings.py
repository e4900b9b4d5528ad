from __future__ import annotations

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel

COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"


class ThemeSettingsUpdate(CamelModel):
    primary_color: str = Field(..., pattern=COLOR_PATTERN)
    button_color: str = Field(..., pattern=COLOR_PATTERN)
    text_color: str = Field(..., pattern=COLOR_PATTERN)
    logo_url: str | None = Field(default=None, max_length=1024)


class ThemeSettingsRead(ThemeSettingsUpdate):
    id: int
    updated_at: datetime


class AdSettingsUpdate(CamelModel):
    google_ad_client: str = Field(..., min_length=1, max_length=128)
    google_ad_slot: str = Field(..., min_length=1, max_length=128)
    is_enabled: bool = True
    width: int = Field(default=728, ge=1, le=4000)
    height: int = Field(default=90, ge=1, le=4000)


class AdSettingsRead(AdSettingsUpdate):
    id: int
    updated_at: datetime
