from __future__ import annotations

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel


class WeatherCreate(CamelModel):
    temperature: int = Field(..., ge=-100, le=100)
    condition: str = Field(..., min_length=1, max_length=64, description="sunny|cloudy|...")


class WeatherRead(WeatherCreate):
    id: int
    date: datetime
