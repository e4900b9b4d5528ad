from __future__ import annotations

from app.schemas.common import CamelModel
from app.schemas.news import NewsRead
from app.schemas.notification import NotificationRead
from app.schemas.weather import WeatherRead


class DashboardResponse(CamelModel):
    news: list[NewsRead]
    weather: WeatherRead | None = None
    notifications: list[NotificationRead]
    unread_count: int
