from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.news import latest_news
from app.api.weather import latest_weather
from app.core.auth import SessionUser, get_current_user
from app.core.config import settings
from app.db.session import get_db
from app.schemas.dashboard import DashboardResponse
from app.schemas.news import NewsRead
from app.schemas.notification import NotificationRead
from app.schemas.weather import WeatherRead
from app.services.notification_service import tracker_for_user

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
def get_dashboard(db: Session = Depends(get_db), current: SessionUser = Depends(get_current_user)) -> DashboardResponse:
    """Everything the auto-refreshing home page needs in one poll."""
    tracker = tracker_for_user(db, current.user_id)
    weather = latest_weather(db)
    return DashboardResponse(
        news=[NewsRead.model_validate(r) for r in latest_news(db, settings.dashboard_news_limit)],
        weather=WeatherRead.model_validate(weather) if weather else None,
        notifications=[NotificationRead.model_validate(n) for n in tracker.notifications],
        unread_count=tracker.unread_count,
    )
