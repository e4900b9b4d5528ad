from app.models.news import News
from app.models.notification import Notification, NotificationWatermark
from app.models.site_settings import AdSettings, ThemeSettings
from app.models.user import User
from app.models.weather import Weather

__all__ = [
    "AdSettings",
    "News",
    "Notification",
    "NotificationWatermark",
    "ThemeSettings",
    "User",
    "Weather",
]
