from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "postgresql+psycopg://postgres:postgres@db:5432/news_portal"
    app_env: str = "dev"
    app_cors_origins: str = "*"
    # Session cookie signing
    auth_secret: str = "change-me-in-production"
    auth_cookie_name: str = "news_portal_session"
    auth_session_hours: float = 24 * 7
    # Default admin created at startup / by scripts/create_admin.py
    admin_username: str = "admin1"
    admin_email: str = "admin1@example.com"
    admin_password: str = "admin1"
    # Unread tracking
    notification_read_policy: str = "timestamp"  # timestamp | read_set
    notification_watermark_key: str = "notifications.last_viewed"
    notification_poll_seconds: float = 5.0
    dashboard_news_limit: int = 10


settings = Settings()
