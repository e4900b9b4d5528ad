from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.timestamps import utcnow


class ThemeSettings(Base):
    __tablename__ = "theme_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    primary_color: Mapped[str] = mapped_column(String(32))
    button_color: Mapped[str] = mapped_column(String(32))
    text_color: Mapped[str] = mapped_column(String(32))
    logo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)


class AdSettings(Base):
    __tablename__ = "ad_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    google_ad_client: Mapped[str] = mapped_column(String(128))
    google_ad_slot: Mapped[str] = mapped_column(String(128))
    is_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    width: Mapped[int] = mapped_column(Integer, default=728)
    height: Mapped[int] = mapped_column(Integer, default=90)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
