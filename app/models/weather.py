from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.timestamps import utcnow


class Weather(Base):
    """Weather snapshot; the newest row is the current one."""

    __tablename__ = "weather"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    temperature: Mapped[int] = mapped_column(Integer)
    condition: Mapped[str] = mapped_column(String(64))  # sunny | cloudy | ...
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
