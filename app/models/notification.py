"""Admin-published notifications and the per-account read watermarks kept for them."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.timestamps import utcnow


class Notification(Base):
    """
    Broadcast notice shown to every logged-in user.
    Immutable once created; expired rows stay in the table and are filtered out of the feed.
    """

    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(256))
    message: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    expiration_hours: Mapped[int | None] = mapped_column(Integer, nullable=True)


class NotificationWatermark(Base):
    """Serialized read-state watermark, one row per (account, key)."""

    __tablename__ = "notification_watermarks"
    __table_args__ = (UniqueConstraint("user_id", "key", name="ux_notification_watermarks_user_key"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True)
    key: Mapped[str] = mapped_column(String(128))
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
