from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.notification import Notification
from app.schemas.notification import UnreadStatus
from app.services.feed import FeedItem, active_feed, newest_first, to_feed_item
from app.services.notification_tracker import NotificationTracker
from app.services.watermark_store import DatabaseWatermarkStore


def list_notifications(db: Session, *, include_expired: bool = False, now: datetime | None = None) -> list[Notification]:
    rows = db.execute(select(Notification).order_by(Notification.created_at.desc(), Notification.id.desc())).scalars().all()
    if include_expired:
        return newest_first(rows)
    return active_feed(rows, now)


def active_feed_items(db: Session, now: datetime | None = None) -> list[FeedItem]:
    return [to_feed_item(r) for r in list_notifications(db, now=now)]


def tracker_for_user(db: Session, user_id: int, *, now: datetime | None = None) -> NotificationTracker:
    tracker = NotificationTracker(DatabaseWatermarkStore(db, user_id))
    tracker.load()
    tracker.refresh(active_feed_items(db, now))
    return tracker


def unread_status(tracker: NotificationTracker) -> UnreadStatus:
    wm = tracker.watermark
    return UnreadStatus(
        policy=tracker.policy,
        unread_count=tracker.unread_count,
        unread_ids=sorted(tracker.unread_ids),
        last_viewed_at=wm.last_viewed_at,
        persisted=tracker.persisted,
    )
