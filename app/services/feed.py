"""Active-feed filtering for notifications, shared by the API and the feed poller."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol


class FeedEntry(Protocol):
    id: int
    created_at: datetime | None
    expiration_hours: int | None


@dataclass(frozen=True)
class FeedItem:
    id: int
    title: str
    message: str
    created_at: datetime | None
    expiration_hours: int | None = None


def as_utc(value: datetime) -> datetime:
    """Naive datetimes (SQLite round-trips) are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(raw: Any) -> datetime | None:
    if isinstance(raw, datetime):
        return as_utc(raw)
    if not isinstance(raw, str) or not raw.strip():
        return None
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return as_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


def expires_at(item: FeedEntry) -> datetime | None:
    if item.expiration_hours is None or item.created_at is None:
        return None
    try:
        return as_utc(item.created_at) + timedelta(hours=item.expiration_hours)
    except OverflowError:
        # Out-of-range windows behave like no expiration at all.
        return None


def is_active(item: FeedEntry, now: datetime | None = None) -> bool:
    deadline = expires_at(item)
    if deadline is None:
        return True
    now = as_utc(now) if now else datetime.now(timezone.utc)
    return deadline > now


def _recency_key(item: FeedEntry) -> tuple[datetime, int]:
    created = as_utc(item.created_at) if item.created_at else datetime.min.replace(tzinfo=timezone.utc)
    return created, item.id


def newest_first(items: Iterable[FeedEntry]) -> list:
    return sorted(items, key=_recency_key, reverse=True)


def active_feed(items: Iterable[FeedEntry], now: datetime | None = None) -> list:
    """Drop expired notifications and order the rest newest first (id breaks ties)."""
    now = now or datetime.now(timezone.utc)
    return newest_first(i for i in items if is_active(i, now))


def _int_or_none(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().lstrip("-").isdigit():
        return int(raw.strip())
    return None


def parse_feed(records: Iterable[Any]) -> list[FeedItem]:
    """
    Convert `GET /api/notifications` JSON records into FeedItems.
    Records without an integer id are dropped; a missing or unparseable
    timestamp is kept as created_at=None so the tracker can skip it.
    """
    items: list[FeedItem] = []
    for rec in records or []:
        if not isinstance(rec, Mapping):
            continue
        notification_id = _int_or_none(rec.get("id"))
        if notification_id is None:
            continue
        items.append(
            FeedItem(
                id=notification_id,
                title=str(rec.get("title") or ""),
                message=str(rec.get("message") or ""),
                created_at=parse_timestamp(rec.get("createdAt", rec.get("created_at"))),
                expiration_hours=_int_or_none(rec.get("expirationHours", rec.get("expiration_hours"))),
            )
        )
    return items


def to_feed_item(row: Any) -> FeedItem:
    return FeedItem(
        id=row.id,
        title=row.title,
        message=row.message,
        created_at=as_utc(row.created_at) if row.created_at else None,
        expiration_hours=row.expiration_hours,
    )
