"""
Unread-notification bookkeeping.

A watermark records what the user has already seen. Two policies exist and a
tracker uses exactly one of them:

- timestamp: everything created strictly after `last_viewed_at` is unread.
  Opening the list moves the watermark to the newest item in the feed.
- read_set: every id missing from `read_ids` is unread. Items can be
  dismissed one by one.

The pure functions (`compute_unread`, `mark_all_read`, `mark_one_read`) never
touch storage. `NotificationTracker` wraps them with a feed snapshot and an
injected `WatermarkStore`; storage failures are logged and the in-memory
watermark keeps governing the session.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime

from app.core.config import settings
from app.services.feed import FeedEntry, as_utc, newest_first, parse_timestamp
from app.services.watermark_store import WatermarkStore

logger = logging.getLogger("app.notifications")

TIMESTAMP_POLICY = "timestamp"
READ_SET_POLICY = "read_set"
POLICIES = (TIMESTAMP_POLICY, READ_SET_POLICY)


class UnsupportedReadOperation(Exception):
    """Raised when a single item is marked read under the timestamp policy."""


class WatermarkDecodeError(ValueError):
    pass


def normalize_policy(policy: str | None) -> str:
    p = (policy or "").strip().lower()
    if p not in POLICIES:
        raise ValueError(f"Unknown notification read policy: {policy!r}")
    return p


@dataclass(frozen=True)
class WatermarkState:
    policy: str = TIMESTAMP_POLICY
    last_viewed_at: datetime | None = None
    read_ids: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.last_viewed_at is not None:
            object.__setattr__(self, "last_viewed_at", as_utc(self.last_viewed_at))
        object.__setattr__(self, "read_ids", frozenset(self.read_ids))

    @classmethod
    def never_viewed(cls, policy: str = TIMESTAMP_POLICY) -> "WatermarkState":
        return cls(policy=normalize_policy(policy))

    def to_json(self) -> str:
        if self.policy == READ_SET_POLICY:
            payload = {"policy": self.policy, "readIds": sorted(self.read_ids)}
        else:
            payload = {
                "policy": self.policy,
                "lastViewedAt": self.last_viewed_at.isoformat() if self.last_viewed_at else None,
            }
        return json.dumps(payload, separators=(",", ":"))

    @classmethod
    def from_json(cls, raw: str) -> "WatermarkState":
        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise WatermarkDecodeError(f"Watermark is not valid JSON: {raw!r}") from e
        if not isinstance(payload, dict):
            raise WatermarkDecodeError("Watermark must be a JSON object")
        try:
            policy = normalize_policy(payload.get("policy"))
        except ValueError as e:
            raise WatermarkDecodeError(str(e)) from e
        if policy == READ_SET_POLICY:
            ids = payload.get("readIds") or []
            if not isinstance(ids, list) or not all(isinstance(i, int) and not isinstance(i, bool) for i in ids):
                raise WatermarkDecodeError("readIds must be a list of integers")
            return cls(policy=policy, read_ids=frozenset(ids))
        raw_ts = payload.get("lastViewedAt")
        if raw_ts is None:
            return cls(policy=policy)
        ts = parse_timestamp(raw_ts)
        if ts is None:
            raise WatermarkDecodeError(f"lastViewedAt is not an ISO-8601 timestamp: {raw_ts!r}")
        return cls(policy=policy, last_viewed_at=ts)


@dataclass(frozen=True)
class UnreadSummary:
    count: int
    ids: frozenset[int]


def _is_unread(item: FeedEntry, watermark: WatermarkState) -> bool:
    # Records without a creation time carry no recency information.
    if item.created_at is None:
        return False
    if watermark.policy == READ_SET_POLICY:
        return item.id not in watermark.read_ids
    if watermark.last_viewed_at is None:
        return True
    return as_utc(item.created_at) > watermark.last_viewed_at


def compute_unread(feed: Iterable[FeedEntry] | None, watermark: WatermarkState) -> UnreadSummary:
    ids = frozenset(item.id for item in (feed or []) if _is_unread(item, watermark))
    return UnreadSummary(count=len(ids), ids=ids)


def mark_all_read(feed: Iterable[FeedEntry] | None, watermark: WatermarkState) -> WatermarkState:
    """
    Advance the watermark past every item in `feed`.
    The timestamp policy moves to the newest creation time in the feed (never
    backwards, never to wall-clock time), so repeating the call is a no-op.
    The read_set policy keeps exactly the ids in the feed; an empty feed (for
    example after a failed fetch) leaves the watermark untouched.
    """
    feed = list(feed or [])
    if watermark.policy == READ_SET_POLICY:
        # Ids that left the feed (expired) are dropped so the set stays bounded.
        if not feed:
            return watermark
        return replace(watermark, read_ids=frozenset(i.id for i in feed))
    items = [i for i in feed if i.created_at is not None]
    if not items:
        return watermark
    newest = max(as_utc(i.created_at) for i in items)
    if watermark.last_viewed_at is not None and watermark.last_viewed_at >= newest:
        return watermark
    return replace(watermark, last_viewed_at=newest)


def mark_one_read(notification_id: int, watermark: WatermarkState) -> WatermarkState:
    if watermark.policy != READ_SET_POLICY:
        raise UnsupportedReadOperation("Single notifications cannot be marked read under the timestamp policy")
    return replace(watermark, read_ids=watermark.read_ids | {int(notification_id)})


class NotificationTracker:
    """
    Holds the latest feed snapshot plus the watermark and exposes what the UI
    renders: `unread_count` for the badge and `notifications` for the list.
    Every refresh recomputes from the snapshot and the current watermark, so a
    refresh landing between open and persist cannot resurrect read items.
    """

    def __init__(
        self,
        store: WatermarkStore,
        *,
        key: str | None = None,
        policy: str | None = None,
    ) -> None:
        self.store = store
        self.key = key or settings.notification_watermark_key
        self.policy = normalize_policy(policy or settings.notification_read_policy)
        self._watermark = WatermarkState.never_viewed(self.policy)
        self._feed: list[FeedEntry] = []
        self._summary = UnreadSummary(count=0, ids=frozenset())
        self.persisted = True

    @property
    def watermark(self) -> WatermarkState:
        return self._watermark

    @property
    def notifications(self) -> list[FeedEntry]:
        return list(self._feed)

    @property
    def unread_count(self) -> int:
        return self._summary.count

    @property
    def unread_ids(self) -> frozenset[int]:
        return self._summary.ids

    @property
    def is_stale(self) -> bool:
        return self._summary.count > 0

    def load(self) -> WatermarkState:
        try:
            raw = self.store.get(self.key)
        except Exception:
            logger.warning("watermark_load_failed key=%s", self.key, exc_info=True)
            raw = None
        if raw:
            try:
                loaded = WatermarkState.from_json(raw)
            except WatermarkDecodeError:
                logger.warning("watermark_corrupt key=%s value=%r", self.key, raw)
                loaded = None
            if loaded is not None and loaded.policy == self.policy:
                self._watermark = loaded
            elif loaded is not None:
                logger.info("watermark_policy_changed key=%s stored=%s active=%s", self.key, loaded.policy, self.policy)
        self._recompute()
        return self._watermark

    def refresh(self, feed: Sequence[FeedEntry] | None) -> UnreadSummary:
        self._feed = newest_first(feed or [])
        return self._recompute()

    def on_open(self) -> WatermarkState:
        self._set_watermark(mark_all_read(self._feed, self._watermark))
        return self._watermark

    def on_item_click(self, notification_id: int) -> WatermarkState:
        if self.policy == TIMESTAMP_POLICY:
            return self.on_open()
        self._set_watermark(mark_one_read(notification_id, self._watermark))
        return self._watermark

    def _set_watermark(self, watermark: WatermarkState) -> None:
        changed = watermark != self._watermark
        self._watermark = watermark
        self._recompute()
        if changed or not self.persisted:
            self._persist()

    def _persist(self) -> None:
        try:
            self.store.set(self.key, self._watermark.to_json())
        except Exception:
            self.persisted = False
            logger.warning("watermark_persist_failed key=%s", self.key, exc_info=True)
            return
        self.persisted = True

    def _recompute(self) -> UnreadSummary:
        self._summary = compute_unread(self._feed, self._watermark)
        return self._summary
