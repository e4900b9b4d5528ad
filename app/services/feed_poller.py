from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx

from app.core.config import settings
from app.services.feed import FeedItem, active_feed, parse_feed
from app.services.notification_tracker import NotificationTracker, UnreadSummary

logger = logging.getLogger("app.notifications.poller")


class NotificationFeedClient:
    """Reads `GET /api/notifications` with a logged-in session cookie."""

    def __init__(self, client: httpx.AsyncClient, path: str = "/api/notifications") -> None:
        self.client = client
        self.path = path

    async def login(self, username: str, password: str) -> None:
        r = await self.client.post("/api/auth/login", json={"username": username, "password": password})
        r.raise_for_status()

    async def fetch(self) -> list[FeedItem]:
        """Failures (network, auth, bad JSON) degrade to an empty feed."""
        try:
            r = await self.client.get(self.path)
            r.raise_for_status()
            records = r.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("feed_fetch_failed path=%s error=%s", self.path, e)
            return []
        if not isinstance(records, list):
            logger.warning("feed_fetch_unexpected_payload path=%s type=%s", self.path, type(records).__name__)
            return []
        return active_feed(parse_feed(records))


class FeedPoller:
    """
    Refreshes a tracker from the feed on a fixed interval until stopped.
    Runs on the event loop; `stop()` cancels and awaits the task so nothing
    updates the tracker after disposal.
    """

    def __init__(
        self,
        tracker: NotificationTracker,
        fetch: Callable[[], Awaitable[list[FeedItem]]],
        *,
        interval: float | None = None,
        on_update: Callable[[UnreadSummary], None] | None = None,
    ) -> None:
        self.tracker = tracker
        self.fetch = fetch
        self.interval = settings.notification_poll_seconds if interval is None else interval
        if self.interval <= 0:
            raise ValueError("Poll interval must be positive")
        self.on_update = on_update
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def poll_once(self) -> UnreadSummary:
        feed = await self.fetch()
        summary = self.tracker.refresh(feed)
        logger.debug("feed_refreshed items=%s unread=%s", len(feed), summary.count)
        if self.on_update:
            self.on_update(summary)
        return summary

    async def _run(self) -> None:
        while True:
            try:
                await self.poll_once()
            except Exception:
                logger.exception("feed_poll_failed")
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
