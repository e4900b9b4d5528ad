"""
Follow the notification feed from a terminal and show the unread badge.

The read watermark is kept in a local JSON file, so unread state survives
restarts the same way a browser's local storage would.

Usage:
    python scripts/watch_notifications.py --base-url http://localhost:8000 \
        --username reader1 --password secret1 [--state ~/.news_portal.json] [--mark-read]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import httpx

from app.core.config import settings
from app.services.feed_poller import FeedPoller, NotificationFeedClient
from app.services.notification_tracker import POLICIES, NotificationTracker
from app.services.watermark_store import JsonFileWatermarkStore

logger = logging.getLogger("app.scripts.watch")


def _print_badge(tracker: NotificationTracker) -> None:
    print(f"[{tracker.unread_count} unread]")
    for n in tracker.notifications:
        marker = "*" if n.id in tracker.unread_ids else " "
        print(f" {marker} #{n.id} {n.title}: {n.message}")


async def watch(args: argparse.Namespace) -> None:
    store = JsonFileWatermarkStore(args.state)
    tracker = NotificationTracker(store, key=f"{settings.notification_watermark_key}:{args.username}", policy=args.policy)
    tracker.load()
    async with httpx.AsyncClient(base_url=args.base_url, timeout=15) as client:
        feed_client = NotificationFeedClient(client)
        await feed_client.login(args.username, args.password)
        poller = FeedPoller(tracker, feed_client.fetch, interval=args.interval, on_update=lambda _s: _print_badge(tracker))
        await poller.poll_once()
        if args.mark_read:
            tracker.on_open()
            _print_badge(tracker)
        if args.once:
            return
        poller.start()
        try:
            while True:
                await asyncio.sleep(3600)
        finally:
            await poller.stop()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Watch notifications and the unread badge")
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--username", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--state", default=str(Path.home() / ".news_portal_watermarks.json"))
    parser.add_argument("--policy", default=settings.notification_read_policy, choices=POLICIES)
    parser.add_argument("--interval", type=float, default=settings.notification_poll_seconds)
    parser.add_argument("--mark-read", action="store_true", help="mark everything read after the first poll")
    parser.add_argument("--once", action="store_true", help="poll a single time and exit")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        asyncio.run(watch(args))
    except httpx.HTTPStatusError as e:
        logger.error("login_failed status=%s", e.response.status_code)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s %(message)s")
    sys.exit(main())
