from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone

from app.services.feed import FeedItem, active_feed, is_active, parse_feed, parse_timestamp

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class FeedFilterTests(unittest.TestCase):
    def test_expired_notifications_are_dropped(self):
        fresh = FeedItem(id=1, title="a", message="m", created_at=NOW - timedelta(minutes=30), expiration_hours=1)
        expired = FeedItem(id=2, title="b", message="m", created_at=NOW - timedelta(hours=3), expiration_hours=2)
        forever = FeedItem(id=3, title="c", message="m", created_at=NOW - timedelta(days=400))
        self.assertTrue(is_active(fresh, NOW))
        self.assertFalse(is_active(expired, NOW))
        self.assertTrue(is_active(forever, NOW))
        self.assertEqual([i.id for i in active_feed([fresh, expired, forever], NOW)], [1, 3])

    def test_out_of_range_expiration_never_expires(self):
        huge = FeedItem(id=1, title="a", message="m", created_at=NOW, expiration_hours=100_000_000)
        self.assertTrue(is_active(huge, NOW))
        self.assertEqual([i.id for i in active_feed([huge], NOW)], [1])
        parsed = parse_feed([{"id": 2, "title": "x", "message": "m", "createdAt": "2026-01-01T00:00:00Z", "expirationHours": 10**12}])
        self.assertEqual([i.id for i in active_feed(parsed, NOW)], [2])

    def test_expiry_boundary_is_exclusive(self):
        edge = FeedItem(id=1, title="a", message="m", created_at=NOW - timedelta(hours=2), expiration_hours=2)
        self.assertFalse(is_active(edge, NOW))

    def test_active_feed_orders_newest_first_with_id_tiebreak(self):
        items = [
            FeedItem(id=1, title="a", message="m", created_at=NOW - timedelta(hours=1)),
            FeedItem(id=3, title="c", message="m", created_at=NOW),
            FeedItem(id=2, title="b", message="m", created_at=NOW),
        ]
        self.assertEqual([i.id for i in active_feed(items, NOW)], [3, 2, 1])


class ParseFeedTests(unittest.TestCase):
    def test_parse_api_records(self):
        records = [
            {"id": 7, "title": "Road closed", "message": "Main st", "createdAt": "2026-03-01T10:00:00Z", "expirationHours": 4},
            {"id": "8", "title": "Power", "message": "Outage", "createdAt": "2026-03-01T11:00:00+02:00", "expirationHours": None},
        ]
        items = parse_feed(records)
        self.assertEqual([i.id for i in items], [7, 8])
        self.assertEqual(items[0].created_at, datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc))
        self.assertEqual(items[0].expiration_hours, 4)
        self.assertEqual(items[1].created_at, datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc))
        self.assertIsNone(items[1].expiration_hours)

    def test_malformed_records(self):
        items = parse_feed([{"title": "no id"}, "junk", {"id": True}, {"id": 5, "title": "x", "createdAt": "soon"}])
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0].id, 5)
        self.assertIsNone(items[0].created_at)
        self.assertEqual(parse_feed(None), [])

    def test_parse_timestamp_naive_is_utc(self):
        self.assertEqual(parse_timestamp("2026-03-01T10:00:00"), datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc))
        self.assertIsNone(parse_timestamp(""))
        self.assertIsNone(parse_timestamp(12))


if __name__ == "__main__":
    unittest.main()
