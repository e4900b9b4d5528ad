from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401 - register models with Base.metadata
from app.db.base import Base
from app.models.user import User
from app.services.watermark_store import DatabaseWatermarkStore, InMemoryWatermarkStore, JsonFileWatermarkStore


class InMemoryStoreTests(unittest.TestCase):
    def test_get_set(self):
        store = InMemoryWatermarkStore()
        self.assertIsNone(store.get("k"))
        store.set("k", "v")
        self.assertEqual(store.get("k"), "v")


class JsonFileStoreTests(unittest.TestCase):
    def test_values_persist_across_instances(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "state" / "watermarks.json"
            JsonFileWatermarkStore(path).set("a", "1")
            JsonFileWatermarkStore(path).set("b", "2")
            store = JsonFileWatermarkStore(path)
            self.assertEqual(store.get("a"), "1")
            self.assertEqual(store.get("b"), "2")
            self.assertIsNone(store.get("c"))

    def test_non_object_file_raises(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "watermarks.json"
            path.write_text("[1, 2]", encoding="utf-8")
            with self.assertRaises(ValueError):
                JsonFileWatermarkStore(path).get("a")


class DatabaseStoreTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
        Base.metadata.create_all(self.engine)
        self.db = sessionmaker(bind=self.engine, expire_on_commit=False)()
        self.alice = User(username="alice_1", email="alice@example.com", password_hash="h", password_salt="s")
        self.bob = User(username="bob_22", email="bob@example.com", password_hash="h", password_salt="s")
        self.db.add_all([self.alice, self.bob])
        self.db.commit()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_values_are_scoped_per_user(self):
        alice = DatabaseWatermarkStore(self.db, self.alice.id)
        bob = DatabaseWatermarkStore(self.db, self.bob.id)
        alice.set("k", "first")
        alice.set("k", "second")
        self.assertEqual(alice.get("k"), "second")
        self.assertIsNone(bob.get("k"))


if __name__ == "__main__":
    unittest.main()
