from __future__ import annotations

import unittest

from sqlalchemy import create_engine, inspect, select, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401 - register models with Base.metadata
from app.core.auth import verify_password
from app.db.base import Base
from app.db.migrations import apply_column_migrations
from app.db.seed import seed_admin_user_if_missing
from app.models.user import User


def _engine():
    return create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)


class ColumnMigrationTests(unittest.TestCase):
    def test_old_schema_gets_missing_columns(self):
        engine = _engine()
        with engine.begin() as conn:
            conn.execute(text("CREATE TABLE users (id INTEGER PRIMARY KEY, username VARCHAR(64))"))
            conn.execute(text("INSERT INTO users (id, username) VALUES (1, 'oldtimer')"))
            conn.execute(text("CREATE TABLE notifications (id INTEGER PRIMARY KEY, title TEXT, message TEXT)"))
        executed = apply_column_migrations(engine)
        self.assertEqual(len(executed), 3)
        cols = {c["name"] for c in inspect(engine).get_columns("notifications")}
        self.assertIn("expiration_hours", cols)
        with engine.connect() as conn:
            self.assertEqual(conn.execute(text("SELECT email FROM users")).scalar(), "oldtimer@example.com")
        self.assertEqual(apply_column_migrations(engine), [])

    def test_current_schema_is_left_alone(self):
        engine = _engine()
        Base.metadata.create_all(engine)
        self.assertEqual(apply_column_migrations(engine), [])


class SeedAdminTests(unittest.TestCase):
    def test_admin_is_created_once_and_promoted(self):
        engine = _engine()
        Base.metadata.create_all(engine)
        db = sessionmaker(bind=engine, expire_on_commit=False)()
        try:
            self.assertEqual(seed_admin_user_if_missing(db, username="chief1", email="c@example.com", password="pw1234"), 1)
            self.assertEqual(seed_admin_user_if_missing(db, username="chief1"), 0)
            admin = db.execute(select(User).where(User.username == "chief1")).scalars().one()
            self.assertTrue(admin.is_admin)
            self.assertTrue(verify_password("pw1234", admin.password_hash, admin.password_salt))

            admin.is_admin = False
            db.commit()
            seed_admin_user_if_missing(db, username="CHIEF1")
            db.refresh(admin)
            self.assertTrue(admin.is_admin)
        finally:
            db.close()


if __name__ == "__main__":
    unittest.main()
