from __future__ import annotations

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

logger = logging.getLogger("app.db")


def apply_column_migrations(engine: Engine) -> list[str]:
    """
    Lightweight startup migrations for databases created before a column existed.
    Idempotent; returns the statements that were executed.
    """
    inspector = inspect(engine)
    tables = set(inspector.get_table_names())
    stmts: list[str] = []
    if "users" in tables:
        cols = {c["name"] for c in inspector.get_columns("users")}
        if "email" not in cols:
            stmts += [
                "ALTER TABLE users ADD COLUMN email VARCHAR(256)",
                "UPDATE users SET email = username || '@example.com' WHERE email IS NULL",
            ]
    if "notifications" in tables:
        cols = {c["name"] for c in inspector.get_columns("notifications")}
        if "expiration_hours" not in cols:
            stmts.append("ALTER TABLE notifications ADD COLUMN expiration_hours INTEGER")
    if not stmts:
        return []
    with engine.begin() as conn:
        for s in stmts:
            logger.info("migration %s", s)
            conn.execute(text(s))
    return stmts
