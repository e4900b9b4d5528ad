"""Key-value stores that persist notification read watermarks."""
from __future__ import annotations

import json
from pathlib import Path
from threading import RLock
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.notification import NotificationWatermark


class WatermarkStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryWatermarkStore:
    """Process-local store; the session-only fallback and the test double."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileWatermarkStore:
    """
    Durable store for a single client (one file per user agent), the
    equivalent of a browser's local storage for command-line consumers.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = RLock()

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        if not isinstance(data, dict):
            raise ValueError(f"Watermark file {self.path} does not hold an object")
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp.replace(self.path)


class DatabaseWatermarkStore:
    """Watermarks scoped to one account, stored in `notification_watermarks`."""

    def __init__(self, db: Session, user_id: int) -> None:
        self.db = db
        self.user_id = user_id

    def _row(self, key: str) -> NotificationWatermark | None:
        return (
            self.db.execute(
                select(NotificationWatermark).where(
                    NotificationWatermark.user_id == self.user_id,
                    NotificationWatermark.key == key,
                )
            )
            .scalars()
            .first()
        )

    def get(self, key: str) -> str | None:
        row = self._row(key)
        return row.value if row else None

    def set(self, key: str, value: str) -> None:
        row = self._row(key)
        if row:
            row.value = value
        else:
            self.db.add(NotificationWatermark(user_id=self.user_id, key=key, value=value))
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
