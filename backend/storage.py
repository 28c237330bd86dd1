"""
Key-value store behind every view.

Values are JSON text stored under string keys, namespaced by user id and,
for daily data, by ISO date (e.g. `pomodoro_<user>_2026-10-18`).
There is no schema versioning and no cross-key transaction: last write wins.
"""
import json
from datetime import datetime, timezone
from typing import Any, Optional

from sqlmodel import Session

from models import StorageItem

DAILY_CONTENT_DATE_KEY = "dailyContentDate"
DAILY_VERSE_KEY = "dailyVerse"
WISDOM_QUOTE_KEY = "wisdomQuote"

PRAYERS = ("fajr", "dhuhr", "asr", "maghrib", "isha")


class CorruptValueError(ValueError):
    """A stored value could not be parsed as JSON."""

    def __init__(self, key: str):
        super().__init__(f"Stored value for {key!r} is not valid JSON")
        self.key = key


def today_iso() -> str:
    """Current UTC date as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# --- Key builders ---

def prayers_key(user_id: str, day: str) -> str:
    return f"prayers_{user_id}_{day}"


def tasks_key(user_id: str) -> str:
    return f"tasks_{user_id}"


def pomodoro_key(user_id: str, day: str) -> str:
    return f"pomodoro_{user_id}_{day}"


def reading_key(user_id: str, day: str) -> str:
    return f"reading_{user_id}_{day}"


def courses_key(user_id: str) -> str:
    return f"courses_{user_id}"


def metrics_key(user_id: str, course_id: str, day: str) -> str:
    return f"metrics_{user_id}_{course_id}_{day}"


class KeyValueStore:
    """localStorage-style access on top of the storageitem table."""

    def __init__(self, session: Session):
        self.session = session

    def get_item(self, key: str) -> Optional[str]:
        item = self.session.get(StorageItem, key)
        return item.value if item else None

    def set_item(self, key: str, value: str) -> None:
        item = self.session.get(StorageItem, key)
        now = datetime.now(timezone.utc)
        if item is None:
            item = StorageItem(key=key, value=value, updated_at=now)
        else:
            item.value = value
            item.updated_at = now
        self.session.add(item)
        self.session.commit()

    def remove_item(self, key: str) -> None:
        item = self.session.get(StorageItem, key)
        if item is not None:
            self.session.delete(item)
            self.session.commit()

    def get_json(self, key: str, default: Any = None) -> Any:
        raw = self.get_item(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptValueError(key) from e

    def set_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value, ensure_ascii=False))


def record_pomodoro_session(store: KeyValueStore, user_id: str, day: Optional[str] = None) -> int:
    """Add one completed focus interval to the user's daily aggregate. Returns the new count."""
    key = pomodoro_key(user_id, day or today_iso())
    stored = store.get_json(key, {}) or {}
    stored["sessionsCompleted"] = (stored.get("sessionsCompleted") or 0) + 1
    store.set_json(key, stored)
    return stored["sessionsCompleted"]
