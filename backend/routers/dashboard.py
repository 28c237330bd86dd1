"""
Dashboard: verse and wisdom quote of the day, today's stats and quick links.
"""
from datetime import date as date_type
from typing import Literal

from fastapi import APIRouter, Depends

from content import QUICK_ACCESS, pick_daily_content, t
from deps import get_store, require_user_id
from storage import (
    PRAYERS,
    KeyValueStore,
    pomodoro_key,
    prayers_key,
    reading_key,
    record_pomodoro_session,
    tasks_key,
    today_iso,
)

router = APIRouter(prefix="/api", tags=["dashboard"])


def collect_stats(store: KeyValueStore, user_id: str, day: str) -> dict:
    """Today's progress across prayers, tasks, pomodoro and reading."""
    prayers = store.get_json(prayers_key(user_id, day), {}) or {}
    prayers_completed = sum(1 for name in PRAYERS if prayers.get(name))

    tasks = store.get_json(tasks_key(user_id), []) or []
    tasks_completed = sum(
        1
        for task in tasks
        if task.get("completed") and str(task.get("createdAt") or "").startswith(day)
    )

    pomodoro = store.get_json(pomodoro_key(user_id, day), {}) or {}
    reading = store.get_json(reading_key(user_id, day), {}) or {}

    return {
        "tasks_completed": tasks_completed,
        "pomodoro_sessions": pomodoro.get("sessionsCompleted") or 0,
        "prayers_completed": prayers_completed,
        "reading_progress": reading.get("progress") or 0,
    }


@router.get("/dashboard")
def get_dashboard(
    language: Literal["en", "ar"] = "en",
    store: KeyValueStore = Depends(get_store),
    uid: str = Depends(require_user_id),
):
    day = today_iso()
    verse, quote = pick_daily_content(store, date_type.fromisoformat(day))
    return {
        "date": day,
        "verse": {**verse, "text": verse.get(language) or verse.get("en")},
        "wisdom": {**quote, "text": quote.get(language) or quote.get("en")},
        "stats": collect_stats(store, uid, day),
        "quick_access": [
            {"title": t(card["key"], language), "url": card["url"]} for card in QUICK_ACCESS
        ],
    }


@router.post("/dashboard/pomodoro/complete")
def complete_pomodoro(
    store: KeyValueStore = Depends(get_store),
    uid: str = Depends(require_user_id),
):
    """Record a focus interval finished by a client-side countdown."""
    count = record_pomodoro_session(store, uid, today_iso())
    return {"sessions_completed": count}
