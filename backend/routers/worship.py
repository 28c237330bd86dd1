"""
Daily prayer checklist and reading progress, one record per user per day.
"""
from datetime import date as date_type
from typing import Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from deps import get_store, require_user_id
from storage import PRAYERS, KeyValueStore, prayers_key, reading_key, today_iso

router = APIRouter(prefix="/api", tags=["worship"])

PrayerName = Literal["fajr", "dhuhr", "asr", "maghrib", "isha"]


class PrayerRequest(BaseModel):
    completed: bool


class ReadingRequest(BaseModel):
    progress: int


def _day(day: Optional[date_type]) -> str:
    return day.isoformat() if day else today_iso()


@router.get("/prayers")
def get_prayers(
    date: Optional[date_type] = None,
    store: KeyValueStore = Depends(get_store),
    uid: str = Depends(require_user_id),
):
    stored = store.get_json(prayers_key(uid, _day(date)), {}) or {}
    return {name: bool(stored.get(name)) for name in PRAYERS}


@router.put("/prayers/{name}")
def set_prayer(
    name: PrayerName,
    req: PrayerRequest,
    date: Optional[date_type] = None,
    store: KeyValueStore = Depends(get_store),
    uid: str = Depends(require_user_id),
):
    key = prayers_key(uid, _day(date))
    stored = store.get_json(key, {}) or {}
    stored[name] = req.completed
    store.set_json(key, stored)
    return {p: bool(stored.get(p)) for p in PRAYERS}


@router.get("/reading")
def get_reading(
    date: Optional[date_type] = None,
    store: KeyValueStore = Depends(get_store),
    uid: str = Depends(require_user_id),
):
    stored = store.get_json(reading_key(uid, _day(date)), {}) or {}
    return {"progress": stored.get("progress") or 0}


@router.put("/reading")
def set_reading(
    req: ReadingRequest,
    date: Optional[date_type] = None,
    store: KeyValueStore = Depends(get_store),
    uid: str = Depends(require_user_id),
):
    key = reading_key(uid, _day(date))
    stored = store.get_json(key, {}) or {}
    stored["progress"] = req.progress
    store.set_json(key, stored)
    return {"progress": req.progress}
