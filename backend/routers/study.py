"""
Study tracker: per-user courses and per-course daily metrics.

Courses live as one list under `courses_<user>`; each (course, day) has one
metrics record under `metrics_<user>_<course>_<date>`, rewritten wholesale
on every field edit.
"""
import uuid
from datetime import date as date_type
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel

from deps import get_store, require_user_id
from logging_handler import setup_logger
from storage import KeyValueStore, courses_key, metrics_key, now_iso, today_iso

logger = setup_logger(__name__)

router = APIRouter(prefix="/api", tags=["study"])

DEFAULT_COURSE_COLOR = "#D4AF37"
METRIC_FIELDS = ("metric1", "metric2", "metric3", "metric4", "metric5")


class CreateCourseRequest(BaseModel):
    name: str
    color: str = DEFAULT_COURSE_COLOR


class MetricValueRequest(BaseModel):
    value: int


def _load_courses(store: KeyValueStore, uid: str) -> list[dict]:
    return store.get_json(courses_key(uid), []) or []


def _find_course(store: KeyValueStore, uid: str, course_id: str) -> dict:
    for course in _load_courses(store, uid):
        if course.get("id") == course_id:
            return course
    raise HTTPException(status_code=404, detail="Course not found")


def _day(day: Optional[date_type]) -> str:
    return day.isoformat() if day else today_iso()


def _fresh_metrics(uid: str, course_id: str, day: str) -> dict:
    record = {
        "id": str(uuid.uuid4()),
        "userId": uid,
        "courseId": course_id,
        "date": day,
    }
    record.update({field: 0 for field in METRIC_FIELDS})
    return record


@router.get("/courses")
def list_courses(
    store: KeyValueStore = Depends(get_store),
    uid: str = Depends(require_user_id),
):
    """All courses for this user, in creation order."""
    return _load_courses(store, uid)


@router.post("/courses", status_code=201)
def add_course(
    req: CreateCourseRequest,
    store: KeyValueStore = Depends(get_store),
    uid: str = Depends(require_user_id),
):
    if not req.name.strip():
        raise HTTPException(status_code=400, detail="Course name is required")
    course = {
        "id": str(uuid.uuid4()),
        "userId": uid,
        "name": req.name,
        "color": req.color or DEFAULT_COURSE_COLOR,
        "createdAt": now_iso(),
    }
    courses = _load_courses(store, uid)
    courses.append(course)
    store.set_json(courses_key(uid), courses)
    logger.info(f"Course {course['id']} added for user {uid}")
    return course


@router.delete("/courses/{course_id}")
def delete_course(
    course_id: str,
    store: KeyValueStore = Depends(get_store),
    uid: str = Depends(require_user_id),
):
    """Remove a course. Its daily metrics records are left in place."""
    courses = _load_courses(store, uid)
    remaining = [c for c in courses if c.get("id") != course_id]
    if len(remaining) == len(courses):
        raise HTTPException(status_code=404, detail="Course not found")
    store.set_json(courses_key(uid), remaining)
    logger.info(f"Course {course_id} deleted for user {uid}")
    return {"deleted": course_id}


@router.get("/courses/{course_id}/metrics")
def get_metrics(
    course_id: str,
    date: Optional[date_type] = None,
    store: KeyValueStore = Depends(get_store),
    uid: str = Depends(require_user_id),
):
    """
    Daily metrics for a course (today by default).
    Returns a zeroed record when nothing is stored yet; it is not saved until edited.
    """
    _find_course(store, uid, course_id)
    day = _day(date)
    stored = store.get_json(metrics_key(uid, course_id, day))
    return stored if stored is not None else _fresh_metrics(uid, course_id, day)


@router.put("/courses/{course_id}/metrics/{metric}")
def update_metric(
    course_id: str,
    req: MetricValueRequest,
    metric: str = Path(pattern=r"^metric[1-5]$"),
    date: Optional[date_type] = None,
    store: KeyValueStore = Depends(get_store),
    uid: str = Depends(require_user_id),
):
    """Set one metric and save the whole record."""
    _find_course(store, uid, course_id)
    day = _day(date)
    key = metrics_key(uid, course_id, day)
    record = store.get_json(key) or _fresh_metrics(uid, course_id, day)
    record[metric] = req.value
    store.set_json(key, record)
    return record
