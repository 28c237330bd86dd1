"""
Task list stored as one array under `tasks_<user>`.
"""
import uuid

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from deps import get_store, require_user_id
from logging_handler import setup_logger
from storage import KeyValueStore, now_iso, tasks_key

logger = setup_logger(__name__)

router = APIRouter(prefix="/api", tags=["tasks"])


class CreateTaskRequest(BaseModel):
    title: str


class UpdateTaskRequest(BaseModel):
    completed: bool


@router.get("/tasks")
def list_tasks(
    store: KeyValueStore = Depends(get_store),
    uid: str = Depends(require_user_id),
):
    return store.get_json(tasks_key(uid), []) or []


@router.post("/tasks", status_code=201)
def add_task(
    req: CreateTaskRequest,
    store: KeyValueStore = Depends(get_store),
    uid: str = Depends(require_user_id),
):
    title = req.title.strip()
    if not title:
        raise HTTPException(status_code=400, detail="Task title is required")
    task = {
        "id": str(uuid.uuid4()),
        "title": title,
        "completed": False,
        "createdAt": now_iso(),
    }
    tasks = store.get_json(tasks_key(uid), []) or []
    tasks.append(task)
    store.set_json(tasks_key(uid), tasks)
    logger.info(f"Task {task['id']} added for user {uid}")
    return task


@router.patch("/tasks/{task_id}")
def update_task(
    task_id: str,
    req: UpdateTaskRequest,
    store: KeyValueStore = Depends(get_store),
    uid: str = Depends(require_user_id),
):
    """Mark a task done or not done."""
    tasks = store.get_json(tasks_key(uid), []) or []
    for task in tasks:
        if task.get("id") == task_id:
            task["completed"] = req.completed
            store.set_json(tasks_key(uid), tasks)
            return task
    raise HTTPException(status_code=404, detail="Task not found")


@router.delete("/tasks/{task_id}")
def delete_task(
    task_id: str,
    store: KeyValueStore = Depends(get_store),
    uid: str = Depends(require_user_id),
):
    tasks = store.get_json(tasks_key(uid), []) or []
    remaining = [t for t in tasks if t.get("id") != task_id]
    if len(remaining) == len(tasks):
        raise HTTPException(status_code=404, detail="Task not found")
    store.set_json(tasks_key(uid), remaining)
    logger.info(f"Task {task_id} deleted for user {uid}")
    return {"deleted": task_id}
