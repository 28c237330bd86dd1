"""
Pomodoro timer endpoints, one timer per user.

Handlers are async so they run on the event loop alongside the ticker;
timer state is never touched from worker threads.
"""
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from deps import get_timers, require_user_id
from timer import TimerRegistry

router = APIRouter(prefix="/api", tags=["timer"])


class PermissionRequest(BaseModel):
    permission: Literal["default", "granted", "denied"]


@router.get("/timer")
async def get_timer(
    timers: TimerRegistry = Depends(get_timers),
    uid: str = Depends(require_user_id),
):
    timer = timers.peek(uid)
    return timer.status() if timer is not None else timers.idle_status()


@router.post("/timer/toggle")
async def toggle_timer(
    timers: TimerRegistry = Depends(get_timers),
    uid: str = Depends(require_user_id),
):
    """Start or pause the countdown."""
    timer = timers.get(uid)
    timer.toggle()
    return timer.status()


@router.post("/timer/reset")
async def reset_timer(
    timers: TimerRegistry = Depends(get_timers),
    uid: str = Depends(require_user_id),
):
    """Back to a stopped focus interval at full length."""
    timer = timers.get(uid)
    timer.reset()
    return timer.status()


@router.get("/timer/notifications")
async def drain_notifications(
    timers: TimerRegistry = Depends(get_timers),
    uid: str = Depends(require_user_id),
):
    """Pending desktop notifications; each one is returned once."""
    timer = timers.peek(uid)
    if timer is None:
        return {"permission": "default", "permission_requested": False, "notifications": []}
    notifier = timer.notifier
    return {
        "permission": notifier.permission,
        "permission_requested": notifier.permission_requested,
        "notifications": notifier.drain(),
    }


@router.put("/timer/notifications/permission")
async def set_notification_permission(
    req: PermissionRequest,
    timers: TimerRegistry = Depends(get_timers),
    uid: str = Depends(require_user_id),
):
    notifier = timers.get(uid).notifier
    notifier.set_permission(req.permission)
    return {"permission": notifier.permission}
