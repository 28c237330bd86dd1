"""
Pomodoro countdown: a focus/break oscillator ticked once per second.

One PomodoroTimer per user lives in a TimerRegistry; a single asyncio task
(run_ticker) drives all of them.
"""
import asyncio
import time
from collections import deque
from enum import Enum
from typing import Callable, Optional

from fastapi.concurrency import run_in_threadpool
from sqlmodel import Session

from logging_handler import setup_logger
from storage import KeyValueStore, record_pomodoro_session, today_iso

logger = setup_logger(__name__)

DEFAULT_FOCUS_SECONDS = 25 * 60
DEFAULT_BREAK_SECONDS = 5 * 60


class Phase(str, Enum):
    FOCUS = "focus"
    BREAK = "break"


class NotificationInbox:
    """
    Server-side stand-in for the browser Notification API.

    `permission` mirrors the browser's value ("default", "granted", "denied").
    Notifications raised while permission is granted queue up here until the
    client drains them.
    """

    PERMISSIONS = ("default", "granted", "denied")

    def __init__(self, permission: str = "default", maxlen: int = 20):
        if permission not in self.PERMISSIONS:
            raise ValueError(f"Unknown notification permission: {permission!r}")
        self.permission = permission
        self.permission_requested = False
        self._pending: deque[dict] = deque(maxlen=maxlen)

    def request_permission(self) -> None:
        self.permission_requested = True

    def set_permission(self, permission: str) -> None:
        if permission not in self.PERMISSIONS:
            raise ValueError(f"Unknown notification permission: {permission!r}")
        self.permission = permission
        self.permission_requested = False

    def notify(self, title: str, body: str) -> None:
        self._pending.append({"title": title, "body": body})

    @property
    def pending(self) -> int:
        return len(self._pending)

    def drain(self) -> list[dict]:
        items = list(self._pending)
        self._pending.clear()
        return items


class PomodoroTimer:
    """
    Two-state countdown (focus/break) with fixed durations.

    Ticking through a focus interval increments `sessions`, fires
    `on_session_complete`, switches to break and stops. Ticking through a
    break switches back to focus and stops, without counting a session.
    """

    def __init__(
        self,
        focus_seconds: int = DEFAULT_FOCUS_SECONDS,
        break_seconds: int = DEFAULT_BREAK_SECONDS,
        on_session_complete: Optional[Callable[[], None]] = None,
        notifier: Optional[NotificationInbox] = None,
    ):
        if focus_seconds <= 0 or break_seconds <= 0:
            raise ValueError("Focus and break durations must be positive")
        self.focus_seconds = focus_seconds
        self.break_seconds = break_seconds
        self.on_session_complete = on_session_complete
        self.notifier = notifier

        self.time_left = focus_seconds
        self.is_running = False
        self.is_break = False
        self.sessions = 0

    @property
    def phase(self) -> Phase:
        return Phase.BREAK if self.is_break else Phase.FOCUS

    def toggle(self) -> None:
        """Start or pause. Asks for notification permission on the first start."""
        if not self.is_running and self.notifier is not None and self.notifier.permission == "default":
            self.notifier.request_permission()
        self.is_running = not self.is_running

    def reset(self) -> None:
        self.is_running = False
        self.is_break = False
        self.time_left = self.focus_seconds

    def tick(self) -> bool:
        """
        Advance the countdown by one second.

        Returns:
            bool: True when the current phase ended on this tick.
        """
        if not self.is_running:
            return False
        if self.time_left > 0:
            self.time_left -= 1
        if self.time_left > 0:
            return False
        self._finish_phase()
        return True

    def _finish_phase(self) -> None:
        was_break = self.is_break
        self.is_running = False
        if was_break:
            self.is_break = False
            self.time_left = self.focus_seconds
        else:
            self.sessions += 1
            self.is_break = True
            self.time_left = self.break_seconds

        if self.notifier is not None and self.notifier.permission == "granted":
            if was_break:
                self.notifier.notify("Break Complete!", "Time to get back to work!")
            else:
                self.notifier.notify("Session Complete!", "Time for a break!")

        if not was_break and self.on_session_complete is not None:
            self.on_session_complete()

    def status(self) -> dict:
        total = self.break_seconds if self.is_break else self.focus_seconds
        minutes, seconds = divmod(self.time_left, 60)
        return {
            "time_left": self.time_left,
            "display": f"{minutes:02d}:{seconds:02d}",
            "phase": self.phase.value,
            "is_running": self.is_running,
            "is_break": self.is_break,
            "sessions": self.sessions,
            "progress": round((total - self.time_left) / total * 100, 2),
        }


class TimerRegistry:
    """
    One timer per user, created on first write access.

    Timers only change on the event loop. A focus interval that ends during
    `tick_all` is reported back to the caller, which persists it with
    `record_session` off the loop. Timers left idle (stopped at a full focus
    interval, nothing queued) for `idle_ttl` seconds are dropped; their
    session count goes with them.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        focus_seconds: int = DEFAULT_FOCUS_SECONDS,
        break_seconds: int = DEFAULT_BREAK_SECONDS,
        idle_ttl: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if focus_seconds <= 0 or break_seconds <= 0:
            raise ValueError("Focus and break durations must be positive")
        self._session_factory = session_factory
        self.focus_seconds = focus_seconds
        self.break_seconds = break_seconds
        self.idle_ttl = idle_ttl
        self._clock = clock
        self._timers: dict[str, PomodoroTimer] = {}
        self._last_seen: dict[str, float] = {}
        self._completed: list[str] = []

    def get(self, user_id: str) -> PomodoroTimer:
        timer = self._timers.get(user_id)
        if timer is None:
            timer = PomodoroTimer(
                focus_seconds=self.focus_seconds,
                break_seconds=self.break_seconds,
                on_session_complete=lambda: self._completed.append(user_id),
                notifier=NotificationInbox(),
            )
            self._timers[user_id] = timer
        self._last_seen[user_id] = self._clock()
        return timer

    def peek(self, user_id: str) -> Optional[PomodoroTimer]:
        """The user's timer if one exists; never creates one."""
        timer = self._timers.get(user_id)
        if timer is not None:
            self._last_seen[user_id] = self._clock()
        return timer

    def idle_status(self) -> dict:
        """Status of a timer nobody has started yet."""
        return PomodoroTimer(self.focus_seconds, self.break_seconds).status()

    def __len__(self) -> int:
        return len(self._timers)

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._timers

    def _is_idle(self, timer: PomodoroTimer) -> bool:
        return (
            not timer.is_running
            and not timer.is_break
            and timer.time_left == timer.focus_seconds
            and not (timer.notifier and timer.notifier.pending)
        )

    def record_session(self, user_id: str) -> int:
        """Persist one completed focus interval. Blocking; keep it off the event loop."""
        with self._session_factory() as session:
            count = record_pomodoro_session(KeyValueStore(session), user_id, today_iso())
        logger.info(f"Pomodoro session completed for user {user_id} ({count} today)")
        return count

    def tick_all(self) -> list[str]:
        """
        Tick every timer once and evict idle ones.

        Returns:
            list[str]: user ids whose focus interval ended on this tick.
        """
        now = self._clock()
        for user_id, timer in list(self._timers.items()):
            try:
                timer.tick()
            except Exception:
                logger.exception(f"Timer tick failed for user {user_id}")
            if self._is_idle(timer) and now - self._last_seen.get(user_id, now) >= self.idle_ttl:
                del self._timers[user_id]
                self._last_seen.pop(user_id, None)

        completed, self._completed = self._completed, []
        return completed


async def _persist(registry: TimerRegistry, user_id: str) -> None:
    try:
        await run_in_threadpool(registry.record_session, user_id)
    except Exception:
        logger.exception(f"Could not record pomodoro session for user {user_id}")


async def run_ticker(registry: TimerRegistry, interval: float = 1.0) -> None:
    """
    Tick every registered timer once per `interval` seconds until cancelled.
    Completed sessions are written from the threadpool; pending writes are
    awaited on shutdown.
    """
    logger.info("Pomodoro ticker started")
    writes: set[asyncio.Task] = set()
    try:
        while True:
            await asyncio.sleep(interval)
            for user_id in registry.tick_all():
                task = asyncio.create_task(_persist(registry, user_id))
                writes.add(task)
                task.add_done_callback(writes.discard)
    finally:
        if writes:
            await asyncio.gather(*writes, return_exceptions=True)
        logger.info("Pomodoro ticker stopped")
