from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Callable, Protocol

from PyQt6.QtCore import QObject, pyqtSignal

from focusdesk.core import blocking, countdown
from focusdesk.core.blocking import BlockedSite, BlockingSession
from focusdesk.core.countdown import CountdownState, Projection, wall_clock_ms
from focusdesk.core.motivation import QUOTES, Quote, StreakData, next_quote_index, register_visit
from focusdesk.data.storage import CourseRow, DebriefRow, PlannerTaskRow, Storage, TaskRow


logger = logging.getLogger(__name__)

TIMER_KEY = "pomodoro_timer"
BLOCKING_KEY = "blocking_session"
STREAK_KEY = "motivation_streak"
SETTINGS_KEY = "settings"


class Notifier(Protocol):
    def show(self, title: str, body: str) -> None: ...

    def beep(self) -> None: ...


def debrief_label(kind: str, today: date) -> str:
    if kind == "weekly":
        week_start = today - timedelta(days=(today.weekday() + 1) % 7)
        return f"Week of {week_start:%B} {week_start.day}, {week_start.year}"
    return f"{today:%A}, {today:%B} {today.day}, {today.year}"


class AppState(QObject):
    state_changed = pyqtSignal()
    timer_changed = pyqtSignal()
    blocking_changed = pyqtSignal()
    sites_changed = pyqtSignal()
    tasks_changed = pyqtSignal()
    planner_changed = pyqtSignal()
    courses_changed = pyqtSignal()
    debriefs_changed = pyqtSignal()
    settings_changed = pyqtSignal(str, object)

    def __init__(self, notifier: Notifier | None = None, clock: Callable[[], int] = wall_clock_ms) -> None:
        super().__init__()
        self.timer = CountdownState()
        self.blocking = BlockingSession()
        self.blocked_sites: list[BlockedSite] = []
        self.tasks: list[TaskRow] = []
        self.courses: list[CourseRow] = []
        self.debriefs: list[DebriefRow] = []
        self.streak = StreakData()
        self.quote_index = 0
        self.settings: dict[str, Any] = {}
        self.notifier = notifier
        self._clock = clock
        self._storage: Storage | None = None

    def load_from_storage(self, storage: Storage, today: date | None = None) -> None:
        self._storage = storage
        self.timer = CountdownState.from_dict(storage.get_setting(TIMER_KEY))
        self.blocking = BlockingSession.from_dict(storage.get_setting(BLOCKING_KEY))
        raw_settings = storage.get_setting(SETTINGS_KEY, {})
        self.settings = raw_settings if isinstance(raw_settings, dict) else {}
        self.streak = register_visit(StreakData.from_dict(storage.get_setting(STREAK_KEY)), today or date.today())
        storage.set_setting(STREAK_KEY, self.streak.to_dict())
        self.blocked_sites = storage.list_blocked_sites()
        self.tasks = storage.list_tasks()
        self.courses = storage.list_courses()
        self.debriefs = storage.list_debriefs()
        self.timer_changed.emit()
        self.blocking_changed.emit()
        self.sites_changed.emit()
        self.tasks_changed.emit()
        self.planner_changed.emit()
        self.courses_changed.emit()
        self.debriefs_changed.emit()
        self.state_changed.emit()

    def now_ms(self) -> int:
        return self._clock()

    def save_setting(self, key: str, value: Any) -> None:
        self.settings[key] = value
        if self._storage:
            self._storage.set_setting(SETTINGS_KEY, self.settings)
        self.settings_changed.emit(key, value)
        self.state_changed.emit()

    # Pomodoro timer

    def timer_projection(self, now_ms: int | None = None) -> Projection:
        return countdown.project(self.timer, self._resolve(now_ms))

    def start_timer(self, now_ms: int | None = None) -> bool:
        return self._apply_timer(countdown.start(self.timer, self._resolve(now_ms)), "start")

    def pause_timer(self, now_ms: int | None = None) -> bool:
        return self._apply_timer(countdown.pause(self.timer, self._resolve(now_ms)), "pause")

    def reset_timer(self) -> bool:
        return self._apply_timer(countdown.reset(self.timer), "reset")

    def reconfigure_timer(self, minutes: Any) -> bool:
        return self._apply_timer(countdown.reconfigure(self.timer, minutes), "reconfigure")

    def complete_timer(self, now_ms: int | None = None) -> bool:
        return self._apply_timer(countdown.complete(self.timer, self._resolve(now_ms)), "complete")

    def _apply_timer(self, new_state: CountdownState, action: str) -> bool:
        if new_state == self.timer:
            logger.debug("Timer %s ignored in phase %s", action, self.timer.phase.value)
            return False
        self.timer = new_state
        self._persist(TIMER_KEY, new_state.to_dict())
        logger.debug("Timer %s -> %s", action, new_state)
        self.timer_changed.emit()
        self.state_changed.emit()
        return True

    # Blocking session

    def blocking_projection(self, now_ms: int | None = None) -> Projection:
        return blocking.project_session(self.blocking, self._resolve(now_ms))

    def start_blocking(self, minutes: Any, now_ms: int | None = None) -> bool:
        if not self._apply_blocking(blocking.start_session(self.blocking, minutes, self._resolve(now_ms)), "start"):
            return False
        self.notify("🚫 Focus Mode Activated", f"Website blocking active for {self.blocking.duration_min} minutes")
        return True

    def end_blocking(self) -> bool:
        if not self.blocking.is_active:
            return False
        self._apply_blocking(blocking.end_session(self.blocking), "end")
        self.notify("✅ Focus Mode Ended", "You can now access all websites")
        return True

    def complete_blocking(self, now_ms: int | None = None) -> bool:
        return self._apply_blocking(blocking.expire(self.blocking, self._resolve(now_ms)), "expire")

    def check_url(self, url: str, now_ms: int | None = None) -> BlockedSite | None:
        """Advisory check: returns the matching site while focus mode is running."""
        if not self.blocking.is_active or self.blocking_projection(now_ms).is_finished:
            return None
        site = blocking.match_site(self.blocked_sites, url)
        if site is None or not self._storage:
            return site
        self._storage.increment_blocked_count(site.id)
        self._reload_sites()
        return next((s for s in self.blocked_sites if s.id == site.id), site)

    def _apply_blocking(self, new_session: BlockingSession, action: str) -> bool:
        if new_session == self.blocking:
            return False
        self.blocking = new_session
        self._persist(BLOCKING_KEY, new_session.to_dict())
        logger.debug("Blocking session %s -> %s", action, new_session)
        self.blocking_changed.emit()
        self.state_changed.emit()
        return True

    def add_blocked_site(self, url: str, name: str = "") -> bool:
        if not self._storage:
            return False
        try:
            self._storage.create_blocked_site(url, name)
        except ValueError as exc:
            logger.info("Blocked site rejected: %s", exc)
            return False
        self._reload_sites()
        return True

    def remove_blocked_site(self, site_id: int) -> None:
        if not self._storage:
            return
        self._storage.delete_blocked_site(site_id)
        self._reload_sites()

    def _reload_sites(self) -> None:
        if self._storage:
            self.blocked_sites = self._storage.list_blocked_sites()
        self.sites_changed.emit()
        self.state_changed.emit()

    # Notifications

    def notify(self, title: str, body: str) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier.show(title, body)
        except Exception:
            logger.warning("Notification %r failed", title, exc_info=True)

    # Tasks

    def add_task(self, name: str, description: str = "") -> bool:
        if not self._storage:
            return False
        try:
            self._storage.create_task(name, description)
        except ValueError:
            return False
        self._reload_tasks()
        return True

    def set_task_done(self, task_id: int, done: bool) -> None:
        if not self._storage:
            return
        self._storage.set_task_done(task_id, done)
        self._reload_tasks()

    def remove_task(self, task_id: int) -> None:
        if not self._storage:
            return
        self._storage.delete_task(task_id)
        self._reload_tasks()

    def _reload_tasks(self) -> None:
        if self._storage:
            self.tasks = self._storage.list_tasks()
        self.tasks_changed.emit()
        self.state_changed.emit()

    # Planner

    def planner_tasks_for(self, day: date) -> list[PlannerTaskRow]:
        if not self._storage:
            return []
        return self._storage.list_planner_tasks(day.isoformat())

    def planner_days(self) -> set[str]:
        return self._storage.planner_days() if self._storage else set()

    def add_planner_task(self, title: str, day: date, time: str = "", description: str = "") -> bool:
        if not self._storage:
            return False
        try:
            self._storage.create_planner_task(title, day.isoformat(), time, description)
        except ValueError:
            return False
        self.planner_changed.emit()
        self.state_changed.emit()
        return True

    def remove_planner_task(self, task_id: int) -> None:
        if not self._storage:
            return
        self._storage.delete_planner_task(task_id)
        self.planner_changed.emit()
        self.state_changed.emit()

    # Courses

    def add_course(self, title: str) -> bool:
        if not self._storage:
            return False
        try:
            self._storage.create_course(title)
        except ValueError:
            return False
        self._reload_courses()
        return True

    def update_course_progress(self, course_id: int, progress: int) -> None:
        if not self._storage:
            return
        self._storage.set_course_progress(course_id, progress)
        self._reload_courses()

    def remove_course(self, course_id: int) -> None:
        if not self._storage:
            return
        self._storage.delete_course(course_id)
        self._reload_courses()

    def _reload_courses(self) -> None:
        if self._storage:
            self.courses = self._storage.list_courses()
        self.courses_changed.emit()
        self.state_changed.emit()

    # Debriefs

    def save_debrief(self, kind: str, what_done: str, what_needs: str, today: date | None = None) -> bool:
        if not self._storage:
            return False
        label = debrief_label(kind, today or date.today())
        try:
            self._storage.create_debrief(kind, label, what_done, what_needs)
        except ValueError:
            return False
        self.debriefs = self._storage.list_debriefs()
        self.debriefs_changed.emit()
        self.state_changed.emit()
        return True

    # Motivation

    @property
    def current_quote(self) -> Quote:
        return QUOTES[self.quote_index]

    def next_quote(self) -> Quote:
        self.quote_index = next_quote_index(self.quote_index)
        self.state_changed.emit()
        return self.current_quote

    # Profile

    def save_profile(self, name: str, email: str) -> None:
        self.save_setting("profile", {"name": name.strip(), "email": email.strip()})

    @property
    def profile(self) -> dict[str, str]:
        raw = self.settings.get("profile")
        if not isinstance(raw, dict):
            return {"name": "", "email": ""}
        return {"name": str(raw.get("name", "")), "email": str(raw.get("email", ""))}

    def _resolve(self, now_ms: int | None) -> int:
        return self._clock() if now_ms is None else now_ms

    def _persist(self, key: str, value: Any) -> None:
        if self._storage:
            self._storage.set_setting(key, value)
