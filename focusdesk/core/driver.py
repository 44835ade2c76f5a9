from __future__ import annotations

"""Periodic re-projection of a countdown onto the UI.

A driver polls once per second while its page is mounted, whether or not the
countdown runs, and owns the window-title override for as long as it runs.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from focusdesk.core.app_state import AppState, Notifier
from focusdesk.core.countdown import Projection, wall_clock_ms


logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class CountdownSource(ABC):
    baseline_title: str
    completion_heading: str
    completion_body: str

    @abstractmethod
    def projection(self, now_ms: int) -> Projection:
        """Project the persisted record at `now_ms`."""

    @abstractmethod
    def complete(self, now_ms: int) -> bool:
        """Apply the completion transition; True only if the record actually changed."""

    @abstractmethod
    def title_for(self, projection: Projection) -> str:
        """Window title shown while running."""


class TimerSource(CountdownSource):
    baseline_title = "FOCUS"
    completion_heading = "⏰ Time's up!"
    completion_body = "Your focus timer has finished. Take a break."

    def __init__(self, app_state: AppState) -> None:
        self._state = app_state

    def projection(self, now_ms: int) -> Projection:
        return self._state.timer_projection(now_ms)

    def complete(self, now_ms: int) -> bool:
        return self._state.complete_timer(now_ms)

    def title_for(self, projection: Projection) -> str:
        return f"{projection.clock_text} remaining - FOCUS"


class BlockingSource(CountdownSource):
    baseline_title = "FOCUS - Website Blocker"
    completion_heading = "✅ Focus Mode Ended"
    completion_body = "You can now access all websites"

    def __init__(self, app_state: AppState) -> None:
        self._state = app_state

    def projection(self, now_ms: int) -> Projection:
        return self._state.blocking_projection(now_ms)

    def complete(self, now_ms: int) -> bool:
        return self._state.complete_blocking(now_ms)

    def title_for(self, projection: Projection) -> str:
        return f"🚫 Focus Mode: {projection.minutes}:{projection.seconds:02d} - FOCUS"


class TitleAffordance:
    """Temporarily overrides a title and puts the baseline back on release."""

    def __init__(self, setter: Callable[[str], None], baseline: str) -> None:
        self._setter = setter
        self.baseline = baseline
        self._held = False
        self._current: str | None = None

    @property
    def held(self) -> bool:
        return self._held

    def acquire(self, text: str) -> None:
        if self._held and text == self._current:
            return
        self._setter(text)
        self._held = True
        self._current = text

    def release(self) -> None:
        if not self._held:
            return
        self._held = False
        self._current = None
        self._setter(self.baseline)


class CompletionEffects:
    """Fire-and-forget side effects of a countdown reaching zero."""

    def __init__(self, notifier: Notifier | None = None) -> None:
        self._notifier = notifier

    def fire(self, title: TitleAffordance, heading: str, body: str) -> None:
        self._attempt("title restore", title.release)
        if self._notifier is None:
            return
        self._attempt("notification", lambda: self._notifier.show(heading, body))
        self._attempt("sound", self._notifier.beep)

    @staticmethod
    def _attempt(label: str, action: Callable[[], None]) -> None:
        try:
            action()
        except Exception:
            logger.warning("Completion %s failed", label, exc_info=True)


class CountdownDriver(QObject):
    projection_changed = pyqtSignal(object)
    completed = pyqtSignal()

    def __init__(
        self,
        source: CountdownSource,
        title: TitleAffordance,
        effects: CompletionEffects | None = None,
        clock: Callable[[], int] = wall_clock_ms,
        interval_ms: int = TICK_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._source = source
        self._title = title
        self._effects = effects or CompletionEffects()
        self._clock = clock
        self._interval_ms = interval_ms
        self._poll: QTimer | None = None

    @property
    def is_mounted(self) -> bool:
        return self._poll is not None

    def mount(self) -> None:
        if self._poll is not None:
            return
        self._poll = QTimer(self)
        self._poll.setInterval(self._interval_ms)
        self._poll.timeout.connect(self.tick)
        self._poll.start()
        self.tick()

    def unmount(self) -> None:
        if self._poll is not None:
            self._poll.stop()
            self._poll.timeout.disconnect(self.tick)
            self._poll.deleteLater()
            self._poll = None
        self._title.release()

    def tick(self, now_ms: int | None = None) -> Projection:
        if now_ms is None:
            now_ms = self._clock()
        projection = self._source.projection(now_ms)
        if projection.is_running and projection.is_finished:
            if self._source.complete(now_ms):
                self._effects.fire(self._title, self._source.completion_heading, self._source.completion_body)
                self.completed.emit()
            projection = self._source.projection(now_ms)

        if projection.is_running:
            self._title.acquire(self._source.title_for(projection))
        else:
            self._title.release()
        self.projection_changed.emit(projection)
        return projection
