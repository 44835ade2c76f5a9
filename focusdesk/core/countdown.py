from __future__ import annotations

"""Countdown record, time projection and state transitions.

The remaining time of a running countdown is always derived from the
wall-clock instant it was started at, never decremented tick by tick, so a
window that was hidden, suspended or restarted still reports the right value.
"""

import logging
import math
import re
import time
from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any


logger = logging.getLogger(__name__)

DEFAULT_DURATION_MIN = 25
MIN_DURATION_MIN = 1
MAX_DURATION_MIN = 300
PRESET_MINUTES = (5, 15, 25)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


def is_timestamp(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return math.isfinite(value)
    return isinstance(value, int)


class CountdownPhase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(frozen=True)
class CountdownState:
    is_running: bool = False
    start_instant_ms: int | None = None
    baseline_remaining_sec: int = DEFAULT_DURATION_MIN * 60
    configured_duration_sec: int = DEFAULT_DURATION_MIN * 60
    last_completion_ms: int | None = None

    @property
    def phase(self) -> CountdownPhase:
        if self.is_running:
            return CountdownPhase.RUNNING
        if self.baseline_remaining_sec == 0 and self.last_completion_ms is not None:
            return CountdownPhase.COMPLETED
        return CountdownPhase.IDLE

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Any) -> "CountdownState":
        """Rebuilds a persisted record; anything malformed yields the default state."""
        if not isinstance(raw, dict):
            if raw is not None:
                logger.warning("Discarding malformed countdown record: %r", raw)
            return cls()
        try:
            is_running = raw.get("is_running", False)
            start = raw.get("start_instant_ms")
            baseline = raw.get("baseline_remaining_sec", DEFAULT_DURATION_MIN * 60)
            configured = raw.get("configured_duration_sec", DEFAULT_DURATION_MIN * 60)
            completed = raw.get("last_completion_ms")
            if not isinstance(is_running, bool):
                raise ValueError("is_running must be a bool")
            for name, value in (("baseline", baseline), ("configured", configured)):
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValueError(f"{name} must be an integer")
            for name, value in (("start", start), ("completion", completed)):
                if value is not None and not is_timestamp(value):
                    raise ValueError(f"{name} must be a timestamp")
            if configured < 1 or baseline < 0 or baseline > configured:
                raise ValueError("durations out of range")
            if is_running != (start is not None):
                raise ValueError("start instant must be present iff running")
        except ValueError as exc:
            logger.warning("Discarding malformed countdown record %r: %s", raw, exc)
            return cls()
        return cls(
            is_running=is_running,
            start_instant_ms=int(start) if start is not None else None,
            baseline_remaining_sec=baseline,
            configured_duration_sec=configured,
            last_completion_ms=int(completed) if completed is not None else None,
        )


@dataclass(frozen=True)
class Projection:
    remaining_seconds: int
    minutes: int
    seconds: int
    progress: float
    is_running: bool

    @property
    def is_finished(self) -> bool:
        return self.remaining_seconds == 0

    @property
    def clock_text(self) -> str:
        return format_clock(self.minutes, self.seconds)


def project(state: CountdownState, now_ms: int) -> Projection:
    """Derives display-ready remaining time from a record and the current instant."""
    remaining = state.baseline_remaining_sec
    if state.is_running and state.start_instant_ms is not None:
        elapsed_sec = max(0, int(now_ms - state.start_instant_ms) // 1000)
        remaining = max(0, state.baseline_remaining_sec - elapsed_sec)
    remaining = min(max(0, remaining), state.configured_duration_sec)
    total = state.configured_duration_sec
    progress = remaining / total if total > 0 else 0.0
    return Projection(
        remaining_seconds=remaining,
        minutes=remaining // 60,
        seconds=remaining % 60,
        progress=max(0.0, min(1.0, progress)),
        is_running=state.is_running,
    )


def start(state: CountdownState, now_ms: int) -> CountdownState:
    if state.is_running or state.baseline_remaining_sec <= 0:
        return state
    return replace(state, is_running=True, start_instant_ms=int(now_ms))


def pause(state: CountdownState, now_ms: int) -> CountdownState:
    if not state.is_running:
        return state
    remaining = project(state, now_ms).remaining_seconds
    return replace(state, is_running=False, start_instant_ms=None, baseline_remaining_sec=remaining)


def reset(state: CountdownState) -> CountdownState:
    return replace(
        state,
        is_running=False,
        start_instant_ms=None,
        baseline_remaining_sec=state.configured_duration_sec,
    )


def reconfigure(state: CountdownState, minutes: Any) -> CountdownState:
    duration_sec = parse_duration_minutes(minutes) * 60
    return reset(replace(state, configured_duration_sec=duration_sec))


def complete(state: CountdownState, now_ms: int) -> CountdownState:
    if not state.is_running or project(state, now_ms).remaining_seconds > 0:
        return state
    return replace(
        state,
        is_running=False,
        start_instant_ms=None,
        baseline_remaining_sec=0,
        last_completion_ms=int(now_ms),
    )


def parse_duration_minutes(value: Any) -> int:
    """Parses user input in minutes, substituting the default for anything unusable."""
    minutes: int | None = None
    if isinstance(value, bool):
        minutes = None
    elif isinstance(value, int):
        minutes = value
    elif isinstance(value, float) and math.isfinite(value):
        minutes = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            minutes = int(match.group(1))
    if minutes is None or not MIN_DURATION_MIN <= minutes <= MAX_DURATION_MIN:
        logger.info("Invalid duration %r, using %d minutes", value, DEFAULT_DURATION_MIN)
        return DEFAULT_DURATION_MIN
    return minutes


def format_clock(minutes: int, seconds: int) -> str:
    return f"{minutes:02d}:{seconds:02d}"
