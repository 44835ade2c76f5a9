from __future__ import annotations

"""Focus-mode blocking session and the advisory blocked-site check."""

import logging
import re
from dataclasses import asdict, dataclass, replace
from typing import Any

from focusdesk.core.countdown import (
    DEFAULT_DURATION_MIN,
    MAX_DURATION_MIN,
    MIN_DURATION_MIN,
    CountdownState,
    Projection,
    is_timestamp,
    parse_duration_minutes,
    project,
)


logger = logging.getLogger(__name__)

_SCHEME_PREFIX = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)


@dataclass(frozen=True)
class BlockingSession:
    is_active: bool = False
    start_instant_ms: int | None = None
    duration_min: int = DEFAULT_DURATION_MIN

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Any) -> "BlockingSession":
        if not isinstance(raw, dict):
            if raw is not None:
                logger.warning("Discarding malformed blocking session: %r", raw)
            return cls()
        is_active = raw.get("is_active", False)
        start = raw.get("start_instant_ms")
        duration = raw.get("duration_min", DEFAULT_DURATION_MIN)
        valid = (
            isinstance(is_active, bool)
            and (start is None or is_timestamp(start))
            and isinstance(duration, int)
            and not isinstance(duration, bool)
            and MIN_DURATION_MIN <= duration <= MAX_DURATION_MIN
            and is_active == (start is not None)
        )
        if not valid:
            logger.warning("Discarding malformed blocking session: %r", raw)
            return cls()
        return cls(
            is_active=is_active,
            start_instant_ms=int(start) if start is not None else None,
            duration_min=duration,
        )


@dataclass(frozen=True)
class BlockedSite:
    id: int
    url: str
    name: str
    added_at: str
    blocked_count: int


def start_session(session: BlockingSession, minutes: Any, now_ms: int) -> BlockingSession:
    if session.is_active:
        return session
    return BlockingSession(
        is_active=True,
        start_instant_ms=int(now_ms),
        duration_min=parse_duration_minutes(minutes),
    )


def end_session(session: BlockingSession) -> BlockingSession:
    """Stops the session; the elapsed part is discarded, a new one starts fresh."""
    return replace(session, is_active=False, start_instant_ms=None)


def as_countdown(session: BlockingSession) -> CountdownState:
    duration_sec = session.duration_min * 60
    return CountdownState(
        is_running=session.is_active,
        start_instant_ms=session.start_instant_ms if session.is_active else None,
        baseline_remaining_sec=duration_sec,
        configured_duration_sec=duration_sec,
    )


def project_session(session: BlockingSession, now_ms: int) -> Projection:
    return project(as_countdown(session), now_ms)


def expire(session: BlockingSession, now_ms: int) -> BlockingSession:
    if not session.is_active or project_session(session, now_ms).remaining_seconds > 0:
        return session
    return end_session(session)


def normalize_url(url: str) -> str:
    """Reduces a url or host to the bare lowercase host, e.g. `https://www.YouTube.com/x` -> `youtube.com`."""
    host = _SCHEME_PREFIX.sub("", url.strip())
    host = re.split(r"[/?#]", host, maxsplit=1)[0].lower()
    if host.startswith("www."):
        host = host[4:]
    return host


def match_site(sites: list[BlockedSite], url: str) -> BlockedSite | None:
    host = normalize_url(url)
    if not host:
        return None
    for site in sites:
        if site.url and site.url in host:
            return site
    return None
