from __future__ import annotations

"""Quote rotation and the daily visit streak."""

import logging
from dataclasses import asdict, dataclass
from datetime import date, timedelta
from typing import Any


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Quote:
    text: str
    author: str


QUOTES: tuple[Quote, ...] = (
    Quote("The only way to do great work is to love what you do.", "Steve Jobs"),
    Quote("Success is not final, failure is not fatal: it is the courage to continue that counts.", "Winston Churchill"),
    Quote("Believe you can and you're halfway there.", "Theodore Roosevelt"),
    Quote("The future belongs to those who believe in the beauty of their dreams.", "Eleanor Roosevelt"),
    Quote("It does not matter how slowly you go as long as you do not stop.", "Confucius"),
    Quote("Everything you've ever wanted is on the other side of fear.", "George Addair"),
    Quote("Success is not how high you have climbed, but how you make a positive difference to the world.", "Roy T. Bennett"),
    Quote("Don't watch the clock; do what it does. Keep going.", "Sam Levenson"),
)


def next_quote_index(index: int) -> int:
    return (index + 1) % len(QUOTES)


@dataclass(frozen=True)
class StreakData:
    current_streak: int = 0
    last_visit: str = ""
    longest_streak: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Any) -> "StreakData":
        if not isinstance(raw, dict):
            return cls()
        try:
            return cls(
                current_streak=max(0, int(raw.get("current_streak", 0))),
                last_visit=str(raw.get("last_visit", "")),
                longest_streak=max(0, int(raw.get("longest_streak", 0))),
            )
        except (TypeError, ValueError):
            logger.warning("Discarding malformed streak data: %r", raw)
            return cls()


def register_visit(data: StreakData, today: date) -> StreakData:
    """Counts a visit: same day keeps the streak, the next day extends it, a gap restarts it."""
    today_str = today.isoformat()
    if data.last_visit == today_str:
        return data
    if data.last_visit == (today - timedelta(days=1)).isoformat():
        streak = data.current_streak + 1
    else:
        streak = 1
    return StreakData(
        current_streak=streak,
        last_visit=today_str,
        longest_streak=max(streak, data.longest_streak),
    )


def streak_message(streak: int) -> str:
    if streak == 0:
        return "Start your journey today!"
    if streak == 1:
        return "Great start!"
    if streak < 7:
        return "Building momentum!"
    if streak < 30:
        return "You're on fire!"
    if streak < 100:
        return "Absolutely crushing it!"
    return "Legendary streak!"
