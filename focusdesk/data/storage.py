from __future__ import annotations

"""SQLite storage: JSON key-value settings plus the dashboard's CRUD tables."""

import json
import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator

from focusdesk.core.blocking import BlockedSite, normalize_url


logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
DEBRIEF_KINDS = ("daily", "weekly")


@dataclass(frozen=True)
class TaskRow:
    id: int
    name: str
    description: str
    is_done: bool
    created_at: str


@dataclass(frozen=True)
class PlannerTaskRow:
    id: int
    title: str
    day: str
    time: str
    description: str


@dataclass(frozen=True)
class CourseRow:
    id: int
    title: str
    progress: int


@dataclass(frozen=True)
class DebriefRow:
    id: int
    kind: str
    label: str
    what_done: str
    what_needs: str
    created_at: str


def _now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


class Storage:
    """Owns the SQLite file; every public call opens its own connection."""
    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA journal_mode = WAL;")
        except sqlite3.DatabaseError:
            pass
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @contextmanager
    def _reader(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
        finally:
            conn.close()

    def init_db(self) -> None:
        """Creates every table on first launch."""
        with self._transaction() as conn:
            conn.execute("CREATE TABLE IF NOT EXISTS schema_version (version INTEGER NOT NULL)")
            row = conn.execute("SELECT version FROM schema_version LIMIT 1").fetchone()
            if not row:
                conn.execute("INSERT INTO schema_version(version) VALUES (?)", (SCHEMA_VERSION,))
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS settings(
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks(
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    is_done INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS planner_tasks(
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    day TEXT NOT NULL,
                    time TEXT NOT NULL DEFAULT '',
                    description TEXT NOT NULL DEFAULT ''
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS courses(
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    progress INTEGER NOT NULL DEFAULT 0 CHECK(progress BETWEEN 0 AND 100)
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS debriefs(
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    kind TEXT NOT NULL CHECK(kind IN ('daily', 'weekly')),
                    label TEXT NOT NULL,
                    what_done TEXT NOT NULL DEFAULT '',
                    what_needs TEXT NOT NULL DEFAULT '',
                    created_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS blocked_sites(
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    url TEXT NOT NULL UNIQUE,
                    name TEXT NOT NULL,
                    added_at TEXT NOT NULL,
                    blocked_count INTEGER NOT NULL DEFAULT 0
                )
                """
            )

    def get_setting(self, key: str, default: Any = None) -> Any:
        with self._reader() as conn:
            row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        if not row:
            return default
        raw = row["value"]
        try:
            return json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            logger.warning("Setting %r holds invalid JSON", key)
            return raw

    def set_setting(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO settings(key, value) VALUES(?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (key, payload),
            )

    def list_tasks(self) -> list[TaskRow]:
        with self._reader() as conn:
            rows = conn.execute(
                "SELECT id, name, description, is_done, created_at FROM tasks ORDER BY id ASC"
            ).fetchall()
        return [
            TaskRow(
                id=row["id"],
                name=row["name"],
                description=row["description"],
                is_done=bool(row["is_done"]),
                created_at=row["created_at"],
            )
            for row in rows
        ]

    def create_task(self, name: str, description: str = "") -> int:
        clean_name = name.strip()
        if not clean_name:
            raise ValueError("Task name cannot be empty")
        with self._transaction() as conn:
            cursor = conn.execute(
                "INSERT INTO tasks(name, description, is_done, created_at) VALUES (?, ?, 0, ?)",
                (clean_name, description.strip(), _now_iso()),
            )
            return int(cursor.lastrowid)

    def set_task_done(self, task_id: int, is_done: bool) -> None:
        with self._transaction() as conn:
            conn.execute("UPDATE tasks SET is_done = ? WHERE id = ?", (int(is_done), task_id))

    def delete_task(self, task_id: int) -> None:
        with self._transaction() as conn:
            conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))

    def list_planner_tasks(self, day: str | None = None) -> list[PlannerTaskRow]:
        """Returns planner entries, optionally for one `YYYY-MM-DD` day, ordered by time."""
        query = "SELECT id, title, day, time, description FROM planner_tasks"
        params: tuple[Any, ...] = ()
        if day is not None:
            query += " WHERE day = ?"
            params = (day,)
        query += " ORDER BY day ASC, time ASC, id ASC"
        with self._reader() as conn:
            rows = conn.execute(query, params).fetchall()
        return [
            PlannerTaskRow(
                id=row["id"],
                title=row["title"],
                day=row["day"],
                time=row["time"],
                description=row["description"],
            )
            for row in rows
        ]

    def create_planner_task(self, title: str, day: str, time: str = "", description: str = "") -> int:
        clean_title = title.strip()
        if not clean_title:
            raise ValueError("Planner task title cannot be empty")
        try:
            datetime.strptime(day, "%Y-%m-%d")
        except ValueError as exc:
            raise ValueError(f"Invalid planner day: {day!r}") from exc
        with self._transaction() as conn:
            cursor = conn.execute(
                "INSERT INTO planner_tasks(title, day, time, description) VALUES (?, ?, ?, ?)",
                (clean_title, day, time.strip(), description.strip()),
            )
            return int(cursor.lastrowid)

    def delete_planner_task(self, task_id: int) -> None:
        with self._transaction() as conn:
            conn.execute("DELETE FROM planner_tasks WHERE id = ?", (task_id,))

    def planner_days(self) -> set[str]:
        with self._reader() as conn:
            rows = conn.execute("SELECT DISTINCT day FROM planner_tasks").fetchall()
        return {row["day"] for row in rows}

    def list_courses(self) -> list[CourseRow]:
        with self._reader() as conn:
            rows = conn.execute("SELECT id, title, progress FROM courses ORDER BY id ASC").fetchall()
        return [CourseRow(id=row["id"], title=row["title"], progress=row["progress"]) for row in rows]

    def create_course(self, title: str) -> int:
        clean_title = title.strip()
        if not clean_title:
            raise ValueError("Course title cannot be empty")
        with self._transaction() as conn:
            cursor = conn.execute("INSERT INTO courses(title, progress) VALUES (?, 0)", (clean_title,))
            return int(cursor.lastrowid)

    def set_course_progress(self, course_id: int, progress: int) -> None:
        clamped = max(0, min(100, int(progress)))
        with self._transaction() as conn:
            conn.execute("UPDATE courses SET progress = ? WHERE id = ?", (clamped, course_id))

    def delete_course(self, course_id: int) -> None:
        with self._transaction() as conn:
            conn.execute("DELETE FROM courses WHERE id = ?", (course_id,))

    def list_debriefs(self, kind: str | None = None) -> list[DebriefRow]:
        """Journal entries, newest first."""
        query = "SELECT id, kind, label, what_done, what_needs, created_at FROM debriefs"
        params: tuple[Any, ...] = ()
        if kind is not None:
            query += " WHERE kind = ?"
            params = (kind,)
        query += " ORDER BY id DESC"
        with self._reader() as conn:
            rows = conn.execute(query, params).fetchall()
        return [
            DebriefRow(
                id=row["id"],
                kind=row["kind"],
                label=row["label"],
                what_done=row["what_done"],
                what_needs=row["what_needs"],
                created_at=row["created_at"],
            )
            for row in rows
        ]

    def create_debrief(self, kind: str, label: str, what_done: str, what_needs: str) -> int:
        if kind not in DEBRIEF_KINDS:
            raise ValueError(f"Unknown debrief kind: {kind!r}")
        if not what_done.strip() and not what_needs.strip():
            raise ValueError("Debrief is empty")
        with self._transaction() as conn:
            cursor = conn.execute(
                """
                INSERT INTO debriefs(kind, label, what_done, what_needs, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (kind, label, what_done, what_needs, _now_iso()),
            )
            return int(cursor.lastrowid)

    def list_blocked_sites(self) -> list[BlockedSite]:
        with self._reader() as conn:
            rows = conn.execute(
                "SELECT id, url, name, added_at, blocked_count FROM blocked_sites ORDER BY id ASC"
            ).fetchall()
        return [
            BlockedSite(
                id=row["id"],
                url=row["url"],
                name=row["name"],
                added_at=row["added_at"],
                blocked_count=row["blocked_count"],
            )
            for row in rows
        ]

    def create_blocked_site(self, url: str, name: str = "") -> int:
        host = normalize_url(url)
        if not host:
            raise ValueError("Site url cannot be empty")
        with self._transaction() as conn:
            exists = conn.execute("SELECT 1 FROM blocked_sites WHERE url = ?", (host,)).fetchone()
            if exists:
                raise ValueError("This site is already blocked")
            cursor = conn.execute(
                "INSERT INTO blocked_sites(url, name, added_at, blocked_count) VALUES (?, ?, ?, 0)",
                (host, name.strip() or host, _now_iso()),
            )
            return int(cursor.lastrowid)

    def delete_blocked_site(self, site_id: int) -> None:
        with self._transaction() as conn:
            conn.execute("DELETE FROM blocked_sites WHERE id = ?", (site_id,))

    def increment_blocked_count(self, site_id: int) -> None:
        with self._transaction() as conn:
            conn.execute("UPDATE blocked_sites SET blocked_count = blocked_count + 1 WHERE id = ?", (site_id,))
