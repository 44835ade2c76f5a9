from datetime import date

from focusdesk.core.app_state import BLOCKING_KEY, TIMER_KEY, AppState, debrief_label
from focusdesk.core.countdown import CountdownState
from focusdesk.data.storage import Storage


T0 = 1_700_000_000_000


def make_state(tmp_path, notifier=None, today=date(2026, 5, 4)) -> tuple[AppState, Storage]:
    storage = Storage(tmp_path / "focus.db")
    storage.init_db()
    state = AppState(notifier=notifier, clock=lambda: T0)
    state.load_from_storage(storage, today=today)
    return state, storage


def test_first_load_uses_default_timer(tmp_path) -> None:
    state, _storage = make_state(tmp_path)
    assert state.timer == CountdownState()
    assert state.timer_projection(T0).clock_text == "25:00"


def test_corrupted_timer_record_falls_back_to_default(tmp_path) -> None:
    storage = Storage(tmp_path / "focus.db")
    storage.init_db()
    with storage._transaction() as conn:  # noqa: SLF001 - tests may inspect DB directly
        conn.execute("INSERT INTO settings(key, value) VALUES (?, ?)", (TIMER_KEY, "{corrupted"))
    storage.set_setting(BLOCKING_KEY, {"is_active": True})

    state = AppState(clock=lambda: T0)
    state.load_from_storage(storage)

    assert state.timer == CountdownState()
    assert state.blocking.is_active is False


def test_non_finite_timestamps_on_disk_fall_back_to_default(tmp_path) -> None:
    storage = Storage(tmp_path / "focus.db")
    storage.init_db()
    with storage._transaction() as conn:  # noqa: SLF001 - tests may inspect DB directly
        conn.execute(
            "INSERT INTO settings(key, value) VALUES (?, ?)",
            (TIMER_KEY, '{"is_running": true, "start_instant_ms": NaN}'),
        )
        conn.execute(
            "INSERT INTO settings(key, value) VALUES (?, ?)",
            (BLOCKING_KEY, '{"is_active": true, "start_instant_ms": Infinity, "duration_min": 30}'),
        )

    state = AppState(clock=lambda: T0)
    state.load_from_storage(storage)

    assert state.timer == CountdownState()
    assert state.blocking.is_active is False
    assert state.timer_projection().clock_text == "25:00"


def test_transitions_persist_whole_record(tmp_path) -> None:
    state, storage = make_state(tmp_path)
    changes: list[bool] = []
    state.timer_changed.connect(lambda: changes.append(True))

    assert state.start_timer(T0) is True
    assert storage.get_setting(TIMER_KEY)["is_running"] is True
    assert storage.get_setting(TIMER_KEY)["start_instant_ms"] == T0

    assert state.pause_timer(T0 + 70_000) is True
    saved = storage.get_setting(TIMER_KEY)
    assert saved["is_running"] is False
    assert saved["start_instant_ms"] is None
    assert saved["baseline_remaining_sec"] == 1430

    assert state.pause_timer(T0 + 80_000) is False
    assert len(changes) == 2


def test_reconfigure_persists_and_survives_reload(tmp_path) -> None:
    state, storage = make_state(tmp_path)
    state.start_timer(T0)
    state.reconfigure_timer("10")

    again = AppState(clock=lambda: T0)
    again.load_from_storage(storage)
    assert again.timer.is_running is False
    assert again.timer.configured_duration_sec == 600
    assert again.timer.baseline_remaining_sec == 600


def test_blocking_session_start_end_and_notifications(tmp_path, notifier) -> None:
    state, storage = make_state(tmp_path, notifier=notifier)

    assert state.start_blocking("90", T0) is True
    assert state.start_blocking("5", T0 + 1_000) is False
    assert storage.get_setting(BLOCKING_KEY) == {"is_active": True, "start_instant_ms": T0, "duration_min": 90}
    assert state.blocking_projection(T0 + 600_000).remaining_seconds == 80 * 60

    assert state.end_blocking() is True
    assert state.end_blocking() is False
    assert storage.get_setting(BLOCKING_KEY)["is_active"] is False
    assert [title for title, _body in notifier.shown] == ["🚫 Focus Mode Activated", "✅ Focus Mode Ended"]


def test_failing_notifier_is_swallowed(tmp_path, failing_notifier) -> None:
    state, _storage = make_state(tmp_path, notifier=failing_notifier)
    assert state.start_blocking(25, T0) is True
    assert state.blocking.is_active is True


def test_check_url_counts_hits_only_while_active(tmp_path) -> None:
    state, _storage = make_state(tmp_path)
    assert state.add_blocked_site("youtube.com", "YouTube") is True
    assert state.add_blocked_site("https://www.youtube.com") is False

    assert state.check_url("https://youtube.com/watch", T0) is None

    state.start_blocking(25, T0)
    hit = state.check_url("https://www.youtube.com/watch", T0 + 1_000)
    assert hit is not None and hit.blocked_count == 1
    assert state.blocked_sites[0].blocked_count == 1
    assert state.check_url("https://python.org", T0 + 2_000) is None
    assert state.check_url("youtube.com", T0 + 25 * 60_000) is None

    state.remove_blocked_site(hit.id)
    assert state.blocked_sites == []


def test_task_course_planner_and_debrief_flows(tmp_path) -> None:
    state, _storage = make_state(tmp_path)

    assert state.add_task("Read chapter 3", "pages 40-62") is True
    assert state.add_task("  ") is False
    task_id = state.tasks[0].id
    state.set_task_done(task_id, True)
    assert state.tasks[0].is_done is True
    state.remove_task(task_id)
    assert state.tasks == []

    assert state.add_course("Statistics") is True
    state.update_course_progress(state.courses[0].id, 65)
    assert state.courses[0].progress == 65

    assert state.add_planner_task("Review", date(2026, 5, 6), "10:00") is True
    assert [t.title for t in state.planner_tasks_for(date(2026, 5, 6))] == ["Review"]
    assert state.planner_days() == {"2026-05-06"}

    assert state.save_debrief("daily", "", "", today=date(2026, 5, 4)) is False
    assert state.save_debrief("weekly", "wrapped up", "", today=date(2026, 5, 6)) is True
    assert state.debriefs[0].label == "Week of May 3, 2026"


def test_crud_without_storage_is_refused() -> None:
    state = AppState(clock=lambda: T0)
    assert state.add_task("x") is False
    assert state.add_blocked_site("x.com") is False
    assert state.planner_tasks_for(date(2026, 1, 1)) == []
    assert state.start_timer(T0) is True


def test_streak_updates_on_load(tmp_path) -> None:
    state, storage = make_state(tmp_path, today=date(2026, 5, 4))
    assert state.streak.current_streak == 1

    next_day = AppState(clock=lambda: T0)
    next_day.load_from_storage(storage, today=date(2026, 5, 5))
    assert next_day.streak.current_streak == 2
    assert next_day.streak.longest_streak == 2


def test_profile_and_quote_rotation(tmp_path) -> None:
    state, storage = make_state(tmp_path)
    state.save_profile(" Alex ", "alex@example.com")
    assert storage.get_setting("settings")["profile"] == {"name": "Alex", "email": "alex@example.com"}

    first = state.current_quote
    assert state.next_quote() != first


def test_debrief_labels() -> None:
    assert debrief_label("daily", date(2026, 5, 4)) == "Monday, May 4, 2026"
    assert debrief_label("weekly", date(2026, 5, 4)) == "Week of May 3, 2026"
    assert debrief_label("weekly", date(2026, 5, 3)) == "Week of May 3, 2026"
