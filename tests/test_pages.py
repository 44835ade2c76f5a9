from datetime import date

import pytest

from focusdesk.core.app_state import AppState
from focusdesk.data.storage import Storage
from focusdesk.ui import pages
from focusdesk.ui.pages import CoursesPage, DebriefPage, PlannerPage, TasksPage


T0 = 1_700_000_000_000


@pytest.fixture
def messages(monkeypatch) -> list[tuple[str, str]]:
    shown: list[tuple[str, str]] = []
    monkeypatch.setattr(
        pages.QMessageBox,
        "information",
        staticmethod(lambda _parent, title, text: shown.append((title, text))),
    )
    return shown


@pytest.fixture
def app_state(tmp_path) -> AppState:
    storage = Storage(tmp_path / "focus.db")
    storage.init_db()
    state = AppState(clock=lambda: T0)
    state.load_from_storage(storage, today=date(2026, 5, 4))
    return state


def test_refused_task_shows_message_and_keeps_input(qt_app, app_state, messages) -> None:
    page = TasksPage(app_state)
    page.description_input.setPlainText("pages 40-62")

    page._add()  # noqa: SLF001

    assert messages == [("Tasks", "Please enter a task name.")]
    assert page.description_input.toPlainText() == "pages 40-62"
    assert app_state.tasks == []

    page.name_input.setText("Read chapter 3")
    page._add()  # noqa: SLF001
    assert len(messages) == 1
    assert page.name_input.text() == ""
    assert [t.name for t in app_state.tasks] == ["Read chapter 3"]


def test_refused_planner_course_and_debrief_show_messages(qt_app, app_state, messages) -> None:
    PlannerPage(app_state)._add()  # noqa: SLF001
    CoursesPage(app_state)._add()  # noqa: SLF001
    DebriefPage(app_state)._save("daily")  # noqa: SLF001

    assert [title for title, _text in messages] == ["Planner", "Courses", "Debrief"]
    assert app_state.courses == []
    assert app_state.debriefs == []
