from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QHBoxLayout, QListWidget, QMainWindow, QStackedWidget, QWidget

from focusdesk.core.app_state import AppState
from focusdesk.core.driver import (
    BlockingSource,
    CompletionEffects,
    CountdownDriver,
    TimerSource,
    TitleAffordance,
)
from focusdesk.core.notifier import DesktopNotifier
from focusdesk.ui.blocker_page import BlockerPage
from focusdesk.ui.pages import CoursesPage, DebriefPage, MotivationPage, PlannerPage, SettingsPage, TasksPage
from focusdesk.ui.timer_page import TimerPage


APP_TITLE = "FOCUS"


class MainWindow(QMainWindow):
    def __init__(self, app_state: AppState, notifier: DesktopNotifier) -> None:
        super().__init__()
        self.setWindowTitle(APP_TITLE)
        self.resize(1100, 720)

        self.app_state = app_state
        self.notifier = notifier
        effects = CompletionEffects(notifier)

        timer_source = TimerSource(app_state)
        self.timer_driver = CountdownDriver(
            timer_source,
            TitleAffordance(self.setWindowTitle, timer_source.baseline_title),
            effects,
            clock=app_state.now_ms,
            parent=self,
        )
        blocking_source = BlockingSource(app_state)
        self.blocking_driver = CountdownDriver(
            blocking_source,
            TitleAffordance(self.setWindowTitle, blocking_source.baseline_title),
            effects,
            clock=app_state.now_ms,
            parent=self,
        )

        self._build_ui()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(0, 0, 0, 0)

        self.sidebar = QListWidget()
        self.sidebar.setObjectName("Sidebar")
        self.sidebar.setFixedWidth(190)
        self.stack = QStackedWidget()
        root.addWidget(self.sidebar)
        root.addWidget(self.stack, 1)

        pages: list[tuple[str, QWidget]] = [
            ("📅  Planner", PlannerPage(self.app_state)),
            ("✅  Tasks", TasksPage(self.app_state)),
            ("⏳  Timer", TimerPage(self.app_state, self.timer_driver)),
            ("📚  Courses", CoursesPage(self.app_state)),
            ("🔥  Motivation", MotivationPage(self.app_state)),
            ("📝  Debrief", DebriefPage(self.app_state)),
            ("🚫  Website Blocker", BlockerPage(self.app_state, self.blocking_driver)),
            ("⚙️  Settings", SettingsPage(self.app_state, self.notifier)),
        ]
        for label, page in pages:
            self.sidebar.addItem(label)
            self.stack.addWidget(page)

        self.sidebar.currentRowChanged.connect(self._navigate)
        self.sidebar.setCurrentRow(0)

    def _navigate(self, row: int) -> None:
        if row < 0:
            return
        self.setWindowTitle(APP_TITLE)
        self.stack.setCurrentIndex(row)
        current = self.stack.currentWidget()
        if current is not None:
            current.setFocus(Qt.FocusReason.OtherFocusReason)

    def closeEvent(self, event) -> None:  # noqa: N802
        self.timer_driver.unmount()
        self.blocking_driver.unmount()
        self.notifier.close()
        event.accept()
