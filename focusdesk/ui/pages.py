from __future__ import annotations

"""Plain list pages of the dashboard: tasks, planner, courses, motivation, debrief, settings."""

from datetime import date

from PyQt6.QtCore import QDate, Qt
from PyQt6.QtGui import QBrush, QColor, QTextCharFormat
from PyQt6.QtWidgets import (
    QCalendarWidget,
    QCheckBox,
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QSpinBox,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from focusdesk.core.app_state import AppState
from focusdesk.core.motivation import streak_message
from focusdesk.core.notifier import DesktopNotifier


def _heading(text: str) -> QLabel:
    label = QLabel(text)
    label.setObjectName("Heading")
    return label


def _selected_id(widget: QListWidget) -> int | None:
    item = widget.currentItem()
    return None if item is None else item.data(Qt.ItemDataRole.UserRole)


class TasksPage(QWidget):
    def __init__(self, app_state: AppState, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.app_state = app_state
        root = QVBoxLayout(self)
        root.addWidget(_heading("Tasks"))

        form = QFormLayout()
        self.name_input = QLineEdit()
        self.description_input = QPlainTextEdit()
        self.description_input.setMaximumHeight(70)
        add_btn = QPushButton("Add Task")
        add_btn.setObjectName("PrimaryButton")
        form.addRow("Name:", self.name_input)
        form.addRow("Description:", self.description_input)
        form.addRow("", add_btn)
        root.addLayout(form)

        self.task_list = QListWidget()
        root.addWidget(self.task_list, 1)
        self.details = QLabel("")
        self.details.setObjectName("MutedText")
        self.details.setWordWrap(True)
        root.addWidget(self.details)
        delete_btn = QPushButton("Delete Selected")
        root.addWidget(delete_btn, alignment=Qt.AlignmentFlag.AlignLeft)

        add_btn.clicked.connect(self._add)
        delete_btn.clicked.connect(self._delete)
        self.task_list.itemChanged.connect(self._on_item_changed)
        self.task_list.currentItemChanged.connect(self._show_details)
        self.app_state.tasks_changed.connect(self.refresh)
        self.refresh()

    def _add(self) -> None:
        if not self.app_state.add_task(self.name_input.text(), self.description_input.toPlainText()):
            QMessageBox.information(self, "Tasks", "Please enter a task name.")
            return
        self.name_input.clear()
        self.description_input.clear()

    def _delete(self) -> None:
        task_id = _selected_id(self.task_list)
        if task_id is not None:
            self.app_state.remove_task(task_id)

    def _on_item_changed(self, item: QListWidgetItem) -> None:
        done = item.checkState() == Qt.CheckState.Checked
        task_id = item.data(Qt.ItemDataRole.UserRole)
        task = next((t for t in self.app_state.tasks if t.id == task_id), None)
        if task is not None and task.is_done != done:
            self.app_state.set_task_done(task_id, done)

    def _show_details(self, item: QListWidgetItem | None, _previous=None) -> None:
        if item is None:
            self.details.setText("")
            return
        task = next((t for t in self.app_state.tasks if t.id == item.data(Qt.ItemDataRole.UserRole)), None)
        self.details.setText(task.description if task and task.description else "")

    def refresh(self) -> None:
        self.task_list.blockSignals(True)
        self.task_list.clear()
        for task in self.app_state.tasks:
            item = QListWidgetItem(task.name, self.task_list)
            item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
            item.setCheckState(Qt.CheckState.Checked if task.is_done else Qt.CheckState.Unchecked)
            item.setData(Qt.ItemDataRole.UserRole, task.id)
        self.task_list.blockSignals(False)


class PlannerPage(QWidget):
    def __init__(self, app_state: AppState, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.app_state = app_state
        root = QHBoxLayout(self)

        left = QVBoxLayout()
        left.addWidget(_heading("Planner"))
        self.calendar = QCalendarWidget()
        self.calendar.setGridVisible(True)
        today_btn = QPushButton("Today")
        left.addWidget(self.calendar, 1)
        left.addWidget(today_btn, alignment=Qt.AlignmentFlag.AlignLeft)
        root.addLayout(left, 2)

        right = QVBoxLayout()
        self.day_label = QLabel("")
        self.day_label.setObjectName("Heading")
        self.day_list = QListWidget()
        form = QFormLayout()
        self.title_input = QLineEdit()
        self.time_input = QLineEdit()
        self.time_input.setPlaceholderText("HH:MM")
        self.description_input = QLineEdit()
        add_btn = QPushButton("Add")
        add_btn.setObjectName("PrimaryButton")
        delete_btn = QPushButton("Delete Selected")
        form.addRow("Title:", self.title_input)
        form.addRow("Time:", self.time_input)
        form.addRow("Notes:", self.description_input)
        form.addRow(add_btn, delete_btn)
        right.addWidget(self.day_label)
        right.addWidget(self.day_list, 1)
        right.addLayout(form)
        root.addLayout(right, 1)

        self.calendar.selectionChanged.connect(self.refresh)
        today_btn.clicked.connect(lambda: self.calendar.setSelectedDate(QDate.currentDate()))
        add_btn.clicked.connect(self._add)
        delete_btn.clicked.connect(self._delete)
        self.app_state.planner_changed.connect(self.refresh)
        self.refresh()

    def _selected_day(self) -> date:
        return self.calendar.selectedDate().toPyDate()

    def _add(self) -> None:
        if not self.app_state.add_planner_task(
            self.title_input.text(), self._selected_day(), self.time_input.text(), self.description_input.text()
        ):
            QMessageBox.information(self, "Planner", "Please enter a title for this day.")
            return
        self.title_input.clear()
        self.time_input.clear()
        self.description_input.clear()

    def _delete(self) -> None:
        task_id = _selected_id(self.day_list)
        if task_id is not None:
            self.app_state.remove_planner_task(task_id)

    def refresh(self) -> None:
        day = self._selected_day()
        self.day_label.setText(f"{day:%A}, {day:%B} {day.day}")
        self.day_list.clear()
        for task in self.app_state.planner_tasks_for(day):
            text = f"{task.time} · {task.title}" if task.time else task.title
            item = QListWidgetItem(text, self.day_list)
            item.setToolTip(task.description)
            item.setData(Qt.ItemDataRole.UserRole, task.id)

        self.calendar.setDateTextFormat(QDate(), QTextCharFormat())
        marked = QTextCharFormat()
        marked.setFontWeight(700)
        marked.setForeground(QBrush(QColor("#b91c1c")))
        for iso_day in self.app_state.planner_days():
            self.calendar.setDateTextFormat(QDate.fromString(iso_day, Qt.DateFormat.ISODate), marked)


class CoursesPage(QWidget):
    def __init__(self, app_state: AppState, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.app_state = app_state
        root = QVBoxLayout(self)
        root.addWidget(_heading("Courses"))

        add_row = QHBoxLayout()
        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("Course title")
        add_btn = QPushButton("Add Course")
        add_btn.setObjectName("PrimaryButton")
        add_row.addWidget(self.title_input, 1)
        add_row.addWidget(add_btn)
        root.addLayout(add_row)

        self.course_list = QListWidget()
        root.addWidget(self.course_list, 1)

        edit_row = QHBoxLayout()
        self.progress_spin = QSpinBox()
        self.progress_spin.setRange(0, 100)
        self.progress_spin.setSuffix(" %")
        update_btn = QPushButton("Update Progress")
        delete_btn = QPushButton("Delete")
        edit_row.addWidget(self.progress_spin)
        edit_row.addWidget(update_btn)
        edit_row.addWidget(delete_btn)
        edit_row.addStretch()
        root.addLayout(edit_row)

        add_btn.clicked.connect(self._add)
        self.title_input.returnPressed.connect(self._add)
        update_btn.clicked.connect(self._update)
        delete_btn.clicked.connect(self._delete)
        self.course_list.currentItemChanged.connect(self._on_select)
        self.app_state.courses_changed.connect(self.refresh)
        self.refresh()

    def _add(self) -> None:
        if not self.app_state.add_course(self.title_input.text()):
            QMessageBox.information(self, "Courses", "Please enter a course title.")
            return
        self.title_input.clear()

    def _update(self) -> None:
        course_id = _selected_id(self.course_list)
        if course_id is not None:
            self.app_state.update_course_progress(course_id, self.progress_spin.value())

    def _delete(self) -> None:
        course_id = _selected_id(self.course_list)
        if course_id is not None:
            self.app_state.remove_course(course_id)

    def _on_select(self, item: QListWidgetItem | None, _previous=None) -> None:
        if item is None:
            return
        course = next((c for c in self.app_state.courses if c.id == item.data(Qt.ItemDataRole.UserRole)), None)
        if course is not None:
            self.progress_spin.setValue(course.progress)

    def refresh(self) -> None:
        self.course_list.clear()
        for course in self.app_state.courses:
            item = QListWidgetItem(f"{course.title} · {course.progress}%", self.course_list)
            item.setData(Qt.ItemDataRole.UserRole, course.id)


class MotivationPage(QWidget):
    def __init__(self, app_state: AppState, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.app_state = app_state
        root = QVBoxLayout(self)
        root.addWidget(_heading("Daily Motivation"), alignment=Qt.AlignmentFlag.AlignHCenter)

        streak_card = QFrame()
        streak_card.setObjectName("Card")
        streak_layout = QHBoxLayout(streak_card)
        self.current_label = QLabel("0")
        self.current_label.setObjectName("StatValue")
        self.longest_label = QLabel("0")
        self.longest_label.setObjectName("StatValue")
        self.message_label = QLabel("")
        streak_layout.addWidget(QLabel("🔥 Current streak"))
        streak_layout.addWidget(self.current_label)
        streak_layout.addSpacing(24)
        streak_layout.addWidget(QLabel("🏆 Longest"))
        streak_layout.addWidget(self.longest_label)
        streak_layout.addStretch()
        streak_layout.addWidget(self.message_label)
        root.addWidget(streak_card)

        self.quote_label = QLabel("")
        self.quote_label.setObjectName("QuoteText")
        self.quote_label.setWordWrap(True)
        self.quote_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.author_label = QLabel("")
        self.author_label.setObjectName("MutedText")
        self.author_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        next_btn = QPushButton("New Quote")
        root.addStretch()
        root.addWidget(self.quote_label)
        root.addWidget(self.author_label)
        root.addWidget(next_btn, alignment=Qt.AlignmentFlag.AlignHCenter)
        root.addStretch()

        next_btn.clicked.connect(self._next_quote)
        self.app_state.state_changed.connect(self.refresh)
        self.refresh()

    def _next_quote(self) -> None:
        self.app_state.next_quote()

    def refresh(self) -> None:
        streak = self.app_state.streak
        days = "day" if streak.current_streak == 1 else "days"
        self.current_label.setText(f"{streak.current_streak} {days}")
        self.longest_label.setText(str(streak.longest_streak))
        self.message_label.setText(streak_message(streak.current_streak))
        quote = self.app_state.current_quote
        self.quote_label.setText(f"“{quote.text}”")
        self.author_label.setText(f"— {quote.author}")


class DebriefPage(QWidget):
    def __init__(self, app_state: AppState, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.app_state = app_state
        root = QVBoxLayout(self)
        root.addWidget(_heading("Debrief"))
        self.tabs = QTabWidget()
        self._editors: dict[str, tuple[QPlainTextEdit, QPlainTextEdit, QListWidget]] = {}
        for kind, title in (("daily", "Daily"), ("weekly", "Weekly")):
            self.tabs.addTab(self._build_tab(kind), title)
        root.addWidget(self.tabs, 1)
        self.app_state.debriefs_changed.connect(self.refresh)
        self.refresh()

    def _build_tab(self, kind: str) -> QWidget:
        tab = QWidget()
        layout = QVBoxLayout(tab)
        done = QPlainTextEdit()
        done.setPlaceholderText("What did you get done?")
        needs = QPlainTextEdit()
        needs.setPlaceholderText("What still needs to be done?")
        save_btn = QPushButton("Save Debrief")
        save_btn.setObjectName("PrimaryButton")
        history = QListWidget()
        layout.addWidget(done)
        layout.addWidget(needs)
        layout.addWidget(save_btn, alignment=Qt.AlignmentFlag.AlignRight)
        layout.addWidget(QLabel("Previous entries"))
        layout.addWidget(history, 1)
        save_btn.clicked.connect(lambda: self._save(kind))
        self._editors[kind] = (done, needs, history)
        return tab

    def _save(self, kind: str) -> None:
        done, needs, _history = self._editors[kind]
        if not self.app_state.save_debrief(kind, done.toPlainText(), needs.toPlainText()):
            QMessageBox.information(self, "Debrief", "Write something before saving.")
            return
        done.clear()
        needs.clear()

    def refresh(self) -> None:
        for kind, (_done, _needs, history) in self._editors.items():
            history.clear()
            for entry in self.app_state.debriefs:
                if entry.kind != kind:
                    continue
                item = QListWidgetItem(entry.label, history)
                item.setToolTip(f"Done:\n{entry.what_done}\n\nNeeds:\n{entry.what_needs}")


class SettingsPage(QWidget):
    def __init__(self, app_state: AppState, notifier: DesktopNotifier, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.app_state = app_state
        self.notifier = notifier
        root = QVBoxLayout(self)
        root.addWidget(_heading("Settings"))

        profile_card = QFrame()
        profile_card.setObjectName("Card")
        form = QFormLayout(profile_card)
        self.name_input = QLineEdit(self.app_state.profile["name"])
        self.email_input = QLineEdit(self.app_state.profile["email"])
        save_btn = QPushButton("Save Profile")
        save_btn.setObjectName("PrimaryButton")
        form.addRow("Name:", self.name_input)
        form.addRow("Email:", self.email_input)
        form.addRow("", save_btn)
        root.addWidget(profile_card)

        self.notify_box = QCheckBox("Show desktop notifications")
        self.notify_box.setChecked(self.notifier.granted)
        root.addWidget(self.notify_box)
        root.addStretch()

        save_btn.clicked.connect(self._save_profile)
        self.notify_box.toggled.connect(self._toggle_notifications)

    def _save_profile(self) -> None:
        self.app_state.save_profile(self.name_input.text(), self.email_input.text())
        QMessageBox.information(self, "Settings", "Profile saved.")

    def _toggle_notifications(self, enabled: bool) -> None:
        if not enabled:
            self.notifier.revoke_permission()
            return
        if not self.notifier.request_permission():
            self.notify_box.blockSignals(True)
            self.notify_box.setChecked(False)
            self.notify_box.blockSignals(False)
            QMessageBox.information(self, "Settings", "Desktop notifications are not available on this system.")
