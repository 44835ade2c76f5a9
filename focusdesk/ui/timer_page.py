from __future__ import annotations

from PyQt6.QtCore import QElapsedTimer, Qt
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from focusdesk.core.app_state import AppState
from focusdesk.core.countdown import PRESET_MINUTES, Projection
from focusdesk.core.driver import CountdownDriver
from focusdesk.scenes.base import BaseScene
from focusdesk.scenes.hourglass import HourglassScene


class SceneWidget(QWidget):
    def __init__(self, scene: BaseScene, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(220, 320)
        self._scene = scene
        self._progress = 1.0
        self._running = False
        self._clock = QElapsedTimer()
        self._clock.start()

    def set_state(self, progress: float, running: bool) -> None:
        self._progress = progress
        self._running = running
        self.update()

    def paintEvent(self, event) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        rect = self.rect().adjusted(10, 10, -10, -10).toRectF()
        self._scene.render(painter, rect, self._progress, self._running, self._clock.elapsed() / 1000.0)


class TimerPage(QWidget):
    def __init__(self, app_state: AppState, driver: CountdownDriver, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.app_state = app_state
        self.driver = driver
        self._build_ui()
        self.driver.projection_changed.connect(self._render)
        self.app_state.timer_changed.connect(self._sync_input)
        self._sync_input()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        heading = QLabel("Pomodoro Timer")
        heading.setObjectName("Heading")
        heading.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(heading)

        body = QHBoxLayout()
        root.addLayout(body, 1)

        left = QVBoxLayout()
        self.scene_widget = SceneWidget(HourglassScene())
        self.clock_label = QLabel("25:00")
        self.clock_label.setObjectName("ClockLabel")
        self.clock_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        left.addWidget(self.scene_widget, 1)
        left.addWidget(self.clock_label)
        body.addLayout(left, 1)

        controls = QVBoxLayout()
        card = QFrame()
        card.setObjectName("Card")
        card_layout = QVBoxLayout(card)
        buttons = QHBoxLayout()
        self.toggle_btn = QPushButton("Start")
        self.toggle_btn.setObjectName("PrimaryButton")
        self.reset_btn = QPushButton("Reset")
        buttons.addWidget(self.toggle_btn, 1)
        buttons.addWidget(self.reset_btn)
        card_layout.addLayout(buttons)
        self.status_label = QLabel("Ready to Start")
        self.status_label.setObjectName("MutedText")
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setTextVisible(False)
        card_layout.addWidget(self.status_label)
        card_layout.addWidget(self.progress_bar)
        controls.addWidget(card)

        custom = QFrame()
        custom.setObjectName("Card")
        custom_layout = QVBoxLayout(custom)
        custom_layout.addWidget(QLabel("Set Custom Time (minutes)"))
        row = QHBoxLayout()
        self.minutes_input = QLineEdit()
        self.minutes_input.setPlaceholderText("1-300")
        self.set_btn = QPushButton("Set")
        row.addWidget(self.minutes_input, 1)
        row.addWidget(self.set_btn)
        custom_layout.addLayout(row)
        presets = QHBoxLayout()
        for minutes in PRESET_MINUTES:
            btn = QPushButton(f"{minutes} min")
            btn.clicked.connect(lambda _checked=False, m=minutes: self._apply_minutes(m))
            presets.addWidget(btn)
        custom_layout.addLayout(presets)
        controls.addWidget(custom)
        controls.addStretch()
        body.addLayout(controls, 1)

        self.toggle_btn.clicked.connect(self._toggle)
        self.reset_btn.clicked.connect(self._reset)
        self.set_btn.clicked.connect(lambda: self._apply_minutes(self.minutes_input.text()))
        self.minutes_input.returnPressed.connect(lambda: self._apply_minutes(self.minutes_input.text()))

    def _toggle(self) -> None:
        if self.app_state.timer.is_running:
            self.app_state.pause_timer()
        else:
            if self.app_state.timer_projection().is_finished:
                self.app_state.reset_timer()
            self.app_state.start_timer()
        self.driver.tick()

    def _reset(self) -> None:
        self.app_state.reset_timer()
        self.driver.tick()

    def _apply_minutes(self, minutes) -> None:
        self.app_state.reconfigure_timer(minutes)
        self.driver.tick()

    def _sync_input(self) -> None:
        if not self.minutes_input.hasFocus():
            self.minutes_input.setText(str(self.app_state.timer.configured_duration_sec // 60))

    def _render(self, projection: Projection) -> None:
        self.clock_label.setText(projection.clock_text)
        self.scene_widget.set_state(projection.progress, projection.is_running)
        self.progress_bar.setValue(int(round((1.0 - projection.progress) * 100)))
        self.toggle_btn.setText("Pause" if projection.is_running else "Start")
        self.status_label.setText("Timer Running" if projection.is_running else "Ready to Start")

    def showEvent(self, event) -> None:  # noqa: N802
        super().showEvent(event)
        self.driver.mount()

    def hideEvent(self, event) -> None:  # noqa: N802
        self.driver.unmount()
        super().hideEvent(event)
