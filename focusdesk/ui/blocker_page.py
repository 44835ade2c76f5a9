from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from focusdesk.core.app_state import AppState
from focusdesk.core.countdown import MAX_DURATION_MIN, MIN_DURATION_MIN, Projection
from focusdesk.core.driver import CountdownDriver


class BlockerPage(QWidget):
    """Advisory website blocker: the list is only checked, never enforced."""

    def __init__(self, app_state: AppState, driver: CountdownDriver, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.app_state = app_state
        self.driver = driver
        self._build_ui()
        self.driver.projection_changed.connect(self._render)
        self.app_state.sites_changed.connect(self.refresh_sites)
        self.refresh_sites()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        header = QHBoxLayout()
        heading = QLabel("Website Blocker")
        heading.setObjectName("Heading")
        header.addWidget(heading)
        header.addStretch()
        status_box = QVBoxLayout()
        self.status_label = QLabel("Focus Mode Inactive")
        self.status_label.setObjectName("StatusInactive")
        self.remaining_label = QLabel("")
        self.remaining_label.setObjectName("MutedText")
        status_box.addWidget(self.status_label, alignment=Qt.AlignmentFlag.AlignRight)
        status_box.addWidget(self.remaining_label, alignment=Qt.AlignmentFlag.AlignRight)
        header.addLayout(status_box)
        root.addLayout(header)

        session_card = QFrame()
        session_card.setObjectName("Card")
        session_layout = QHBoxLayout(session_card)
        session_layout.addWidget(QLabel("Duration (minutes):"))
        self.duration_spin = QSpinBox()
        self.duration_spin.setRange(MIN_DURATION_MIN, MAX_DURATION_MIN)
        self.duration_spin.setValue(self.app_state.blocking.duration_min)
        session_layout.addWidget(self.duration_spin)
        self.session_btn = QPushButton("Start Focus Mode")
        self.session_btn.setObjectName("PrimaryButton")
        session_layout.addWidget(self.session_btn)
        session_layout.addStretch()
        root.addWidget(session_card)

        add_card = QFrame()
        add_card.setObjectName("Card")
        add_form = QFormLayout(add_card)
        self.url_input = QLineEdit()
        self.url_input.setPlaceholderText("youtube.com, facebook.com, reddit.com")
        self.name_input = QLineEdit()
        self.name_input.setPlaceholderText("YouTube, Social Media, etc.")
        self.add_btn = QPushButton("Add Site")
        add_form.addRow("Website URL:", self.url_input)
        add_form.addRow("Display name (optional):", self.name_input)
        add_form.addRow("", self.add_btn)
        root.addWidget(add_card)

        root.addWidget(QLabel("Blocked sites"))
        self.sites_list = QListWidget()
        root.addWidget(self.sites_list, 1)
        self.remove_btn = QPushButton("Remove Selected")
        root.addWidget(self.remove_btn, alignment=Qt.AlignmentFlag.AlignLeft)

        check_row = QHBoxLayout()
        self.check_input = QLineEdit()
        self.check_input.setPlaceholderText("Paste a URL to check it against the block list")
        self.check_btn = QPushButton("Check URL")
        self.check_result = QLabel("")
        check_row.addWidget(self.check_input, 1)
        check_row.addWidget(self.check_btn)
        root.addLayout(check_row)
        root.addWidget(self.check_result)

        self.session_btn.clicked.connect(self._toggle_session)
        self.add_btn.clicked.connect(self._add_site)
        self.url_input.returnPressed.connect(self._add_site)
        self.remove_btn.clicked.connect(self._remove_site)
        self.check_btn.clicked.connect(self._check_url)

    def _toggle_session(self) -> None:
        if self.app_state.blocking.is_active:
            self.app_state.end_blocking()
        else:
            self.app_state.start_blocking(self.duration_spin.value())
        self.driver.tick()

    def _add_site(self) -> None:
        url = self.url_input.text()
        if not url.strip():
            return
        if not self.app_state.add_blocked_site(url, self.name_input.text()):
            QMessageBox.information(self, "Website Blocker", "This site is already blocked!")
            return
        self.url_input.clear()
        self.name_input.clear()

    def _remove_site(self) -> None:
        item = self.sites_list.currentItem()
        if item is None:
            return
        self.app_state.remove_blocked_site(item.data(Qt.ItemDataRole.UserRole))

    def _check_url(self) -> None:
        url = self.check_input.text()
        if not url.strip():
            return
        if not self.app_state.blocked_sites:
            self.check_result.setText("Add some blocked sites first!")
            return
        if not self.app_state.blocking.is_active:
            self.check_result.setText("Focus mode is not active.")
            return
        site = self.app_state.check_url(url)
        if site is None:
            self.check_result.setText("✅ This site is not blocked. Keep up the focused work!")
        else:
            self.check_result.setText(f"🚫 {site.name} is blocked during your focus session.")

    def refresh_sites(self) -> None:
        self.sites_list.clear()
        for site in self.app_state.blocked_sites:
            text = f"{site.name} · {site.url} · blocked {site.blocked_count}x"
            item = QListWidgetItem(text, self.sites_list)
            item.setData(Qt.ItemDataRole.UserRole, site.id)

    def _render(self, projection: Projection) -> None:
        active = projection.is_running
        self.status_label.setText("Focus Mode Active" if active else "Focus Mode Inactive")
        self.status_label.setObjectName("StatusActive" if active else "StatusInactive")
        self.status_label.style().unpolish(self.status_label)
        self.status_label.style().polish(self.status_label)
        self.remaining_label.setText(f"{projection.minutes}:{projection.seconds:02d} remaining" if active else "")
        self.session_btn.setText("End Focus Mode" if active else "Start Focus Mode")
        self.session_btn.setObjectName("DangerButton" if active else "PrimaryButton")
        self.session_btn.style().unpolish(self.session_btn)
        self.session_btn.style().polish(self.session_btn)
        self.duration_spin.setEnabled(not active)

    def showEvent(self, event) -> None:  # noqa: N802
        super().showEvent(event)
        self.driver.mount()

    def hideEvent(self, event) -> None:  # noqa: N802
        self.driver.unmount()
        super().hideEvent(event)
