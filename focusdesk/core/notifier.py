from __future__ import annotations

"""Best-effort desktop notifications and sound through the system tray."""

import logging

from PyQt6.QtWidgets import QApplication, QStyle, QSystemTrayIcon

from focusdesk.data.storage import Storage


logger = logging.getLogger(__name__)

PERMISSION_KEY = "notification_permission"
MESSAGE_TIMEOUT_MS = 5000


class DesktopNotifier:
    """Shows tray balloon messages once the user has allowed them."""

    def __init__(self, storage: Storage | None = None) -> None:
        self._storage = storage
        self._tray: QSystemTrayIcon | None = None
        self._granted = bool(storage.get_setting(PERMISSION_KEY, False)) if storage else False

    @property
    def granted(self) -> bool:
        return self._granted

    def request_permission(self) -> bool:
        granted = isinstance(QApplication.instance(), QApplication) and QSystemTrayIcon.isSystemTrayAvailable()
        if not granted:
            logger.info("System tray unavailable, notifications disabled")
        self._set_granted(granted)
        return granted

    def revoke_permission(self) -> None:
        self._set_granted(False)

    def show(self, title: str, body: str) -> None:
        if not self._granted:
            return
        tray = self._ensure_tray()
        if tray is None:
            return
        tray.showMessage(title, body, QSystemTrayIcon.MessageIcon.Information, MESSAGE_TIMEOUT_MS)

    def beep(self) -> None:
        if not isinstance(QApplication.instance(), QApplication):
            return
        QApplication.beep()

    def close(self) -> None:
        if self._tray is not None:
            self._tray.hide()
            self._tray = None

    def _set_granted(self, granted: bool) -> None:
        self._granted = granted
        if self._storage:
            self._storage.set_setting(PERMISSION_KEY, granted)

    def _ensure_tray(self) -> QSystemTrayIcon | None:
        if self._tray is not None:
            return self._tray
        app = QApplication.instance()
        if not isinstance(app, QApplication) or not QSystemTrayIcon.isSystemTrayAvailable():
            return None
        icon = app.style().standardIcon(QStyle.StandardPixmap.SP_MessageBoxInformation)
        self._tray = QSystemTrayIcon(icon)
        self._tray.setToolTip("FOCUS")
        self._tray.show()
        return self._tray
