from __future__ import annotations

"""Entry point of the FOCUS desk dashboard.

Sets up logging, opens the SQLite store, restores persisted state and shows
the main window.
"""

import logging
import os
import sys
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from focusdesk.core.app_state import AppState
from focusdesk.core.notifier import DesktopNotifier
from focusdesk.data.storage import Storage
from focusdesk.ui.main_window import MainWindow
from focusdesk.ui.styles import apply_theme


DB_ENV = "FOCUSDESK_DB"
LOG_LEVEL_ENV = "FOCUSDESK_LOG_LEVEL"


def default_db_path() -> Path:
    """SQLite file from `FOCUSDESK_DB`, else `focusdesk.db` in the working directory."""
    override = os.environ.get(DB_ENV)
    if override:
        return Path(override).expanduser()
    return Path.cwd() / "focusdesk.db"


def configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("FOCUS")
    apply_theme(app)

    db_path = default_db_path()
    logging.getLogger(__name__).info("Using database %s", db_path)
    storage = Storage(db_path)
    storage.init_db()

    notifier = DesktopNotifier(storage)
    app_state = AppState(notifier=notifier)
    app_state.load_from_storage(storage)

    window = MainWindow(app_state=app_state, notifier=notifier)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
