import os

import pytest
from PyQt6.QtWidgets import QApplication


os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qt_app():
    app = QApplication.instance() or QApplication([])
    yield app


class RecordingNotifier:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.shown: list[tuple[str, str]] = []
        self.beeps = 0

    def show(self, title: str, body: str) -> None:
        if self.fail:
            raise RuntimeError("notification backend is gone")
        self.shown.append((title, body))

    def beep(self) -> None:
        if self.fail:
            raise OSError("no audio device")
        self.beeps += 1


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def failing_notifier() -> RecordingNotifier:
    return RecordingNotifier(fail=True)
