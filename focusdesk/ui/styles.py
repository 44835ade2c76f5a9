from __future__ import annotations

from PyQt6.QtWidgets import QApplication


THEME_QSS = """
QWidget {
    background: #f4f1ee;
    color: #2f2a26;
    font-size: 13px;
}

QLabel, QCheckBox {
    background: transparent;
}

QListWidget#Sidebar {
    background: #2f2a26;
    color: #f4f1ee;
    border: none;
    padding: 12px 6px;
    font-size: 14px;
}

QListWidget#Sidebar::item {
    padding: 10px 12px;
    border-radius: 10px;
}

QListWidget#Sidebar::item:selected {
    background: #eb8f60;
    color: #ffffff;
}

QFrame#Card {
    background: #f6e4d6;
    border: none;
    border-radius: 16px;
}

QLabel#Heading {
    font-size: 22px;
    font-weight: 700;
    color: #2a2521;
}

QLabel#ClockLabel {
    font-size: 44px;
    font-weight: 700;
    color: #2d2824;
}

QLabel#StatValue {
    font-size: 30px;
    font-weight: 700;
    color: #c2410c;
}

QLabel#MutedText {
    color: #867b71;
}

QLabel#QuoteText {
    font-size: 18px;
    font-style: italic;
}

QLabel#StatusActive {
    color: #b91c1c;
    font-weight: 700;
}

QLabel#StatusInactive {
    color: #6f645b;
    font-weight: 600;
}

QPushButton {
    border: none;
    background: #f7eee6;
    border-radius: 14px;
    padding: 8px 14px;
    font-weight: 600;
}

QPushButton:hover {
    background: #f2e6dc;
}

QPushButton:disabled {
    color: #b3a79b;
    background: #f5efea;
}

QPushButton#PrimaryButton {
    background: #eb8f60;
    color: #ffffff;
    border-radius: 20px;
    padding: 10px 24px;
    font-size: 14px;
}

QPushButton#PrimaryButton:hover {
    background: #de8050;
}

QPushButton#DangerButton {
    background: #dc2626;
    color: #ffffff;
    border-radius: 20px;
    padding: 10px 24px;
}

QLineEdit, QSpinBox, QTextEdit, QPlainTextEdit, QComboBox {
    background: #fff7f1;
    border: none;
    border-radius: 12px;
    padding: 6px 10px;
}

QListWidget {
    background: #fff7f1;
    border: none;
    border-radius: 12px;
    padding: 6px;
}

QListWidget::item:selected {
    background: #f5e9de;
    color: #2f2a26;
}

QProgressBar {
    border: 0;
    border-radius: 4px;
    background: #eee4db;
    max-height: 8px;
    text-align: center;
}

QProgressBar::chunk {
    border-radius: 4px;
    background: #eb8f60;
}
"""


def apply_theme(app: QApplication) -> None:
    app.setStyleSheet(THEME_QSS)
