"""
Reusable widgets for the desktop window.
"""

from __future__ import annotations

from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget


class Card(QFrame):
    """Card container with rounded corners."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("Card")
        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(16, 16, 16, 16)
        self.layout.setSpacing(10)


class PrimaryButton(QPushButton):
    def __init__(self, text: str = "", parent=None):
        super().__init__(text, parent)
        self.setObjectName("PrimaryButton")


class SecondaryButton(QPushButton):
    def __init__(self, text: str = "", parent=None):
        super().__init__(text, parent)
        self.setObjectName("SecondaryButton")


class StatusPill(QLabel):
    """Status indicator pill (e.g. "RUNNING", "STOPPED")."""

    def __init__(self, text: str = "", active: bool = False, parent=None):
        super().__init__(text, parent)
        self.setObjectName("StatusPillActive" if active else "StatusPill")


class LabeledRow(QWidget):
    """A caption followed by one input widget."""

    def __init__(self, caption: str, widget: QWidget, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(12)
        label = QLabel(caption)
        label.setObjectName("BodyLabel")
        layout.addWidget(label)
        layout.addStretch()
        layout.addWidget(widget)
