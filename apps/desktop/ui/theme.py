"""
Theme tokens and QSS generation for the desktop window (dark and light).
"""

from __future__ import annotations

from typing import Literal

SPACING = {
    "xs": "4px",
    "sm": "8px",
    "md": "12px",
    "lg": "16px",
}

FONT = {
    "family": "Segoe UI, Arial, sans-serif",
    "sm": "12px",
    "base": "14px",
    "lg": "16px",
    "xl": "24px",
}

# Outcome accents used by status pills and the activity list
ACCENTS = {
    "primary": "#1A9FFF",
    "success": "#5BA32B",
    "warning": "#D8A31A",
    "danger": "#C8412F",
    "muted": "#8F98A0",
}

DARK_COLORS = {
    "background": "#171A21",
    "surface": "#1B2838",
    "surface_alt": "#2A475E",
    "text": "#E6EAED",
    "text_muted": "#8F98A0",
    "border": "#2F3D4C",
}

LIGHT_COLORS = {
    "background": "#EEF1F4",
    "surface": "#FFFFFF",
    "surface_alt": "#E1E7ED",
    "text": "#1B2838",
    "text_muted": "#5C6770",
    "border": "#C9D2DA",
}

ThemeMode = Literal["light", "dark"]


def _shade(hex_color: str, percent: int) -> str:
    hex_color = hex_color.lstrip("#")
    factor = 1 + (percent / 100)
    channels = [max(0, min(255, int(int(hex_color[i:i + 2], 16) * factor))) for i in (0, 2, 4)]
    return "#" + "".join(f"{c:02x}" for c in channels)


class Theme:
    """Theme manager providing QSS stylesheets for light and dark modes."""

    def __init__(self, mode: ThemeMode = "dark"):
        self.mode = mode
        self.colors = LIGHT_COLORS if mode == "light" else DARK_COLORS

    def toggle_mode(self) -> None:
        self.mode = "dark" if self.mode == "light" else "light"
        self.colors = LIGHT_COLORS if self.mode == "light" else DARK_COLORS

    def get_stylesheet(self) -> str:
        c = self.colors
        family = FONT["family"]

        return f"""
        QMainWindow, QWidget {{
            background-color: {c["background"]};
            color: {c["text"]};
            font-family: {family};
            font-size: {FONT["base"]};
        }}

        QLabel#TitleLabel {{
            font-size: {FONT["xl"]};
            font-weight: 700;
        }}

        QLabel#SubtitleLabel, QLabel#HintLabel {{
            font-size: {FONT["sm"]};
            color: {c["text_muted"]};
        }}

        QLabel#SectionLabel {{
            font-size: {FONT["lg"]};
            font-weight: 600;
        }}

        QFrame#Card, QFrame#Card QWidget {{
            background-color: {c["surface"]};
        }}

        QFrame#Card {{
            border: 1px solid {c["border"]};
            border-radius: 8px;
        }}

        QPushButton#PrimaryButton {{
            background-color: {ACCENTS["primary"]};
            color: #FFFFFF;
            border: none;
            border-radius: 4px;
            padding: {SPACING["sm"]} {SPACING["lg"]};
            font-weight: 600;
        }}

        QPushButton#PrimaryButton:hover {{
            background-color: {_shade(ACCENTS["primary"], -12)};
        }}

        QPushButton#PrimaryButton:disabled, QPushButton#SecondaryButton:disabled {{
            background-color: {c["border"]};
            color: {c["text_muted"]};
        }}

        QPushButton#SecondaryButton {{
            background-color: {c["surface_alt"]};
            color: {c["text"]};
            border: 1px solid {c["border"]};
            border-radius: 4px;
            padding: {SPACING["sm"]} {SPACING["lg"]};
        }}

        QLineEdit, QSpinBox, QDoubleSpinBox, QComboBox {{
            background-color: {c["background"]};
            border: 1px solid {c["border"]};
            border-radius: 4px;
            padding: {SPACING["xs"]} {SPACING["sm"]};
        }}

        QLineEdit:focus {{
            border-color: {ACCENTS["primary"]};
        }}

        QListWidget {{
            background-color: {c["background"]};
            border: 1px solid {c["border"]};
            border-radius: 4px;
            padding: {SPACING["xs"]};
        }}

        QLabel#StatusPill, QLabel#StatusPillActive, QLabel#StatusPillDanger {{
            border-radius: 10px;
            padding: {SPACING["xs"]} {SPACING["md"]};
            font-size: {FONT["sm"]};
            font-weight: 600;
        }}

        QLabel#StatusPill {{
            background-color: {c["surface_alt"]};
            color: {ACCENTS["muted"]};
        }}

        QLabel#StatusPillActive {{
            background-color: {ACCENTS["success"]};
            color: #FFFFFF;
        }}

        QLabel#StatusPillDanger {{
            background-color: {ACCENTS["danger"]};
            color: #FFFFFF;
        }}
        """
