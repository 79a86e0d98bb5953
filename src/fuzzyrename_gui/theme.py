"""Gestion simple des thèmes UI."""

from __future__ import annotations

from PySide6.QtWidgets import QApplication

THEME_LIGHT = "light"
THEME_DARK = "dark"


def normalize_theme_mode(mode: str | None) -> str:
    if mode in (THEME_LIGHT, THEME_DARK):
        return mode
    return THEME_LIGHT


def build_app_qss(dark: bool) -> str:
    if dark:
        return (
            "QWidget { background: #2f2f2f; color: #f0f0f0; }"
            "QMenuBar, QMenu { background: #3a3a3a; color: #f0f0f0; }"
            "QMenu::item:selected { background: #3a5a8a; }"
            "QTableView { background: #2b2b2b; color: #f0f0f0; border: 1px solid #666; }"
            "QTableView::item:selected { background: #3a5a8a; color: #ffffff; }"
            "QHeaderView::section { background: #404040; color: #f0f0f0; }"
            "QDoubleSpinBox { background: #2b2b2b; color: #f0f0f0; border: 1px solid #666; }"
        )
    return (
        "QWidget { background: #efefef; color: #111111; }"
        "QMenuBar, QMenu { background: #f7f7f7; color: #111111; }"
        "QMenu::item:selected { background: #cfe3ff; }"
        "QTableView { background: #ffffff; color: #111111; border: 1px solid #cfcfcf; }"
        "QTableView::item:selected { background: #cfe3ff; color: #111111; }"
        "QHeaderView::section { background: #f2f2f2; color: #111111; }"
        "QDoubleSpinBox { background: #ffffff; color: #111111; border: 1px solid #cfcfcf; }"
    )


def apply_theme(mode: str | None) -> None:
    """Applique la feuille de style du thème à toute l'application."""
    app = QApplication.instance()
    if app is None:
        return
    app.setStyleSheet(build_app_qss(normalize_theme_mode(mode) == THEME_DARK))
