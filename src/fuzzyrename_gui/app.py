"""Point d'entrée de l'application GUI fuzzyrename."""

from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication

from fuzzyrename_gui.main_window import MainWindow


def main() -> int:
    """Lance l'application GUI."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    app.setApplicationName("fuzzyrename")
    app.setOrganizationName("fuzzyrename")
    win = MainWindow()
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
