from __future__ import annotations
import logging
import os
import sys
from PySide6.QtWidgets import QApplication
from .ui.main_window import MainWindow, ORG_NAME, APP_NAME, APP_VERSION

DEBUG_ENV = "RECEIPT_DISPATCH_DEBUG"


def debug_enabled(argv: list[str]) -> bool:
    return "--debug" in argv or os.environ.get(DEBUG_ENV) == "1"


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main(argv: list[str] | None = None):
    argv = list(sys.argv if argv is None else argv)
    configure_logging(debug_enabled(argv))

    app = QApplication([a for a in argv if a != "--debug"])
    app.setOrganizationName(ORG_NAME)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)

    win = MainWindow()
    win.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
