"""Application entry point."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from credit_app.core.container import build_container
from credit_app.core.logging import get_logger
from credit_app.ui.main_window import MainWindow

logger = get_logger(__name__)


def run() -> None:
    """Launch the GUI application."""
    container = build_container()
    logger.info("Database ready at %s", container.config.database.path)

    app = QApplication(sys.argv)
    window = MainWindow(container.customer_resource, container.credit_resource)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    run()
