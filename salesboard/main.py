from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtGui import QColor, QFont, QPalette
from PySide6.QtWidgets import QApplication, QStyleFactory

from salesboard.config import SETTINGS
from salesboard.infra.loader import json_file_source
from salesboard.infra.logging import setup_logging
from salesboard.infra.repository import TaskRepository
from salesboard.services.dashboard import Dashboard
from salesboard.services.task_service import TaskService
from salesboard.ui.main_window import MainWindow


def _apply_dark_palette(app: QApplication) -> None:
    palette = QPalette()
    palette.setColor(QPalette.Window, QColor("#0F172A"))
    palette.setColor(QPalette.WindowText, QColor("#E6EDF3"))
    palette.setColor(QPalette.Base, QColor("#111827"))
    palette.setColor(QPalette.AlternateBase, QColor("#1B2230"))
    palette.setColor(QPalette.Text, QColor("#E6EDF3"))
    palette.setColor(QPalette.Button, QColor("#202A3B"))
    palette.setColor(QPalette.ButtonText, QColor("#E6EDF3"))
    palette.setColor(QPalette.Highlight, QColor("#4F6BED"))
    palette.setColor(QPalette.HighlightedText, QColor("#FFFFFF"))
    app.setPalette(palette)


def load_styles(app: QApplication) -> None:
    qss_path = Path(__file__).resolve().parent / "ui" / "styles.qss"
    if qss_path.exists():
        app.setStyleSheet(qss_path.read_text(encoding="utf-8"))


def build_dashboard() -> Dashboard:
    return Dashboard(
        TaskService(TaskRepository()),
        source=json_file_source(SETTINGS.tasks_source_path),
        seed_count=SETTINGS.seed_count,
        grade_thresholds=SETTINGS.grade_thresholds,
    )


def main() -> None:
    setup_logging()

    app = QApplication(sys.argv)
    app.setStyle(QStyleFactory.create("Fusion"))
    _apply_dark_palette(app)
    app.setFont(QFont("Segoe UI", 10))
    load_styles(app)

    window = MainWindow(build_dashboard())
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
