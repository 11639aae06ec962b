from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QFileDialog,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from salesboard.config import SETTINGS
from salesboard.infra.csv_codec import CsvFormatError, read_csv, write_csv
from salesboard.services.dashboard import Dashboard

from .dialogs import TaskDialog
from .widgets import BucketTable, MetricCard, TaskTable, format_money, metric_values


class MainWindow(QWidget):
    def __init__(self, dashboard: Dashboard):
        super().__init__()
        self.setWindowTitle("SalesBoard")
        self.resize(1280, 760)

        self.dashboard = dashboard

        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(12, 12, 12, 12)
        main_layout.setSpacing(12)

        main_layout.addWidget(self._build_metrics())

        splitter = QSplitter(Qt.Horizontal)
        splitter.addWidget(self._build_center())
        splitter.addWidget(self._build_insights())
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)
        splitter.setSizes([880, 360])
        main_layout.addWidget(splitter, 1)

        QShortcut(QKeySequence("Ctrl+N"), self, self.new_task)
        QShortcut(QKeySequence("Ctrl+Z"), self, self.undo_delete)

        self.load_tasks()

    def _build_metrics(self) -> QWidget:
        frame = QFrame()
        frame.setObjectName("MetricsBar")
        layout = QHBoxLayout(frame)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.metric_cards: dict[str, MetricCard] = {}
        for title in metric_values(self.dashboard.metrics):
            card = MetricCard(title)
            layout.addWidget(card, 1)
            self.metric_cards[title] = card
        return frame

    def _build_center(self) -> QWidget:
        frame = QFrame()
        frame.setObjectName("CenterPanel")
        layout = QVBoxLayout(frame)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(12)

        header = QHBoxLayout()
        header_title = QLabel("Sales tasks")
        header_title.setProperty("class", "panel-title")
        self.status_label = QLabel("")
        self.status_label.setProperty("class", "stats-badge")
        header.addWidget(header_title)
        header.addStretch()
        header.addWidget(self.status_label)

        action_row = QHBoxLayout()
        add_button = QPushButton("New task")
        add_button.clicked.connect(self.new_task)

        edit_button = QPushButton("Edit")
        edit_button.setProperty("variant", "secondary")
        edit_button.clicked.connect(self.edit_task)

        delete_button = QPushButton("Delete")
        delete_button.setProperty("variant", "danger")
        delete_button.clicked.connect(self.delete_task)

        self.undo_button = QPushButton("Undo delete")
        self.undo_button.setProperty("variant", "secondary")
        self.undo_button.clicked.connect(self.undo_delete)

        export_csv_button = QPushButton("Export CSV")
        export_csv_button.setProperty("variant", "ghost")
        export_csv_button.clicked.connect(self.export_csv)

        import_csv_button = QPushButton("Import CSV")
        import_csv_button.setProperty("variant", "ghost")
        import_csv_button.clicked.connect(self.import_csv)

        reload_button = QPushButton("Reload")
        reload_button.setProperty("variant", "ghost")
        reload_button.clicked.connect(self.load_tasks)

        for button in (add_button, edit_button, delete_button, self.undo_button):
            action_row.addWidget(button)
        action_row.addStretch()
        for button in (export_csv_button, import_csv_button, reload_button):
            action_row.addWidget(button)

        self.task_table = TaskTable()
        self.task_table.doubleClicked.connect(self.edit_task)

        layout.addLayout(header)
        layout.addLayout(action_row)
        layout.addWidget(self.task_table, 1)
        return frame

    def _build_insights(self) -> QWidget:
        frame = QFrame()
        frame.setObjectName("DetailPanel")
        layout = QGridLayout(frame)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        title = QLabel("Insights")
        title.setProperty("class", "panel-title")

        self.priority_table = BucketTable("Revenue")
        self.status_table = BucketTable("Revenue")
        self.roi_table = BucketTable("Tasks")

        layout.addWidget(title, 0, 0)
        layout.addWidget(QLabel("Revenue by priority"), 1, 0)
        layout.addWidget(self.priority_table, 2, 0)
        layout.addWidget(QLabel("Revenue by status"), 3, 0)
        layout.addWidget(self.status_table, 4, 0)
        layout.addWidget(QLabel("ROI distribution"), 5, 0)
        layout.addWidget(self.roi_table, 6, 0)
        return frame

    def load_tasks(self) -> None:
        self.status_label.setText("Loading…")
        self.dashboard.load()
        self.refresh()
        if self.dashboard.error:
            QMessageBox.warning(self, "Load failed", self.dashboard.error)

    def refresh(self) -> None:
        dashboard = self.dashboard
        self.task_table.set_tasks(dashboard.derived_sorted)

        for title, text in metric_values(dashboard.metrics).items():
            self.metric_cards[title].set_value(text)

        self.priority_table.set_rows(
            [(priority.value, format_money(total)) for priority, total in dashboard.revenue_by_priority]
        )
        self.status_table.set_rows(
            [(status.value, format_money(total)) for status, total in dashboard.revenue_by_status]
        )
        self.roi_table.set_rows([(label, str(count)) for label, count in dashboard.roi_buckets])

        parts = [f"Tasks: {len(dashboard.tasks)}"]
        if dashboard.seeded:
            parts.append("sample data")
        if dashboard.dropped:
            parts.append(f"skipped: {dashboard.dropped}")
        self.status_label.setText(" • ".join(parts))

        last_deleted = dashboard.last_deleted
        self.undo_button.setEnabled(last_deleted is not None)
        self.undo_button.setToolTip(f"Restore “{last_deleted.title}”" if last_deleted else "")

    def new_task(self) -> None:
        dialog = TaskDialog(parent=self)
        if dialog.exec() != TaskDialog.Accepted:
            return
        self.dashboard.add_task(dialog.task_input())
        self.refresh()

    def edit_task(self) -> None:
        task_id = self.task_table.selected_task_id()
        if task_id is None:
            return
        task = self.dashboard.service.get_task(task_id)
        if task is None:
            return
        dialog = TaskDialog(task, parent=self)
        if dialog.exec() != TaskDialog.Accepted:
            return
        self.dashboard.update_task(task_id, dialog.patch())
        self.refresh()

    def delete_task(self) -> None:
        task_id = self.task_table.selected_task_id()
        if task_id is None:
            return
        self.dashboard.delete_task(task_id)
        self.refresh()

    def undo_delete(self) -> None:
        self.dashboard.undo_delete()
        self.refresh()

    def export_csv(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self,
            "Export CSV",
            str(Path.home() / SETTINGS.export_filename),
            "CSV Files (*.csv)",
        )
        if not path:
            return
        try:
            write_csv(path, self.dashboard.tasks)
        except OSError as exc:
            QMessageBox.warning(self, "Export failed", str(exc))
            return
        QMessageBox.information(self, "Done", "CSV file saved.")

    def import_csv(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Import CSV",
            str(Path.home()),
            "CSV Files (*.csv)",
        )
        if not path:
            return
        try:
            result = self.dashboard.import_csv(read_csv(path))
        except (OSError, UnicodeDecodeError, CsvFormatError) as exc:
            QMessageBox.warning(self, "Import failed", str(exc))
            return
        self.refresh()
        message = f"Imported tasks: {len(result.tasks)}."
        if result.dropped:
            message += f"\nSkipped invalid rows: {result.dropped}."
        QMessageBox.information(self, "Done", message)
