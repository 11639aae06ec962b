from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFrame,
    QHeaderView,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
)

from salesboard.domain.entities import DerivedTask, Metrics
from salesboard.domain.enums import Priority, TaskStatus

PRIORITY_OPTIONS = [(priority.value, priority) for priority in Priority]
STATUS_OPTIONS = [(status.value, status) for status in TaskStatus]

PRIORITY_COLORS = {
    Priority.HIGH: "#E57B63",
    Priority.MEDIUM: "#E0B25B",
    Priority.LOW: "#7CC4A1",
}

TASK_COLUMNS = ["Title", "Revenue", "Hours", "ROI", "Priority", "Status"]


def format_money(value: float) -> str:
    return f"${value:,.2f}"


def format_roi(roi: float | None) -> str:
    return "N/A" if roi is None else f"{roi:,.1f}"


class MetricCard(QFrame):
    def __init__(self, title: str, parent=None):
        super().__init__(parent)
        self.setObjectName("MetricCard")
        self.setAttribute(Qt.WA_StyledBackground, True)

        self.title_label = QLabel(title)
        self.title_label.setProperty("class", "metric-title")
        self.value_label = QLabel("-")
        self.value_label.setProperty("class", "metric-value")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.setSpacing(2)
        layout.addWidget(self.title_label)
        layout.addWidget(self.value_label)

    def set_value(self, text: str) -> None:
        self.value_label.setText(text)


def metric_values(metrics: Metrics) -> dict[str, str]:
    return {
        "Total revenue": format_money(metrics.total_revenue),
        "Time tracked": f"{metrics.total_time_taken:,.1f} h",
        "Time efficiency": f"{metrics.time_efficiency_pct:.1f}%",
        "Revenue / hour": format_money(metrics.revenue_per_hour),
        "Average ROI": f"{metrics.average_roi:,.1f}",
        "Grade": metrics.performance_grade,
    }


class TaskTable(QTableWidget):
    def __init__(self, parent=None):
        super().__init__(0, len(TASK_COLUMNS), parent)
        self.setObjectName("TaskTable")
        self.setHorizontalHeaderLabels(TASK_COLUMNS)
        self.verticalHeader().setVisible(False)
        self.setEditTriggers(QTableWidget.NoEditTriggers)
        self.setSelectionBehavior(QTableWidget.SelectRows)
        self.setSelectionMode(QTableWidget.SingleSelection)
        self.setAlternatingRowColors(True)
        header = self.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.Stretch)
        for col in range(1, len(TASK_COLUMNS)):
            header.setSectionResizeMode(col, QHeaderView.ResizeToContents)
        self.verticalHeader().setDefaultSectionSize(32)

    def set_tasks(self, tasks: list[DerivedTask]) -> None:
        self.setRowCount(len(tasks))
        for row, task in enumerate(tasks):
            cells = [
                task.title,
                format_money(task.revenue),
                f"{task.time_taken:g}",
                format_roi(task.roi),
                task.priority.value,
                task.status.value,
            ]
            for col, text in enumerate(cells):
                item = QTableWidgetItem(text)
                item.setData(Qt.UserRole, task.id)
                if col > 0:
                    item.setTextAlignment(Qt.AlignCenter)
                self.setItem(row, col, item)
            priority_item = self.item(row, 4)
            color = PRIORITY_COLORS.get(task.priority)
            if priority_item and color:
                priority_item.setForeground(QColor("#111827"))
                priority_item.setBackground(QColor(color))

    def selected_task_id(self) -> str | None:
        items = self.selectedItems()
        if not items:
            return None
        return items[0].data(Qt.UserRole)


class BucketTable(QTableWidget):
    """Two-column label/value table used for the chart breakdowns."""

    def __init__(self, value_header: str, parent=None):
        super().__init__(0, 2, parent)
        self.setObjectName("BucketTable")
        self.setHorizontalHeaderLabels(["", value_header])
        self.verticalHeader().setVisible(False)
        self.setEditTriggers(QTableWidget.NoEditTriggers)
        self.setSelectionMode(QTableWidget.NoSelection)
        header = self.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.Stretch)
        header.setSectionResizeMode(1, QHeaderView.ResizeToContents)

    def set_rows(self, rows: list[tuple[str, str]]) -> None:
        self.setRowCount(len(rows))
        for row, (label, value) in enumerate(rows):
            label_item = QTableWidgetItem(label)
            value_item = QTableWidgetItem(value)
            value_item.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
            self.setItem(row, 0, label_item)
            self.setItem(row, 1, value_item)
