from __future__ import annotations

from dataclasses import asdict

from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QDoubleSpinBox,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
)

from salesboard.domain.entities import TaskEntity, TaskInput

from .widgets import PRIORITY_OPTIONS, STATUS_OPTIONS


def changed_fields(before: TaskInput, after: TaskInput) -> dict:
    """Patch holding only the form fields that differ from the pre-filled values."""
    old = asdict(before)
    return {name: value for name, value in asdict(after).items() if old[name] != value}


class TaskDialog(QDialog):
    """Add/edit form; ``task`` pre-fills the fields when editing."""

    def __init__(self, task: TaskEntity | None = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Edit task" if task else "New task")
        self.setObjectName("TaskDialog")
        self.resize(420, 380)

        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("Task title")

        self.revenue_input = QDoubleSpinBox()
        self.revenue_input.setRange(-1_000_000_000, 1_000_000_000)
        self.revenue_input.setDecimals(2)
        self.revenue_input.setPrefix("$ ")

        self.time_input = QDoubleSpinBox()
        self.time_input.setRange(0.01, 10_000)
        self.time_input.setDecimals(2)
        self.time_input.setSingleStep(0.5)
        self.time_input.setSuffix(" h")

        self.priority_combo = QComboBox()
        for label, value in PRIORITY_OPTIONS:
            self.priority_combo.addItem(label, value)

        self.status_combo = QComboBox()
        for label, value in STATUS_OPTIONS:
            self.status_combo.addItem(label, value)

        self.notes_input = QTextEdit()
        self.notes_input.setPlaceholderText("Notes")
        self.notes_input.setMaximumHeight(100)

        form = QFormLayout()
        form.addRow("Title", self.title_input)
        form.addRow("Revenue", self.revenue_input)
        form.addRow("Time taken", self.time_input)
        form.addRow("Priority", self.priority_combo)
        form.addRow("Status", self.status_combo)
        form.addRow("Notes", self.notes_input)

        save_button = QPushButton("Save")
        save_button.clicked.connect(self._on_save)
        cancel_button = QPushButton("Cancel")
        cancel_button.setProperty("variant", "ghost")
        cancel_button.clicked.connect(self.reject)

        buttons = QHBoxLayout()
        buttons.addStretch()
        buttons.addWidget(cancel_button)
        buttons.addWidget(save_button)

        layout = QVBoxLayout(self)
        layout.addLayout(form)
        layout.addLayout(buttons)

        self._initial: TaskInput | None = None
        if task:
            self._populate(task)
            self._initial = self.task_input()
        else:
            self.priority_combo.setCurrentIndex(1)
            self.time_input.setValue(1)

    def _populate(self, task: TaskEntity) -> None:
        self.title_input.setText(task.title)
        self.revenue_input.setValue(task.revenue)
        self.time_input.setValue(task.time_taken)
        priority_index = self.priority_combo.findData(task.priority)
        if priority_index >= 0:
            self.priority_combo.setCurrentIndex(priority_index)
        status_index = self.status_combo.findData(task.status)
        if status_index >= 0:
            self.status_combo.setCurrentIndex(status_index)
        self.notes_input.setPlainText(task.notes or "")

    def _on_save(self) -> None:
        if not self.title_input.text().strip():
            QMessageBox.warning(self, "Title required", "Enter a task title.")
            return
        self.accept()

    def task_input(self) -> TaskInput:
        notes = self.notes_input.toPlainText().strip()
        return TaskInput(
            title=self.title_input.text().strip(),
            revenue=self.revenue_input.value(),
            time_taken=self.time_input.value(),
            priority=self.priority_combo.currentData(),
            status=self.status_combo.currentData(),
            notes=notes or None,
        )

    def patch(self) -> dict:
        data = self.task_input()
        if self._initial is None:
            return asdict(data)
        return changed_fields(self._initial, data)
