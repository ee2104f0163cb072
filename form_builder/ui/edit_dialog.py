"""Dialog for editing one field's properties."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLineEdit,
    QPlainTextEdit,
)

from form_builder.model.field import FieldPatch, FormField, format_options


class FieldEditDialog(QDialog):
    def __init__(self, form_field: FormField, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Edit Field")
        self._has_options = form_field.field_type.has_options

        self.label_edit = QLineEdit(form_field.label)
        self.placeholder_edit = QLineEdit(form_field.placeholder)
        self.required_check = QCheckBox("Required")
        self.required_check.setChecked(form_field.required)
        self.options_edit = QPlainTextEdit(format_options(form_field.options))
        self.options_edit.setPlaceholderText("One option per line")

        layout = QFormLayout(self)
        layout.addRow("Label", self.label_edit)
        layout.addRow("Placeholder", self.placeholder_edit)
        layout.addRow("", self.required_check)
        if self._has_options:
            layout.addRow("Options", self.options_edit)
        else:
            self.options_edit.hide()

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addRow(buttons)

    def patch(self) -> FieldPatch:
        return FieldPatch(
            label=self.label_edit.text(),
            placeholder=self.placeholder_edit.text(),
            required=self.required_check.isChecked(),
            options_text=self.options_edit.toPlainText() if self._has_options else None,
        )
