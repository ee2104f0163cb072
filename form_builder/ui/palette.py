"""Palette of field types that can be dragged onto the canvas."""

from __future__ import annotations

from PySide6.QtCore import QMimeData, Qt, Signal
from PySide6.QtWidgets import QAbstractItemView, QListWidget, QListWidgetItem

from form_builder.model.field import DEFAULT_LABELS, FieldType
from form_builder.viewer.canvas import FIELD_TYPE_MIME


class FieldPalette(QListWidget):
    type_activated = Signal(str)

    def __init__(self) -> None:
        super().__init__()
        self.setDragEnabled(True)
        self.setDragDropMode(QAbstractItemView.DragDropMode.DragOnly)
        self.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)

        for field_type in FieldType:
            item = QListWidgetItem(DEFAULT_LABELS[field_type])
            item.setData(Qt.ItemDataRole.UserRole, field_type.value)
            self.addItem(item)

        # double click adds without dragging
        self.itemDoubleClicked.connect(
            lambda item: self.type_activated.emit(item.data(Qt.ItemDataRole.UserRole))
        )

    def mimeTypes(self) -> list[str]:  # type: ignore[override]
        return [FIELD_TYPE_MIME]

    def mimeData(self, items) -> QMimeData:  # type: ignore[override]
        mime = QMimeData()
        if items:
            token = str(items[0].data(Qt.ItemDataRole.UserRole))
            mime.setData(FIELD_TYPE_MIME, token.encode("utf-8"))
        return mime
