"""Interactive form preview: drop target plus widgets built from the render tree."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from html import escape

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QButtonGroup,
    QCheckBox,
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QRadioButton,
    QVBoxLayout,
    QWidget,
)

from form_builder.render.builder import ActionKind, FieldAction, RenderResult
from form_builder.render.tree import Node
from form_builder.render.validation import ControlState

FIELD_TYPE_MIME = "application/x-form-field-type"

CANVAS_STYLE = """
FormCanvas { background: #ffffff; border: 2px dashed #c7cbe0; border-radius: 8px; }
FormCanvas[dragOver="true"] { border-color: #667eea; background: #f3f4ff; }
QFrame#formField { border: 1px solid #e5e7eb; border-radius: 6px; padding: 6px; }
QLabel#emptyMessage { color: #9ca3af; }
*[validationState="error"] { border: 1px solid #ef4444; }
*[validationState="neutral"] { border: 1px solid #e5e7eb; }
"""


@dataclass(slots=True)
class WidgetControl:
    """Binds a Qt input widget to the field it was rendered for."""

    field_id: int
    required: bool
    widget: QWidget
    read: Callable[[], str]

    def current_value(self) -> str:
        return self.read()

    def set_state(self, state: ControlState) -> None:
        self.widget.setProperty("validationState", state.value)
        self.widget.style().unpolish(self.widget)
        self.widget.style().polish(self.widget)


class FormCanvas(QWidget):
    field_dropped = Signal(str)
    edit_requested = Signal(int)
    delete_requested = Signal(int)
    submit_requested = Signal()

    def __init__(self) -> None:
        super().__init__()
        self._result: RenderResult | None = None
        self._controls: list[WidgetControl] = []
        self._containers: list[QFrame] = []
        self._layout = QVBoxLayout(self)
        self._layout.setAlignment(Qt.AlignmentFlag.AlignTop)
        self.setAcceptDrops(True)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet(CANVAS_STYLE)
        self.setMinimumSize(500, 600)

    @property
    def containers(self) -> list[QFrame]:
        return list(self._containers)

    def live_controls(self) -> list[WidgetControl]:
        return list(self._controls)

    def show_result(self, result: RenderResult) -> None:
        self._clear()
        self._result = result
        for node in result.root.children:
            if not isinstance(node, Node):
                continue
            if node.has_class("empty-message"):
                message = QLabel(node.text())
                message.setObjectName("emptyMessage")
                message.setAlignment(Qt.AlignmentFlag.AlignCenter)
                self._layout.addWidget(message)
            elif node.has_class("form-field"):
                container = self._build_container(node)
                self._containers.append(container)
                self._layout.addWidget(container)
        self._layout.addStretch(1)

    def dragEnterEvent(self, event) -> None:  # type: ignore[override]
        if event.mimeData().hasFormat(FIELD_TYPE_MIME):
            self._set_drag_over(True)
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event) -> None:  # type: ignore[override]
        if event.mimeData().hasFormat(FIELD_TYPE_MIME):
            event.acceptProposedAction()

    def dragLeaveEvent(self, event) -> None:  # type: ignore[override]
        self._set_drag_over(False)
        super().dragLeaveEvent(event)

    def dropEvent(self, event) -> None:  # type: ignore[override]
        self._set_drag_over(False)
        if not event.mimeData().hasFormat(FIELD_TYPE_MIME):
            event.ignore()
            return
        payload = bytes(event.mimeData().data(FIELD_TYPE_MIME)).decode("utf-8", errors="replace")
        event.acceptProposedAction()
        self.field_dropped.emit(payload)

    def _set_drag_over(self, active: bool) -> None:
        self.setProperty("dragOver", active)
        self.style().unpolish(self)
        self.style().polish(self)

    def _clear(self) -> None:
        self._controls = []
        self._containers = []
        while self._layout.count():
            item = self._layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.setParent(None)
                widget.deleteLater()

    def _build_container(self, node: Node) -> QFrame:
        field_id = int(str(node.attrs["data-id"]))
        frame = QFrame()
        frame.setObjectName("formField")
        frame.setProperty("fieldId", field_id)
        layout = QVBoxLayout(frame)

        for child in node.children:
            if not isinstance(child, Node):
                continue
            if child.has_class("field-actions"):
                layout.addLayout(self._build_actions(child))
            elif child.tag == "button":
                layout.addWidget(self._build_button(child))
            elif child.tag == "label":
                layout.addWidget(self._build_label(child))
            else:
                layout.addWidget(self._build_control(child, field_id))
        return frame

    def _build_actions(self, node: Node) -> QHBoxLayout:
        row = QHBoxLayout()
        row.addStretch(1)
        for child in node.find_all("button"):
            row.addWidget(self._build_button(child))
        return row

    def _build_button(self, node: Node) -> QPushButton:
        button = QPushButton(node.text())
        button.setObjectName(str(node.attrs.get("class") or "button"))
        action = self._result.actions.get(node) if self._result is not None else None
        if action is not None:
            button.clicked.connect(lambda _=False, action=action: self._dispatch(action))
        return button

    def _dispatch(self, action: FieldAction) -> None:
        match action.kind:
            case ActionKind.EDIT:
                self.edit_requested.emit(action.field_id)
            case ActionKind.DELETE:
                self.delete_requested.emit(action.field_id)
            case ActionKind.SUBMIT:
                self.submit_requested.emit()

    def _build_label(self, node: Node) -> QLabel:
        parts = []
        for child in node.children:
            if isinstance(child, str):
                parts.append(escape(child))
            elif child.has_class("required"):
                parts.append(f'<span style="color:#ef4444">{escape(child.text())}</span>')
        label = QLabel("".join(parts))
        label.setTextFormat(Qt.TextFormat.RichText)
        return label

    def _build_control(self, node: Node, field_id: int) -> QWidget:
        required = node.attrs.get("required") is True

        if node.tag == "textarea":
            editor = QPlainTextEdit()
            editor.setPlaceholderText(str(node.attrs.get("placeholder") or ""))
            self._register(field_id, required, editor, editor.toPlainText)
            return editor

        if node.tag == "select":
            combo = QComboBox()
            for option in node.find_all("option"):
                combo.addItem(option.text(), str(option.attrs.get("value") or ""))
            self._register(field_id, required, combo, lambda: combo.currentData() or "")
            return combo

        if node.has_class("radio-group") or node.has_class("checkbox-group"):
            return self._build_choice_group(node, field_id)

        line = QLineEdit()
        line.setPlaceholderText(str(node.attrs.get("placeholder") or ""))
        line.setProperty("inputType", node.attrs.get("type"))
        if node.attrs.get("type") == "password":
            line.setEchoMode(QLineEdit.EchoMode.Password)
        self._register(field_id, required, line, line.text)
        return line

    def _build_choice_group(self, node: Node, field_id: int) -> QWidget:
        group_widget = QWidget()
        layout = QVBoxLayout(group_widget)
        layout.setContentsMargins(0, 0, 0, 0)
        inputs = node.find_all("input")
        exclusive = node.has_class("radio-group")
        button_group = QButtonGroup(group_widget)
        button_group.setExclusive(exclusive)

        for option_input in inputs:
            text = str(option_input.attrs.get("value") or "")
            button = QRadioButton(text) if exclusive else QCheckBox(text)
            button_group.addButton(button)
            layout.addWidget(button)

        required = any(option_input.attrs.get("required") is True for option_input in inputs)

        def read() -> str:
            return ",".join(button.text() for button in button_group.buttons() if button.isChecked())

        self._register(field_id, required, group_widget, read)
        return group_widget

    def _register(
        self,
        field_id: int,
        required: bool,
        widget: QWidget,
        read: Callable[[], str],
    ) -> None:
        self._controls.append(WidgetControl(field_id, required, widget, read))
