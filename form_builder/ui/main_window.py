"""Main application window wiring palette, canvas, dialog and persistence."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QFileDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QScrollArea,
    QSplitter,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from form_builder import config
from form_builder.export.pdf_importer import PdfImportError, import_pdf_fields
from form_builder.export.pdf_writer import PdfWriteError, write_pdf_form
from form_builder.export.structure import (
    MalformedDocumentError,
    decode_structure,
    encode_standalone_markup,
    encode_structure,
)
from form_builder.render.builder import render_interactive
from form_builder.render.validation import ValidationResult, validate
from form_builder.state.session import FormSession
from form_builder.state.store import FormStore, SettingsStore
from form_builder.ui.edit_dialog import FieldEditDialog
from form_builder.ui.palette import FieldPalette
from form_builder.viewer.canvas import FormCanvas

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, store: FormStore | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Form Builder")
        self.resize(1100, 800)

        self._session = FormSession()
        self._store = store if store is not None else SettingsStore()

        self.palette = FieldPalette()
        self.palette.type_activated.connect(self.add_field)

        self.canvas = FormCanvas()
        self.canvas.field_dropped.connect(self.add_field)
        self.canvas.edit_requested.connect(self.edit_field)
        self.canvas.delete_requested.connect(self.delete_field)
        self.canvas.submit_requested.connect(self.submit_form)

        self.notice = QLabel()
        self.notice.setObjectName("successMessage")
        self.notice.setStyleSheet(
            "background: #10b981; color: white; padding: 8px; border-radius: 5px;"
        )
        self.notice.hide()
        self._notice_timer = QTimer(self)
        self._notice_timer.setSingleShot(True)
        self._notice_timer.timeout.connect(self.notice.hide)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.scroll_area.setWidget(self.canvas)

        preview = QWidget()
        preview_layout = QVBoxLayout(preview)
        preview_layout.addWidget(self.notice)
        preview_layout.addWidget(self.scroll_area)

        splitter = QSplitter()
        splitter.addWidget(self.palette)
        splitter.addWidget(preview)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 4)
        self.setCentralWidget(splitter)

        self._build_toolbar()
        self.render_form()
        self.statusBar().showMessage("Ready")

    @property
    def session(self) -> FormSession:
        return self._session

    def _build_toolbar(self) -> None:
        toolbar = QToolBar("Main Toolbar")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        for text, handler in (
            ("Save", self.save_form),
            ("Load", self.load_form),
            ("Clear", self.clear_form),
            (None, None),
            ("Export JSON", self.export_json),
            ("Export HTML", self.export_html),
            ("Export PDF", self.export_pdf),
            ("Import PDF", self.import_pdf),
        ):
            if text is None:
                toolbar.addSeparator()
                continue
            action = QAction(text, self)
            action.triggered.connect(handler)
            toolbar.addAction(action)

    def render_form(self) -> None:
        self.canvas.show_result(render_interactive(self._session.fields))
        self.statusBar().showMessage(f"{len(self._session)} field(s)")

    def add_field(self, type_token: str) -> None:
        form_field = self._session.add_field(type_token)
        logger.info("Added %s field %s", form_field.field_type.value, form_field.id)
        self.render_form()

    def edit_field(self, field_id: int) -> None:
        form_field = self._session.get(field_id)
        if form_field is None:
            return
        dialog = FieldEditDialog(form_field, self)
        if not dialog.exec():
            return
        self._session.update_by_id(field_id, dialog.patch())
        self.render_form()

    def delete_field(self, field_id: int) -> None:
        if self._session.delete_by_id(field_id):
            self.render_form()

    def submit_form(self) -> ValidationResult:
        result = validate(self.canvas.live_controls())
        if result.valid:
            self.show_notice("Form submitted successfully!")
        else:
            logger.info("Submit blocked, missing required fields: %s", sorted(result.invalid_ids))
            QMessageBox.warning(self, "Missing Fields", "Please fill all required fields")
        return result

    def show_notice(self, text: str) -> None:
        self.notice.setText(text)
        self.notice.show()
        # restarting replaces any pending dismiss
        self._notice_timer.start(config.NOTICE_TIMEOUT_MS)

    def save_form(self) -> None:
        self._store.write(config.STORE_KEY, encode_structure(self._session.fields))
        logger.info("Saved form with %d field(s)", len(self._session))
        QMessageBox.information(self, "Saved", "Form saved successfully!")

    def load_form(self) -> None:
        saved = self._store.read(config.STORE_KEY)
        if saved is None:
            QMessageBox.information(self, "Nothing to Load", "No saved form found")
            return
        try:
            fields = decode_structure(saved)
        except MalformedDocumentError as exc:
            logger.error("Load failed: %s", exc)
            QMessageBox.critical(self, "Load Failed", str(exc))
            return

        self._session.replace_all(fields)
        self.render_form()
        logger.info("Loaded form with %d field(s)", len(fields))
        QMessageBox.information(self, "Loaded", "Form loaded successfully!")

    def clear_form(self) -> None:
        answer = QMessageBox.question(
            self,
            "Clear Form",
            "Are you sure you want to clear the form?",
        )
        if answer != QMessageBox.StandardButton.Yes:
            return
        self._session.clear()
        self.render_form()

    def export_json(self) -> None:
        self._export_text(
            config.JSON_EXPORT_NAME,
            "JSON Files (*.json)",
            encode_structure(self._session.fields, indent=2),
        )

    def export_html(self) -> None:
        self._export_text(
            config.HTML_EXPORT_NAME,
            "HTML Files (*.html)",
            encode_standalone_markup(self._session.fields),
        )

    def export_pdf(self) -> None:
        output_path = self._ask_save_path(config.PDF_EXPORT_NAME, "PDF Files (*.pdf)")
        if output_path is None:
            return
        try:
            write_pdf_form(self._session.fields, output_path)
        except PdfWriteError as exc:
            logger.error("PDF export failed: %s", exc)
            QMessageBox.critical(self, "Export Failed", str(exc))
            return
        self.statusBar().showMessage(f"Exported: {output_path}")

    def import_pdf(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Import PDF Form",
            str(Path.home()),
            "PDF Files (*.pdf)",
        )
        if not file_path:
            return
        if len(self._session):
            answer = QMessageBox.question(
                self,
                "Import PDF Form",
                "Importing replaces the current form. Continue?",
            )
            if answer != QMessageBox.StandardButton.Yes:
                return
        try:
            fields = import_pdf_fields(file_path)
        except PdfImportError as exc:
            logger.warning("PDF import failed: %s", exc)
            QMessageBox.warning(self, "Import Failed", str(exc))
            return

        self._session.replace_all(fields)
        self.render_form()
        logger.info("Imported %d field(s) from %s", len(fields), file_path)
        QMessageBox.information(self, "Imported", f"Imported {len(fields)} field(s)")

    def _export_text(self, default_name: str, file_filter: str, content: str) -> None:
        output_path = self._ask_save_path(default_name, file_filter)
        if output_path is None:
            return
        try:
            output_path.write_text(content, encoding="utf-8")
        except OSError as exc:
            logger.error("Export to %s failed: %s", output_path, exc)
            QMessageBox.critical(self, "Export Failed", str(exc))
            return
        logger.info("Exported %s", output_path)
        self.statusBar().showMessage(f"Exported: {output_path}")

    def _ask_save_path(self, default_name: str, file_filter: str) -> Path | None:
        file_path, _ = QFileDialog.getSaveFileName(
            self,
            "Export Form",
            str(Path.home() / default_name),
            file_filter,
        )
        if not file_path:
            return None
        return Path(file_path)
