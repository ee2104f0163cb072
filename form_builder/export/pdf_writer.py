"""Fillable PDF export using reportlab AcroForm widgets + pypdf."""

from __future__ import annotations

from collections.abc import Sequence
from io import BytesIO
import logging
from pathlib import Path

from pypdf import PdfReader, PdfWriter
from pypdf.generic import BooleanObject, NameObject
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from form_builder.model.field import FieldType, FormField
from form_builder.render.builder import UNSELECTED_LABEL, control_name

logger = logging.getLogger(__name__)

MARGIN = 54.0
LABEL_SIZE = 11.0
LABEL_GAP = 6.0
FIELD_GAP = 16.0
INPUT_WIDTH = 360.0
INPUT_HEIGHT = 22.0
TEXTAREA_HEIGHT = 66.0
OPTION_SIZE = 12.0
OPTION_ROW = 18.0


class PdfWriteError(RuntimeError):
    """Raised when output generation fails."""


def write_pdf_form(
    fields: Sequence[FormField],
    output_path: str | Path,
    title: str = "Generated Form",
) -> None:
    output = Path(output_path)
    try:
        data = build_pdf_form(fields, title=title)
        with output.open("wb") as handle:
            handle.write(data)
    except Exception as exc:
        raise PdfWriteError(f"Failed to write output PDF: {output}") from exc
    logger.info("Wrote PDF form with %d field(s) to %s", len(fields), output)


def build_pdf_form(fields: Sequence[FormField], title: str = "Generated Form") -> bytes:
    buffer = BytesIO()
    report = canvas.Canvas(buffer, pagesize=letter)
    report.setTitle(title)
    _layout_fields(report, fields)
    report.save()
    buffer.seek(0)

    writer = PdfWriter(clone_from=PdfReader(buffer))
    acroform = writer._root_object.get("/AcroForm")
    if acroform is not None:
        acroform.get_object()[NameObject("/NeedAppearances")] = BooleanObject(True)
    writer.add_metadata({"/Title": title})

    out = BytesIO()
    writer.write(out)
    return out.getvalue()


def _layout_fields(report: canvas.Canvas, fields: Sequence[FormField]) -> None:
    _, page_height = letter
    y = page_height - MARGIN

    for form_field in fields:
        if form_field.field_type is FieldType.SUBMIT:
            continue

        needed = LABEL_SIZE + LABEL_GAP + _control_height(form_field) + FIELD_GAP
        if y - needed < MARGIN:
            report.showPage()
            y = page_height - MARGIN

        y -= LABEL_SIZE
        report.setFont("Helvetica-Bold", LABEL_SIZE)
        report.setFillColor(colors.black)
        report.drawString(MARGIN, y, form_field.label)
        if form_field.required:
            report.setFillColor(colors.red)
            report.drawString(
                MARGIN + report.stringWidth(form_field.label, "Helvetica-Bold", LABEL_SIZE) + 3,
                y,
                "*",
            )
        y -= LABEL_GAP

        height = _control_height(form_field)
        y -= height
        _draw_control(report, form_field, y)
        y -= FIELD_GAP


def _control_height(form_field: FormField) -> float:
    match form_field.field_type:
        case FieldType.TEXTAREA:
            return TEXTAREA_HEIGHT
        case FieldType.RADIO | FieldType.CHECKBOX:
            return max(len(form_field.options), 1) * OPTION_ROW
        case _:
            return INPUT_HEIGHT


def _draw_control(report: canvas.Canvas, form_field: FormField, bottom: float) -> None:
    form = report.acroForm
    name = control_name(form_field)
    required = "required" if form_field.required else ""

    match form_field.field_type:
        case FieldType.RADIO:
            top = bottom + _control_height(form_field)
            states = _export_states(form_field.options)
            for index, option in enumerate(form_field.options):
                row = top - (index + 1) * OPTION_ROW
                form.radio(
                    name=name,
                    value=states[index],
                    selected=False,
                    x=MARGIN,
                    y=row,
                    size=OPTION_SIZE,
                    tooltip=form_field.label,
                    fieldFlags=f"noToggleToOff radio {required}".strip(),
                    borderColor=colors.grey,
                    fillColor=None,
                )
                _draw_option_label(report, option, row)
        case FieldType.CHECKBOX:
            top = bottom + _control_height(form_field)
            for index, option in enumerate(form_field.options):
                row = top - (index + 1) * OPTION_ROW
                form.checkbox(
                    name=f"{name}_{index}",
                    x=MARGIN,
                    y=row,
                    size=OPTION_SIZE,
                    checked=False,
                    buttonStyle="check",
                    tooltip=f"{form_field.label}: {option}",
                    fieldFlags="",
                    borderColor=colors.grey,
                    fillColor=None,
                )
                _draw_option_label(report, option, row)
        case FieldType.SELECT:
            form.choice(
                name=name,
                value=UNSELECTED_LABEL,
                options=_choice_options(form_field.options),
                x=MARGIN,
                y=bottom,
                width=INPUT_WIDTH,
                height=INPUT_HEIGHT,
                tooltip=form_field.label,
                fieldFlags=f"combo {required}".strip(),
                borderColor=colors.grey,
                fillColor=None,
                textColor=colors.black,
            )
        case _:
            flags = [required]
            if form_field.field_type is FieldType.TEXTAREA:
                flags.append("multiline")
            elif form_field.field_type is FieldType.PASSWORD:
                flags.append("password")
            elif form_field.field_type is FieldType.FILE:
                flags.append("fileSelect")
            form.textfield(
                name=name,
                value="",
                x=MARGIN,
                y=bottom,
                width=INPUT_WIDTH,
                height=_control_height(form_field),
                tooltip=form_field.label,
                fieldFlags=" ".join(flag for flag in flags if flag),
                borderColor=colors.grey,
                fillColor=None,
                textColor=colors.black,
                maxlen=2000,
            )


def _choice_options(options: list[str]) -> list[str]:
    # the leading choice stands in for "nothing selected"; reportlab needs a non-empty value
    unique = [option for option in dict.fromkeys(options) if option and option != UNSELECTED_LABEL]
    return [UNSELECTED_LABEL, *unique]


def _draw_option_label(report: canvas.Canvas, option: str, row: float) -> None:
    report.setFont("Helvetica", LABEL_SIZE)
    report.setFillColor(colors.black)
    report.drawString(MARGIN + OPTION_SIZE + 6, row + 2, option)


def _export_states(options: list[str]) -> list[str]:
    # PDF name objects cannot hold spaces or delimiters
    states: list[str] = []
    for index, option in enumerate(options):
        state = "".join(ch for ch in option if ch.isalnum()) or f"Option{index + 1}"
        if state in states:
            state = f"{state}_{index + 1}"
        states.append(state)
    return states
