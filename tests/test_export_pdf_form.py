from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pytest
from pypdf import PdfReader

from form_builder.export.pdf_importer import PdfImportError, import_pdf_fields
from form_builder.export.pdf_writer import PdfWriteError, build_pdf_form, write_pdf_form
from form_builder.model.factory import create_field
from form_builder.model.field import FieldType


def _sample_fields():
    name = create_field("text", 0)
    name.label = "Name"
    name.required = True
    notes = create_field("textarea", 1)
    notes.label = "Notes"
    secret = create_field("password", 2)
    colour = create_field("select", 3)
    colour.label = "Colour"
    colour.options = ["Red", "Blue"]
    answer = create_field("radio", 4)
    answer.label = "Answer"
    answer.options = ["Yes", "No"]
    extras = create_field("checkbox", 5)
    extras.label = "Extras"
    extras.options = ["Milk", "Sugar"]
    submit = create_field("submit", 6)
    return [name, notes, secret, colour, answer, extras, submit]


def test_build_pdf_form_produces_acroform() -> None:
    data = build_pdf_form(_sample_fields())

    reader = PdfReader(BytesIO(data))
    fields = reader.get_fields()

    assert fields is not None
    assert "field_0" in fields
    assert "field_6" not in fields
    assert reader.trailer["/Root"]["/AcroForm"]["/NeedAppearances"]


def test_pdf_roundtrip_recovers_field_types(tmp_path: Path) -> None:
    output = tmp_path / "form.pdf"
    write_pdf_form(_sample_fields(), output)

    imported = import_pdf_fields(output)

    assert [f.field_type for f in imported] == [
        FieldType.TEXT,
        FieldType.TEXTAREA,
        FieldType.PASSWORD,
        FieldType.SELECT,
        FieldType.RADIO,
        FieldType.CHECKBOX,
    ]
    assert [f.id for f in imported] == list(range(6))
    assert imported[0].label == "Name"
    assert imported[0].required is True
    assert imported[1].required is False
    assert imported[3].options == ["Red", "Blue"]
    assert imported[4].options == ["Yes", "No"]
    assert imported[5].label == "Extras"
    assert imported[5].options == ["Milk", "Sugar"]
    assert imported[5].required is False


def test_write_pdf_form_wraps_io_errors(tmp_path: Path) -> None:
    with pytest.raises(PdfWriteError):
        write_pdf_form(_sample_fields(), tmp_path / "missing" / "form.pdf")


def test_import_rejects_non_pdf(tmp_path: Path) -> None:
    bogus = tmp_path / "bogus.pdf"
    bogus.write_text("not a pdf", encoding="utf-8")

    with pytest.raises(PdfImportError):
        import_pdf_fields(bogus)


@pytest.mark.parametrize("options", [[], ["A", "A"], ["Zürich"], ["A", "B"]])
def test_select_exports_with_unselected_leading_choice(options: list[str]) -> None:
    select = create_field("select", 1)
    select.options = options

    reader = PdfReader(BytesIO(build_pdf_form([select])))
    fields = reader.get_fields()

    assert fields is not None
    assert "field_1" in fields


def test_select_roundtrip_drops_unselected_choice(tmp_path: Path) -> None:
    select = create_field("select", 0)
    select.label = "Size"
    select.options = ["Small", "Large"]
    empty = create_field("select", 1)
    empty.options = []
    output = tmp_path / "form.pdf"
    write_pdf_form([select, empty], output)

    imported = import_pdf_fields(output)

    assert [f.options for f in imported] == [["Small", "Large"], []]
    assert imported[0].label == "Size"


def test_checkbox_label_with_colon_survives_import(tmp_path: Path) -> None:
    checkbox = create_field("checkbox", 0)
    checkbox.label = "Q: pick"
    checkbox.options = ["Tea", "Coffee"]
    output = tmp_path / "form.pdf"
    write_pdf_form([checkbox], output)

    imported = import_pdf_fields(output)

    assert imported[0].label == "Q: pick"
    assert imported[0].options == ["Tea", "Coffee"]
