from __future__ import annotations

import json

import pytest

from form_builder.export.structure import (
    MalformedDocumentError,
    decode_structure,
    encode_standalone_markup,
    encode_structure,
)
from form_builder.model.factory import create_field
from form_builder.model.field import FieldType, FormField


def _one_of_each() -> list[FormField]:
    fields = [create_field(field_type.value, index * 2) for index, field_type in enumerate(FieldType)]
    fields[0].required = True
    fields[0].label = "Full name"
    fields[0].placeholder = "Jane Doe"
    return fields


def test_roundtrip_empty_document() -> None:
    assert decode_structure(encode_structure([])) == []


def test_roundtrip_one_field_of_each_type() -> None:
    fields = _one_of_each()

    assert decode_structure(encode_structure(fields)) == fields


def test_roundtrip_option_field_with_no_options() -> None:
    select = create_field("select", 5)
    select.options = []

    assert decode_structure(encode_structure([select])) == [select]


def test_roundtrip_preserves_option_order_and_unicode() -> None:
    radio = create_field("radio", 1)
    radio.options = ["Zürich", "Ålesund", "Åbo"]

    decoded = decode_structure(encode_structure([radio], indent=2))

    assert decoded[0].options == ["Zürich", "Ålesund", "Åbo"]


def test_encoded_records_use_documented_keys() -> None:
    records = json.loads(encode_structure([create_field("checkbox", 0)]))

    assert records == [
        {
            "id": 0,
            "type": "checkbox",
            "label": "Checkboxes",
            "placeholder": "Enter value",
            "required": False,
            "options": ["Option 1", "Option 2", "Option 3"],
        }
    ]


def test_pretty_export_is_indented() -> None:
    text = encode_structure([create_field("text", 0)], indent=2)

    assert text.startswith("[\n  {")


@pytest.mark.parametrize(
    "text",
    [
        "",
        "not json",
        "{}",
        '{"id": 1}',
        "[1, 2]",
        '[{"id": "1", "type": "text", "label": "", "placeholder": "", "required": false, "options": []}]',
        '[{"id": 1, "type": "slider", "label": "", "placeholder": "", "required": false, "options": []}]',
        '[{"id": 1, "type": "text", "label": "", "placeholder": "", "required": "yes", "options": []}]',
        '[{"id": 1, "type": "text", "label": "", "placeholder": "", "required": false}]',
        '[{"id": 1, "type": "radio", "label": "", "placeholder": "", "required": false, "options": [1]}]',
    ],
)
def test_decode_rejects_malformed_documents(text: str) -> None:
    with pytest.raises(MalformedDocumentError):
        decode_structure(text)


def test_decode_rejects_duplicate_ids() -> None:
    text = encode_structure([create_field("text", 1), create_field("email", 1)])

    with pytest.raises(MalformedDocumentError):
        decode_structure(text)


def test_decode_drops_options_on_plain_types() -> None:
    text = '[{"id": 0, "type": "text", "label": "A", "placeholder": "", "required": false, "options": ["x"]}]'

    assert decode_structure(text)[0].options == []


def test_standalone_markup_is_export_only_html() -> None:
    markup = encode_standalone_markup(_one_of_each())

    assert markup.startswith("<!DOCTYPE html>")
    with pytest.raises(MalformedDocumentError):
        decode_structure(markup)
