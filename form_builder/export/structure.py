"""Structural JSON save/load and standalone HTML export."""

from __future__ import annotations

from collections.abc import Sequence
import json
import logging

from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, StrictStr, TypeAdapter, ValidationError

from form_builder.model.field import FieldType, FormField
from form_builder.render.builder import render_standalone

logger = logging.getLogger(__name__)


class MalformedDocumentError(RuntimeError):
    """Raised when structural text does not describe a list of fields."""


class FieldRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: StrictInt
    type: FieldType
    label: StrictStr
    placeholder: StrictStr
    required: StrictBool
    options: list[StrictStr]

    @classmethod
    def from_field(cls, form_field: FormField) -> FieldRecord:
        return cls(
            id=form_field.id,
            type=form_field.field_type,
            label=form_field.label,
            placeholder=form_field.placeholder,
            required=form_field.required,
            options=list(form_field.options),
        )

    def to_field(self) -> FormField:
        # non-option types never carry options
        options = list(self.options) if self.type.has_options else []
        return FormField(
            id=self.id,
            field_type=self.type,
            label=self.label,
            placeholder=self.placeholder,
            required=self.required,
            options=options,
        )


_RECORDS = TypeAdapter(list[FieldRecord])


def encode_structure(fields: Sequence[FormField], indent: int | None = None) -> str:
    records = [FieldRecord.from_field(form_field).model_dump(mode="json") for form_field in fields]
    return json.dumps(records, indent=indent, ensure_ascii=False)


def decode_structure(text: str | bytes) -> list[FormField]:
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise MalformedDocumentError("Saved form is not valid JSON") from exc

    try:
        records = _RECORDS.validate_python(payload)
    except ValidationError as exc:
        logger.error("Structural document failed validation: %s", exc)
        raise MalformedDocumentError("Saved form does not contain a list of fields") from exc

    seen: set[int] = set()
    for record in records:
        if record.id in seen:
            raise MalformedDocumentError(f"Saved form repeats field id {record.id}")
        seen.add(record.id)

    return [record.to_field() for record in records]


def encode_standalone_markup(fields: Sequence[FormField]) -> str:
    return render_standalone(fields)
