"""In-memory session state for the designed form."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
import logging

from form_builder.model.factory import create_field
from form_builder.model.field import FieldPatch, FormField, parse_options

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FormSession:
    """Owns the ordered field list and the id counter.

    Every mutation goes through the methods below. Ids are issued
    monotonically and never handed out twice within one session.
    """

    _fields: list[FormField] = field(default_factory=list)
    _next_id: int = 0

    @property
    def fields(self) -> list[FormField]:
        return list(self._fields)

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._fields)

    def get(self, field_id: int) -> FormField | None:
        for form_field in self._fields:
            if form_field.id == field_id:
                return form_field
        return None

    def add_field(self, type_token: object) -> FormField:
        form_field = create_field(type_token, self._next_id)
        self._next_id += 1
        self.append(form_field)
        return form_field

    def append(self, form_field: FormField) -> None:
        if self.get(form_field.id) is not None:
            raise ValueError(f"Field id already present: {form_field.id}")
        self._fields.append(form_field)
        self._next_id = max(self._next_id, form_field.id + 1)
        logger.debug("Appended field %s (%s)", form_field.id, form_field.field_type.value)

    def update_by_id(self, field_id: int, patch: FieldPatch) -> bool:
        form_field = self.get(field_id)
        if form_field is None:
            logger.debug("Update ignored, no field with id %s", field_id)
            return False

        form_field.label = patch.label
        form_field.placeholder = patch.placeholder
        form_field.required = patch.required
        if form_field.field_type.has_options and patch.options_text is not None:
            form_field.options = parse_options(patch.options_text)
        logger.debug("Updated field %s", field_id)
        return True

    def delete_by_id(self, field_id: int) -> bool:
        remaining = [f for f in self._fields if f.id != field_id]
        if len(remaining) == len(self._fields):
            logger.debug("Delete ignored, no field with id %s", field_id)
            return False
        self._fields = remaining
        logger.debug("Deleted field %s", field_id)
        return True

    def clear(self) -> None:
        self._fields = []

    def replace_all(self, fields: Iterable[FormField]) -> None:
        replacement = list(fields)
        seen: set[int] = set()
        for form_field in replacement:
            if form_field.id in seen:
                raise ValueError(f"Duplicate field id: {form_field.id}")
            seen.add(form_field.id)

        self._fields = replacement
        self._next_id = max(seen | {0}) + 1
        logger.debug("Replaced document with %d field(s)", len(replacement))
