"""Form field model definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    NUMBER = "number"
    TEXTAREA = "textarea"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    SELECT = "select"
    DATE = "date"
    FILE = "file"
    SUBMIT = "submit"

    @classmethod
    def from_token(cls, token: object) -> FieldType | None:
        try:
            return cls(token)
        except ValueError:
            return None

    @property
    def has_options(self) -> bool:
        return self in OPTION_TYPES


OPTION_TYPES = frozenset({FieldType.RADIO, FieldType.CHECKBOX, FieldType.SELECT})

DEFAULT_LABELS: dict[FieldType, str] = {
    FieldType.TEXT: "Text Input",
    FieldType.EMAIL: "Email Address",
    FieldType.PASSWORD: "Password",
    FieldType.NUMBER: "Number",
    FieldType.TEXTAREA: "Text Area",
    FieldType.RADIO: "Radio Buttons",
    FieldType.CHECKBOX: "Checkboxes",
    FieldType.SELECT: "Dropdown",
    FieldType.DATE: "Date",
    FieldType.FILE: "File Upload",
    FieldType.SUBMIT: "Submit",
}

FALLBACK_LABEL = "Field"
DEFAULT_PLACEHOLDER = "Enter value"
DEFAULT_OPTIONS = ("Option 1", "Option 2", "Option 3")


@dataclass(slots=True)
class FormField:
    id: int
    field_type: FieldType
    label: str
    placeholder: str = DEFAULT_PLACEHOLDER
    required: bool = False
    options: list[str] = field(default_factory=list)


@dataclass(slots=True)
class FieldPatch:
    """Edited attributes committed by the property dialog."""

    label: str
    placeholder: str
    required: bool
    options_text: str | None = None


def parse_options(text: str) -> list[str]:
    """Split a newline-delimited blob into options, skipping blank lines."""
    return [line for line in text.splitlines() if line.strip()]


def format_options(options: list[str]) -> str:
    return "\n".join(options)
