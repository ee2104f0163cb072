"""Import existing AcroForm fields from a PDF into form fields."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path

from pypdf import PdfReader

from form_builder.model.field import DEFAULT_LABELS, DEFAULT_PLACEHOLDER, FieldType, FormField
from form_builder.render.builder import UNSELECTED_LABEL

logger = logging.getLogger(__name__)

FLAG_REQUIRED = 1 << 1
FLAG_MULTILINE = 1 << 12
FLAG_PASSWORD = 1 << 13
FLAG_RADIO = 1 << 15
FLAG_PUSH_BUTTON = 1 << 16
FLAG_FILE_SELECT = 1 << 20


class PdfImportError(RuntimeError):
    """Raised when existing form fields cannot be imported."""


@dataclass(slots=True)
class _Pending:
    field_type: FieldType
    label: str
    required: bool
    options: list[str] = field(default_factory=list)


def import_pdf_fields(source_path: str | Path) -> list[FormField]:
    """Read widgets in page order and turn them into fields with ids from 0."""
    source = Path(source_path)
    pending: list[_Pending] = []
    by_key: dict[str, _Pending] = {}

    try:
        reader = PdfReader(str(source))
        for page in reader.pages:
            annots = page.get("/Annots") or []
            for annot_ref in annots:
                annot = annot_ref.get_object()
                if annot.get("/Subtype") != "/Widget":
                    continue

                parent = annot.get("/Parent")
                parent_obj = parent.get_object() if parent is not None else None

                field_type = _inherited(annot, parent_obj, "/FT")
                if field_type is None:
                    continue

                name = str(_inherited(annot, parent_obj, "/T") or "")
                tooltip = str(_inherited(annot, parent_obj, "/TU") or "")
                flags = int(_inherited(annot, parent_obj, "/Ff") or 0)
                required = bool(flags & FLAG_REQUIRED)

                if field_type == "/Tx":
                    if flags & FLAG_MULTILINE:
                        kind = FieldType.TEXTAREA
                    elif flags & FLAG_PASSWORD:
                        kind = FieldType.PASSWORD
                    elif flags & FLAG_FILE_SELECT:
                        kind = FieldType.FILE
                    else:
                        kind = FieldType.TEXT
                    entry = _Pending(kind, tooltip or name, required)
                    pending.append(entry)
                elif field_type == "/Ch":
                    entry = _Pending(FieldType.SELECT, tooltip or name, required)
                    entry.options = _choice_options(_inherited(annot, parent_obj, "/Opt"))
                    pending.append(entry)
                elif field_type == "/Btn" and flags & FLAG_RADIO:
                    entry = by_key.get(name)
                    if entry is None:
                        entry = _Pending(FieldType.RADIO, tooltip or name, required)
                        by_key[name] = entry
                        pending.append(entry)
                    entry.options.extend(_on_states(annot))
                elif field_type == "/Btn" and not flags & FLAG_PUSH_BUTTON:
                    group, _, _ = name.rpartition("_")
                    key = f"checkbox:{group or name}"
                    label, _, option = tooltip.rpartition(": ")
                    entry = by_key.get(key)
                    if entry is None:
                        entry = _Pending(FieldType.CHECKBOX, label or group or name, False)
                        by_key[key] = entry
                        pending.append(entry)
                    entry.options.append(option or name)
    except Exception as exc:
        raise PdfImportError(f"Failed to import form fields from: {source}") from exc

    imported = [
        FormField(
            id=index,
            field_type=entry.field_type,
            label=entry.label or DEFAULT_LABELS[entry.field_type],
            placeholder=DEFAULT_PLACEHOLDER,
            required=entry.required,
            options=[option for option in entry.options if option.strip()],
        )
        for index, entry in enumerate(pending)
    ]
    logger.info("Imported %d field(s) from %s", len(imported), source)
    return imported


def _inherited(annot, parent_obj, key: str):
    value = annot.get(key)
    if value is None and parent_obj is not None:
        value = parent_obj.get(key)
    return value


def _choice_options(raw) -> list[str]:
    options: list[str] = []
    for item in raw or []:
        item = item.get_object() if hasattr(item, "get_object") else item
        # [export, display] pairs keep the display text
        if isinstance(item, list):
            item = item[-1] if item else ""
        options.append(str(item))
    # drop the "nothing selected" entry written on export
    if options and options[0] in ("", UNSELECTED_LABEL):
        options = options[1:]
    return [option for option in options if option]


def _on_states(annot) -> list[str]:
    appearance = annot.get("/AP")
    if appearance is None:
        return []
    normal = appearance.get_object().get("/N")
    if normal is None:
        return []
    return [str(state).lstrip("/") for state in normal.get_object().keys() if state != "/Off"]
