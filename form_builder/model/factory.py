"""Field factory for drop payloads."""

from __future__ import annotations

import logging

from form_builder.model.field import (
    DEFAULT_LABELS,
    DEFAULT_OPTIONS,
    DEFAULT_PLACEHOLDER,
    FALLBACK_LABEL,
    FieldType,
    FormField,
)

logger = logging.getLogger(__name__)


def create_field(type_token: object, field_id: int) -> FormField:
    """Build a new field with type-appropriate defaults.

    The token comes from an untrusted drag payload. Unrecognized tokens
    produce a plain text field labelled ``"Field"`` instead of failing.
    """
    field_type = FieldType.from_token(type_token)
    if field_type is None:
        logger.warning("Unknown field type token %r, using fallback", type_token)
        field_type = FieldType.TEXT
        label = FALLBACK_LABEL
    else:
        label = DEFAULT_LABELS.get(field_type, FALLBACK_LABEL)

    options = list(DEFAULT_OPTIONS) if field_type.has_options else []
    return FormField(
        id=field_id,
        field_type=field_type,
        label=label,
        placeholder=DEFAULT_PLACEHOLDER,
        required=False,
        options=options,
    )
