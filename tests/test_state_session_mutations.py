from __future__ import annotations

import random

import pytest

from form_builder.model.factory import create_field
from form_builder.model.field import FieldPatch, FieldType, parse_options
from form_builder.state.session import FormSession


def test_add_field_issues_monotonic_ids_from_zero() -> None:
    session = FormSession()

    ids = [session.add_field("text").id for _ in range(3)]

    assert ids == [0, 1, 2]
    assert session.next_id == 3


@pytest.mark.parametrize("seed", range(5))
def test_deletes_keep_surviving_ids_unique_and_ordered(seed: int) -> None:
    rng = random.Random(seed)
    session = FormSession()
    tokens = [t.value for t in FieldType]
    added = [session.add_field(rng.choice(tokens)).id for _ in range(12)]

    doomed = set(rng.sample(added, k=rng.randint(0, len(added))))
    for field_id in doomed:
        assert session.delete_by_id(field_id) is True

    survivors = [f.id for f in session.fields]
    assert survivors == [field_id for field_id in added if field_id not in doomed]
    assert len(set(survivors)) == len(survivors)


def test_ids_are_never_reused_after_delete() -> None:
    session = FormSession()
    first = session.add_field("text")
    session.delete_by_id(first.id)

    second = session.add_field("text")

    assert second.id == first.id + 1


def test_delete_missing_id_is_noop() -> None:
    session = FormSession()
    session.add_field("email")
    before = [(f.id, f.label) for f in session.fields]

    assert session.delete_by_id(99) is False
    assert [(f.id, f.label) for f in session.fields] == before
    assert session.next_id == 1


def test_update_missing_id_is_noop() -> None:
    session = FormSession()
    session.add_field("text")

    assert session.update_by_id(5, FieldPatch("x", "y", True)) is False
    assert session.fields[0].label == "Text Input"


def test_update_applies_attributes_and_parses_options() -> None:
    session = FormSession()
    radio = session.add_field("radio")

    session.update_by_id(radio.id, FieldPatch("Pick", "ignored", True, "A\n\nB\n  \nC"))

    updated = session.get(radio.id)
    assert updated is not None
    assert updated.label == "Pick"
    assert updated.placeholder == "ignored"
    assert updated.required is True
    assert updated.options == ["A", "B", "C"]


def test_update_ignores_options_for_plain_types() -> None:
    session = FormSession()
    text = session.add_field("text")

    session.update_by_id(text.id, FieldPatch("Name", "Your name", False, "A\nB"))

    assert session.fields[0].options == []


def test_update_can_empty_option_list() -> None:
    session = FormSession()
    select = session.add_field("select")

    session.update_by_id(select.id, FieldPatch("Pick", "", False, "\n   \n"))

    assert session.fields[0].options == []


def test_parse_options_handles_windows_newlines() -> None:
    assert parse_options("A\r\nB\r\n\r\n") == ["A", "B"]


def test_replace_all_recomputes_next_id() -> None:
    session = FormSession()
    session.replace_all([create_field("text", 2), create_field("text", 5), create_field("text", 9)])

    assert session.add_field("number").id == 10


def test_replace_all_with_empty_document() -> None:
    session = FormSession()
    for _ in range(4):
        session.add_field("text")

    session.replace_all([])

    assert len(session) == 0
    assert session.next_id == 1


def test_replace_all_rejects_duplicate_ids_without_changes() -> None:
    session = FormSession()
    session.add_field("text")

    with pytest.raises(ValueError):
        session.replace_all([create_field("text", 3), create_field("email", 3)])

    assert [f.id for f in session.fields] == [0]


def test_clear_keeps_counter() -> None:
    session = FormSession()
    session.add_field("text")
    session.add_field("text")

    session.clear()

    assert session.fields == []
    assert session.add_field("text").id == 2


def test_fields_returns_a_copy() -> None:
    session = FormSession()
    session.add_field("text")

    session.fields.clear()

    assert len(session) == 1
