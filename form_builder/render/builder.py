"""Build markup trees for the designer preview and the exported form.

Both renderers share ``build_control`` so every field type has exactly one
shape definition. The preview adds edit/delete affordances and reports them
through ``RenderResult.actions`` instead of embedding handler names in the
markup.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from form_builder.model.field import FieldType, FormField
from form_builder.render.tree import Node, element, write_document

EMPTY_MESSAGE = "Drag and drop elements here to build your form"
UNSELECTED_LABEL = "Select an option"
DOCUMENT_TITLE = "Generated Form"

STANDALONE_CSS = """
body { font-family: Arial, sans-serif; max-width: 600px; margin: 50px auto; padding: 20px; }
.form-field { margin-bottom: 20px; }
label { display: block; margin-bottom: 5px; font-weight: bold; }
.radio-group label, .checkbox-group label { font-weight: normal; }
input, textarea, select { width: 100%; padding: 10px; border: 1px solid #ddd; border-radius: 5px; box-sizing: border-box; }
.radio-group input, .checkbox-group input { width: auto; }
.required { color: red; }
button { padding: 12px 30px; background: #667eea; color: white; border: none; border-radius: 5px; cursor: pointer; }
""".strip()


class ActionKind(str, Enum):
    EDIT = "edit"
    DELETE = "delete"
    SUBMIT = "submit"


@dataclass(frozen=True, slots=True)
class FieldAction:
    kind: ActionKind
    field_id: int


@dataclass(slots=True)
class RenderResult:
    root: Node
    actions: dict[Node, FieldAction] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.root.find_all("div", "form-field")

    def actions_for(self, field_id: int) -> list[FieldAction]:
        return [action for action in self.actions.values() if action.field_id == field_id]


def control_name(form_field: FormField) -> str:
    return f"field_{form_field.id}"


def build_label(form_field: FormField) -> Node:
    label = element("label", form_field.label)
    if form_field.required:
        label.children.extend([" ", element("span", "*", class_="required")])
    return label


def build_control(form_field: FormField) -> Node:
    """Return the input control for a non-submit field."""
    name = control_name(form_field)
    required = form_field.required

    match form_field.field_type:
        case FieldType.TEXTAREA:
            return element(
                "textarea",
                name=name,
                placeholder=form_field.placeholder,
                required=required,
            )
        case FieldType.RADIO:
            # the group's required flag rides on its first button
            return element(
                "div",
                *(
                    element(
                        "label",
                        element(
                            "input",
                            type="radio",
                            name=name,
                            value=option,
                            required=required and index == 0,
                        ),
                        f" {option}",
                    )
                    for index, option in enumerate(form_field.options)
                ),
                class_="radio-group",
            )
        case FieldType.CHECKBOX:
            # required is intentionally not applied to individual boxes
            return element(
                "div",
                *(
                    element(
                        "label",
                        element("input", type="checkbox", name=name, value=option),
                        f" {option}",
                    )
                    for option in form_field.options
                ),
                class_="checkbox-group",
            )
        case FieldType.SELECT:
            return element(
                "select",
                element("option", UNSELECTED_LABEL, value=""),
                *(element("option", option, value=option) for option in form_field.options),
                name=name,
                required=required,
            )
        case (
            FieldType.TEXT
            | FieldType.EMAIL
            | FieldType.PASSWORD
            | FieldType.NUMBER
            | FieldType.DATE
            | FieldType.FILE
        ):
            return element(
                "input",
                type=form_field.field_type.value,
                name=name,
                placeholder=form_field.placeholder,
                required=required,
            )
        case _:
            return element(
                "input",
                type=FieldType.TEXT.value,
                name=name,
                placeholder=form_field.placeholder,
                required=required,
            )


def render_interactive(fields: Sequence[FormField]) -> RenderResult:
    root = element("div", class_="form-preview")
    result = RenderResult(root=root)
    if not fields:
        root.children.append(element("p", EMPTY_MESSAGE, class_="empty-message"))
        return result

    for form_field in fields:
        container = element("div", class_="form-field", data_id=str(form_field.id))
        actions = element("div", class_="field-actions")
        container.children.append(actions)

        if form_field.field_type is not FieldType.SUBMIT:
            edit_button = element("button", "Edit", type="button", class_="btn-edit")
            actions.children.append(edit_button)
            result.actions[edit_button] = FieldAction(ActionKind.EDIT, form_field.id)

        delete_button = element("button", "Delete", type="button", class_="btn-delete")
        actions.children.append(delete_button)
        result.actions[delete_button] = FieldAction(ActionKind.DELETE, form_field.id)

        if form_field.field_type is FieldType.SUBMIT:
            submit_button = element("button", form_field.label, type="button", class_="btn-submit")
            container.children.append(submit_button)
            result.actions[submit_button] = FieldAction(ActionKind.SUBMIT, form_field.id)
        else:
            container.children.extend([build_label(form_field), build_control(form_field)])

        root.children.append(container)
    return result


def build_standalone_tree(fields: Sequence[FormField]) -> Node:
    form = element("form")
    for form_field in fields:
        if form_field.field_type is FieldType.SUBMIT:
            form.children.append(element("button", form_field.label, type="submit"))
            continue
        form.children.append(
            element(
                "div",
                build_label(form_field),
                build_control(form_field),
                class_="form-field",
            )
        )

    head = element(
        "head",
        element("meta", charset="UTF-8"),
        element("meta", name="viewport", content="width=device-width, initial-scale=1.0"),
        element("title", DOCUMENT_TITLE),
        element("style", STANDALONE_CSS),
    )
    return element("html", head, element("body", form), lang="en")


def render_standalone(fields: Sequence[FormField]) -> str:
    return write_document(build_standalone_tree(fields))
