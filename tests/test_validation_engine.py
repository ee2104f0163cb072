from __future__ import annotations

from dataclasses import dataclass

from form_builder.render.validation import ControlState, validate


@dataclass
class FakeControl:
    field_id: int
    required: bool
    value: str = ""
    state: ControlState | None = None

    def current_value(self) -> str:
        return self.value

    def set_state(self, state: ControlState) -> None:
        self.state = state


def test_empty_required_control_is_invalid() -> None:
    control = FakeControl(3, required=True)

    result = validate([control])

    assert result.valid is False
    assert result.invalid_ids == frozenset({3})
    assert control.state is ControlState.ERROR


def test_filled_required_control_is_valid() -> None:
    control = FakeControl(3, required=True)
    validate([control])

    control.value = "filled"
    result = validate([control])

    assert result.valid is True
    assert result.invalid_ids == frozenset()
    assert control.state is ControlState.NEUTRAL


def test_optional_controls_never_fail() -> None:
    controls = [FakeControl(0, required=False), FakeControl(1, required=False, value="x")]

    result = validate(controls)

    assert result.valid is True
    assert all(c.state is ControlState.NEUTRAL for c in controls)


def test_reports_every_invalid_field() -> None:
    controls = [
        FakeControl(0, required=True),
        FakeControl(1, required=True, value="ok"),
        FakeControl(2, required=True),
    ]

    result = validate(controls)

    assert result.invalid_ids == frozenset({0, 2})


def test_no_controls_is_valid() -> None:
    assert validate([]).valid is True
