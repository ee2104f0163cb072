"""Required-field validation over live preview controls."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol


class ControlState(str, Enum):
    NEUTRAL = "neutral"
    ERROR = "error"


class LiveControl(Protocol):
    """A rendered input whose value comes from user interaction."""

    @property
    def field_id(self) -> int: ...

    @property
    def required(self) -> bool: ...

    def current_value(self) -> str: ...

    def set_state(self, state: ControlState) -> None: ...


@dataclass(frozen=True, slots=True)
class ValidationResult:
    valid: bool
    invalid_ids: frozenset[int] = field(default_factory=frozenset)


def validate(controls: Iterable[LiveControl]) -> ValidationResult:
    """Mark every control and report the fields whose required value is empty."""
    invalid: set[int] = set()
    for control in controls:
        if control.required and not control.current_value():
            invalid.add(control.field_id)
            control.set_state(ControlState.ERROR)
        else:
            control.set_state(ControlState.NEUTRAL)
    return ValidationResult(valid=not invalid, invalid_ids=frozenset(invalid))
