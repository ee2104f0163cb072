"""Key-value persistence for the saved structural document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from PySide6.QtCore import QSettings

from form_builder import config


class FormStore(Protocol):
    def read(self, key: str) -> str | None: ...

    def write(self, key: str, text: str) -> None: ...


class SettingsStore:
    """Stores text values in the platform settings backend."""

    def __init__(self, settings: QSettings | None = None) -> None:
        self._settings = settings or QSettings(config.SETTINGS_ORG, config.SETTINGS_APP)

    def read(self, key: str) -> str | None:
        value = self._settings.value(key)
        if value is None or value == "":
            return None
        return str(value)

    def write(self, key: str, text: str) -> None:
        self._settings.setValue(key, text)
        self._settings.sync()


@dataclass(slots=True)
class MemoryStore:
    values: dict[str, str] = field(default_factory=dict)

    def read(self, key: str) -> str | None:
        return self.values.get(key) or None

    def write(self, key: str, text: str) -> None:
        self.values[key] = text
