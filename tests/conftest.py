from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from richdoc import HtmlConverter


class RecordingEmitter:
    """Emitter capturing structured events for assertions."""

    debug_enabled = False

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))

    def named(self, name: str) -> list[dict[str, Any]]:
        return [payload for event, payload in self.events if event == name]


@pytest.fixture
def converter() -> HtmlConverter:
    return HtmlConverter()


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()
