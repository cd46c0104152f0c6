"""Diagnostic emitter rendering conversion feedback on the CLI."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from richdoc.core.diagnostics import DiagnosticEmitter, format_event_message

from .state import CLIState, emit_error, emit_warning, get_cli_state, render_message


class CliEmitter(DiagnosticEmitter):
    """Render diagnostics on stderr.

    Warnings and errors are always shown. Structured events are summarised from
    ``-v`` on, and events without a summary are dumped raw from ``-vv`` on.
    """

    def __init__(self, state: CLIState | None = None) -> None:
        self._state = state or get_cli_state()

    @property
    def debug_enabled(self) -> bool:
        return self._state.show_tracebacks

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        if self._state.verbosity < 1:
            return
        message = format_event_message(name, payload)
        if message is None:
            if self._state.verbosity < 2:
                return
            message = f"{name}: {dict(payload)}"
        render_message("info", message)


__all__ = ["CliEmitter"]
