"""Public CLI exports for richdoc."""

from __future__ import annotations

from .app import app, main
from .commands import convert, rules
from .diagnostics import CliEmitter
from .state import debug_enabled, emit_error, emit_warning, get_cli_state, set_cli_state


__all__ = [
    "CliEmitter",
    "app",
    "convert",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "main",
    "rules",
    "set_cli_state",
]
