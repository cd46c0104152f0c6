"""CLI command implementations."""

from __future__ import annotations

from .convert import convert
from .rules import rules


__all__ = ["convert", "rules"]
