"""Conversion context shared with every handler."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .config import ConverterConfig
from .diagnostics import DiagnosticEmitter, NullEmitter
from .exceptions import NestingDepthExceeded


if TYPE_CHECKING:  # pragma: no cover - typing only
    from bs4.element import Tag

    from .nodes import BlockNode, InlineNode
    from .rules import ConversionEngine


@dataclass
class ConversionContext:
    """Per-call state. A context is never shared between two conversions."""

    engine: ConversionEngine
    config: ConverterConfig = field(default_factory=ConverterConfig)
    emitter: DiagnosticEmitter = field(default_factory=NullEmitter)
    depth: int = 0

    @contextmanager
    def descend(self) -> Iterator[int]:
        """Enter one level of inline nesting, enforcing ``config.max_depth``."""
        if self.depth >= self.config.max_depth:
            raise NestingDepthExceeded(self.config.max_depth)
        self.depth += 1
        try:
            yield self.depth
        finally:
            self.depth -= 1

    def classify_block(self, element: Tag) -> BlockNode | None:
        """Classify ``element`` through the engine's block rules."""
        return self.engine.classify_block(element, self)

    def compose_inline(self, element: Tag) -> list[InlineNode]:
        """Compose the inline content of ``element`` through the engine."""
        return self.engine.compose_inline(element, self)


__all__ = ["ConversionContext"]
