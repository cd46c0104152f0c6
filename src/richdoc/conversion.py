"""HTML to document conversion entry points."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from typing import Any

from bs4 import BeautifulSoup, FeatureNotFound, Tag
from bs4.builder import HTMLTreeBuilder, ParserRejectedMarkup

from .core.config import ConverterConfig
from .core.context import ConversionContext
from .core.diagnostics import (
    DiagnosticEmitter,
    ensure_emitter,
    raise_parse_failure,
    record_event,
)
from .core.dom import child_elements, document_body
from .core.exceptions import InvalidNodeError
from .core.nodes import BlockNode, Document, InlineNode
from .core.rules import ConversionEngine, RuleKind


logger = logging.getLogger(__name__)

FALLBACK_PARSER = "html.parser"

# The parse root is listed so that whitespace-only strings are never collapsed.
PRESERVE_WHITESPACE_TAGS = set(HTMLTreeBuilder.DEFAULT_PRESERVE_WHITESPACE_TAGS) | {"[document]"}


class HtmlConverter:
    """Convert HTML fragments into document trees.

    A converter only holds its configuration and rule registry; every call to
    :meth:`convert` builds a fresh context, so one instance can serve
    concurrent callers.
    """

    def __init__(
        self,
        config: ConverterConfig | None = None,
        *,
        parser: str | None = None,
    ) -> None:
        self.config = config or ConverterConfig()
        if parser is not None:
            self.config = self.config.model_copy(update={"parser": parser})
        self.engine = ConversionEngine()
        self._register_builtin_handlers()

    def _register_builtin_handlers(self) -> None:
        """Register the built-in block and inline handlers."""
        from .handlers import blocks as block_handlers, inline as inline_handlers

        self.engine.collect_from(block_handlers)
        self.engine.collect_from(inline_handlers)

    def register(self, handler: Any) -> None:
        """Register additional handlers on demand.

        Arguments can be callables decorated with :func:`converts` or modules/classes
        exposing decorated attributes.
        """
        definition = getattr(handler, "__conversion_rule__", None)
        if definition is not None:
            self.engine.register(handler)
            return

        self.engine.collect_from(handler)

    def parse(self, html: str | bytes, *, emitter: DiagnosticEmitter | None = None) -> BeautifulSoup:
        """Parse ``html`` with the configured backend.

        Whitespace-only text is kept verbatim everywhere in the tree.

        Raises:
            ParseFailure: When the input cannot be decoded or the parser rejects it.
        """
        try:
            markup = self._decode(html)
            try:
                return self._build_soup(markup, self.config.parser)
            except FeatureNotFound:
                if self.config.parser == FALLBACK_PARSER:
                    raise
                # Fall back to the built-in parser when the preferred backend is missing.
                record_event(
                    emitter,
                    "parser_fallback",
                    {"preferred": self.config.parser, "fallback": FALLBACK_PARSER},
                )
                return self._build_soup(markup, FALLBACK_PARSER)
        except (UnicodeDecodeError, ParserRejectedMarkup) as exc:
            raise_parse_failure(emitter, "Failed to parse HTML content", exc)

    @staticmethod
    def _build_soup(markup: str, parser: str) -> BeautifulSoup:
        return BeautifulSoup(
            markup, parser, preserve_whitespace_tags=PRESERVE_WHITESPACE_TAGS
        )

    def _decode(self, html: str | bytes) -> str:
        if isinstance(html, str):
            return html
        if isinstance(html, (bytes, bytearray)):
            return bytes(html).decode(self.config.encoding)
        raise InvalidNodeError(f"Expected HTML as str or bytes, got {type(html).__name__}")

    def new_context(self, emitter: DiagnosticEmitter | None = None) -> ConversionContext:
        """Return a fresh context bound to this converter."""
        return ConversionContext(
            engine=self.engine,
            config=self.config,
            emitter=ensure_emitter(emitter),
        )

    def convert(
        self, html: str | bytes, *, emitter: DiagnosticEmitter | None = None
    ) -> Document:
        """Convert an HTML string into a document.

        The result always holds at least one block; empty or whitespace-only
        input yields a single empty paragraph.
        """
        soup = self.parse(html, emitter=emitter)
        context = self.new_context(emitter)
        content = self.walk(document_body(soup), context)
        logger.debug("Converted HTML input into %d block(s)", len(content))
        if not content:
            return Document.empty()
        return Document(content=tuple(content))

    def walk(self, body: Tag, context: ConversionContext) -> list[BlockNode]:
        """Classify the direct element children of ``body``; text is ignored."""
        blocks: list[BlockNode] = []
        for element in child_elements(body):
            node = context.classify_block(element)
            if node is not None:
                blocks.append(node)
        return blocks

    def classify_block(
        self, element: Tag, *, emitter: DiagnosticEmitter | None = None
    ) -> BlockNode | None:
        """Classify an already-parsed element into a block node."""
        return self.new_context(emitter).classify_block(element)

    def compose_inline(
        self, element: Tag, *, emitter: DiagnosticEmitter | None = None
    ) -> list[InlineNode]:
        """Compose the inline content of an already-parsed element."""
        return self.new_context(emitter).compose_inline(element)

    def iter_registered_rules(self) -> Iterable[tuple[RuleKind, str]]:
        """Expose currently registered rules for debugging/reporting."""
        for kind in RuleKind:
            for rule in self.engine.registry.iter_kind(kind):
                yield kind, rule.name


def convert_document(
    html: str | bytes,
    *,
    config: ConverterConfig | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> Document:
    """Convert ``html`` into a document with a default converter."""
    return HtmlConverter(config).convert(html, emitter=emitter)


def classify_block(element: Tag, *, config: ConverterConfig | None = None) -> BlockNode | None:
    """Classify a single parsed element with the built-in rules."""
    return HtmlConverter(config).classify_block(element)


def compose_inline(element: Tag, *, config: ConverterConfig | None = None) -> list[InlineNode]:
    """Compose the inline content of a parsed element with the built-in rules."""
    return HtmlConverter(config).compose_inline(element)


__all__ = [
    "FALLBACK_PARSER",
    "PRESERVE_WHITESPACE_TAGS",
    "HtmlConverter",
    "classify_block",
    "compose_inline",
    "convert_document",
]
