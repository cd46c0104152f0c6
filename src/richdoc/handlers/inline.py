"""Inline Composer rules turning formatting elements into marks."""

from __future__ import annotations

from bs4 import Tag

from ..core.context import ConversionContext
from ..core.dom import plain_text_nodes
from ..core.nodes import (
    BoldMark,
    HardBreak,
    InlineNode,
    ItalicMark,
    LinkMark,
    Mark,
    TextNode,
    UnderlineMark,
)
from ..core.rules import RuleKind, converts


def apply_mark(nodes: list[InlineNode], mark: Mark) -> list[InlineNode]:
    """Append ``mark`` to every text run; other inline nodes pass through."""
    return [node.with_mark(mark) if isinstance(node, TextNode) else node for node in nodes]


@converts("strong", "b", kind=RuleKind.INLINE, name="inline_bold")
def render_bold(element: Tag, context: ConversionContext) -> list[InlineNode]:
    return apply_mark(context.compose_inline(element), BoldMark())


@converts("em", "i", kind=RuleKind.INLINE, name="inline_italic")
def render_italic(element: Tag, context: ConversionContext) -> list[InlineNode]:
    return apply_mark(context.compose_inline(element), ItalicMark())


@converts("u", kind=RuleKind.INLINE, name="inline_underline")
def render_underline(element: Tag, context: ConversionContext) -> list[InlineNode]:
    return apply_mark(context.compose_inline(element), UnderlineMark())


@converts("a", kind=RuleKind.INLINE, name="inline_link")
def render_link(element: Tag, context: ConversionContext) -> list[InlineNode]:
    """Attach a link mark; only ``href`` and ``target`` are read from the source."""
    href = element.get("href") or ""
    target = element.get("target") or context.config.link_target
    mark = LinkMark(href=str(href), target=str(target))
    return apply_mark(context.compose_inline(element), mark)


@converts("br", kind=RuleKind.INLINE, name="inline_breaks")
def render_line_break(element: Tag, context: ConversionContext) -> list[InlineNode]:
    return [HardBreak()]


@converts(kind=RuleKind.INLINE, name="inline_fallback")
def render_unknown_inline(element: Tag, context: ConversionContext) -> list[InlineNode]:
    """Keep only the trimmed text of elements without a dedicated rule."""
    return plain_text_nodes(element)
