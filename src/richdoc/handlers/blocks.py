"""Block Walker rules classifying top-level elements into block nodes."""

from __future__ import annotations

from bs4 import Tag

from ..core.context import ConversionContext
from ..core.dom import child_elements, has_direct_text, tag_name, text_content
from ..core.nodes import (
    BulletList,
    HardBreak,
    Heading,
    HorizontalRule,
    ListItem,
    OrderedList,
    Paragraph,
    TextNode,
)
from ..core.rules import RuleKind, converts


@converts("h1", "h2", "h3", "h4", "h5", "h6", kind=RuleKind.BLOCK, name="headings")
def convert_heading(element: Tag, context: ConversionContext) -> Heading:
    """Convert ``<hN>`` into a heading of level ``N``."""
    level = int(tag_name(element)[1])
    return Heading(level=level, content=tuple(context.compose_inline(element)))


@converts("p", kind=RuleKind.BLOCK, name="paragraphs")
def convert_paragraph(element: Tag, context: ConversionContext) -> Paragraph:
    """Convert ``<p>``; an empty paragraph carries no content at all."""
    content = context.compose_inline(element)
    return Paragraph(content=tuple(content) if content else None)


@converts("div", kind=RuleKind.BLOCK, name="containers")
def convert_container(element: Tag, context: ConversionContext) -> Paragraph | None:
    """Promote a ``<div>`` with direct text to a paragraph.

    A container holding only nested elements is dropped together with its
    subtree; its children are not walked as blocks.
    """
    if not has_direct_text(element):
        return None
    return Paragraph(content=tuple(context.compose_inline(element)))


def _list_items(element: Tag, context: ConversionContext) -> tuple[ListItem, ...]:
    items: list[ListItem] = []
    for child in child_elements(element):
        if tag_name(child) != "li":
            continue
        paragraph = Paragraph(content=tuple(context.compose_inline(child)))
        items.append(ListItem(content=(paragraph,)))
    return tuple(items)


@converts("ul", kind=RuleKind.BLOCK, name="bullet_lists")
def convert_bullet_list(element: Tag, context: ConversionContext) -> BulletList:
    return BulletList(content=_list_items(element, context))


@converts("ol", kind=RuleKind.BLOCK, name="ordered_lists")
def convert_ordered_list(element: Tag, context: ConversionContext) -> OrderedList:
    return OrderedList(content=_list_items(element, context))


@converts("hr", kind=RuleKind.BLOCK, name="horizontal_rules")
def convert_horizontal_rule(element: Tag, context: ConversionContext) -> HorizontalRule:
    return HorizontalRule()


@converts("br", kind=RuleKind.BLOCK, name="block_breaks")
def convert_block_break(element: Tag, context: ConversionContext) -> HardBreak:
    return HardBreak()


@converts(kind=RuleKind.BLOCK, name="block_fallback")
def convert_unknown_block(element: Tag, context: ConversionContext) -> Paragraph | None:
    """Degrade any other element to a plain paragraph of its trimmed text."""
    text = text_content(element, strip=True)
    if not text:
        return None
    return Paragraph(content=(TextNode(text),))
