"""Small queries over the BeautifulSoup tree shared by the handlers."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from .nodes import InlineNode, TextNode


def tag_name(element: Tag) -> str:
    """Return the lower-cased tag name of an element."""
    return (element.name or "").lower()


def is_text(node: Any) -> bool:
    """Return True for character data, excluding comments, doctypes and CDATA."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def child_elements(element: Tag) -> Iterator[Tag]:
    """Yield the direct element children of ``element`` in document order."""
    for child in element.children:
        if isinstance(child, Tag):
            yield child


def has_direct_text(element: Tag) -> bool:
    """Return True when a direct text child carries non-whitespace content."""
    return any(is_text(child) and child.strip() for child in element.children)


def text_content(element: Tag, *, strip: bool = False) -> str:
    """Return the combined character data of ``element`` and its descendants.

    Comments and CDATA sections are skipped, as in inline composition.
    """
    text = "".join(str(node) for node in element.descendants if is_text(node))
    return text.strip() if strip else text


def plain_text_nodes(element: Tag) -> list[InlineNode]:
    """Degrade an element to a single unmarked run of its trimmed text."""
    text = text_content(element, strip=True)
    return [TextNode(text)] if text else []


def document_body(soup: BeautifulSoup) -> Tag:
    """Return the ``<body>`` element, or the parse root when there is none."""
    body = soup.body
    return body if body is not None else soup


__all__ = [
    "child_elements",
    "document_body",
    "has_direct_text",
    "is_text",
    "plain_text_nodes",
    "tag_name",
    "text_content",
]
