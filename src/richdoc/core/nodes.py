"""Document model produced by the HTML converter.

The tree mirrors the JSON structure consumed by the structured editor and
the storage layer. Every node serialises through ``to_dict`` and the field
names (``type``, ``attrs``, ``content``, ``text``, ``marks``) are part of the
compatibility contract with those consumers.

Blocks

`Paragraph`
: Inline content, or no ``content`` key at all when built from an empty ``<p>``.

`Heading`
: ``attrs.level`` between 1 and 6 and inline content.

`BulletList` / `OrderedList`
: A sequence of `ListItem` nodes, each wrapping block content.

`HorizontalRule` / `HardBreak`
: Leaves without content. `HardBreak` is valid both as a block and inline.

Inlines

`TextNode`
: A run of characters carrying an ordered sequence of distinct marks.

Marks are applied innermost first: ``<strong><em>x</em></strong>`` produces
``[italic, bold]``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
import json
from typing import Any, ClassVar

from .exceptions import InvalidNodeError


LINK_REL = "noopener noreferrer nofollow"
DEFAULT_LINK_TARGET = "_blank"


@dataclass(frozen=True, slots=True)
class Mark:
    """Base class for inline marks."""

    kind: ClassVar[str] = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind}


@dataclass(frozen=True, slots=True)
class BoldMark(Mark):
    kind: ClassVar[str] = "bold"


@dataclass(frozen=True, slots=True)
class ItalicMark(Mark):
    kind: ClassVar[str] = "italic"


@dataclass(frozen=True, slots=True)
class UnderlineMark(Mark):
    kind: ClassVar[str] = "underline"


@dataclass(frozen=True, slots=True)
class LinkMark(Mark):
    """Hyperlink mark. Source ``class`` attributes are never carried over."""

    kind: ClassVar[str] = "link"

    href: str = ""
    target: str = DEFAULT_LINK_TARGET
    rel: str = field(default=LINK_REL, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "attrs": {
                "href": self.href,
                "target": self.target,
                "rel": self.rel,
                "class": None,
            },
        }


@dataclass(frozen=True, slots=True)
class TextNode:
    """Run of text with its marks."""

    type: ClassVar[str] = "text"

    text: str
    marks: tuple[Mark, ...] = ()

    def has_mark(self, kind: str) -> bool:
        """Return True when a mark of the given kind is already applied."""
        return any(mark.kind == kind for mark in self.marks)

    def with_mark(self, mark: Mark) -> TextNode:
        """Return a copy with ``mark`` appended, unless its kind is present."""
        if self.has_mark(mark.kind):
            return self
        return replace(self, marks=(*self.marks, mark))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": self.type, "text": self.text}
        if self.marks:
            payload["marks"] = [mark.to_dict() for mark in self.marks]
        return payload


@dataclass(frozen=True, slots=True)
class HardBreak:
    type: ClassVar[str] = "hardBreak"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


@dataclass(frozen=True, slots=True)
class HorizontalRule:
    type: ClassVar[str] = "horizontalRule"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


InlineNode = TextNode | HardBreak


def _dump_content(content: Iterable[Any]) -> list[dict[str, Any]]:
    return [node.to_dict() for node in content]


@dataclass(frozen=True, slots=True)
class Paragraph:
    """Paragraph block; ``content=None`` omits the key from the payload."""

    type: ClassVar[str] = "paragraph"

    content: tuple[InlineNode, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": self.type}
        if self.content is not None:
            payload["content"] = _dump_content(self.content)
        return payload


@dataclass(frozen=True, slots=True)
class Heading:
    type: ClassVar[str] = "heading"

    level: int
    content: tuple[InlineNode, ...] = ()

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise InvalidNodeError(f"Heading level must be within 1..6, got {self.level}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "attrs": {"level": self.level},
            "content": _dump_content(self.content),
        }


@dataclass(frozen=True, slots=True)
class ListItem:
    type: ClassVar[str] = "listItem"

    content: tuple[BlockNode, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": _dump_content(self.content)}


@dataclass(frozen=True, slots=True)
class BulletList:
    type: ClassVar[str] = "bulletList"

    content: tuple[ListItem, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": _dump_content(self.content)}


@dataclass(frozen=True, slots=True)
class OrderedList:
    type: ClassVar[str] = "orderedList"

    content: tuple[ListItem, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": _dump_content(self.content)}


BlockNode = (
    Paragraph | Heading | BulletList | OrderedList | ListItem | HorizontalRule | HardBreak
)


@dataclass(frozen=True, slots=True)
class Document:
    """Document root holding at least one block."""

    type: ClassVar[str] = "doc"

    content: tuple[BlockNode, ...]

    def __post_init__(self) -> None:
        if not self.content:
            raise InvalidNodeError("A document requires at least one block node")

    @classmethod
    def empty(cls) -> Document:
        """Return the canonical empty document: a single empty paragraph."""
        return cls(content=(Paragraph(),))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": _dump_content(self.content)}

    def to_json(self, **kwargs: Any) -> str:
        """Serialise the document, forwarding ``kwargs`` to :func:`json.dumps`."""
        kwargs.setdefault("ensure_ascii", False)
        return json.dumps(self.to_dict(), **kwargs)


__all__ = [
    "DEFAULT_LINK_TARGET",
    "LINK_REL",
    "BlockNode",
    "BoldMark",
    "BulletList",
    "Document",
    "HardBreak",
    "Heading",
    "HorizontalRule",
    "InlineNode",
    "ItalicMark",
    "LinkMark",
    "ListItem",
    "Mark",
    "OrderedList",
    "Paragraph",
    "TextNode",
    "UnderlineMark",
]
