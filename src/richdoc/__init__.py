"""Primary public API for richdoc."""

from __future__ import annotations

from richdoc.conversion import HtmlConverter, classify_block, compose_inline, convert_document
from richdoc.core.config import ConverterConfig
from richdoc.core.context import ConversionContext
from richdoc.core.diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from richdoc.core.exceptions import InvalidNodeError, ParseFailure, RichDocError
from richdoc.core.nodes import (
    LINK_REL,
    BlockNode,
    BoldMark,
    BulletList,
    Document,
    HardBreak,
    Heading,
    HorizontalRule,
    InlineNode,
    ItalicMark,
    LinkMark,
    ListItem,
    Mark,
    OrderedList,
    Paragraph,
    TextNode,
    UnderlineMark,
)
from richdoc.core.rules import RuleKind, converts
from richdoc.version import get_version


__version__ = get_version()

__all__ = [
    "LINK_REL",
    "BlockNode",
    "BoldMark",
    "BulletList",
    "ConversionContext",
    "ConverterConfig",
    "DiagnosticEmitter",
    "Document",
    "HardBreak",
    "Heading",
    "HorizontalRule",
    "HtmlConverter",
    "InlineNode",
    "InvalidNodeError",
    "ItalicMark",
    "LinkMark",
    "ListItem",
    "LoggingEmitter",
    "Mark",
    "NullEmitter",
    "OrderedList",
    "Paragraph",
    "ParseFailure",
    "RichDocError",
    "RuleKind",
    "TextNode",
    "UnderlineMark",
    "__version__",
    "classify_block",
    "compose_inline",
    "convert_document",
    "converts",
]
