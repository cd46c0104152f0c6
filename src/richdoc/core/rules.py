"""Rule declaration and dispatch for the HTML to document conversion.

Handlers declare the tags they convert with the ``@converts`` decorator,
which records a :class:`RuleDefinition` on the callable. The
:class:`ConversionEngine` collects those declarations into a
:class:`RuleRegistry` and dispatches each element to exactly one rule.

Two kinds of rules exist:

``BLOCK``
: Block Walker rules. A handler receives a top-level element and returns a
  block node, or ``None`` to drop the element.

``INLINE``
: Inline Composer rules. A handler receives an element found inside a block
  and returns the ordered inline nodes it produces.

A rule declared without tags is the fallback of its kind. Every element whose
tag has no dedicated rule is sent to the fallback, so each kind must register
one.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum, auto
import logging
from typing import TYPE_CHECKING, Any, cast

from bs4 import Tag

from .diagnostics import record_event
from .dom import is_text, plain_text_nodes, tag_name, text_content
from .exceptions import NestingDepthExceeded
from .nodes import TextNode


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .context import ConversionContext
    from .nodes import BlockNode, InlineNode


logger = logging.getLogger(__name__)


class RuleKind(Enum):
    """Families of conversion rules."""

    BLOCK = auto()
    """Top-level classification into block nodes."""

    INLINE = auto()
    """Composition of inline nodes inside a block."""


RuleCallable = Callable[[Any, "ConversionContext"], Any]

FALLBACK = "__fallback__"


@dataclass
class ConversionRule:
    """Concrete rule registered in the engine."""

    priority: int
    kind: RuleKind
    tags: tuple[str, ...]
    name: str
    handler: RuleCallable

    def is_fallback(self) -> bool:
        """Return True when the rule handles tags without a dedicated rule."""
        return self.tags == (FALLBACK,)


@dataclass(frozen=True)
class RuleDefinition:
    """Descriptor installed on handler callables by the decorator."""

    kind: RuleKind
    tags: tuple[str, ...]
    priority: int = 0
    name: str | None = None

    def bind(self, handler: RuleCallable) -> ConversionRule:
        """Create a concrete rule instance bound to the callable."""
        name = self.name or getattr(handler, "__name__", handler.__class__.__name__)
        return ConversionRule(
            priority=self.priority,
            kind=self.kind,
            tags=self.tags,
            name=name,
            handler=handler,
        )


class RuleRegistry:
    """Container resolving a tag name to the rule that converts it."""

    def __init__(self) -> None:
        self._rules: dict[RuleKind, dict[str, list[ConversionRule]]] = {}

    def register(self, rule: ConversionRule) -> None:
        """Register a rule; at equal priority the latest registration wins."""
        kind_bucket = self._rules.setdefault(rule.kind, {})
        for tag in rule.tags:
            tag_bucket = kind_bucket.setdefault(tag.lower() if tag != FALLBACK else tag, [])
            tag_bucket.insert(0, rule)
            tag_bucket.sort(key=lambda item: -item.priority)

    def resolve(self, kind: RuleKind, tag: str) -> ConversionRule:
        """Return the rule converting ``tag``, falling back to the kind's default."""
        kind_bucket = self._rules.get(kind, {})
        candidates = kind_bucket.get(tag) or kind_bucket.get(FALLBACK)
        if not candidates:
            raise LookupError(f"No {kind.name.lower()} rule registered for <{tag}>")
        return candidates[0]

    def iter_kind(self, kind: RuleKind) -> Iterable[ConversionRule]:
        """Iterate over the rules of a kind, once per registered tag."""
        for tag_rules in self._rules.get(kind, {}).values():
            yield from tag_rules

    def describe(self) -> list[dict[str, object]]:
        """Return a serialisable snapshot of the registered rules."""
        entries: list[dict[str, object]] = []
        for kind in RuleKind:
            buckets = self._rules.get(kind, {})
            for tag, rules in sorted(buckets.items(), key=lambda item: item[0]):
                for order, rule in enumerate(rules):
                    entries.append(
                        {
                            "kind": kind.name,
                            "tag": tag,
                            "name": rule.name,
                            "priority": rule.priority,
                            "active": order == 0,
                        }
                    )
        return entries


def converts(
    *tags: str,
    kind: RuleKind = RuleKind.BLOCK,
    priority: int = 0,
    name: str | None = None,
) -> Callable[[RuleCallable], RuleCallable]:
    """Decorator used to register element handlers."""
    definition = RuleDefinition(
        kind=kind,
        tags=tuple(tags) or (FALLBACK,),
        priority=priority,
        name=name,
    )

    def decorator(handler: RuleCallable) -> RuleCallable:
        cast(Any, handler).__conversion_rule__ = definition
        return handler

    return decorator


class ConversionEngine:
    """Dispatch elements to the registered rules."""

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        self.registry = registry or RuleRegistry()

    def collect_from(self, owner: Any) -> None:
        """Collect decorated callables from an object or module."""
        for attribute in dir(owner):
            handler = getattr(owner, attribute)
            definition = getattr(handler, "__conversion_rule__", None)
            if definition is None and hasattr(handler, "__func__"):
                definition = getattr(handler.__func__, "__conversion_rule__", None)
            if isinstance(definition, RuleDefinition):
                self.registry.register(definition.bind(handler))

    def register(self, handler: RuleCallable) -> None:
        """Register a standalone callable decorated with ``@converts``."""
        definition = getattr(handler, "__conversion_rule__", None)
        if not isinstance(definition, RuleDefinition):
            msg = "Handler must be decorated with @converts"
            raise TypeError(msg)
        self.registry.register(definition.bind(handler))

    def classify_block(self, element: Tag, context: ConversionContext) -> BlockNode | None:
        """Classify one top-level element into a block node, or drop it."""
        name = tag_name(element)
        rule = self.registry.resolve(RuleKind.BLOCK, name)
        node = rule.handler(element, context)
        if node is None:
            record_event(context.emitter, "element_dropped", {"tag": name, "rule": rule.name})
            if text_content(element, strip=True):
                context.emitter.warning(f"Dropped <{name}> together with its nested text")
        return node

    def compose_inline(self, element: Tag, context: ConversionContext) -> list[InlineNode]:
        """Compose the direct children of ``element`` into inline nodes."""
        nodes: list[InlineNode] = []
        with context.descend():
            for child in element.children:
                if is_text(child):
                    text = str(child)
                    if text:
                        nodes.append(TextNode(text))
                    continue
                if not isinstance(child, Tag):
                    continue

                name = tag_name(child)
                rule = self.registry.resolve(RuleKind.INLINE, name)
                try:
                    nodes.extend(rule.handler(child, context))
                except NestingDepthExceeded as exc:
                    logger.debug("Flattening <%s> at depth %d", name, context.depth)
                    record_event(
                        context.emitter, "depth_limit", {"tag": name, "depth": exc.depth}
                    )
                    nodes.extend(plain_text_nodes(child))
        return nodes


__all__ = [
    "FALLBACK",
    "ConversionEngine",
    "ConversionRule",
    "RuleDefinition",
    "RuleKind",
    "RuleRegistry",
    "converts",
]
