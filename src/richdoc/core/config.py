"""Configuration model used by the HTML converter.

ConverterConfig

`parser` (`str`)
: BeautifulSoup tree builder used to parse the input. Defaults to the
  built-in ``html.parser``. When the requested backend is not installed the
  converter falls back to ``html.parser`` and reports a ``parser_fallback``
  event.

`max_depth` (`int`)
: Maximum nesting of inline formatting elements (``<strong>``, ``<em>``,
  ``<a>`` and friends). Elements nested deeper are degraded to a single plain
  text run carrying their trimmed text. Accepted values range from 1 to
  ``MAX_DEPTH_LIMIT`` (200) so that composition stays within the interpreter
  recursion limit.

`encoding` (`str`)
: Codec used to decode ``bytes`` input. Undecodable input is reported as a
  :class:`~richdoc.core.exceptions.ParseFailure`.

`link_target` (`str`)
: Target applied to link marks when the source ``<a>`` carries no
  ``target`` attribute.
"""

from __future__ import annotations

import codecs

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .nodes import DEFAULT_LINK_TARGET


MAX_DEPTH_LIMIT = 200


class ConverterConfig(BaseModel):
    """Options controlling a conversion run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    parser: str = Field(default="html.parser", description="BeautifulSoup backend")
    max_depth: int = Field(
        default=64, ge=1, le=MAX_DEPTH_LIMIT, description="Inline nesting cap"
    )
    encoding: str = Field(default="utf-8", description="Codec for bytes input")
    link_target: str = Field(default=DEFAULT_LINK_TARGET, description="Default link target")

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding '{value}'") from exc
        return value


__all__ = ["MAX_DEPTH_LIMIT", "ConverterConfig"]
