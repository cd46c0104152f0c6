"""Custom exception hierarchy for the HTML to document conversion."""

from __future__ import annotations


class RichDocError(RuntimeError):
    """Base exception for conversion failures."""


class ParseFailure(RichDocError):
    """Raised when the input cannot be parsed as HTML at all."""


class InvalidNodeError(RichDocError):
    """Raised when a document node would violate the model invariants."""


class NestingDepthExceeded(RichDocError):
    """Raised when inline composition descends past the configured depth."""

    def __init__(self, depth: int) -> None:
        super().__init__(f"Inline nesting exceeds the maximum depth of {depth}")
        self.depth = depth


def exception_hint(exc: BaseException) -> str:
    """Return a concise, user-facing summary of an exception."""
    if isinstance(exc, ParseFailure):
        cause = exc.__cause__
        if isinstance(cause, UnicodeDecodeError):
            return f"input is not valid {cause.encoding} ({cause.reason})"
        if cause is not None:
            return exception_hint(cause)
    message = str(exc).strip()
    if message:
        return message.splitlines()[0]
    return type(exc).__name__


__all__ = [
    "InvalidNodeError",
    "NestingDepthExceeded",
    "ParseFailure",
    "RichDocError",
    "exception_hint",
]
