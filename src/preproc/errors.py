"""
preproc.errors - Error types raised while building and assembling files.

Cyclic includes and duplicate includes within one file are not errors;
they are suppressed by the builder and the assembler.
"""

from __future__ import annotations

from typing import Any


class PreprocError(Exception):
    """Base class for all preproc failures."""


class NotFoundError(PreprocError, LookupError):
    """A seed or included file could not be resolved or fetched.

    Attributes:
        reference: The reference that failed to resolve (a FileReference
            or a plain string).
    """

    def __init__(self, reference: Any) -> None:
        self.reference = reference
        super().__init__(f"file not found {reference}")


class ParseError(PreprocError, ValueError):
    """A directive-looking line could not be parsed.

    Attributes:
        line_index: 0-based index of the offending line.
        message: Message reported by the line parser.
        identity: Identity of the file containing the line, when known.
    """

    def __init__(self, line_index: int, message: str, identity: str | None = None) -> None:
        self.line_index = line_index
        self.message = message
        self.identity = identity
        text = f"line {line_index}: {message}"
        if identity:
            text = f"{identity}: {text}"
        super().__init__(text)


class EmptyGraphError(PreprocError, ValueError):
    """Assembly was requested on a dependency graph with no entries."""

    def __init__(self) -> None:
        super().__init__("empty dependency graph")
