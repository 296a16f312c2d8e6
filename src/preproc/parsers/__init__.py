"""Line parsers - directive recognition for single lines.

A line parser looks at one line of a source file and decides whether it
is a preprocessor directive. The dependency graph builder runs a parser
over every line of every file it visits.

Exports:
- IncludeKind: Whether an include is searched globally or locally
- IncludeDirective: A recognized include command
- MalformedDirective: A directive-looking line that failed to parse
- LineParser: Protocol for parser implementations
- scan_directives: Run a parser over a list of lines
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Union, runtime_checkable

from preproc.errors import ParseError


class IncludeKind(Enum):
    """How an include target is looked up."""

    GLOBAL = "global"  # <name>: searched in the configured include paths
    LOCAL = "local"  # "name": relative to the including file


@dataclass(frozen=True)
class IncludeDirective:
    """A recognized include directive.

    Attributes:
        kind: Global or local lookup.
        name: The file name exactly as written between the delimiters.
    """

    kind: IncludeKind
    name: str


@dataclass(frozen=True)
class MalformedDirective:
    """A line carrying the directive marker that could not be parsed.

    Attributes:
        message: Human-readable explanation, including the offending text.
    """

    message: str


ParsedLine = Union[IncludeDirective, MalformedDirective, None]


@runtime_checkable
class LineParser(Protocol):
    """Protocol for line parsers.

    ``parse_line`` returns None when the line is not a directive, an
    IncludeDirective when it is a valid include, or a MalformedDirective
    when it carries the directive marker but cannot be parsed.
    """

    def parse_line(self, line: str) -> ParsedLine:
        """Classify a single line (without its line terminator)."""
        ...


def scan_directives(
    lines: list[str],
    parser: LineParser,
    identity: str | None = None,
) -> list[tuple[int, IncludeDirective]]:
    """Run a parser over every line and collect include directives.

    Args:
        lines: Lines of one file, in order.
        parser: Parser used to classify each line.
        identity: Identity of the file, used only in error messages.

    Returns:
        List of (line_index, directive) tuples in line order. Indices are
        0-based.

    Raises:
        ParseError: On the first malformed directive.
    """
    directives: list[tuple[int, IncludeDirective]] = []
    for index, line in enumerate(lines):
        parsed = parser.parse_line(line)
        if parsed is None:
            continue
        if isinstance(parsed, MalformedDirective):
            raise ParseError(index, parsed.message, identity)
        directives.append((index, parsed))
    return directives


__all__ = [
    "IncludeDirective",
    "IncludeKind",
    "LineParser",
    "MalformedDirective",
    "ParsedLine",
    "scan_directives",
]
