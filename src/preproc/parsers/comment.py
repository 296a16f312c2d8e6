"""CommentParser - directives hidden in comment lines.

Recognizes lines made of a comment marker immediately followed by ``&``:

    <marker> "&" <ws> "include" <ws> ( "<" name ">" | '"' name '"' )

so the directives stay invisible to the host language's own compiler or
interpreter. ``//&include <util.c>`` is a global include with the default
marker; ``#&include "helpers.py"`` is a local include with marker ``#``.
"""

from __future__ import annotations

from preproc.parsers import IncludeDirective, IncludeKind, MalformedDirective, ParsedLine

DEFAULT_MARKER = "//"
DIRECTIVE_PREFIX = "&"
INCLUDE_KEYWORD = "include"


class CommentParser:
    """Parser for ``<marker>&include`` directives.

    The marker must start the line; indented directives are not
    recognized. Anything after ``<marker>&`` that is not a well-formed
    include is reported as malformed rather than ignored.
    """

    def __init__(self, marker: str = DEFAULT_MARKER) -> None:
        if not marker:
            raise ValueError("comment marker must not be empty")
        self.marker = marker

    def __repr__(self) -> str:
        return f"CommentParser({self.marker!r})"

    def parse_line(self, line: str) -> ParsedLine:
        """Classify one line.

        Args:
            line: A single line without its terminator.

        Returns:
            None if the line does not start with ``<marker>&``, otherwise an
            IncludeDirective or a MalformedDirective.
        """
        if not line.startswith(self.marker + DIRECTIVE_PREFIX):
            return None

        rem = line[len(self.marker) + len(DIRECTIVE_PREFIX) :]
        command = rem.lstrip()
        if not command.startswith(INCLUDE_KEYWORD):
            return MalformedDirective(f"invalid preproc statement `{rem}`")

        target = command[len(INCLUDE_KEYWORD) :].strip()
        if len(target) >= 2 and target.startswith("<") and target.endswith(">"):
            return IncludeDirective(IncludeKind.GLOBAL, target[1:-1])
        if len(target) >= 2 and target.startswith('"') and target.endswith('"'):
            return IncludeDirective(IncludeKind.LOCAL, target[1:-1])
        return MalformedDirective(f"invalid include statement `{rem}`")
