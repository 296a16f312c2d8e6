"""File Assembler - Splices a DependencyGraph back into a single text.

Starting from the graph's roots, each file's lines are copied to the
output, and every directive line recorded as an insertion point is
replaced by the fully expanded content of its target. A file is emitted
at most once per assembly: a second include of the same file, including
a back-reference in a cycle, contributes nothing.

Like the builder, the assembler keeps an explicit stack instead of
recursing.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from preproc.errors import EmptyGraphError
from preproc.graph import DependencyGraph, InsertionPoint
from preproc.utilities.text import split_lines

JOIN_SEPARATOR = "\n"


@dataclass
class _Cursor:
    """Emission state for one file."""

    lines: list[str]
    points: list[InsertionPoint]
    line: int = 0
    next_point: int = 0


def assemble(graph: DependencyGraph, roots: Iterable[str] | None = None) -> str:
    """Generate the flattened text for a dependency graph.

    Args:
        graph: Graph produced by the builder. It is not modified.
        roots: Identities to start from, in order. Defaults to
            graph.roots().

    Returns:
        All emitted lines joined by a single newline.

    Raises:
        EmptyGraphError: If the graph has no entries.
    """
    if not graph:
        raise EmptyGraphError()

    if roots is None:
        roots = graph.roots()

    output: list[str] = []
    visited: set[str] = set()
    for root in roots:
        _emit(root, graph, visited, output)
    return JOIN_SEPARATOR.join(output)


def _emit(root: str, graph: DependencyGraph, visited: set[str], output: list[str]) -> None:
    """Append the expanded lines of root to output."""
    stack: list[_Cursor] = []

    def enter(identity: str) -> None:
        if identity in visited:
            return
        visited.add(identity)
        record = graph[identity]
        stack.append(_Cursor(split_lines(record.text), record.points))

    enter(root)
    while stack:
        cursor = stack[-1]
        if cursor.next_point < len(cursor.points):
            point = cursor.points[cursor.next_point]
            cursor.next_point += 1
            output.extend(cursor.lines[cursor.line : point.line_index])
            # The directive line itself is never copied
            cursor.line = point.line_index + 1
            enter(point.target)
        else:
            output.extend(cursor.lines[cursor.line :])
            stack.pop()
