"""Graph Builder - Constructs a DependencyGraph from a seed file.

The builder visits files depth-first in pre-order: a file's includes are
followed in line order, and each newly discovered file is scanned
completely before the includer moves on to its next directive.

Cycles are broken by inserting an empty placeholder record for a file
before its own directives are followed. Any later directive that resolves
to a file already in the graph, placeholder or not, records an insertion
point but is not followed again.

The traversal keeps its own stack of frames instead of recursing, so deep
include chains cannot exhaust the interpreter's call stack.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from preproc.errors import NotFoundError
from preproc.graph import DependencyGraph, InsertionPoint, SourceRecord
from preproc.parsers import IncludeDirective, IncludeKind, LineParser, scan_directives
from preproc.sources import FileReference, FileSource, GlobalRef, LocalRef
from preproc.utilities.text import split_lines

logger = logging.getLogger(__name__)

# Seeds given as plain names are resolved like a local include of the
# working directory.
SEED_PARENT = "./"


@dataclass
class _Frame:
    """A file whose directives are being followed."""

    identity: str
    record: SourceRecord
    directives: list[tuple[int, IncludeDirective]]
    position: int = 0

    def done(self) -> bool:
        return self.position >= len(self.directives)


class GraphBuilder:
    """Builder for dependency graphs.

    Usage:
        builder = GraphBuilder(FilesystemSource(["include"]), CommentParser("//"))
        seed_identity, graph = builder.build("main.c")
    """

    def __init__(self, source: FileSource, parser: LineParser) -> None:
        self.source = source
        self.parser = parser

    def build(self, seed: FileReference | str | Path) -> tuple[str, DependencyGraph]:
        """Discover every file reachable from seed.

        Args:
            seed: A file reference, or a file name taken relative to the
                working directory.

        Returns:
            Tuple of (seed identity, dependency graph).

        Raises:
            NotFoundError: If the seed or any included file cannot be
                resolved or fetched.
            ParseError: If any visited file contains a malformed directive.
        """
        seed_ref = _seed_reference(seed)
        seed_identity = self.source.resolve(seed_ref)
        if seed_identity is None:
            raise NotFoundError(seed_ref)

        graph = DependencyGraph()
        stack = [self._open(seed_ref, graph)]

        while stack:
            frame = stack[-1]
            if frame.done():
                # Replace the placeholder with the finished record
                graph._records[frame.identity] = frame.record
                stack.pop()
                continue

            line_index, directive = frame.directives[frame.position]
            frame.position += 1

            ref = _directive_reference(directive, frame.identity)
            target = self.source.resolve(ref)
            if target is None:
                raise NotFoundError(ref)

            # Only the first include of a target within one file counts
            if frame.record.has_target(target):
                logger.debug(
                    "%s:%d: duplicate include of %s ignored", frame.identity, line_index, target
                )
                continue
            frame.record.points.append(InsertionPoint(line_index, target))

            if target not in graph:
                stack.append(self._open(ref, graph))

        logger.debug("Built graph for %s with %d file(s)", seed_identity, len(graph))
        return seed_identity, graph

    def _open(self, ref: FileReference, graph: DependencyGraph) -> _Frame:
        """Fetch a file, register its placeholder and scan its directives."""
        fetched = self.source.fetch(ref)
        if fetched is None:
            raise NotFoundError(ref)

        # Placeholder must exist before any of this file's includes are followed
        graph._records[fetched.identity] = SourceRecord()

        lines = split_lines(fetched.content)
        directives = scan_directives(lines, self.parser, fetched.identity)
        logger.debug("Scanned %s: %d directive(s)", fetched.identity, len(directives))
        return _Frame(fetched.identity, SourceRecord(fetched.content), directives)


def generate_graph(
    seed: FileReference | str | Path,
    source: FileSource,
    parser: LineParser,
) -> tuple[str, DependencyGraph]:
    """Build a dependency graph from seed in one call.

    See GraphBuilder.build() for arguments and errors.
    """
    return GraphBuilder(source, parser).build(seed)


def _seed_reference(seed: FileReference | str | Path) -> FileReference:
    if isinstance(seed, (GlobalRef, LocalRef)):
        return seed
    return LocalRef(str(seed), SEED_PARENT)


def _directive_reference(directive: IncludeDirective, includer: str) -> FileReference:
    if directive.kind is IncludeKind.LOCAL:
        return LocalRef(directive.name, includer)
    return GlobalRef(directive.name)
