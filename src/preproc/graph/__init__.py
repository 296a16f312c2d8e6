"""Graph module - Dependency graph data structures.

Exports:
- InsertionPoint: Where, and with which file, to splice an include
- SourceRecord: Raw text of a file plus its insertion points
- DependencyGraph: Read-only mapping of identity -> SourceRecord

Note: DependencyGraph is populated by preproc.graph.builder.GraphBuilder
(use build_graph() to construct one from a seed file).
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class InsertionPoint:
    """A directive line and the file that replaces it.

    Attributes:
        line_index: 0-based index of the directive line in the owning file.
        target: Identity of the included file.
    """

    line_index: int
    target: str


@dataclass
class SourceRecord:
    """A file's raw text and the insertion points found in it.

    Points are kept in ascending line order, one per target identity.
    A record with no text and no points is a placeholder for a file
    whose scan has not finished yet.
    """

    text: str = ""
    points: list[InsertionPoint] = field(default_factory=list)

    def has_target(self, target: str) -> bool:
        """Check whether any insertion point already includes target."""
        return any(p.target == target for p in self.points)

    def targets(self) -> list[str]:
        """Return the target identities in point order."""
        return [p.target for p in self.points]


class DependencyGraph(Mapping[str, SourceRecord]):
    """Mapping of file identity to SourceRecord.

    Iteration follows insertion order, which for a built graph is the
    order in which files were first discovered (pre-order from the
    seed). That order is what makes root selection stable.
    """

    def __init__(self, records: Mapping[str, SourceRecord] | None = None) -> None:
        self._records: dict[str, SourceRecord] = dict(records or {})

    def __getitem__(self, identity: str) -> SourceRecord:
        return self._records[identity]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"DependencyGraph({list(self._records)!r})"

    def referenced(self) -> set[str]:
        """Return every identity that is the target of some insertion point."""
        return {target for _, target in self.iter_edges()}

    def roots(self) -> list[str]:
        """Return the entry points for assembly.

        Roots are identities not included by any file, in graph order.
        When every file is included by another (a pure cycle) there is no
        natural entry point; the first identity of the graph is used. For a
        freshly built graph that is the seed file.
        """
        if not self._records:
            return []
        referenced = self.referenced()
        roots = [identity for identity in self._records if identity not in referenced]
        if not roots:
            roots = [next(iter(self._records))]
        return roots

    def iter_edges(self) -> Iterator[tuple[str, str]]:
        """Iterate (includer, included) pairs in graph and point order."""
        for identity, record in self._records.items():
            for point in record.points:
                yield identity, point.target

    def merge(self, other: Mapping[str, SourceRecord]) -> DependencyGraph:
        """Return a new graph holding the records of both graphs.

        Records in ``other`` replace records with the same identity.
        """
        merged = DependencyGraph(self._records)
        merged._records.update(other)
        return merged


__all__ = [
    "DependencyGraph",
    "InsertionPoint",
    "SourceRecord",
]
