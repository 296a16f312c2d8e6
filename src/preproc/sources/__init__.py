"""File sources - resolve references to identities and fetch raw text.

A file source is the only component that knows where files live. It
turns a reference taken from a directive into a canonical identity
string and hands back the file's content.

Exports:
- GlobalRef: A reference searched across the configured include paths
- LocalRef: A reference relative to the including file
- FileReference: Union of the two
- FetchedFile: Identity and content of a fetched file
- FileSource: Protocol for source implementations
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable


@dataclass(frozen=True)
class GlobalRef:
    """Reference to a file searched across the include paths."""

    name: str

    def __str__(self) -> str:
        return f"<{self.name}>"


@dataclass(frozen=True)
class LocalRef:
    """Reference to a file relative to another one.

    Attributes:
        name: The referenced name.
        parent: Identity (or directory) the name is relative to.
    """

    name: str
    parent: str

    def __str__(self) -> str:
        return f'"{self.name}" (local to {self.parent})'


FileReference = Union[GlobalRef, LocalRef]


@dataclass(frozen=True)
class FetchedFile:
    """Content of a file together with its resolved identity."""

    identity: str
    content: str


@runtime_checkable
class FileSource(Protocol):
    """Protocol for file sources.

    Both methods return None when the reference cannot be resolved;
    callers decide whether that is an error.
    """

    def resolve(self, ref: FileReference) -> str | None:
        """Resolve a reference to a canonical identity."""
        ...

    def fetch(self, ref: FileReference) -> FetchedFile | None:
        """Resolve a reference and read its content."""
        ...


__all__ = [
    "FetchedFile",
    "FileReference",
    "FileSource",
    "GlobalRef",
    "LocalRef",
]
