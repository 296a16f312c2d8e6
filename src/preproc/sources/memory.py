"""MemorySource - an in-memory file source.

Useful for tests and for embedding preproc where files do not live on
disk. File names are normalized POSIX-style paths; local references are
resolved against the directory part of the including file's name.
"""

from __future__ import annotations

import posixpath

from preproc.sources import FetchedFile, FileReference, GlobalRef, LocalRef


class MemorySource:
    """File source backed by a dict of name -> content."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self._files: dict[str, str] = {}
        for name, content in (files or {}).items():
            self.add_file(name, content)

    def add_file(self, name: str, content: str) -> None:
        """Add or replace a file."""
        self._files[_normalize(name)] = content

    def __contains__(self, name: str) -> bool:
        return _normalize(name) in self._files

    def resolve(self, ref: FileReference) -> str | None:
        """Resolve a reference to a stored file name."""
        if isinstance(ref, GlobalRef):
            name = _normalize(ref.name)
        elif isinstance(ref, LocalRef):
            parent = _normalize(ref.parent)
            if parent not in self._files:
                # Parent is a directory rather than a stored file
                base = parent
            else:
                base = posixpath.dirname(parent)
            name = _normalize(posixpath.join(base, ref.name))
        else:
            raise TypeError(f"unsupported file reference: {ref!r}")

        return name if name in self._files else None

    def fetch(self, ref: FileReference) -> FetchedFile | None:
        """Resolve a reference and return its stored content."""
        identity = self.resolve(ref)
        if identity is None:
            return None
        return FetchedFile(identity, self._files[identity])


def _normalize(name: str) -> str:
    return posixpath.normpath(name.replace("\\", "/"))
