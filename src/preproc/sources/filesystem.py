"""FilesystemSource - resolve references against the local filesystem.

Resolution rules:
- Global absolute names resolve only if the file exists.
- Global names starting with ``./`` are taken relative to the working
  directory.
- Other global names are searched in the configured include paths, in
  the order they were added, and finally in the default directory.
- Local names are joined to the directory of the including file.

Identities are absolute, normalized paths with symlinks resolved, so the
same file reached through different references always maps to one
identity.
"""

from __future__ import annotations

import logging
from pathlib import Path

from preproc.sources import FetchedFile, FileReference, GlobalRef, LocalRef

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_PATH = "."


class FilesystemSource:
    """File source backed by the local filesystem.

    Attributes:
        search_paths: Include directories searched for global references.
        default: Directory searched after all include directories.
        encoding: Encoding used to decode file content.
    """

    def __init__(
        self,
        search_paths: list[str | Path] | None = None,
        default: str | Path = DEFAULT_SEARCH_PATH,
        encoding: str = "utf-8",
    ) -> None:
        self.search_paths: list[Path] = [Path(p) for p in search_paths or []]
        self.default = Path(default)
        self.encoding = encoding

    def add_path(self, path: str | Path) -> None:
        """Append an include directory to the search order."""
        self.search_paths.append(Path(path))

    def resolve(self, ref: FileReference) -> str | None:
        """Resolve a reference to an absolute path string.

        Args:
            ref: Global or local reference.

        Returns:
            The identity of the file, or None if it does not exist.
        """
        if isinstance(ref, LocalRef):
            return self._resolve_local(ref)
        if isinstance(ref, GlobalRef):
            return self._resolve_global(ref)
        raise TypeError(f"unsupported file reference: {ref!r}")

    def fetch(self, ref: FileReference) -> FetchedFile | None:
        """Resolve a reference and read the file.

        Returns:
            FetchedFile, or None if the file cannot be found or read.
        """
        identity = self.resolve(ref)
        if identity is None:
            return None
        try:
            content = Path(identity).read_bytes().decode(self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read %s: %s", identity, e)
            return None
        return FetchedFile(identity, content)

    def _resolve_global(self, ref: GlobalRef) -> str | None:
        path = Path(ref.name)

        if path.is_absolute():
            return _existing_file(path)

        if ref.name.startswith("./"):
            return _existing_file(Path.cwd() / path)

        for search_path in [*self.search_paths, self.default]:
            identity = _existing_file(search_path / path)
            if identity is not None:
                return identity
        return None

    def _resolve_local(self, ref: LocalRef) -> str | None:
        parent = Path(ref.parent)
        base = parent.parent if parent.is_file() else parent
        return _existing_file(base / ref.name)


def _existing_file(path: Path) -> str | None:
    """Return the normalized absolute path if it names an existing file."""
    if not path.is_file():
        return None
    return str(path.resolve())
