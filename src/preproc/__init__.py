"""
preproc - A minimal source preprocessor

Resolves include directives hidden in comment lines (``//&include <x>``),
builds a dependency graph of every file they reach, and splices the
files back together into a single flattened text. Cyclic and repeated
includes are emitted only once.

Example:

    from preproc import CommentParser, FilesystemSource, GraphBuilder, assemble

    source = FilesystemSource(["include_folder"])
    _, graph = GraphBuilder(source, CommentParser("//")).build("main.file")
    text = assemble(graph)
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("preproc")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from preproc.assembler import assemble
from preproc.depfile import create_depfile
from preproc.errors import EmptyGraphError, NotFoundError, ParseError, PreprocError
from preproc.graph import DependencyGraph, InsertionPoint, SourceRecord
from preproc.graph.builder import GraphBuilder, generate_graph
from preproc.parsers import IncludeDirective, IncludeKind, LineParser, MalformedDirective
from preproc.parsers.comment import CommentParser
from preproc.sources import FetchedFile, FileSource, GlobalRef, LocalRef
from preproc.sources.filesystem import FilesystemSource
from preproc.sources.memory import MemorySource

__all__ = [
    "__version__",
    "CommentParser",
    "DependencyGraph",
    "EmptyGraphError",
    "FetchedFile",
    "FileSource",
    "FilesystemSource",
    "GlobalRef",
    "GraphBuilder",
    "IncludeDirective",
    "IncludeKind",
    "InsertionPoint",
    "LineParser",
    "LocalRef",
    "MalformedDirective",
    "MemorySource",
    "NotFoundError",
    "ParseError",
    "PreprocError",
    "SourceRecord",
    "assemble",
    "create_depfile",
    "generate_graph",
]
