"""Factory - Shared entry point for preprocessing a file from configuration.

Commands use this instead of wiring parsers, sources and the builder
together themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from preproc.assembler import assemble
from preproc.config import get_config
from preproc.graph import DependencyGraph
from preproc.graph.builder import GraphBuilder
from preproc.parsers.comment import CommentParser
from preproc.sources.filesystem import FilesystemSource


@dataclass
class PreprocessResult:
    """Outcome of preprocessing one seed file.

    Attributes:
        seed: Identity of the seed file.
        graph: Dependency graph of every file reached from the seed.
        text: Flattened output text.
    """

    seed: str
    graph: DependencyGraph
    text: str


def create_source(
    config: dict[str, Any],
    include_paths: list[str | Path] | None = None,
) -> FilesystemSource:
    """Create a FilesystemSource from configuration.

    Include paths given explicitly are searched before the configured ones.
    """
    section = config.get("preprocess", {})
    configured = section.get("include_paths", [])
    if isinstance(configured, (str, Path)):
        configured = [configured]
    paths: list[str | Path] = [*(include_paths or []), *configured]
    return FilesystemSource(paths, encoding=section.get("encoding", "utf-8"))


def create_parser(config: dict[str, Any], comment: str | None = None) -> CommentParser:
    """Create a CommentParser from configuration, or from comment if given."""
    marker = comment or config.get("preprocess", {}).get("comment", "//")
    return CommentParser(marker)


def build_graph(
    seed: str | Path,
    config: dict[str, Any] | None = None,
    include_paths: list[str | Path] | None = None,
    comment: str | None = None,
    config_path: Path | None = None,
) -> tuple[str, DependencyGraph]:
    """Build the dependency graph for seed.

    Args:
        seed: File to start from, relative to the working directory.
        config: Pre-loaded config dict (optional).
        include_paths: Extra include directories searched first.
        comment: Comment marker overriding the configured one.
        config_path: Path to config file, used when config is None.

    Returns:
        Tuple of (seed identity, dependency graph).
    """
    if config is None:
        config = get_config(config_path)

    builder = GraphBuilder(create_source(config, include_paths), create_parser(config, comment))
    return builder.build(seed)


def preprocess(
    seed: str | Path,
    config: dict[str, Any] | None = None,
    include_paths: list[str | Path] | None = None,
    comment: str | None = None,
    config_path: Path | None = None,
) -> PreprocessResult:
    """Build the graph for seed and assemble it into one text.

    Arguments are the same as for build_graph().
    """
    seed_identity, graph = build_graph(
        seed,
        config=config,
        include_paths=include_paths,
        comment=comment,
        config_path=config_path,
    )
    return PreprocessResult(seed_identity, graph, assemble(graph))
