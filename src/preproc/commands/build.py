"""
preproc.commands.build - Preprocess a file into a flattened output.

Writes the assembled text next to the input (``main.c`` -> ``main.i``)
unless an output path is given, and optionally a make depfile.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from preproc.config import get_config
from preproc.depfile import create_depfile
from preproc.factory import preprocess


def default_output_path(file: str | Path, config: dict[str, Any]) -> Path:
    """Return the output path used when none is given."""
    suffix = config.get("preprocess", {}).get("output_suffix", ".i")
    return Path(file).with_suffix(suffix)


def get_strip_prefix(args: argparse.Namespace, config: dict[str, Any]) -> str | None:
    """Return the depfile prefix to strip, preferring the command line."""
    prefix = getattr(args, "strip_prefix", None)
    if prefix is None:
        prefix = config.get("depfile", {}).get("strip_prefix")
    return prefix or None


def run(args: argparse.Namespace) -> int:
    """
    Run the build command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success)
    """
    config = get_config(getattr(args, "config", None))
    encoding = config.get("preprocess", {}).get("encoding", "utf-8")

    result = preprocess(
        args.file,
        config=config,
        include_paths=args.include,
        comment=args.comment,
    )

    output = args.output or default_output_path(args.file, config)
    output.write_text(result.text, encoding=encoding)

    if args.depfile:
        depfile_text = create_depfile(str(output), result.graph, get_strip_prefix(args, config))
        args.depfile.write_text(depfile_text + "\n", encoding="utf-8")

    if not args.quiet:
        for identity in result.graph:
            print(f"processed {identity}")
        if args.depfile:
            print(f"wrote dependencies to {args.depfile}")
        print(f"wrote to {output}")

    return 0
