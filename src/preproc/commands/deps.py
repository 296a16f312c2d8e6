"""
preproc.commands.deps - Print the dependency rule for a file.
"""

from __future__ import annotations

import argparse

from preproc.commands.build import default_output_path, get_strip_prefix
from preproc.config import get_config
from preproc.depfile import create_depfile
from preproc.factory import build_graph


def run(args: argparse.Namespace) -> int:
    """Run the deps command."""
    config = get_config(getattr(args, "config", None))

    _, graph = build_graph(
        args.file,
        config=config,
        include_paths=args.include,
        comment=args.comment,
    )

    target = args.target or str(default_output_path(args.file, config))
    print(create_depfile(target, graph, get_strip_prefix(args, config)))
    return 0
