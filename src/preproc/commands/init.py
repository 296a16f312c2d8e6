"""
preproc.commands.init - Create a default configuration file.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import tomlkit

from preproc.config import CONFIG_FILENAME, DEFAULT_CONFIG


def generate_config() -> str:
    """Render DEFAULT_CONFIG as a commented TOML document."""
    doc = tomlkit.document()
    doc.add(tomlkit.comment("preproc configuration"))
    doc.add(tomlkit.nl())

    preprocess = tomlkit.table()
    defaults = DEFAULT_CONFIG["preprocess"]
    preprocess.add("comment", defaults["comment"])
    preprocess["comment"].comment("directives are lines starting with <comment>&")
    include_paths = tomlkit.array()
    include_paths.extend(defaults["include_paths"])
    preprocess.add("include_paths", include_paths)
    preprocess["include_paths"].comment("searched in order for <global> includes")
    preprocess.add("output_suffix", defaults["output_suffix"])
    preprocess.add("encoding", defaults["encoding"])
    doc.add("preprocess", preprocess)

    depfile = tomlkit.table()
    depfile.add("strip_prefix", DEFAULT_CONFIG["depfile"]["strip_prefix"])
    doc.add("depfile", depfile)

    return tomlkit.dumps(doc)


def run(args: argparse.Namespace) -> int:
    """Run the init command."""
    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists() and not args.force:
        print(f"Error: {config_path} already exists (use --force to overwrite)", file=sys.stderr)
        return 1

    config_path.write_text(generate_config(), encoding="utf-8")

    if not args.quiet:
        print(f"Created {config_path}")
    return 0
