"""
preproc.cli - Command-line interface.

Main entry point for the preproc CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from preproc import __version__
from preproc.commands import build, deps, init


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the arguments shared by commands that read a source tree."""
    parser.add_argument(
        "file",
        help="File to preprocess",
    )
    parser.add_argument(
        "-I",
        "--include",
        action="append",
        default=[],
        help="Add a directory to search for <global> includes (can be repeated)",
        metavar="DIR",
    )
    parser.add_argument(
        "-c",
        "--comment",
        help="Comment marker that starts a directive (default: //)",
        metavar="MARKER",
    )
    parser.add_argument(
        "--strip-prefix",
        help="Prefix removed from paths listed in dependency output",
        metavar="PREFIX",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="preproc",
        description="Minimal source preprocessor for comment-embedded include directives",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Directives:
  //&include <util.c>     # searched in the include directories
  //&include "local.c"    # relative to the including file

Examples:
  preproc build main.c                     # Write main.i
  preproc build main.c -I lib -o out.c     # Search lib/ for <...> includes
  preproc build main.py -c '#'             # Directives start with #&
  preproc build main.c -o a.i -MF a.i.d    # Also write a make depfile
  preproc deps main.c                      # Print the dependency rule

Configuration:
  preproc init                  # Create .preproc.toml in current directory

For detailed command help: preproc <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"preproc {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # build command
    build_parser = subparsers.add_parser(
        "build",
        help="Preprocess a file into a single flattened output",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  preproc build main.c                  # Output to main.i
  preproc build main.c -I include       # Add an include directory
  preproc build main.c -MF main.i.d     # Write dependencies for make
""",
    )
    _add_source_arguments(build_parser)
    build_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file (default: input with the configured suffix, .i)",
        metavar="PATH",
    )
    build_parser.add_argument(
        "-MF",
        "--depfile",
        type=Path,
        help="Also write a make-compatible dependency file",
        metavar="PATH",
    )

    # deps command
    deps_parser = subparsers.add_parser(
        "deps",
        help="Print the make dependency rule for a file",
    )
    _add_source_arguments(deps_parser)
    deps_parser.add_argument(
        "--target",
        help="Rule target (default: the build output path)",
        metavar="NAME",
    )

    # init command
    init_parser = subparsers.add_parser(
        "init",
        help="Create .preproc.toml configuration file",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite existing configuration",
    )

    # completion command
    completion_parser = subparsers.add_parser(
        "completion",
        help="Show shell tab-completion setup",
    )
    completion_parser.add_argument(
        "--shell",
        choices=["bash", "zsh", "fish", "tcsh"],
        help="Generate the completion script for a specific shell",
    )

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install preproc[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)
    _configure_logging(args)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        # Dispatch to command handlers
        if args.command == "build":
            return build.run(args)
        elif args.command == "deps":
            return deps.run(args)
        elif args.command == "init":
            return init.run(args)
        elif args.command == "completion":
            return completion_command(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


def completion_command(args: argparse.Namespace) -> int:
    """Handle completion command - generate shell completion scripts."""
    try:
        import argcomplete  # noqa: F401
    except ImportError:
        print("Error: argcomplete not installed.", file=sys.stderr)
        print("Install with: pip install preproc[completion]", file=sys.stderr)
        return 1

    shell = args.shell

    if shell:
        import subprocess

        cmd = ["register-python-argcomplete"]
        if shell in ("fish", "tcsh"):
            cmd.append(f"--shell={shell}")
        cmd.append("preproc")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError:
            print("Error: register-python-argcomplete not found.", file=sys.stderr)
            print("Make sure argcomplete is properly installed.", file=sys.stderr)
            return 1
        if result.returncode != 0:
            print(f"Error generating completion script: {result.stderr}", file=sys.stderr)
            return 1
        print(result.stdout)
    else:
        print("""
Shell Completion Setup for preproc
==================================

Bash (add to ~/.bashrc):
  eval "$(register-python-argcomplete preproc)"

Zsh (add to ~/.zshrc):
  autoload -U bashcompinit
  bashcompinit
  eval "$(register-python-argcomplete preproc)"

Fish (add to ~/.config/fish/config.fish):
  register-python-argcomplete --shell fish preproc | source

Generate script for a specific shell:
  preproc completion --shell bash
""")

    return 0


if __name__ == "__main__":
    sys.exit(main())
