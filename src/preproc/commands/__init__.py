"""
preproc.commands - CLI command implementations
"""

__all__ = [
    "build",
    "deps",
    "init",
]
