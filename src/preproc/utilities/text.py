"""Line splitting shared by the graph builder and the assembler.

Insertion point indices recorded by the builder are only meaningful if the
assembler splits the same text into exactly the same lines, so both go
through split_lines().
"""

from __future__ import annotations


def split_lines(text: str) -> list[str]:
    """Split text into lines.

    Lines are separated by ``\\n``. A trailing ``\\r`` is removed from each
    line, and a newline at the very end of the text does not start an
    extra empty line.

    Args:
        text: Raw file content.

    Returns:
        List of lines without line terminators.
    """
    if not text:
        return []

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
