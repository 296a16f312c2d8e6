"""Shared pytest fixtures."""

import os
from pathlib import Path

import pytest

from preproc.parsers.comment import CommentParser
from preproc.sources.memory import MemorySource


@pytest.fixture
def parser():
    """Parser for //& directives."""
    return CommentParser("//")


@pytest.fixture
def cyclic_source():
    """Three files including each other in a ring: a -> b -> c -> a."""
    return MemorySource(
        {
            "a.txt": "File a.txt begin\n//&include <b.txt>\nFile a.txt end",
            "b.txt": "File b.txt begin\n//&include <c.txt>\nFile b.txt end",
            "c.txt": "File c.txt begin\n//&include <a.txt>\nFile c.txt end",
        }
    )


@pytest.fixture
def chain_source():
    """Linear chain a -> b -> c without cycles."""
    return MemorySource(
        {
            "a.txt": "A begin\n//&include <b.txt>\nA end",
            "b.txt": "B begin\n//&include <c.txt>\nB end",
            "c.txt": "C only",
        }
    )


@pytest.fixture
def write_tree(tmp_path):
    """Write a dict of relative path -> content below tmp_path."""

    def _write(files: dict[str, str]) -> Path:
        for name, content in files.items():
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep PREPROC_* variables from the calling shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("PREPROC_"):
            monkeypatch.delenv(name)
