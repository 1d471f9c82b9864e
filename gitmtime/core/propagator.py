"""
Directory propagation - push a file's commit time onto every ancestor.
"""

import posixpath
from typing import Iterator

from .constants import ROOT_DIR
from .ledger import DirectoryLedger


def parent_dir(path: str) -> str:
    """Parent of a git path; the parent of a top-level entry is '.'."""
    return posixpath.dirname(path.rstrip("/") or path) or ROOT_DIR


def ancestors(path: str) -> Iterator[str]:
    """
    Yield the parent of path, then its parent, up to the root.

    The root is the fixed point of parent_dir: '.' for relative paths and
    '/' for absolute ones. It is yielded exactly once.
    """
    directory = parent_dir(path)
    while True:
        yield directory
        parent = parent_dir(directory)
        if parent == directory:
            return
        directory = parent


def propagate(ledger: DirectoryLedger, path: str, mtime: int) -> None:
    """Update every ancestor directory of path with max(existing, mtime)."""
    for directory in ancestors(path):
        ledger.set_if_after(directory, mtime)
