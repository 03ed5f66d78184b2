"""Scanners for local repositories (tree walk, detection, hooksPath scan)."""

from .detector import detect_repository
from .local_hooks import find_repositories, scan
from .tree_walker import DEFAULT_MAX_DEPTH, SKIP_DIRS, TreeWalker, walk

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "SKIP_DIRS",
    "TreeWalker",
    "detect_repository",
    "find_repositories",
    "scan",
    "walk",
]
