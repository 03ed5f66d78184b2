"""Tests for the tree walker and repository detector."""

import os

import pytest

from githooks.core.cancellation import CancellationToken, OperationCancelledError
from githooks.scanners import tree_walker as tree_walker_module
from githooks.scanners.detector import detect_repository
from githooks.scanners.tree_walker import SKIP_DIRS, TreeWalker, walk


OVERRIDE = "[core]\n\thooksPath = .husky\n"


def _collect(root, max_depth=10, **kwargs):
    found = []
    walk(str(root), max_depth, found.append, **kwargs)
    return [os.path.relpath(r.path, str(root)) for r in found]


# =============================================================================
# Detector
# =============================================================================

def test_detect_repository_with_override(tmp_path, make_repo):
    """Detector builds paths and reads the override."""
    make_repo(tmp_path, config_text=OVERRIDE)

    repo = detect_repository(str(tmp_path))

    assert repo is not None
    assert repo.path == str(tmp_path)
    assert repo.metadata_dir == str(tmp_path / ".git")
    assert repo.config_path == str(tmp_path / ".git" / "config")
    assert repo.has_override
    assert repo.override_value == ".husky"


def test_detect_repository_not_a_repo(tmp_path):
    """Plain directory is not a repository."""
    assert detect_repository(str(tmp_path)) is None


def test_detect_repository_git_file_is_not_a_repo(tmp_path):
    """A .git file (worktree pointer) is not a metadata directory."""
    (tmp_path / ".git").write_text("gitdir: ../elsewhere\n")

    assert detect_repository(str(tmp_path)) is None


def test_detect_repository_missing_config(tmp_path, make_repo):
    """Missing config yields a repository without override."""
    make_repo(tmp_path, config_text=None)

    repo = detect_repository(str(tmp_path))

    assert repo is not None
    assert not repo.has_override
    assert repo.override_value == ""


# =============================================================================
# Depth
# =============================================================================

def test_walk_depth_boundary(tmp_path, make_repo):
    """Repository at depth == max_depth is found, at max_depth + 1 it is not."""
    make_repo(tmp_path, "a/b/c", OVERRIDE)
    make_repo(tmp_path, "x/y/z/w", OVERRIDE)

    assert _collect(tmp_path, max_depth=3) == [os.path.join("a", "b", "c")]
    assert _collect(tmp_path, max_depth=2) == []
    assert _collect(tmp_path, max_depth=4) == [
        os.path.join("a", "b", "c"),
        os.path.join("x", "y", "z", "w"),
    ]


def test_walk_root_is_repository(tmp_path, make_repo):
    """Root itself is depth 0 and is reported without descending."""
    make_repo(tmp_path, config_text=OVERRIDE)
    make_repo(tmp_path, "nested", OVERRIDE)

    assert _collect(tmp_path, max_depth=0) == ["."]
    assert _collect(tmp_path, max_depth=5) == ["."]


def test_walk_negative_depth():
    """Negative depth is rejected."""
    with pytest.raises(ValueError):
        TreeWalker(max_depth=-1)


# =============================================================================
# Exclusions, nesting, ordering
# =============================================================================

@pytest.mark.parametrize("excluded", sorted(SKIP_DIRS))
def test_walk_skips_excluded_dirs(tmp_path, make_repo, excluded):
    """Repositories under excluded names are never discovered."""
    make_repo(tmp_path, f"{excluded}/fake-repo", OVERRIDE)
    make_repo(tmp_path, "valid-repo", OVERRIDE)

    assert _collect(tmp_path) == ["valid-repo"]


def test_walk_does_not_enter_repositories(tmp_path, make_repo):
    """Nested repositories inside a detected root are not surfaced."""
    make_repo(tmp_path, "outer", OVERRIDE)
    make_repo(tmp_path, "outer/packages/inner", OVERRIDE)

    assert _collect(tmp_path) == ["outer"]


def test_walk_order_is_depth_first_sorted(tmp_path, make_repo):
    """Depth-first, siblings by name, stable across runs."""
    for rel in ["b", "a/deep/repo", "c", "a/shallow"]:
        make_repo(tmp_path, rel, OVERRIDE)

    expected = [os.path.join("a", "deep", "repo"), os.path.join("a", "shallow"), "b", "c"]

    assert _collect(tmp_path) == expected
    assert _collect(tmp_path) == expected


def test_walk_reports_repositories_without_override(tmp_path, make_repo):
    """Walker reports every repository; filtering is the scanner's job."""
    make_repo(tmp_path, "plain", "[core]\n\tbare = false\n")

    assert _collect(tmp_path) == ["plain"]


# =============================================================================
# Symlinks and errors
# =============================================================================

@pytest.mark.skipif(not hasattr(os, "symlink"), reason="sem suporte a symlink")
def test_walk_does_not_follow_symlink_cycles(tmp_path, make_repo):
    """Symlinked directories (including cycles) are not followed."""
    make_repo(tmp_path, "real/repo", OVERRIDE)
    os.symlink(str(tmp_path), str(tmp_path / "real" / "loop"))
    os.symlink(str(tmp_path / "real" / "repo"), str(tmp_path / "alias"))

    assert _collect(tmp_path, max_depth=50) == [os.path.join("real", "repo")]


def test_walk_skips_permission_denied(tmp_path, make_repo, monkeypatch):
    """PermissionError while listing skips only that directory."""
    make_repo(tmp_path, "locked/repo", OVERRIDE)
    make_repo(tmp_path, "open/repo", OVERRIDE)

    real_scandir = os.scandir
    locked = str(tmp_path / "locked")

    def _scandir(path):
        if str(path) == locked:
            raise PermissionError(13, "Permission denied", path)
        return real_scandir(path)

    monkeypatch.setattr(tree_walker_module.os, "scandir", _scandir)

    assert _collect(tmp_path) == [os.path.join("open", "repo")]


def test_walk_propagates_other_errors(tmp_path):
    """Non-permission I/O errors abort the walk."""
    with pytest.raises(FileNotFoundError):
        _collect(tmp_path / "does-not-exist")


# =============================================================================
# Cancellation
# =============================================================================

def test_walk_cancelled_before_start(tmp_path):
    """A cancelled token stops the walk even on an empty tree."""
    token = CancellationToken()
    token.cancel()

    with pytest.raises(OperationCancelledError):
        _collect(tmp_path, cancel_token=token)


def test_walk_cancelled_midway(tmp_path, make_repo):
    """Cancelling from the callback stops before the next directory."""
    for rel in ["a", "b", "c"]:
        make_repo(tmp_path, rel, OVERRIDE)

    token = CancellationToken()
    seen = []

    def _on_repo(repo):
        seen.append(repo)
        token.cancel()

    with pytest.raises(OperationCancelledError):
        walk(str(tmp_path), 5, _on_repo, cancel_token=token)

    assert len(seen) == 1
