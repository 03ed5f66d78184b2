"""Pytest configuration and fixtures."""

import shutil
import subprocess
from pathlib import Path

import pytest

from githooks.core.config_store import get_config_store


HAS_GIT = shutil.which("git") is not None

requires_git = pytest.mark.skipif(not HAS_GIT, reason="git não encontrado no PATH")


@pytest.fixture(params=["text", pytest.param("git", marks=requires_git)])
def store(request):
    """Roda o teste com os dois backends de config store."""
    return get_config_store(request.param)


@pytest.fixture
def make_repo():
    """
    Cria um repositório "fake": diretório com .git/config escrito à mão.

    Retorna o Path da raiz do repositório.
    """
    def _make(root: Path, rel: str = ".", config_text: str = "[core]\n\tbare = false\n") -> Path:
        repo_dir = (root / rel) if rel != "." else root
        git_dir = repo_dir / ".git"
        git_dir.mkdir(parents=True, exist_ok=True)
        if config_text is not None:
            (git_dir / "config").write_text(config_text, newline="")
        return repo_dir

    return _make


@pytest.fixture
def temp_git_repo(tmp_path):
    """Cria repositório git temporário."""
    if not HAS_GIT:
        pytest.skip("git não encontrado no PATH")

    repo_dir = tmp_path / "test_repo"
    repo_dir.mkdir()

    subprocess.run(["git", "init"], cwd=repo_dir, check=True, capture_output=True)
    subprocess.run(
        ["git", "config", "user.email", "test@example.com"],
        cwd=repo_dir,
        check=True
    )
    subprocess.run(
        ["git", "config", "user.name", "Test User"],
        cwd=repo_dir,
        check=True
    )

    return repo_dir


def git_config_get(repo_dir: Path, key: str):
    """Lê uma chave com `git config --local`. Retorna None se ausente."""
    result = subprocess.run(
        ["git", "config", "--local", key],
        cwd=repo_dir,
        capture_output=True,
        text=True,
    )
    if result.returncode == 1:
        return None
    result.check_returncode()
    return result.stdout.strip()


def git_config_set(repo_dir: Path, key: str, value: str) -> None:
    subprocess.run(["git", "config", "--local", key, value], cwd=repo_dir, check=True)


@pytest.fixture
def git_config():
    """Helpers para ler/escrever config local via git."""
    class _GitConfig:
        get = staticmethod(git_config_get)
        set = staticmethod(git_config_set)

    return _GitConfig
