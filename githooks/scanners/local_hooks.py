"""
git-hooks - Local Hooks Scanner
Encontra repositórios com core.hooksPath sobrescrito localmente.
"""

import logging
import os
from typing import List, Optional

from githooks.core.cancellation import CancellationToken
from githooks.core.config_store import ConfigStore
from githooks.core.models import Repository

from .tree_walker import DEFAULT_MAX_DEPTH, walk


logger = logging.getLogger(__name__)


def find_repositories(
    root: str = ".",
    max_depth: int = DEFAULT_MAX_DEPTH,
    cancel_token: Optional[CancellationToken] = None,
    store: Optional[ConfigStore] = None,
) -> List[Repository]:
    """
    Lista todos os repositórios encontrados (com ou sem override).

    Args:
        root: Diretório inicial (default: diretório atual)
        max_depth: Profundidade máxima
        cancel_token: Token de cancelamento
        store: Config store usado para ler core.hooksPath

    Returns:
        Repositórios na ordem de descoberta (depth-first, irmãos por nome)
    """
    root = os.path.abspath(root)
    repositories: List[Repository] = []

    walk(root, max_depth, repositories.append, store=store, cancel_token=cancel_token)

    logger.debug("%d repositório(s) encontrados em %s", len(repositories), root)
    return repositories


def scan(
    root: str = ".",
    max_depth: int = DEFAULT_MAX_DEPTH,
    cancel_token: Optional[CancellationToken] = None,
    store: Optional[ConfigStore] = None,
) -> List[Repository]:
    """
    Retorna apenas os repositórios com core.hooksPath local.

    Raises:
        OperationCancelledError: Se o scan for cancelado (sem lista parcial)
    """
    repositories = find_repositories(root, max_depth, cancel_token=cancel_token, store=store)
    return [repo for repo in repositories if repo.has_override]


__all__ = [
    "find_repositories",
    "scan",
]
