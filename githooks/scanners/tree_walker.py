"""
git-hooks - Tree Walker
Percorre uma árvore de diretórios procurando raízes de repositórios git.
"""

import logging
import os
from typing import Callable, FrozenSet, Iterable, List, Optional, Set, Tuple

from githooks.core.cancellation import CancellationToken
from githooks.core.config_store import ConfigStore, TextConfigStore
from githooks.core.models import Repository

from .detector import detect_repository


logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 10

# Diretórios de dependências/build/virtualenv nunca visitados
SKIP_DIRS: FrozenSet[str] = frozenset({
    "node_modules",
    "venv",
    ".venv",
    "env",
    "__pycache__",
    ".terraform",
    "vendor",
})


# =============================================================================
# Tree Walker
# =============================================================================

class TreeWalker:
    """
    Walk iterativo (pilha explícita) limitado por profundidade.

    Regras:
    - root tem profundidade 0; diretórios além de max_depth não são visitados
    - diretórios em SKIP_DIRS são ignorados por completo
    - ao detectar um repositório, não desce dentro dele
    - symlinks para diretórios não são seguidos
    - PermissionError ao listar um diretório: pula o diretório
    - cancelamento checado antes de visitar cada diretório
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        store: Optional[ConfigStore] = None,
        cancel_token: Optional[CancellationToken] = None,
        skip_dirs: Iterable[str] = SKIP_DIRS,
    ):
        """
        Args:
            max_depth: Profundidade máxima a partir do root
            store: Config store usado pelo detector
            cancel_token: Token de cancelamento cooperativo
            skip_dirs: Nomes de diretórios a ignorar
        """
        if max_depth < 0:
            raise ValueError(f"max_depth deve ser >= 0 (recebido: {max_depth})")

        self.max_depth = max_depth
        self.store = store or TextConfigStore()
        self.cancel_token = cancel_token
        self.skip_dirs = frozenset(skip_dirs)

    def walk(self, root: str, on_repository: Callable[[Repository], None]) -> int:
        """
        Percorre `root` chamando `on_repository` para cada repositório.

        Args:
            root: Diretório inicial
            on_repository: Callback chamado uma vez por repositório detectado

        Returns:
            Quantidade de repositórios detectados

        Raises:
            OperationCancelledError: Se o token for cancelado durante o walk
            OSError: Erros de I/O que não sejam de permissão
        """
        root = os.path.abspath(root)
        stack: List[Tuple[str, int]] = [(root, 0)]
        seen: Set[str] = set()
        found = 0

        while stack:
            if self.cancel_token is not None:
                self.cancel_token.raise_if_cancelled()

            path, depth = stack.pop()

            if depth > self.max_depth:
                continue

            if os.path.basename(path) in self.skip_dirs:
                logger.debug("Ignorando diretório excluído: %s", path)
                continue

            real_path = os.path.realpath(path)
            if real_path in seen:
                continue
            seen.add(real_path)

            repository = detect_repository(path, self.store)
            if repository is not None:
                found += 1
                on_repository(repository)
                continue

            if depth == self.max_depth:
                continue

            try:
                children = self._list_subdirectories(path)
            except PermissionError as e:
                logger.debug("Sem permissão para listar %s: %s", path, e)
                continue

            # Empilha em ordem reversa: o primeiro irmão (por nome) sai primeiro
            for child in reversed(children):
                stack.append((child, depth + 1))

        return found

    @staticmethod
    def _list_subdirectories(path: str) -> List[str]:
        """Lista subdiretórios (sem seguir symlinks), ordenados por nome."""
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda entry: entry.name)

        return [entry.path for entry in entries if entry.is_dir(follow_symlinks=False)]


# =============================================================================
# Helper Functions
# =============================================================================

def walk(
    root: str,
    max_depth: int,
    on_repository: Callable[[Repository], None],
    store: Optional[ConfigStore] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> int:
    """
    Helper function para executar um walk com a lista de exclusão padrão.

    Returns:
        Quantidade de repositórios detectados
    """
    walker = TreeWalker(max_depth=max_depth, store=store, cancel_token=cancel_token)
    return walker.walk(root, on_repository)


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "TreeWalker",
    "walk",
    "SKIP_DIRS",
    "DEFAULT_MAX_DEPTH",
]
