"""
git-hooks - Batch Cleaner
Remove core.hooksPath de uma lista de repositórios e agrega os resultados.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from .cancellation import CancellationToken, is_cancelled
from .config_store import ConfigStore, ConfigStoreError, TextConfigStore
from .models import CleanResult, CleanSummary, Repository


logger = logging.getLogger(__name__)


# =============================================================================
# Batch Cleaner
# =============================================================================

class BatchCleaner:
    """
    Aplica o config store editor em cada repositório.

    Responsabilidades:
    - Processar na ordem de entrada
    - Registrar um CleanResult por repositório tentado
    - Parar de iniciar trabalho novo ao detectar cancelamento
    """

    def __init__(
        self,
        store: Optional[ConfigStore] = None,
        cancel_token: Optional[CancellationToken] = None,
        max_workers: int = 1,
    ):
        """
        Args:
            store: Config store usado para remover a chave
            cancel_token: Token de cancelamento cooperativo
            max_workers: > 1 edita repositórios em paralelo (ThreadPoolExecutor)
        """
        if max_workers < 1:
            raise ValueError(f"max_workers deve ser >= 1 (recebido: {max_workers})")

        self.store = store or TextConfigStore()
        self.cancel_token = cancel_token
        self.max_workers = max_workers

    def clean(self, repositories: Sequence[Repository]) -> CleanSummary:
        """
        Remove core.hooksPath de todos os repositórios.

        Args:
            repositories: Repositórios (normalmente o resultado de um scan)

        Returns:
            CleanSummary com resultados na ordem de entrada
        """
        repositories = list(repositories)

        if self.max_workers > 1 and len(repositories) > 1:
            outcomes = self._clean_parallel(repositories)
        else:
            outcomes = self._clean_sequential(repositories)

        summary = CleanSummary(repositories_with_config=len(repositories))

        for repo, result in zip(repositories, outcomes):
            if result is None:
                summary.cancelled = True
                summary.pending.append(repo)
                continue

            summary.results.append(result)
            if result.succeeded:
                summary.configs_removed += 1

        if summary.cancelled:
            logger.info(
                "Limpeza cancelada: %d tentado(s), %d pendente(s)",
                len(summary.results), len(summary.pending)
            )

        return summary

    def _clean_sequential(self, repositories: List[Repository]) -> List[Optional[CleanResult]]:
        outcomes: List[Optional[CleanResult]] = []

        for repo in repositories:
            if is_cancelled(self.cancel_token):
                break
            outcomes.append(self._clean_one(repo))

        # Não tentados ficam como None
        outcomes.extend([None] * (len(repositories) - len(outcomes)))
        return outcomes

    def _clean_parallel(self, repositories: List[Repository]) -> List[Optional[CleanResult]]:
        """
        Cada task checa o token ao começar. Duas threads podem checar fora de
        ordem, então uma task anterior pode voltar None enquanto uma posterior já
        terminou: em paralelo, `pending` não é necessariamente um sufixo da
        entrada, mas results + pending sempre cobre todos os repositórios.
        """
        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="clean") as executor:
            futures = [executor.submit(self._clean_if_not_cancelled, repo) for repo in repositories]
            return [future.result() for future in futures]

    def _clean_if_not_cancelled(self, repository: Repository) -> Optional[CleanResult]:
        if is_cancelled(self.cancel_token):
            return None
        return self._clean_one(repository)

    def _clean_one(self, repository: Repository) -> CleanResult:
        result = CleanResult(
            repository=repository,
            previous_value=repository.override_value,
        )

        try:
            self.store.remove_override(repository)
            result.removed = True
        except ConfigStoreError as e:
            logger.warning("Falha ao limpar %s: %s", repository.path, e)
            result.error = e

        return result


# =============================================================================
# Helper Functions
# =============================================================================

def clean(
    repositories: Sequence[Repository],
    cancel_token: Optional[CancellationToken] = None,
    store: Optional[ConfigStore] = None,
    max_workers: int = 1,
) -> CleanSummary:
    """
    Helper function para limpar uma lista de repositórios.

    Args:
        repositories: Repositórios alvo
        cancel_token: Token de cancelamento
        store: Config store (default: texto)
        max_workers: Paralelismo (1 = sequencial)

    Returns:
        CleanSummary
    """
    cleaner = BatchCleaner(store=store, cancel_token=cancel_token, max_workers=max_workers)
    return cleaner.clean(repositories)


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "BatchCleaner",
    "clean",
]
