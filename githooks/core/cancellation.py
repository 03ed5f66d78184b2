"""
git-hooks - Cancellation
Cancelamento cooperativo compartilhado entre a CLI (CTRL+C) e o core.
"""

import threading
from typing import Optional


# =============================================================================
# Exceções
# =============================================================================

class OperationCancelledError(Exception):
    """Operação interrompida pelo usuário."""

    def __init__(self, message: str = "Operação cancelada pelo usuário"):
        super().__init__(message)


# =============================================================================
# Cancellation Token
# =============================================================================

class CancellationToken:
    """
    Flag de cancelamento thread-safe.

    O core só consulta o token em pontos bem definidos (antes de visitar um
    diretório, antes de processar um repositório); nada é interrompido no
    meio de uma escrita.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        """Sinaliza o cancelamento."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Levanta OperationCancelledError se o token foi cancelado."""
        if self._event.is_set():
            raise OperationCancelledError()


def is_cancelled(token: Optional[CancellationToken]) -> bool:
    """Helper que aceita token ausente (None = nunca cancelado)."""
    return token is not None and token.cancelled


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "CancellationToken",
    "OperationCancelledError",
    "is_cancelled",
]
