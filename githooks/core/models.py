"""
git-hooks - Core Data Models
Estruturas de dados do scan e da limpeza de core.hooksPath locais.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional


# =============================================================================
# Repository
# =============================================================================

@dataclass(frozen=True)
class Repository:
    """Um repositório git detectado durante o walk."""
    path: str
    metadata_dir: str
    config_path: str
    override_value: str = ""
    has_override: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serializa Repository para dict."""
        return {
            "path": self.path,
            "metadata_dir": self.metadata_dir,
            "config_path": self.config_path,
            "override_value": self.override_value,
            "has_override": self.has_override,
        }


# =============================================================================
# Clean Result
# =============================================================================

@dataclass
class CleanResult:
    """Resultado da remoção de core.hooksPath em um repositório."""
    repository: Repository
    removed: bool = False
    previous_value: str = ""
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        """True se a chave terminou ausente e não houve erro."""
        return self.removed and self.error is None

    def to_dict(self) -> Dict[str, Any]:
        """Serializa CleanResult para dict."""
        return {
            "path": self.repository.path,
            "removed": self.removed,
            "previous_value": self.previous_value,
            "error": str(self.error) if self.error else None,
        }


# =============================================================================
# Clean Summary
# =============================================================================

@dataclass
class CleanSummary:
    """Resumo de uma execução do batch cleaner."""
    repositories_with_config: int = 0
    configs_removed: int = 0
    results: List[CleanResult] = field(default_factory=list)
    cancelled: bool = False
    pending: List[Repository] = field(default_factory=list)

    @property
    def failed(self) -> int:
        """Quantidade de repositórios tentados que falharam."""
        return len(self.results) - self.configs_removed

    @property
    def exit_code(self) -> int:
        """
        Calcula exit code apropriado.

        0   = todas as configs removidas
        1   = pelo menos uma falha
        130 = interrompido (cancelado)
        """
        if self.cancelled:
            return 130

        if self.failed > 0:
            return 1

        return 0

    def to_dict(self) -> Dict[str, Any]:
        """Serializa CleanSummary para dict."""
        return {
            "repositories_with_config": self.repositories_with_config,
            "configs_removed": self.configs_removed,
            "failed": self.failed,
            "cancelled": self.cancelled,
            "results": [r.to_dict() for r in self.results],
            "pending": [r.path for r in self.pending],
        }


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "Repository",
    "CleanResult",
    "CleanSummary",
]
