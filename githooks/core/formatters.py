"""
git-hooks - Output Formatters
Formatação de scans e resumos de limpeza (terminal, JSON).
"""

import sys
import json
from typing import List, Optional, TextIO

from .models import CleanResult, CleanSummary, Repository


SEPARATOR = "━" * 36


# =============================================================================
# ANSI Color Codes
# =============================================================================

class Colors:
    """Códigos de cor ANSI para terminal."""

    RESET = "\033[0m"

    RED = "\033[91m"
    YELLOW = "\033[93m"
    GREEN = "\033[92m"
    CYAN = "\033[96m"

    @staticmethod
    def is_tty(file: TextIO = sys.stdout) -> bool:
        """Verifica se o output é um terminal (suporta cores)."""
        return hasattr(file, 'isatty') and file.isatty()


def pluralize(singular: str, plural: str, count: int) -> str:
    return singular if count == 1 else plural


# =============================================================================
# Base Formatter
# =============================================================================

class BaseFormatter:
    """
    Classe base para formatters.
    """

    def __init__(self, use_colors: Optional[bool] = None):
        """
        Args:
            use_colors: Se True, usa cores ANSI. Se None, detecta automaticamente.
        """
        if use_colors is None:
            self.use_colors = Colors.is_tty()
        else:
            self.use_colors = use_colors

    def colorize(self, text: str, color: str) -> str:
        """Aplica cor ao texto se use_colors=True."""
        if not self.use_colors:
            return text
        return f"{color}{text}{Colors.RESET}"

    def format_scan(self, repositories: List[Repository]) -> str:
        """Formata lista de repositórios com override (implementado por subclasses)."""
        raise NotImplementedError

    def format_summary(self, summary: CleanSummary) -> str:
        """Formata CleanSummary (implementado por subclasses)."""
        raise NotImplementedError


# =============================================================================
# Console Formatter (Default)
# =============================================================================

class ConsoleFormatter(BaseFormatter):
    """
    Formatter para output no terminal (human-readable).
    """

    def __init__(self, use_colors: Optional[bool] = None, verbose: bool = False):
        """
        Args:
            use_colors: Usar cores ANSI
            verbose: Se True, mostra mais detalhes
        """
        super().__init__(use_colors)
        self.verbose = verbose

    def format_scan(self, repositories: List[Repository]) -> str:
        if not repositories:
            return self.colorize(
                "✅ Nenhum repositório com core.hooksPath local encontrado.", Colors.GREEN
            )

        count = len(repositories)
        lines = [
            f"Encontrados {count} {pluralize('repositório', 'repositórios', count)} "
            f"com override local de hooks:",
            "",
        ]

        for repo in repositories:
            if self.verbose:
                lines.append(f"  📁 {self.colorize(repo.path, Colors.CYAN)}")
                lines.append(f"     Override: core.hooksPath = {repo.override_value}")
                lines.append(f"     Config:   {repo.config_path}")
            else:
                lines.append(f"  • {repo.path} (core.hooksPath = {repo.override_value})")

        return "\n".join(lines)

    def format_result(self, result: CleanResult) -> str:
        path = result.repository.path

        if result.error is not None:
            return self.colorize(f"❌ {path}: {result.error}", Colors.RED)

        if self.verbose:
            return self.colorize(f"✅ {path} (removido: {result.previous_value})", Colors.GREEN)

        return self.colorize(f"✅ {path}", Colors.GREEN)

    def format_summary(self, summary: CleanSummary) -> str:
        lines = [self.format_result(r) for r in summary.results]

        if summary.pending:
            lines.append("")
            lines.append(self.colorize(
                f"⚠️  {len(summary.pending)} não {pluralize('processado', 'processados', len(summary.pending))} "
                f"(cancelado):", Colors.YELLOW
            ))
            for repo in summary.pending:
                lines.append(f"  - {repo.path}")

        lines.append("")
        lines.append(SEPARATOR)

        if summary.failed == 0 and not summary.cancelled:
            lines.append(
                f"Resumo: {summary.configs_removed} "
                f"{pluralize('override removido', 'overrides removidos', summary.configs_removed)} com sucesso"
            )
        else:
            lines.append(f"Resumo: {summary.configs_removed} removidos, {summary.failed} falharam")
            if summary.cancelled:
                lines.append(f"        {len(summary.pending)} pendentes (operação cancelada)")

        lines.append(SEPARATOR)
        return "\n".join(lines)


# =============================================================================
# JSON Formatter
# =============================================================================

class JSONFormatter(BaseFormatter):
    """
    Formatter JSON (machine-readable).
    """

    def __init__(self, pretty: bool = True):
        super().__init__(use_colors=False)
        self.pretty = pretty

    def _dump(self, data) -> str:
        if self.pretty:
            return json.dumps(data, indent=2, ensure_ascii=False)
        return json.dumps(data, ensure_ascii=False)

    def format_scan(self, repositories: List[Repository]) -> str:
        return self._dump({
            "repositories": [r.to_dict() for r in repositories],
            "total": len(repositories),
        })

    def format_summary(self, summary: CleanSummary) -> str:
        return self._dump(summary.to_dict())


# =============================================================================
# Formatter Factory
# =============================================================================

class FormatterFactory:
    """Factory para criar formatters."""

    @staticmethod
    def create(
        format_type: str,
        use_colors: Optional[bool] = None,
        verbose: bool = False,
        pretty: bool = True
    ) -> BaseFormatter:
        """
        Cria formatter apropriado.

        Args:
            format_type: Tipo do formatter (console, json)
            use_colors: Usar cores (apenas console)
            verbose: Modo verbose (apenas console)
            pretty: Pretty print JSON (apenas json)
        """
        format_type = format_type.lower()

        if format_type == "console":
            return ConsoleFormatter(use_colors=use_colors, verbose=verbose)

        elif format_type == "json":
            return JSONFormatter(pretty=pretty)

        else:
            raise ValueError(
                f"Formato desconhecido: {format_type}. "
                f"Formatos válidos: console, json"
            )


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    'BaseFormatter',
    'ConsoleFormatter',
    'JSONFormatter',
    'FormatterFactory',
    'Colors',
    'pluralize',
]
