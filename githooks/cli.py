"""
git-hooks - Command Line Interface
Entry point dos comandos de scan/limpeza de core.hooksPath locais.
"""

import logging
import signal
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from githooks.__version__ import __version__
from githooks.core.cancellation import CancellationToken, OperationCancelledError
from githooks.core.cleaner import clean
from githooks.core.config_store import ConfigStoreError, get_config_store
from githooks.core.formatters import FormatterFactory, pluralize
from githooks.core.models import CleanSummary, Repository
from githooks.core.settings import Settings, SettingsLoadError, load_effective_settings
from githooks.scanners.local_hooks import scan


EXIT_CANCELLED = 130


# =============================================================================
# Typer App Setup
# =============================================================================

app = typer.Typer(
    name="git-hooks",
    help="🪝 git-hooks - Gerencia hooks git centralizados",
    add_completion=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


# =============================================================================
# Global Options
# =============================================================================

def version_callback(value: bool):
    """Callback para --version."""
    if value:
        console.print(f"🪝 git-hooks version {__version__}", style="bold cyan")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Mostra versão do git-hooks"
    )
):
    """
    🪝 git-hooks - Gerencia hooks git centralizados

    Encontra e remove overrides locais de core.hooksPath.
    """
    pass


# =============================================================================
# Helpers
# =============================================================================

def configure_logging(level: str) -> None:
    """Instala RichHandler no logger raiz do pacote."""
    logger = logging.getLogger("githooks")
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=err_console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)


def _load_settings(
    config: Optional[Path],
    verbose: bool,
    max_depth: Optional[int],
    backend: Optional[str],
    workers: Optional[int],
) -> Settings:
    """Carrega settings e aplica overrides das flags."""
    try:
        settings = load_effective_settings(config)
        settings = Settings(
            max_depth=settings.max_depth if max_depth is None else max_depth,
            backend=settings.backend if backend is None else backend,
            workers=settings.workers if workers is None else workers,
            log_level="DEBUG" if verbose else settings.log_level,
        )
    except SettingsLoadError as e:
        console.print(f"❌ Erro ao carregar configurações: {e}", style="red")
        raise typer.Exit(1)

    configure_logging(settings.log_level)
    return settings


@contextmanager
def cancel_on_interrupt(token: CancellationToken):
    """
    CTRL+C cancela o token em vez de matar o processo no meio de uma escrita.

    Só envolve trabalho que consulta o token (scan e limpeza). Prompts ficam
    de fora: o handler não levanta exceção, e um input() seria retomado.
    """
    def _handler(signum, frame):
        token.cancel()

    try:
        previous = signal.signal(signal.SIGINT, _handler)
    except ValueError:
        # Fora da main thread: sem handler
        yield token
        return

    try:
        yield token
    finally:
        signal.signal(signal.SIGINT, previous)


def _scan_or_exit(path: Path, settings: Settings, token: CancellationToken) -> List[Repository]:
    try:
        with cancel_on_interrupt(token):
            return scan(
                str(path),
                settings.max_depth,
                cancel_token=token,
                store=get_config_store(settings.backend),
            )
    except OperationCancelledError:
        console.print("\nOperação cancelada.", style="yellow")
        raise typer.Exit(EXIT_CANCELLED)
    except (ConfigStoreError, OSError) as e:
        console.print(f"❌ Erro ao escanear repositórios: {e}", style="red")
        raise typer.Exit(1)


def _clean(repos: List[Repository], settings: Settings, token: CancellationToken) -> CleanSummary:
    with cancel_on_interrupt(token):
        return clean(
            repos,
            cancel_token=token,
            store=get_config_store(settings.backend),
            max_workers=settings.workers,
        )


def _print_repo_list(repos: List[Repository]) -> None:
    for repo in repos:
        typer.echo(f"  - {repo.path}")
        typer.echo(f"    hooksPath: {repo.override_value}")


# =============================================================================
# Command: scan-local
# =============================================================================

@app.command("scan-local")
def scan_local(
    path: Path = typer.Argument(
        Path("."),
        help="Diretório inicial do scan"
    ),
    max_depth: Optional[int] = typer.Option(
        None,
        "--max-depth",
        min=0,
        help="Profundidade máxima (default: 10)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Mostra detalhes e logs de debug"
    ),
    auto_fix: bool = typer.Option(
        False,
        "--auto-fix",
        help="Remove automaticamente os overrides encontrados"
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Não pedir confirmação no --auto-fix"
    ),
    backend: Optional[str] = typer.Option(
        None,
        "--backend",
        help="Estratégia de leitura/edição do config: text, git"
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        min=1,
        help="Repositórios limpos em paralelo"
    ),
    format: str = typer.Option(
        "console",
        "--format",
        "-f",
        help="Formato de output: console, json"
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Arquivo de configurações YAML"
    ),
):
    """
    🔍 Procura repositórios com core.hooksPath local

    Exemplos:

    \b
    # Scan a partir do diretório atual
    git-hooks scan-local

    \b
    # Scan e remoção sem confirmação
    git-hooks scan-local ~/code --auto-fix --yes
    """
    settings = _load_settings(config, verbose, max_depth, backend, workers)
    format = format.lower()

    try:
        formatter = FormatterFactory.create(format, verbose=verbose)
    except ValueError as e:
        console.print(f"❌ {e}", style="red")
        raise typer.Exit(2)

    if format == "json" and auto_fix and not yes:
        console.print("❌ --format json com --auto-fix requer --yes", style="red")
        raise typer.Exit(2)

    token = CancellationToken()

    if format == "console":
        console.print("🔍 Procurando overrides locais de hooks...")

    repos = _scan_or_exit(path, settings, token)

    if not auto_fix or not repos:
        typer.echo(formatter.format_scan(repos))
        if repos and format == "console":
            console.print("\n💡 Dica: use --auto-fix para remover esses overrides")
        raise typer.Exit(0)

    if format == "console":
        typer.echo(formatter.format_scan(repos))

        if not yes and not typer.confirm("\nRemover esses overrides locais?", default=False):
            console.print("Cancelado.")
            raise typer.Exit(0)

        console.print("\n🔧 Removendo overrides...\n")

    summary = _clean(repos, settings, token)
    typer.echo(formatter.format_summary(summary))
    raise typer.Exit(summary.exit_code)


# =============================================================================
# Command: clean-local-hooks
# =============================================================================

@app.command("clean-local-hooks")
def clean_local_hooks(
    path: Path = typer.Argument(
        Path("."),
        help="Diretório inicial do scan"
    ),
    max_depth: Optional[int] = typer.Option(
        None,
        "--max-depth",
        min=0,
        help="Profundidade máxima (default: 10)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Mostra detalhes e logs de debug"
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Não pedir confirmação"
    ),
    backend: Optional[str] = typer.Option(
        None,
        "--backend",
        help="Estratégia de leitura/edição do config: text, git"
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        min=1,
        help="Repositórios limpos em paralelo"
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Arquivo de configurações YAML"
    ),
):
    """
    🗑️ Remove core.hooksPath dos repositórios encontrados

    Exemplos:

    \b
    # Com confirmação
    git-hooks clean-local-hooks ~/code

    \b
    # Sem confirmação
    git-hooks clean-local-hooks ~/code --force
    """
    settings = _load_settings(config, verbose, max_depth, backend, workers)
    formatter = FormatterFactory.create("console", verbose=verbose)

    token = CancellationToken()
    repos = _scan_or_exit(path, settings, token)

    if verbose:
        console.print(
            f"Encontrados {len(repos)} {pluralize('repositório', 'repositórios', len(repos))} "
            f"com core.hooksPath local\n"
        )

    if not repos:
        console.print("Nenhum repositório com core.hooksPath local encontrado.")
        raise typer.Exit(0)

    if not force:
        console.print(
            f"Isso vai remover core.hooksPath de {len(repos)} "
            f"{pluralize('repositório', 'repositórios', len(repos))}:"
        )
        _print_repo_list(repos)

        if not typer.confirm("\nContinuar?", default=False):
            console.print("Cancelado.")
            raise typer.Exit(0)

        console.print()

    summary = _clean(repos, settings, token)
    typer.echo(formatter.format_summary(summary))
    raise typer.Exit(summary.exit_code)


# =============================================================================
# Main Entry Point
# =============================================================================

def main():
    """Entry point principal."""
    app()


if __name__ == "__main__":
    sys.exit(main())
