"""
git-hooks - Settings Loader
Carrega configurações do arquivo YAML (~/.git-hooks/config.yaml).
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .config_store import ConfigBackend


logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "GIT_HOOKS_CONFIG"
USER_SETTINGS_FILE = Path.home() / ".git-hooks" / "config.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# =============================================================================
# Exceções
# =============================================================================

class SettingsLoadError(Exception):
    """Erro ao carregar arquivo de configurações."""
    pass


# =============================================================================
# Settings
# =============================================================================

def _is_int(value: Any) -> bool:
    # YAML `true` vira bool, que é subclasse de int
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class Settings:
    """Configuração da CLI do git-hooks."""
    max_depth: int = 10
    backend: str = ConfigBackend.TEXT.value
    workers: int = 1
    log_level: str = "WARNING"

    def __post_init__(self):
        """Valida valores."""
        if not _is_int(self.max_depth) or self.max_depth < 0:
            raise SettingsLoadError(f"max_depth deve ser inteiro >= 0 (recebido: {self.max_depth!r})")

        if not _is_int(self.workers) or self.workers < 1:
            raise SettingsLoadError(f"workers deve ser inteiro >= 1 (recebido: {self.workers!r})")

        backends = [b.value for b in ConfigBackend]
        self.backend = str(self.backend).lower()
        if self.backend not in backends:
            raise SettingsLoadError(
                f"backend inválido: {self.backend}. Valores válidos: {', '.join(backends)}"
            )

        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise SettingsLoadError(
                f"log_level inválido: {self.log_level}. Valores válidos: {', '.join(LOG_LEVELS)}"
            )


# =============================================================================
# Loader
# =============================================================================

def settings_from_dict(data: Optional[Dict[str, Any]]) -> Settings:
    """
    Constrói Settings a partir de um dict (já parseado do YAML).

    Aceita tanto o formato plano quanto aninhado em `git_hooks:`.
    """
    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise SettingsLoadError("YAML deve conter um objeto no nível raiz")

    section = data.get("git_hooks", data)
    if not isinstance(section, dict):
        raise SettingsLoadError("Campo 'git_hooks' deve ser um objeto")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(section) - known)
    if unknown:
        logger.warning("Ignorando chaves desconhecidas em settings: %s", ", ".join(unknown))

    return Settings(**{k: v for k, v in section.items() if k in known})


def load_settings(filepath: Union[str, Path]) -> Settings:
    """
    Carrega Settings de um arquivo YAML.

    Raises:
        SettingsLoadError: Se o arquivo não existir ou for inválido
    """
    filepath = Path(filepath)

    if not filepath.is_file():
        raise SettingsLoadError(f"Arquivo não encontrado: {filepath}")

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"Erro ao parsear YAML: {e}")
    except OSError as e:
        raise SettingsLoadError(f"Erro ao ler arquivo: {e}")

    return settings_from_dict(data)


def resolve_settings_path(explicit: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """
    Decide qual arquivo de settings usar.

    Ordem: argumento explícito, $GIT_HOOKS_CONFIG, ~/.git-hooks/config.yaml
    (só se existir). None = usar defaults.
    """
    if explicit:
        return Path(explicit)

    from_env = os.environ.get(SETTINGS_ENV_VAR)
    if from_env:
        return Path(from_env)

    if USER_SETTINGS_FILE.is_file():
        return USER_SETTINGS_FILE

    return None


def load_effective_settings(explicit: Optional[Union[str, Path]] = None) -> Settings:
    """Carrega settings do arquivo resolvido ou retorna defaults."""
    path = resolve_settings_path(explicit)
    if path is None:
        return Settings()

    logger.debug("Carregando settings de %s", path)
    return load_settings(path)


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "Settings",
    "SettingsLoadError",
    "load_settings",
    "load_effective_settings",
    "resolve_settings_path",
    "settings_from_dict",
    "SETTINGS_ENV_VAR",
]
