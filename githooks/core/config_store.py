"""
git-hooks - Config Store
Leitura e remoção de core.hooksPath no .git/config de um repositório.

Duas implementações intercambiáveis:
- GitConfigStore: delega para `git config --file <config>`
- TextConfigStore: parseia e reescreve o arquivo diretamente
"""

import logging
import os
import shutil
import subprocess
import tempfile
from enum import Enum
from typing import List, Optional, Tuple, Union

from .models import Repository


logger = logging.getLogger(__name__)

TARGET_SECTION = "core"
TARGET_KEY = "hooksPath"
TARGET_NAME = f"{TARGET_SECTION}.{TARGET_KEY}"

UTF8_BOM = "\ufeff"

# Exit codes do `git config`
GIT_EXIT_KEY_NOT_FOUND = 1
GIT_EXIT_INVALID_FILE = 3
GIT_EXIT_NOTHING_TO_UNSET = 5


# =============================================================================
# Exceções
# =============================================================================

class ConfigStoreError(Exception):
    """Erro ao ler ou escrever o config store de um repositório."""
    pass


class ConfigReadError(ConfigStoreError):
    """Falha de I/O ao ler o arquivo de config."""
    pass


class ConfigWriteError(ConfigStoreError):
    """Falha de I/O ao reescrever o arquivo de config."""
    pass


# =============================================================================
# Enums
# =============================================================================

class ConfigBackend(str, Enum):
    """Estratégias disponíveis para ler/editar o config store."""
    GIT = "git"
    TEXT = "text"


# =============================================================================
# Parsing Helpers
# =============================================================================

def _split_lines(text: str) -> List[str]:
    """Quebra em linhas mantendo o terminador original (\\n ou \\r\\n)."""
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _section_header(line: str) -> Optional[str]:
    """
    Retorna o conteúdo de um header `[...]`, ou None se a linha não é header.

    `[core]` -> 'core', `[custom "core"]` -> 'custom "core"'
    """
    stripped = line.strip()
    if not stripped.startswith("["):
        return None

    end = stripped.find("]")
    if end == -1:
        return None

    return stripped[1:end].strip()


def _is_target_section(header: str) -> bool:
    # Subseções (`[core "x"]`, `[core.x]`) nunca são a seção core
    return header.lower() == TARGET_SECTION


def _clean_value(raw: str) -> str:
    """Remove aspas e comentário inline de um valor."""
    raw = raw.strip()

    if raw.startswith('"'):
        end = raw.find('"', 1)
        if end != -1:
            return raw[1:end]

    for marker in ("#", ";"):
        idx = raw.find(marker)
        if idx != -1:
            raw = raw[:idx]

    return raw.strip()


def _parse_key_line(line: str) -> Optional[Tuple[str, str]]:
    """Parseia `key = value`. Retorna None para comentários e linhas vazias."""
    stripped = line.strip()
    if not stripped or stripped[0] in "#;":
        return None

    if "=" not in stripped:
        # `key` sem valor: booleano implícito, valor vazio
        return stripped, ""

    key, _, value = stripped.partition("=")
    return key.strip(), _clean_value(value)


def _is_target_key(key: str) -> bool:
    return key.lower() == TARGET_KEY.lower()


def _iter_target_lines(lines: List[str]):
    """
    Percorre as linhas rastreando a seção atual.

    Yields:
        (index, value) para cada linha `hooksPath = ...` dentro de `[core]`
    """
    in_target = False

    for idx, line in enumerate(lines):
        if idx == 0:
            # BOM no início do arquivo não faz parte da primeira linha (git ignora)
            line = line.lstrip(UTF8_BOM)

        header = _section_header(line)
        if header is not None:
            in_target = _is_target_section(header)
            continue

        if not in_target:
            continue

        parsed = _parse_key_line(line)
        if parsed and _is_target_key(parsed[0]):
            yield idx, parsed[1]


# =============================================================================
# Base Store
# =============================================================================

class ConfigStore:
    """
    Interface comum dos config stores.
    """

    backend: ConfigBackend

    def read_override(self, config_path: str) -> Tuple[str, bool]:
        """
        Lê core.hooksPath do arquivo de config.

        Args:
            config_path: Caminho do .git/config

        Returns:
            (valor, presente). Arquivo ausente ou inválido -> ("", False)
        """
        raise NotImplementedError

    def remove_override(self, repository: Repository) -> bool:
        """
        Remove core.hooksPath do config do repositório.

        Args:
            repository: Repositório alvo

        Returns:
            True se alguma linha foi removida, False se a chave já estava ausente

        Raises:
            ConfigReadError: Se o arquivo não puder ser lido
            ConfigWriteError: Se o arquivo não puder ser reescrito
        """
        raise NotImplementedError


# =============================================================================
# Text Store
# =============================================================================

class TextConfigStore(ConfigStore):
    """
    Parseia e reescreve o .git/config diretamente.

    Só remove linhas inteiras; todo o resto do arquivo (outras chaves,
    seções, comentários, linhas vazias, terminadores) é preservado byte a byte.
    """

    backend = ConfigBackend.TEXT

    def read_override(self, config_path: str) -> Tuple[str, bool]:
        try:
            text = self._read_text(config_path)
        except ConfigReadError as e:
            logger.debug("Config ilegível em %s: %s", config_path, e)
            return "", False

        value = ""
        for _, found in _iter_target_lines(_split_lines(text)):
            value = found  # última ocorrência vence, como no git

        return value, bool(value)

    def remove_override(self, repository: Repository) -> bool:
        config_path = repository.config_path
        lines = _split_lines(self._read_text(config_path))

        drop = {idx for idx, _ in _iter_target_lines(lines)}
        if not drop:
            logger.debug("%s já ausente em %s", TARGET_NAME, config_path)
            return False

        kept = [line for idx, line in enumerate(lines) if idx not in drop]
        self._write_atomic(config_path, "".join(kept))

        logger.debug("Removidas %d linha(s) de %s em %s", len(drop), TARGET_NAME, config_path)
        return True

    @staticmethod
    def _read_text(config_path: str) -> str:
        try:
            with open(config_path, "r", encoding="utf-8", errors="surrogateescape", newline="") as f:
                return f.read()
        except OSError as e:
            raise ConfigReadError(f"Erro ao ler {config_path}: {e}") from e

    @staticmethod
    def _write_atomic(config_path: str, content: str) -> None:
        """Escreve em arquivo temporário no mesmo diretório e faz os.replace."""
        directory = os.path.dirname(config_path) or "."

        try:
            fd, tmp_path = tempfile.mkstemp(prefix=".config.", suffix=".tmp", dir=directory)
        except OSError as e:
            raise ConfigWriteError(f"Erro ao criar arquivo temporário em {directory}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
                f.write(content)
            shutil.copymode(config_path, tmp_path)
            os.replace(tmp_path, config_path)
        except OSError as e:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise ConfigWriteError(f"Erro ao reescrever {config_path}: {e}") from e


# =============================================================================
# Git Store
# =============================================================================

class GitConfigStore(ConfigStore):
    """
    Delega para o próprio git, sempre com `--file <config>`.

    O escopo é exatamente o arquivo do repositório: nunca cai para
    config global ou de sistema.
    """

    backend = ConfigBackend.GIT

    def __init__(self, git_binary: str = "git"):
        self.git_binary = git_binary

    def read_override(self, config_path: str) -> Tuple[str, bool]:
        if not os.path.isfile(config_path):
            return "", False

        result = self._run_git(config_path, ["--get", TARGET_NAME])

        if result.returncode == GIT_EXIT_KEY_NOT_FOUND:
            return "", False

        if result.returncode != 0:
            logger.debug(
                "git config --get falhou em %s (exit %d): %s",
                config_path, result.returncode, result.stderr.strip()
            )
            return "", False

        value = result.stdout.strip()
        return value, bool(value)

    def remove_override(self, repository: Repository) -> bool:
        config_path = repository.config_path

        if not os.path.isfile(config_path):
            raise ConfigReadError(f"Arquivo de config não encontrado: {config_path}")

        result = self._run_git(config_path, ["--unset-all", TARGET_NAME])

        if result.returncode == 0:
            logger.debug("git removeu %s em %s", TARGET_NAME, config_path)
            return True

        if result.returncode == GIT_EXIT_NOTHING_TO_UNSET:
            logger.debug("%s já ausente em %s", TARGET_NAME, config_path)
            return False

        if result.returncode == GIT_EXIT_INVALID_FILE:
            raise ConfigReadError(
                f"Config inválido em {config_path}: {result.stderr.strip()}"
            )

        raise ConfigWriteError(
            f"git config --unset-all falhou em {config_path} "
            f"(exit {result.returncode}): {result.stderr.strip()}"
        )

    def _run_git(self, config_path: str, args: List[str]) -> subprocess.CompletedProcess:
        """
        Executa `git config --file <config_path> <args>`.

        Raises:
            ConfigStoreError: Se o git não estiver disponível
        """
        cmd = [self.git_binary, "config", "--file", config_path, *args]

        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise ConfigStoreError("Git não encontrado no PATH") from e
        except OSError as e:
            raise ConfigStoreError(f"Erro ao executar git: {e}") from e


# =============================================================================
# Factory
# =============================================================================

def get_config_store(backend: Union[str, ConfigBackend] = ConfigBackend.TEXT) -> ConfigStore:
    """
    Cria o config store apropriado.

    Args:
        backend: 'git' ou 'text'

    Returns:
        ConfigStore configurado
    """
    try:
        backend = ConfigBackend(str(getattr(backend, "value", backend)).lower())
    except ValueError:
        raise ValueError(
            f"Backend desconhecido: {backend}. "
            f"Backends válidos: {', '.join(b.value for b in ConfigBackend)}"
        )

    if backend == ConfigBackend.GIT:
        return GitConfigStore()

    return TextConfigStore()


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "ConfigBackend",
    "ConfigStore",
    "ConfigStoreError",
    "ConfigReadError",
    "ConfigWriteError",
    "GitConfigStore",
    "TextConfigStore",
    "get_config_store",
    "TARGET_SECTION",
    "TARGET_KEY",
]
