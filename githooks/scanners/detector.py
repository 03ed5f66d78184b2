"""
git-hooks - Repository Detector
Reconhece a raiz de um repositório git pela presença do diretório .git.
"""

import logging
import os
from typing import Optional

from githooks.core.config_store import ConfigStore, TextConfigStore
from githooks.core.models import Repository


logger = logging.getLogger(__name__)

METADATA_DIR_NAME = ".git"
CONFIG_FILE_NAME = "config"


def detect_repository(path: str, store: Optional[ConfigStore] = None) -> Optional[Repository]:
    """
    Verifica se `path` é a raiz de um repositório.

    Args:
        path: Diretório candidato
        store: Config store usado para ler core.hooksPath (default: texto)

    Returns:
        Repository populado, ou None se não houver diretório .git
    """
    metadata_dir = os.path.join(path, METADATA_DIR_NAME)
    if not os.path.isdir(metadata_dir):
        return None

    store = store or TextConfigStore()
    config_path = os.path.join(metadata_dir, CONFIG_FILE_NAME)
    value, present = store.read_override(config_path)

    logger.debug("Repositório detectado: %s (hooksPath=%r)", path, value if present else None)

    return Repository(
        path=path,
        metadata_dir=metadata_dir,
        config_path=config_path,
        override_value=value if present else "",
        has_override=present,
    )


__all__ = [
    "detect_repository",
    "METADATA_DIR_NAME",
    "CONFIG_FILE_NAME",
]
