"""Core modules for git-hooks (config store, cleaner, models)."""

from .cancellation import CancellationToken, OperationCancelledError
from .cleaner import BatchCleaner, clean
from .config_store import (
    ConfigBackend,
    ConfigReadError,
    ConfigStore,
    ConfigStoreError,
    ConfigWriteError,
    GitConfigStore,
    TextConfigStore,
    get_config_store,
)
from .formatters import FormatterFactory
from .models import CleanResult, CleanSummary, Repository
from .settings import Settings, SettingsLoadError, load_effective_settings, load_settings

__all__ = [
    # Cancellation
    "CancellationToken",
    "OperationCancelledError",
    # Cleaner
    "BatchCleaner",
    "clean",
    # Config store
    "ConfigBackend",
    "ConfigReadError",
    "ConfigStore",
    "ConfigStoreError",
    "ConfigWriteError",
    "GitConfigStore",
    "TextConfigStore",
    "get_config_store",
    # Formatters
    "FormatterFactory",
    # Models
    "CleanResult",
    "CleanSummary",
    "Repository",
    # Settings
    "Settings",
    "SettingsLoadError",
    "load_effective_settings",
    "load_settings",
]
