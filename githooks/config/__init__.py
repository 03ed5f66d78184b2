"""Configuration files for git-hooks."""

from pathlib import Path

CONFIG_DIR = Path(__file__).parent
DEFAULT_SETTINGS_FILE = CONFIG_DIR / "default_settings.yaml"

__all__ = ["CONFIG_DIR", "DEFAULT_SETTINGS_FILE"]
