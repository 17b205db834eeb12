"""Configuration for i18n-keysync."""

from .loader import load_config, load_config_file
from .settings import RESERVED_FILENAMES, Settings

__all__ = ["RESERVED_FILENAMES", "Settings", "load_config", "load_config_file"]
