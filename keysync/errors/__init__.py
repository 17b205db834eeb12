"""
Error handling for i18n-keysync.

- Structured error hierarchy
- Per-run error context tracking
"""

from .exceptions import (
    KeySyncError,
    ConfigurationError,
    TranslationFileError,
    ReferenceFileError,
    TranslationWriteError,
)

from .handlers import ErrorContextManager

__all__ = [
    # Exceptions
    "KeySyncError",
    "ConfigurationError",
    "TranslationFileError",
    "ReferenceFileError",
    "TranslationWriteError",

    # Handlers
    "ErrorContextManager",
]
