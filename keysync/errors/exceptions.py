"""
Error hierarchy for i18n-keysync.

Every error carries a code and a context dict so that failures can be logged
and written to the JSON report without losing where they happened.
"""

from typing import Any, Dict, Optional
from datetime import datetime, timezone
from pathlib import Path


class KeySyncError(Exception):
    """
    Base exception for all i18n-keysync errors.

    Provides error context and categorization for logging and reporting.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        previous_error: Optional[Exception] = None,
    ):
        super().__init__(message)

        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.previous_error = previous_error
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "previous_error": str(self.previous_error) if self.previous_error else None,
        }


class ConfigurationError(KeySyncError):
    """Configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            context={"config_key": config_key},
            **kwargs
        )


class TranslationFileError(KeySyncError):
    """Errors tied to one translation file on disk."""

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        language: Optional[str] = None,
        **kwargs
    ):
        super().__init__(
            message,
            context={
                "path": str(path) if path is not None else None,
                "language": language,
            },
            **kwargs
        )
        self.path = path
        self.language = language


class ReferenceFileError(TranslationFileError):
    """A reference (source-of-truth) file is missing or is not a JSON object."""
    pass


class TranslationWriteError(TranslationFileError):
    """An output file could not be written."""
    pass
