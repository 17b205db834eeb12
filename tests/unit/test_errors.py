"""
Unit tests for the error hierarchy and error tracking.
"""

from pathlib import Path

from keysync.errors import (
    ConfigurationError,
    ErrorContextManager,
    KeySyncError,
    ReferenceFileError,
    TranslationFileError,
    TranslationWriteError,
)


class TestErrorHierarchy:
    """Test error class hierarchy."""

    def test_base_error_creation(self):
        error = KeySyncError(message="Test error", error_code="TEST_ERROR", context={"key": "value"})

        assert error.message == "Test error"
        assert error.error_code == "TEST_ERROR"
        assert error.context == {"key": "value"}
        assert error.timestamp is not None

    def test_default_error_code(self):
        assert ConfigurationError("bad").error_code == "ConfigurationError"

    def test_error_to_dict(self):
        cause = ValueError("boom")
        error = ReferenceFileError("Invalid JSON", path=Path("a/b.json"), previous_error=cause)

        error_dict = error.to_dict()

        assert error_dict["error_type"] == "ReferenceFileError"
        assert error_dict["context"] == {"path": str(Path("a/b.json")), "language": None}
        assert error_dict["previous_error"] == "boom"
        assert "timestamp" in error_dict

    def test_file_errors_share_base(self):
        assert issubclass(ReferenceFileError, TranslationFileError)
        assert issubclass(TranslationWriteError, TranslationFileError)
        assert issubclass(TranslationFileError, KeySyncError)

    def test_configuration_error_context(self):
        error = ConfigurationError("Invalid config", config_key="languages")

        assert error.context["config_key"] == "languages"


class TestErrorContextManager:
    """Test per-run error tracking."""

    def test_record_error(self):
        manager = ErrorContextManager()

        manager.record_error(TranslationWriteError("disk full", language="fr"), {"output": "x.json"})

        assert manager.has_errors
        record = manager.error_history[0]
        assert record["error_type"] == "TranslationWriteError"
        assert record["context"]["language"] == "fr"
        assert record["context"]["output"] == "x.json"

    def test_error_stats(self):
        manager = ErrorContextManager()
        manager.record_error(ReferenceFileError("a"))
        manager.record_error(ReferenceFileError("b"))
        manager.record_error(TranslationWriteError("c"))

        stats = manager.get_error_stats()

        assert stats["total_errors"] == 3
        assert stats["error_counts"] == {"ReferenceFileError": 2, "TranslationWriteError": 1}
        assert stats["most_common"] == ("ReferenceFileError", 2)

    def test_history_limit(self):
        manager = ErrorContextManager(max_history=2)
        for i in range(3):
            manager.record_error(KeySyncError(f"error {i}"))

        assert [r["message"] for r in manager.error_history] == ["error 1", "error 2"]
        assert manager.get_error_stats()["error_counts"]["KeySyncError"] == 3

    def test_empty(self):
        manager = ErrorContextManager()

        assert not manager.has_errors
        assert manager.get_error_stats()["most_common"] is None
