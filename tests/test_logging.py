"""Tests for logging configuration."""

import logging

from patient_records.utils.logging import LogConfig, get_logger, setup_logging


class TestLogging:
    """Tests for setup_logging and get_logger."""

    def test_get_logger_uses_env_level(self, monkeypatch):
        """Test that LOG_LEVEL sets the module logger level."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert get_logger("patient_records.test_env").level == logging.DEBUG

    def test_get_logger_explicit_level(self):
        """Test that an explicit level wins over the environment."""
        assert get_logger("patient_records.test_explicit", level="error").level == logging.ERROR

    def test_setup_logging_filters_at_handler(self):
        """Test that the configured level also applies to the root handlers."""
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging(LogConfig(level="WARNING"))
            assert root.level == logging.WARNING
            assert all(handler.level == logging.WARNING for handler in root.handlers)
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
