# tests/test_logging_conf.py
"""
Logging Configuration Tests

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- ratecache.shared.logging_conf (setup_logging for testing)
- ratecache.config (settings providing the LOG_* defaults)
- unittest.mock (patch to keep pytest's own logging handlers in place)
"""
import logging  # Standard logging handlers inspected after setup
from logging.handlers import RotatingFileHandler

import pytest  # Testing framework for writing and running tests

from unittest.mock import patch  # Patch basicConfig so the root logger is left untouched

from ratecache.config import settings
from ratecache.shared.logging_conf import setup_logging


@pytest.fixture
def log_settings(monkeypatch):
    """Reset the LOG_* settings so the host environment does not leak in."""
    monkeypatch.setattr(settings, "log_file", None)
    monkeypatch.setattr(settings, "log_dir", None)
    monkeypatch.setattr(settings, "log_stdout", True)
    monkeypatch.setattr(settings, "log_max_bytes", 10 * 1024 * 1024)
    monkeypatch.setattr(settings, "log_backup_count", 5)
    return settings


class TestSetupLogging:
    @patch('ratecache.shared.logging_conf.logging.basicConfig')
    def test_log_dir(self, mock_basic, tmp_path, log_settings):
        path = setup_logging(level=logging.DEBUG, log_dir=tmp_path / "logs", backup_count=2, log_stdout=False)

        assert path == tmp_path / "logs" / "ratecache.log"
        kwargs = mock_basic.call_args.kwargs
        assert kwargs["level"] == logging.DEBUG
        handlers = kwargs["handlers"]
        assert len(handlers) == 1
        assert isinstance(handlers[0], RotatingFileHandler)
        assert handlers[0].backupCount == 2
        handlers[0].close()

    @patch('ratecache.shared.logging_conf.logging.basicConfig')
    def test_stdout_only(self, mock_basic, log_settings):
        assert setup_logging() is None
        handlers = mock_basic.call_args.kwargs["handlers"]
        assert len(handlers) == 1
        assert type(handlers[0]) is logging.StreamHandler

    @patch('ratecache.shared.logging_conf.logging.basicConfig')
    def test_falls_back_to_stdout(self, mock_basic, log_settings):
        setup_logging(log_stdout=False)
        handlers = mock_basic.call_args.kwargs["handlers"]
        assert type(handlers[0]) is logging.StreamHandler


class TestSetupLoggingFromSettings:
    @patch('ratecache.shared.logging_conf.logging.basicConfig')
    def test_log_dir_from_settings(self, mock_basic, tmp_path, log_settings):
        log_settings.log_dir = str(tmp_path / "var")
        log_settings.log_stdout = False
        log_settings.log_max_bytes = 2048
        log_settings.log_backup_count = 3

        path = setup_logging()

        assert path == tmp_path / "var" / "ratecache.log"
        handlers = mock_basic.call_args.kwargs["handlers"]
        assert len(handlers) == 1
        assert handlers[0].maxBytes == 2048
        assert handlers[0].backupCount == 3
        handlers[0].close()

    @patch('ratecache.shared.logging_conf.logging.basicConfig')
    def test_log_file_from_settings(self, mock_basic, tmp_path, log_settings):
        log_settings.log_file = str(tmp_path / "app" / "rates.log")

        path = setup_logging()

        assert path == tmp_path / "app" / "rates.log"
        handlers = mock_basic.call_args.kwargs["handlers"]
        assert len(handlers) == 2
        assert type(handlers[0]) is logging.StreamHandler
        assert isinstance(handlers[1], RotatingFileHandler)
        handlers[1].close()

    @patch('ratecache.shared.logging_conf.logging.basicConfig')
    def test_arguments_override_settings(self, mock_basic, tmp_path, log_settings):
        log_settings.log_dir = str(tmp_path / "ignored")

        path = setup_logging(log_file=tmp_path / "explicit.log", log_stdout=False)

        assert path == tmp_path / "explicit.log"
        assert not (tmp_path / "ignored").exists()
        mock_basic.call_args.kwargs["handlers"][0].close()
