"""
Tests for the shared logger setup.
"""

import logging
import pytest

from ideagen.utils.config import Config, config
from ideagen.utils.logger import QUIET_LOGGERS, ideagen_logger, set_log_level


@pytest.fixture
def restore_level():
    yield
    set_log_level(config.log_level)


class TestLogger:
    """Tests for the ideagen logger and the provider loggers it quiets."""

    def test_single_handler_without_propagation(self):
        assert len(ideagen_logger.handlers) == 1
        assert ideagen_logger.propagate is False

    def test_debug_keeps_http_loggers_quiet(self, restore_level):
        set_log_level("debug")

        assert ideagen_logger.level == logging.DEBUG
        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.getLevelName(config.http_log_level)
            assert logging.getLogger(name).level > logging.DEBUG

    def test_http_loggers_follow_stricter_level(self, restore_level):
        set_log_level("CRITICAL")

        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.CRITICAL


class TestConfig:
    """Tests for environment-driven settings."""

    def test_http_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("HTTP_LOG_LEVEL", "error")

        assert Config().http_log_level == "ERROR"

    def test_defaults(self, monkeypatch):
        for name in ("HTTP_LOG_LEVEL", "RATE_LIMIT_MAX_CALLS", "RATE_LIMIT_WINDOW_SECONDS", "REQUEST_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)

        settings = Config()

        assert settings.http_log_level == "WARNING"
        assert settings.rate_limit_max_calls == 10
        assert settings.rate_limit_window_seconds == 60
        assert settings.request_timeout == 60
        assert not hasattr(settings, "project_root")
