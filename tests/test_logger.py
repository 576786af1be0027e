"""Tests for lib/logger.py."""

import logging

from lib.logger import LEVEL_ENV_VAR, ROOT_LOGGER, get_logger


class TestGetLogger:
    """Tests for get_logger()."""

    def test_component_is_child_of_stackscout(self):
        """Component loggers hang off the stackscout logger."""
        assert get_logger("walker").name == "stackscout.walker"
        assert get_logger("walker").parent is logging.getLogger(ROOT_LOGGER)

    def test_same_logger_on_repeated_calls(self):
        assert get_logger("cached") is get_logger("cached")

    def test_single_handler_on_parent(self):
        """Only the parent carries a handler, and it is installed once."""
        get_logger("one")
        get_logger("two")
        root = logging.getLogger(ROOT_LOGGER)
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        assert root.propagate is False
        assert get_logger("one").handlers == []

    def test_default_level_is_warning(self, monkeypatch):
        monkeypatch.delenv(LEVEL_ENV_VAR, raising=False)
        assert get_logger("level_default").level == logging.WARNING

    def test_level_from_environment(self, monkeypatch):
        """Level names from the environment are case-insensitive."""
        monkeypatch.setenv(LEVEL_ENV_VAR, "debug")
        assert get_logger("level_env").level == logging.DEBUG

    def test_unknown_environment_level_falls_back(self, monkeypatch):
        monkeypatch.setenv(LEVEL_ENV_VAR, "chatty")
        assert get_logger("level_bogus").level == logging.WARNING

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv(LEVEL_ENV_VAR, "DEBUG")
        assert get_logger("level_pinned", level="ERROR").level == logging.ERROR

    def test_warning_reaches_caplog(self, caplog):
        """Records flow through the parent, so pytest's caplog can capture them."""
        logger = get_logger("capture")
        root = logging.getLogger(ROOT_LOGGER)
        root.addHandler(caplog.handler)
        try:
            logger.warning("Skipping workspace svc")
        finally:
            root.removeHandler(caplog.handler)
        assert "Skipping workspace svc" in caplog.text
