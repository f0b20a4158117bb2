"""
Tests for logging setup.
"""

import logging

import pytest

from toolshed.core.observability.logging_config import level_from_flags, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLevelFromFlags:
    """Tests for CLI flag → level mapping."""

    def test_default(self, monkeypatch):
        monkeypatch.delenv("TOOLSHED_LOG_LEVEL", raising=False)
        assert level_from_flags() == "WARNING"

    def test_env(self, monkeypatch):
        monkeypatch.setenv("TOOLSHED_LOG_LEVEL", "INFO")
        assert level_from_flags() == "INFO"

    def test_debug_wins(self, monkeypatch):
        monkeypatch.setenv("TOOLSHED_LOG_LEVEL", "ERROR")
        assert level_from_flags(verbose=True, quiet=True, debug=True) == "DEBUG"

    def test_verbose_beats_quiet(self):
        assert level_from_flags(verbose=True, quiet=True) == "INFO"

    def test_quiet(self):
        assert level_from_flags(quiet=True) == "ERROR"


class TestSetupLogging:
    """Tests for handler configuration."""

    def test_console_only(self, monkeypatch):
        monkeypatch.delenv("TOOLSHED_LOG_FILE", raising=False)
        setup_logging("INFO")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.INFO

    def test_minimal_format(self, monkeypatch, capsys):
        monkeypatch.delenv("TOOLSHED_LOG_FILE", raising=False)
        setup_logging("WARNING")
        logging.getLogger("toolshed.test").warning("bat: asset install unavailable")
        assert capsys.readouterr().err == "warning: bat: asset install unavailable\n"

    def test_bad_level_falls_back(self, monkeypatch):
        monkeypatch.delenv("TOOLSHED_LOG_FILE", raising=False)
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_file_handler(self, tmp_path, monkeypatch):
        log_file = tmp_path / "toolshed.log"
        monkeypatch.setenv("TOOLSHED_LOG_FILE", str(log_file))
        monkeypatch.setenv("TOOLSHED_LOG_FILE_LEVEL", "DEBUG")

        setup_logging("WARNING")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        logging.getLogger("toolshed.test").debug("resolved bat")
        for handler in root.handlers:
            handler.flush()

        assert "resolved bat" in log_file.read_text()
        for handler in root.handlers:
            if isinstance(handler, logging.FileHandler):
                handler.close()
