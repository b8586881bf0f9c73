"""
Tests for the logger module.
"""

import json
import logging
import sys
from pathlib import Path

import pytest

from safe_delete.utils.logger import (
    ROOT_LOGGER_NAME,
    LogConfig,
    get_analysis_id,
    get_config,
    get_logger,
    log_context,
    setup_logging,
)
from safe_delete.utils.logger.formatters import HumanFormatter, JsonFormatter


@pytest.fixture
def restore_logging():
    """Put the default (silent) configuration back after the test."""
    yield
    setup_logging(LogConfig())


def _record(msg="hello %s", args=("world",), analysis_id=None, exc_info=None):
    record = logging.LogRecord(
        name="safe_delete.analyzer",
        level=logging.INFO,
        pathname="/src/safe_delete/analyzer/command.py",
        lineno=88,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )
    record.analysis_id = analysis_id
    return record


class TestGetLogger:
    def test_root_logger(self):
        assert get_logger().name == ROOT_LOGGER_NAME

    def test_child_logger(self):
        assert get_logger("analyzer").name == "safe_delete.analyzer"

    def test_default_config_is_silent(self, restore_logging):
        root = setup_logging(LogConfig())
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.NullHandler)
        assert root.propagate is False

    def test_setup_twice_does_not_duplicate(self, restore_logging, tmp_path):
        config = LogConfig(log_dir=tmp_path, console_enabled=True)
        setup_logging(config)
        root = setup_logging(config)
        assert len(root.handlers) == 3


class TestGetConfig:
    """Tests for environment driven configuration."""

    def test_defaults(self, monkeypatch):
        for name in (
            "SAFE_DELETE_DEBUG",
            "SAFE_DELETE_LOG_LEVEL",
            "SAFE_DELETE_LOG_CONSOLE",
            "SAFE_DELETE_LOG_DIR",
        ):
            monkeypatch.delenv(name, raising=False)

        config = get_config()
        assert config.default_level == logging.INFO
        assert config.console_enabled is False
        assert config.file_enabled is False

    def test_debug_enables_console(self, monkeypatch):
        monkeypatch.setenv("SAFE_DELETE_DEBUG", "1")
        monkeypatch.delenv("SAFE_DELETE_LOG_CONSOLE", raising=False)
        config = get_config()
        assert config.default_level == logging.DEBUG
        assert config.console_enabled is True

    def test_console_can_be_forced_off(self, monkeypatch):
        monkeypatch.setenv("SAFE_DELETE_DEBUG", "true")
        monkeypatch.setenv("SAFE_DELETE_LOG_CONSOLE", "0")
        assert get_config().console_enabled is False

    @pytest.mark.parametrize(
        "value, level",
        [("debug", logging.DEBUG), ("WARN", logging.WARNING), ("error", logging.ERROR)],
    )
    def test_log_level(self, monkeypatch, value, level):
        monkeypatch.delenv("SAFE_DELETE_DEBUG", raising=False)
        monkeypatch.setenv("SAFE_DELETE_LOG_LEVEL", value)
        assert get_config().default_level == level

    def test_unknown_log_level_ignored(self, monkeypatch):
        monkeypatch.delenv("SAFE_DELETE_DEBUG", raising=False)
        monkeypatch.setenv("SAFE_DELETE_LOG_LEVEL", "loud")
        assert get_config().default_level == logging.INFO

    def test_log_dir(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SAFE_DELETE_LOG_DIR", str(tmp_path))
        config = get_config()
        assert config.log_dir == Path(tmp_path)
        assert config.human_log_path == tmp_path / "safe-delete.log"
        assert config.json_log_path == tmp_path / "safe-delete.json"


class TestLogContext:
    def test_sets_and_resets_id(self):
        assert get_analysis_id() is None
        with log_context() as analysis_id:
            assert len(analysis_id) == 8
            assert get_analysis_id() == analysis_id
        assert get_analysis_id() is None

    def test_explicit_id(self):
        with log_context("abc12345") as analysis_id:
            assert analysis_id == "abc12345"

    def test_nested(self):
        with log_context("outer"):
            with log_context("inner"):
                assert get_analysis_id() == "inner"
            assert get_analysis_id() == "outer"


class TestFileLogging:
    def test_writes_human_and_json_logs(self, restore_logging, tmp_path):
        setup_logging(LogConfig(log_dir=tmp_path, default_level=logging.DEBUG))

        with log_context("feedc0de"):
            get_logger("analyzer").info("2 threat(s) in command")

        for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
            handler.flush()

        human = (tmp_path / "safe-delete.log").read_text()
        assert "safe_delete.analyzer" in human
        assert "2 threat(s) in command [analysis=feedc0de]" in human

        entry = json.loads((tmp_path / "safe-delete.json").read_text().splitlines()[-1])
        assert entry["message"] == "2 threat(s) in command"
        assert entry["logger"] == "safe_delete.analyzer"
        assert entry["analysis_id"] == "feedc0de"


class TestFormatters:
    def test_human_format(self):
        line = HumanFormatter().format(_record(analysis_id="1f2e3d4c"))
        parts = [part.strip() for part in line.split(" | ")]
        assert parts[1] == "INFO"
        assert parts[2] == "safe_delete.analyzer"
        assert parts[3] == "command.py:88"
        assert parts[4] == "hello world [analysis=1f2e3d4c]"

    def test_human_format_without_id(self):
        line = HumanFormatter().format(_record())
        assert line.endswith("| hello world")

    def test_json_format_with_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record(exc_info=sys.exc_info())

        data = json.loads(JsonFormatter().format(record))
        assert data["message"] == "hello world"
        assert data["line"] == 88
        assert "analysis_id" not in data
        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "boom"
