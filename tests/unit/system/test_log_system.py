"""Tests for centralized logging configuration."""

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import cast

from tradetrack.system import LoggerFactory, LoggingConfig
from tradetrack.system.log_system import LogLevel


def test_default_configuration():
    """Test get_logger() configures defaults on first use."""
    assert not LoggerFactory.is_configured()

    logger = LoggerFactory.get_logger(__name__)

    assert LoggerFactory.is_configured()
    assert hasattr(logger, "info")
    assert logging.getLogger().level == logging.INFO
    # File output is opt-in
    assert not any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)


def test_default_config_values():
    config = LoggingConfig()

    assert config.level == "INFO"
    assert config.format == "console"
    assert config.enable_file is False
    assert config.file_path == Path("logs/tradetrack.log")
    assert config.file_level == "WARNING"


def test_explicit_configuration():
    """Test configuring logger factory explicitly."""
    LoggerFactory.configure(LoggingConfig(level="DEBUG", format="json"))

    assert LoggerFactory.is_configured()
    assert logging.getLogger().level == logging.DEBUG


def test_file_logging_writes_json_lines(tmp_path):
    """Test file output is one JSON object per event."""
    log_file = tmp_path / "test.log"
    LoggerFactory.configure(
        LoggingConfig(
            level="INFO",
            enable_file=True,
            file_path=log_file,
            file_level="DEBUG",
            file_rotation=False,
        )
    )

    LoggerFactory.get_logger("tradetrack.test").info("sharpe.method_selected", method="monthly_returns")

    entry = json.loads(log_file.read_text().strip())
    assert entry["event"] == "sharpe.method_selected"
    assert entry["method"] == "monthly_returns"
    assert "log_timestamp" in entry


def test_file_level_filters_file_output(tmp_path):
    """Test events below file_level stay out of the file."""
    log_file = tmp_path / "warnings.log"
    LoggerFactory.configure(
        LoggingConfig(level="DEBUG", enable_file=True, file_path=log_file, file_level="WARNING", file_rotation=False)
    )
    logger = LoggerFactory.get_logger("tradetrack.test")

    logger.info("ignored.event")
    logger.warning("loaders.line_skipped", line_number=3)

    lines = log_file.read_text().strip().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["event"] == "loaders.line_skipped"


def test_file_logging_uses_default_path():
    """Test enabling file logging without a path writes to logs/tradetrack.log."""
    LoggerFactory.configure(LoggingConfig(enable_file=True))

    LoggerFactory.get_logger(__name__).warning("loaders.line_skipped", line_number=2)

    # Relative to the working directory (a tmp dir in tests)
    assert Path("logs/tradetrack.log").is_file()


def test_file_logging_creates_directory(tmp_path):
    """Test that file logging creates parent directories."""
    log_file = tmp_path / "logs" / "subdir" / "test.log"
    LoggerFactory.configure(LoggingConfig(enable_file=True, file_path=log_file, file_rotation=False))

    LoggerFactory.get_logger(__name__).warning("test")

    assert log_file.exists()


def test_rotating_file_handler(tmp_path):
    """Test rotating file handler configuration."""
    log_file = tmp_path / "rotating.log"
    LoggerFactory.configure(
        LoggingConfig(enable_file=True, file_path=log_file, file_rotation=True, max_file_size_mb=1, backup_count=5)
    )

    handlers = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]

    assert len(handlers) == 1
    assert handlers[0].maxBytes == 1 * 1024 * 1024
    assert handlers[0].backupCount == 5


def test_different_log_levels():
    """Test every supported level configures the root logger."""
    for level_str in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        LoggerFactory.reset()

        LoggerFactory.configure(LoggingConfig(level=cast(LogLevel, level_str)))

        assert logging.getLogger().level == getattr(logging, level_str)


def test_console_renderer_includes_event_and_context():
    """Test the console renderer output layout."""
    renderer = LoggerFactory._custom_console_renderer()

    line = renderer(
        None,
        "info",
        {
            "log_timestamp": "251022-205007.28",
            "level": "info",
            "event": "kelly.no_edge",
            "kelly": -1.1,
            "filename": "kelly.py",
            "lineno": 42,
            "logger": "tradetrack.libraries.risk.tools.kelly",
        },
    )

    assert line.startswith("251022-205007.28 ")
    assert "kelly.no_edge" in line
    assert "kelly=-1.1" in line
    assert "kelly:42" in line


def test_timestamp_uses_own_key(tmp_path):
    """Test the timestamp does not overwrite a domain field named date."""
    log_file = tmp_path / "ts.log"
    LoggerFactory.configure(LoggingConfig(enable_file=True, file_path=log_file, file_rotation=False))

    LoggerFactory.get_logger(__name__).warning("loaders.line_skipped", date="2025-01-02")

    entry = json.loads(log_file.read_text().strip())
    assert entry["date"] == "2025-01-02"
    assert len(entry["log_timestamp"]) == len("251022-205007")


def test_reset_clears_configuration():
    """Test that reset clears configuration."""
    LoggerFactory.configure(LoggingConfig(level="DEBUG"))
    assert LoggerFactory.is_configured()

    LoggerFactory.reset()

    assert not LoggerFactory.is_configured()
    assert logging.getLogger().handlers == []
