"""
Tests for logging_config module (logging configuration).
"""
import logging

import pytest

from logging_config import get_logger, set_console_level, setup_logging


@pytest.fixture(autouse=True)
def _reset_cropsy_logger():
    logger = logging.getLogger("cropsy")
    root_logger = logging.getLogger()
    original_root_level = root_logger.level
    logger.handlers.clear()
    yield
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    root_logger.setLevel(original_root_level)


def _write_config(tmp_path, logging_yaml: str):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("logging:\n" + logging_yaml)
    return config_file


def _console_handler(logger):
    return [h for h in logger.handlers if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)][0]


def test_setup_logging_default(tmp_path):
    """Test setup_logging with a logging section."""
    config_file = _write_config(tmp_path, f"  log_file: {tmp_path / 'test.log'}\n  console_level: WARNING\n")

    result = setup_logging(config_file)

    assert result.name == "cropsy"
    assert result.level == logging.DEBUG
    assert len(result.handlers) == 2  # File and console handlers


def test_setup_logging_missing_config_file_uses_defaults(tmp_path, monkeypatch):
    """Test setup_logging without a config file (defaults, log file in cwd)."""
    monkeypatch.chdir(tmp_path)

    result = setup_logging(tmp_path / "nonexistent.yaml")

    assert len(result.handlers) == 2
    assert _console_handler(result).level == logging.INFO
    assert (tmp_path / "cropsy.log").exists()


@pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
def test_setup_logging_console_handler_level(tmp_path, level):
    """Test different console logging levels."""
    config_file = _write_config(tmp_path, f"  log_file: {tmp_path / 'test.log'}\n  console_level: {level.lower()}\n")

    result = setup_logging(config_file)

    assert _console_handler(result).level == getattr(logging, level)
    file_handler = [h for h in result.handlers if isinstance(h, logging.FileHandler)][0]
    assert file_handler.level == logging.DEBUG


def test_setup_logging_prevents_duplicate_handlers(tmp_path):
    """Test that calling setup_logging multiple times doesn't add duplicate handlers."""
    config_file = _write_config(tmp_path, f"  log_file: {tmp_path / 'test.log'}\n")

    setup_logging(config_file)
    handler_count_1 = len(logging.getLogger("cropsy").handlers)
    setup_logging(config_file)
    handler_count_2 = len(logging.getLogger("cropsy").handlers)

    assert handler_count_1 == handler_count_2


def test_setup_logging_append_mode_preserves_existing_file(tmp_path):
    """Test that file_mode=append keeps existing log content."""
    log_file = tmp_path / "append.log"
    log_file.write_text("existing line\n")
    config_file = _write_config(tmp_path, f"  log_file: {log_file}\n  file_mode: a\n")

    logger = setup_logging(config_file)
    logger.info("new line")

    content = log_file.read_text()
    assert "existing line" in content
    assert "new line" in content


def test_setup_logging_root_suppression(tmp_path):
    """Test that the root logger is raised to the third-party level unless disabled."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    config_file = _write_config(tmp_path, f"  log_file: {tmp_path / 'test.log'}\n  third_party_log_level: ERROR\n")
    setup_logging(config_file)
    assert root_logger.level == logging.ERROR


def test_setup_logging_no_root_suppression(tmp_path):
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    config_file = _write_config(tmp_path, f"  log_file: {tmp_path / 'test.log'}\n  suppress_root_logger: false\n")
    setup_logging(config_file)
    assert root_logger.level == logging.DEBUG


@pytest.mark.parametrize(
    "logging_yaml",
    [
        "  file_mode: invalid\n",
        "  console_level: LOUD\n",
        "  third_party_log_level: quiet\n",
        "  suppress_root_logger: maybe\n",
        "  log_file: ''\n",
    ],
)
def test_setup_logging_invalid_settings_raise(tmp_path, logging_yaml):
    """Test invalid logging settings fail fast."""
    config_file = _write_config(tmp_path, logging_yaml)
    with pytest.raises(ValueError):
        setup_logging(config_file)


def test_setup_logging_invalid_section_raises(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("logging: verbose\n")
    with pytest.raises(ValueError):
        setup_logging(config_file)


def test_set_console_level_leaves_file_handler(tmp_path):
    config_file = _write_config(tmp_path, f"  log_file: {tmp_path / 'test.log'}\n")
    logger = setup_logging(config_file)

    set_console_level(logging.ERROR)

    assert _console_handler(logger).level == logging.ERROR
    file_handler = [h for h in logger.handlers if isinstance(h, logging.FileHandler)][0]
    assert file_handler.level == logging.DEBUG


def test_get_logger():
    """Test get_logger function."""
    assert get_logger().name == "cropsy"
    assert get_logger("custom").name == "custom"
