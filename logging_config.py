"""Logging set-up for cropsy.

Every message received and sent is written to the log file at DEBUG; the console
shows INFO and above unless config.yaml or -v/-q say otherwise.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from cropsy_core.config import read_config

LOGGER_NAME = "cropsy"

DEFAULT_LOGGING_SETTINGS = {
    'log_file': 'cropsy.log',
    'console_level': 'INFO',
    'file_mode': 'w',
    'suppress_root_logger': True,
    'third_party_log_level': 'WARNING',
}

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s'
CONSOLE_FORMAT = '%(levelname)s: %(message)s'


@dataclass(frozen=True)
class LoggingSettings:
    log_file: str
    console_level: int
    file_mode: str
    suppress_root_logger: bool
    third_party_log_level: int


def _parse_level(key: str, value: object) -> int:
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid logging.{key} '{value}'")
    return level


def _load_logging_settings(config_path: Path) -> LoggingSettings:
    """Merge the ``logging`` section of config.yaml over the defaults and validate it."""
    section = read_config(config_path).get('logging', {})
    if not isinstance(section, dict):
        raise ValueError(f"Invalid logging section in {config_path}; expected mapping.")
    merged = {**DEFAULT_LOGGING_SETTINGS, **section}

    if merged['file_mode'] not in ('w', 'a'):
        raise ValueError("logging.file_mode must be 'w' or 'a'")
    if not isinstance(merged['suppress_root_logger'], bool):
        raise ValueError("logging.suppress_root_logger must be boolean")
    log_file = merged['log_file']
    if not isinstance(log_file, str) or not log_file.strip():
        raise ValueError("logging.log_file must be a non-empty string")

    return LoggingSettings(
        log_file=log_file,
        console_level=_parse_level('console_level', merged['console_level']),
        file_mode=merged['file_mode'],
        suppress_root_logger=merged['suppress_root_logger'],
        third_party_log_level=_parse_level('third_party_log_level', merged['third_party_log_level']),
    )


def _file_handler(settings: LoggingSettings) -> logging.Handler:
    handler = logging.FileHandler(settings.log_file, mode=settings.file_mode, encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    return handler


def _console_handler(settings: LoggingSettings) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(settings.console_level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _is_console(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)


def setup_logging(config_path: Path = Path("config.yaml")) -> logging.Logger:
    """
    Attach file and console handlers to the cropsy logger.

    Settings are validated even when the logger is already configured, so a bad
    config.yaml is reported on every call. Handlers are only added once.

    Args:
        config_path: Path to the configuration YAML file. A missing file means defaults.

    Returns:
        The configured "cropsy" logger.

    Raises:
        ValueError: If the logging section holds an invalid value.
    """
    settings = _load_logging_settings(config_path)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    if logger.handlers:
        return logger

    logger.addHandler(_file_handler(settings))
    logger.addHandler(_console_handler(settings))

    # python-osc and matplotlib log through the root logger
    if settings.suppress_root_logger:
        logging.getLogger().setLevel(settings.third_party_log_level)

    return logger


def set_console_level(level: int, name: str = LOGGER_NAME) -> None:
    """Change console verbosity; the log file keeps everything."""
    for handler in logging.getLogger(name).handlers:
        if _is_console(handler):
            handler.setLevel(level)


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    return logging.getLogger(name)
