"""Configuration helpers shared across CLI, relay and output layers."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml

from .constants import (
    DEFAULT_LAYOUT_SETTINGS,
    DEFAULT_RELAY_SETTINGS,
    DEFAULT_RUNTIME_PATHS,
    RELAY_ENV_OVERRIDES,
)
from .models import CropSettings

logger = logging.getLogger("cropsy")

_NON_NEGATIVE_LAYOUT_KEYS = ('top_margin', 'bottom_margin', 'left_margin', 'right_margin', 'spacing', 'inset')
_PORT_KEYS = ('listen_port', 'target_port')


class CoreConfigService:
    """Stateful access wrapper for core config helpers."""

    def __init__(self, config_file: Path = Path("config.yaml")) -> None:
        self.config_file = config_file

    def load_crop_settings(self) -> CropSettings:
        return load_crop_settings(self.config_file)

    def load_relay_settings(self, environ: Mapping[str, str] | None = None) -> dict[str, str | int]:
        return load_relay_settings(self.config_file, environ)

    def load_runtime_paths(self) -> dict[str, str]:
        return load_runtime_paths(self.config_file)


def read_config(config_file: Path = Path("config.yaml")) -> dict:
    """Read the config YAML as a mapping; a missing file reads as empty."""
    config_file = Path(config_file)
    if not config_file.exists():
        logger.debug("Config file %s not found; using defaults", config_file)
        return {}

    with open(config_file, 'r') as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Invalid config in {config_file}; expected mapping at top level.")
    return config


def _read_section(config: dict, section: str, config_file: Path) -> dict:
    values = config.get(section, {})
    if values is None:
        return {}
    if not isinstance(values, dict):
        raise ValueError(f"Invalid {section} section in {config_file}; expected mapping.")
    return values


def _parse_aspect_ratio(value: object) -> float:
    """Accept an aspect ratio as a number or a [width, height] pair."""
    if isinstance(value, (list, tuple)):
        if len(value) != 2:
            raise ValueError("layout.aspect_ratio pair must have exactly two values, e.g. [16, 9]")
        ratio_w, ratio_h = (float(part) for part in value)
        if ratio_h == 0:
            raise ValueError("layout.aspect_ratio height must be non-zero")
        ratio = ratio_w / ratio_h
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        ratio = float(value)
    else:
        raise ValueError("layout.aspect_ratio must be a number or a [width, height] pair")

    if ratio <= 0:
        raise ValueError("layout.aspect_ratio must be > 0")
    return ratio


def load_crop_settings(config_file: Path = Path("config.yaml")) -> CropSettings:
    """Load margins, spacing, aspect ratio and inset from the ``layout`` section.

    Missing keys keep the deployment defaults (47/60/6/6 margins, 6 spacing, 16:9).
    """
    config_file = Path(config_file)
    layout = _read_section(read_config(config_file), 'layout', config_file)

    unknown_keys = sorted(set(layout) - set(DEFAULT_LAYOUT_SETTINGS))
    if unknown_keys:
        raise ValueError(f"Unknown layout setting(s) in {config_file}: {', '.join(unknown_keys)}")

    settings = DEFAULT_LAYOUT_SETTINGS.copy()
    for key in _NON_NEGATIVE_LAYOUT_KEYS:
        if key in layout:
            value = layout[key]
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"layout.{key} must be a number")
            if value < 0:
                raise ValueError(f"layout.{key} must be >= 0")
            settings[key] = value

    if 'aspect_ratio' in layout:
        settings['aspect_ratio'] = _parse_aspect_ratio(layout['aspect_ratio'])

    return CropSettings(**settings)


def _parse_port(key: str, value: object) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"relay.{key} must be an integer port, got {value!r}")
    if not 0 < port < 65536:
        raise ValueError(f"relay.{key} must be between 1 and 65535, got {port}")
    return port


def load_relay_settings(
    config_file: Path = Path("config.yaml"),
    environ: Mapping[str, str] | None = None,
) -> dict[str, str | int]:
    """Load relay hosts, ports and OSC addresses.

    Priority:
    1. Environment variables (LISTEN_HOST, LISTEN_PORT, IZZY_HOST, IZZY_PORT)
    2. config.yaml ``relay`` section
    3. Built-in defaults
    """
    config_file = Path(config_file)
    relay = _read_section(read_config(config_file), 'relay', config_file)
    environ = os.environ if environ is None else environ

    settings: dict[str, str | int] = DEFAULT_RELAY_SETTINGS.copy()
    for key in DEFAULT_RELAY_SETTINGS:
        if key in relay:
            settings[key] = relay[key]

    for env_name, key in RELAY_ENV_OVERRIDES.items():
        env_value = environ.get(env_name)
        if env_value:
            logger.debug("relay.%s overridden by %s=%s", key, env_name, env_value)
            settings[key] = env_value

    for key in _PORT_KEYS:
        settings[key] = _parse_port(key, settings[key])

    for key in ('listen_host', 'target_host'):
        value = settings[key]
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"relay.{key} must be a non-empty string")
        settings[key] = value.strip()

    for key in ('command_address', 'output_address'):
        value = settings[key]
        if not isinstance(value, str) or not value.startswith('/'):
            raise ValueError(f"relay.{key} must be an OSC address starting with '/'")

    return settings


def load_runtime_paths(config_file: Path = Path("config.yaml")) -> dict[str, str]:
    """Load runtime path defaults from config YAML.

    Paths are read from top-level ``runtime_paths`` and merged with minimal
    defaults when keys are missing.
    """
    config_file = Path(config_file)
    runtime_paths = _read_section(read_config(config_file), 'runtime_paths', config_file)

    paths = DEFAULT_RUNTIME_PATHS.copy()
    for key in DEFAULT_RUNTIME_PATHS:
        if key in runtime_paths:
            value = runtime_paths[key]
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"runtime_paths.{key} must be a non-empty string")
            paths[key] = value.strip()

    return paths
