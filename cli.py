"""
CLI and configuration utilities for cropsy.

Handles command-line argument parsing and resolution of relay/layout settings.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from cropsy_core.config import CoreConfigService, load_runtime_paths as core_load_runtime_paths
from cropsy_core.constants import DEFAULT_RUNTIME_PATHS
from cropsy_core.models import CropSettings

logger = logging.getLogger("cropsy")

__version__ = "1.0.0"
ONE_SHOT_MODES = ("send", "dry_run", "export", "preview")


class CLIError(ValueError):
    """User-facing CLI validation error with optional hint text."""

    def __init__(self, message: str, hint: str | None = None):
        self.message = message
        self.hint = hint
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class FriendlyArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises CLIError instead of exiting immediately."""

    def error(self, message: str) -> None:
        hint = None
        if "unrecognized arguments" in message and "--size" in message:
            hint = "Use --screen WIDTHxHEIGHT (for example: --screen 1920x1080)."
        elif "not allowed with argument" in message:
            hint = "Choose only one of --send, --dry-run, --export or --preview."
        usage = self.format_usage().strip()
        raise CLIError(f"Argument error: {message}\n{usage}", hint=hint)


def _resolve_runtime_path_defaults() -> tuple[Path, dict[str, str]]:
    """Resolve config path and runtime path defaults from CLI pre-parse."""
    config_probe = argparse.ArgumentParser(add_help=False)
    config_probe.add_argument("--config", type=Path, default=Path("config.yaml"))
    probe_args, _ = config_probe.parse_known_args()
    config_path = probe_args.config

    if "--help" in sys.argv or "-h" in sys.argv:
        return config_path, DEFAULT_RUNTIME_PATHS.copy()

    try:
        runtime_paths = core_load_runtime_paths(config_path)
    except (ValueError, OSError, yaml.YAMLError) as exc:
        raise CLIError(
            f"Failed to load runtime_paths from {config_path}: {exc}",
            "Fix config.yaml runtime_paths values or provide a valid --config path.",
        )

    return config_path, runtime_paths


def parse_args() -> argparse.Namespace:
    """
    Parse command-line arguments for cropsy.

    Returns:
        argparse.Namespace: Parsed command-line arguments, with ``screen`` parsed
        into a (width, height) tuple and ``mode`` set to the selected one-shot
        mode or "listen".
    """
    config_path_default, runtime_paths = _resolve_runtime_path_defaults()

    parser = FriendlyArgumentParser(
        description="Relay gallery crop values (box size and pan percentages) over OSC.",
        epilog="""
Examples:
  %(prog)s                                          # Listen for /zgc/cropValues commands
  %(prog)s --screen 1920x1080 --count 9 --send      # Send sizes 1..9 once and exit
  %(prog)s --screen 1920x1080 --count 4 --single --dry-run
  %(prog)s --screen 1920x1080 --count 25 --export crops.csv
  %(prog)s --screen 1920x1080 --count 6 --preview   # PNG per gallery size in --out-dir
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # Gallery selection
    gallery_group = parser.add_argument_group("gallery (required for one-shot modes)")
    gallery_group.add_argument(
        "--screen",
        type=str,
        default=None,
        help="Screen size as WIDTHxHEIGHT (e.g., 1920x1080)"
    )
    gallery_group.add_argument(
        "-n", "--count",
        type=int,
        default=None,
        help="Largest gallery size (number of boxes)"
    )
    gallery_group.add_argument(
        "--single",
        action="store_true",
        help="Only produce values for --count boxes instead of every size from 1 to --count"
    )

    # One-shot modes (mutually exclusive); default is to listen for commands
    mode_group = parser.add_argument_group("one-shot modes (choose one; default listens for commands)")
    mode_exclusive = mode_group.add_mutually_exclusive_group()
    mode_exclusive.add_argument(
        "--send",
        action="store_true",
        help="Send the crop value messages once, then exit"
    )
    mode_exclusive.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the messages that would be sent without sending them"
    )
    mode_exclusive.add_argument(
        "--export",
        type=Path,
        metavar="CSV",
        default=None,
        help="Write a per-box table of crop and pan values to a CSV file"
    )
    mode_exclusive.add_argument(
        "--preview",
        action="store_true",
        help="Render a PNG preview of each gallery size into --out-dir"
    )

    # Network
    network_group = parser.add_argument_group("network (override config.yaml and environment)")
    network_group.add_argument("--listen-host", type=str, default=None, help="Host to listen on for commands")
    network_group.add_argument("--listen-port", type=int, default=None, help="Port to listen on for commands")
    network_group.add_argument("--target-host", type=str, default=None, help="Host receiving crop values")
    network_group.add_argument("--target-port", type=int, default=None, help="Port receiving crop values")

    # Output options
    output_group = parser.add_argument_group("output options")
    output_group.add_argument(
        "--config",
        type=Path,
        default=config_path_default,
        help=f"Path to config YAML file (default: {config_path_default})"
    )
    output_group.add_argument(
        "--out-dir",
        type=Path,
        default=Path(runtime_paths["out_dir"]),
        help=f"Output directory for previews (default: {runtime_paths['out_dir']})"
    )
    output_group.add_argument(
        "-s", "--show",
        action="store_true",
        help="Show previews interactively as they are rendered"
    )

    # Console verbosity
    verbosity_group = parser.add_argument_group("console verbosity")
    verbosity_exclusive = verbosity_group.add_mutually_exclusive_group()
    verbosity_exclusive.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress console output except errors (log file unaffected)"
    )
    verbosity_exclusive.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose console output (DEBUG level, log file always at DEBUG)"
    )

    args = parser.parse_args()
    args.mode = resolve_mode(args)
    args.screen = parse_screen(args.screen)
    validate_gallery_args(args)
    return args


def resolve_mode(args: argparse.Namespace) -> str:
    """Return the selected one-shot mode name, or "listen" when none is selected."""
    for mode in ONE_SHOT_MODES:
        value = getattr(args, mode, None)
        if value:
            return mode
    return "listen"


def parse_screen(screen_str: str | None) -> tuple[int, int] | None:
    """
    Parse screen size string into (width, height).

    Args:
        screen_str: Screen string in format "WIDTHxHEIGHT" (e.g., "1920x1080") or None.

    Returns:
        tuple[int, int] | None: (width, height) or None if screen_str is None.

    Raises:
        CLIError: If the screen format is invalid.
    """
    if screen_str is None:
        return None

    if 'x' not in screen_str.lower():
        raise CLIError(
            f"Invalid screen format '{screen_str}'.",
            "Use WIDTHxHEIGHT (e.g., --screen 1920x1080)."
        )

    try:
        parts = screen_str.lower().split('x')
        if len(parts) != 2:
            raise ValueError()
        width = int(parts[0])
        height = int(parts[1])
        if width <= 0 or height <= 0:
            raise ValueError()
        return (width, height)
    except ValueError:
        raise CLIError(
            f"Invalid screen format '{screen_str}'.",
            "Use WIDTHxHEIGHT with positive integers (e.g., --screen 1920x1080)."
        )


def validate_gallery_args(args: argparse.Namespace) -> None:
    """Check that one-shot modes have a screen size and a positive count."""
    if args.count is not None and args.count < 1:
        raise CLIError(
            f"Invalid --count {args.count}.",
            "Use a whole number of boxes >= 1 (e.g., --count 9)."
        )

    if args.mode == "listen":
        if args.screen is not None or args.count is not None or args.single:
            raise CLIError(
                "--screen, --count and --single need a one-shot mode.",
                "Add --send, --dry-run, --export CSV or --preview."
            )
        return

    if args.screen is None or args.count is None:
        raise CLIError(
            "One-shot modes need both --screen and --count.",
            "For example: --screen 1920x1080 --count 9 --send"
        )


def load_crop_settings(config_file: Path) -> CropSettings:
    """
    Load crop margins, spacing and aspect ratio from config YAML.

    Args:
        config_file: Path to config YAML file.

    Returns:
        CropSettings: Settings from the ``layout`` section merged with defaults.

    Raises:
        CLIError: If the layout section is invalid.
    """
    try:
        return CoreConfigService(config_file).load_crop_settings()
    except (ValueError, OSError, yaml.YAMLError) as exc:
        raise CLIError(str(exc), "Fix the layout section of config.yaml.") from exc


def load_relay_settings(args: argparse.Namespace) -> dict[str, str | int]:
    """
    Resolve relay hosts, ports and addresses.

    Priority:
    1. CLI --listen-host/--listen-port/--target-host/--target-port
    2. Environment variables (LISTEN_HOST, LISTEN_PORT, IZZY_HOST, IZZY_PORT)
    3. config.yaml relay section
    4. Built-in defaults

    Raises:
        CLIError: If the relay section or an override is invalid.
    """
    try:
        settings = CoreConfigService(args.config).load_relay_settings()
    except (ValueError, OSError, yaml.YAMLError) as exc:
        raise CLIError(str(exc), "Fix the relay section of config.yaml or the LISTEN_*/IZZY_* variables.") from exc

    for key in ('listen_host', 'listen_port', 'target_host', 'target_port'):
        value = getattr(args, key, None)
        if value is not None:
            settings[key] = value

    for key in ('listen_port', 'target_port'):
        if not 0 < int(settings[key]) < 65536:
            raise CLIError(f"Invalid --{key.replace('_', '-')} {settings[key]}.", "Use a port between 1 and 65535.")

    return settings
