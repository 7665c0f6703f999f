"""
cropsy: gallery crop values for OSC-controlled panners.

Main entry point for the cropsy application. Listens for crop value commands and
relays per-gallery-size box scale and pan percentages, or produces them once
(send, dry run, CSV export or PNG preview) from the command line.
"""

import logging
import sys

from cli import CLIError, load_crop_settings, load_relay_settings, parse_args
from cropsy_core.errors import DegenerateLayoutError, InvalidDimensionError, ZeroTravelRangeError
from cropsy_relay.relay import CropValuesRelay, build_crop_messages
from cropsy_relay.transport import UdpOscTransport
from logging_config import get_logger, set_console_level, setup_logging


def _configure_console_logging(args, logger) -> None:
    """Apply console verbosity rules based on CLI flags."""
    if args.verbose:
        set_console_level(logging.DEBUG)
        logger.debug("Verbose mode enabled (console output at DEBUG level)")
    elif args.quiet:
        set_console_level(logging.ERROR)


def _build_transport(relay_settings) -> UdpOscTransport:
    return UdpOscTransport(
        listen_host=relay_settings['listen_host'],
        listen_port=relay_settings['listen_port'],
        target_host=relay_settings['target_host'],
        target_port=relay_settings['target_port'],
    )


def _run_listen(args, crop_settings, relay_settings, logger) -> int:
    """Listen for commands until interrupted."""
    transport = _build_transport(relay_settings)
    relay = CropValuesRelay(
        transport,
        settings=crop_settings,
        command_address=relay_settings['command_address'],
        output_address=relay_settings['output_address'],
    )
    logger.info(
        "Crop values will be sent to %s:%d",
        relay_settings['target_host'],
        relay_settings['target_port'],
    )
    try:
        relay.start()
    except KeyboardInterrupt:
        logger.info("Stopped listening")
    except OSError as exc:
        logger.error(
            "Could not listen on %s:%d: %s",
            relay_settings['listen_host'],
            relay_settings['listen_port'],
            exc,
        )
        return 1
    finally:
        transport.close()
    return 0


def _run_send(args, crop_settings, relay_settings, logger) -> int:
    """Send the messages once and report whether every count went out."""
    width, height = args.screen
    transport = _build_transport(relay_settings)
    relay = CropValuesRelay(
        transport,
        settings=crop_settings,
        command_address=relay_settings['command_address'],
        output_address=relay_settings['output_address'],
    )
    try:
        results = relay.dispatch(width, height, args.count, all_up_to=not args.single)
    finally:
        transport.close()
    return 0 if all(result.sent for result in results) else 1


def _run_dry_run(args, crop_settings, relay_settings, logger) -> int:
    """Log the messages that would be sent."""
    width, height = args.screen
    logger.info("DRY RUN MODE - No messages will be sent")
    logger.info(f"Target: {relay_settings['target_host']}:{relay_settings['target_port']}")
    for message in build_crop_messages(
        width,
        height,
        args.count,
        settings=crop_settings,
        output_address=relay_settings['output_address'],
        all_up_to=not args.single,
    ):
        logger.info("%s %s", message.address, " ".join(f"{value:g}" for value in message.arguments))
    return 0


def _run_export(args, crop_settings, relay_settings, logger) -> int:
    from cropsy_output.table import build_panner_table, export_panner_table

    width, height = args.screen
    df = build_panner_table(
        width,
        height,
        args.count,
        settings=crop_settings,
        all_up_to=not args.single,
        output_address=relay_settings['output_address'],
    )
    export_panner_table(df, args.export)
    return 0


def _run_preview(args, crop_settings, relay_settings, logger) -> int:
    from cropsy_output.preview import render_layout_preview

    width, height = args.screen
    counts = [args.count] if args.single else range(1, args.count + 1)
    for count in counts:
        render_layout_preview(width, height, count, args.out_dir, settings=crop_settings, show_plot=args.show)
    return 0


MODE_RUNNERS = {
    'listen': _run_listen,
    'send': _run_send,
    'dry_run': _run_dry_run,
    'export': _run_export,
    'preview': _run_preview,
}


def main() -> int:
    """
    Main entry point for cropsy.

    Parses command-line arguments, loads layout and relay settings, then listens
    for commands or runs the selected one-shot mode.
    """
    try:
        args = parse_args()
    except CLIError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    try:
        setup_logging(args.config)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    logger = get_logger("cropsy")
    _configure_console_logging(args, logger)

    try:
        crop_settings = load_crop_settings(args.config)
        relay_settings = load_relay_settings(args)
    except CLIError as e:
        logger.error(str(e))
        return 2

    try:
        return MODE_RUNNERS[args.mode](args, crop_settings, relay_settings, logger)
    except (InvalidDimensionError, DegenerateLayoutError, ZeroTravelRangeError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
