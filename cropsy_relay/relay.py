"""
Crop values relay.

Receives ``<command_address> <width> <height> <max_count>`` and sends one message
per gallery size, ``<output_address>/NNN <width%> <width%> <panH1> <panV1> ...``,
for every count from 1 up to max_count in increasing order.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from cropsy_core.constants import DEFAULT_RELAY_SETTINGS
from cropsy_core.errors import DegenerateLayoutError, InvalidDimensionError, ZeroTravelRangeError
from cropsy_core.formatting import build_crop_values_address, build_panner_arguments
from cropsy_core.models import DEFAULT_CROP_SETTINGS, CropSettings
from cropsy_core.panner import ensure_usable_layout, to_panner_params

from .transport import OscTransport

logger = logging.getLogger("cropsy")


class RelayCommandError(ValueError):
    """Inbound command whose arguments cannot be turned into a screen size and count."""


@dataclass(frozen=True)
class CropMessage:
    """One outbound message: the gallery size it describes, its address and arguments."""
    count: int
    address: str
    arguments: tuple[float, ...]


@dataclass(frozen=True)
class SendResult:
    count: int
    address: str
    sent: bool
    error: str | None = None


def _requested_counts(max_count: int, all_up_to: bool) -> range:
    return range(1, max_count + 1) if all_up_to else range(max_count, max_count + 1)


def build_crop_message(
    width: float,
    height: float,
    count: int,
    settings: CropSettings = DEFAULT_CROP_SETTINGS,
    output_address: str = DEFAULT_RELAY_SETTINGS['output_address'],
) -> CropMessage:
    """Compute the outbound message for a single gallery size."""
    params = ensure_usable_layout(to_panner_params(width, height, count, settings))
    return CropMessage(
        count=count,
        address=build_crop_values_address(count, output_address),
        arguments=tuple(build_panner_arguments(params)),
    )


def build_crop_messages(
    width: float,
    height: float,
    max_count: int,
    settings: CropSettings = DEFAULT_CROP_SETTINGS,
    output_address: str = DEFAULT_RELAY_SETTINGS['output_address'],
    all_up_to: bool = True,
) -> Iterator[CropMessage]:
    """Yield messages for counts 1..max_count (or only max_count when all_up_to is False)."""
    for count in _requested_counts(max_count, all_up_to):
        yield build_crop_message(width, height, count, settings, output_address)


def _as_number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RelayCommandError(f"{name} must be numeric, got {value!r}")
    if not math.isfinite(value):
        raise RelayCommandError(f"{name} must be finite, got {value!r}")
    return value


def parse_command_args(args: tuple[Any, ...]) -> tuple[float, float, int]:
    """
    Parse inbound command arguments into (width, height, max_count).

    Raises:
        RelayCommandError: If there are fewer than three arguments or any is invalid.
    """
    if len(args) < 3:
        raise RelayCommandError(f"Expected <width> <height> <max_count>, got {list(args)}")
    if len(args) > 3:
        logger.warning("Ignoring extra command arguments: %s", list(args[3:]))

    width = _as_number("width", args[0])
    height = _as_number("height", args[1])
    max_count = _as_number("max_count", args[2])

    if width <= 0 or height <= 0:
        raise RelayCommandError(f"Screen size must be positive, got {width}x{height}")
    if isinstance(max_count, float):
        if not max_count.is_integer():
            raise RelayCommandError(f"max_count must be a whole number, got {max_count}")
        max_count = int(max_count)
    if max_count < 1:
        raise RelayCommandError(f"max_count must be >= 1, got {max_count}")

    return width, height, max_count


class CropValuesRelay:
    """Turns crop value commands into per-gallery-size panner messages."""

    def __init__(
        self,
        transport: OscTransport,
        settings: CropSettings = DEFAULT_CROP_SETTINGS,
        command_address: str = DEFAULT_RELAY_SETTINGS['command_address'],
        output_address: str = DEFAULT_RELAY_SETTINGS['output_address'],
    ) -> None:
        self.transport = transport
        self.settings = settings
        self.command_address = command_address
        self.output_address = output_address

    def start(self) -> None:
        """Register the command handler and block while the transport listens."""
        self.transport.on_message(self.command_address, self.handle_command)
        logger.info('Waiting for command "%s <width> <height> <max-gallery-size>"', self.command_address)
        self.transport.listen()

    def handle_command(self, address: str, *args: Any) -> list[SendResult]:
        """OSC handler for the command address; errors are logged, never raised."""
        logger.info("Received %s %s", address, list(args))
        try:
            width, height, max_count = parse_command_args(args)
        except RelayCommandError as exc:
            logger.error("Invalid %s command: %s", address, exc)
            return []
        return self.dispatch(width, height, max_count)

    def dispatch(self, width: float, height: float, max_count: int, all_up_to: bool = True) -> list[SendResult]:
        """
        Compute and send messages for each requested gallery size, lowest count first.

        A count that cannot be computed or sent is logged and recorded as failed;
        the remaining counts are still processed.

        Returns:
            list[SendResult]: One result per requested count, in send order.
        """
        if width <= 0 or height <= 0:
            raise InvalidDimensionError(f"Screen size must be positive, got {width}x{height}")
        if max_count < 1:
            raise InvalidDimensionError(f"max_count must be >= 1, got {max_count}")

        results: list[SendResult] = []
        for count in _requested_counts(max_count, all_up_to):
            address = build_crop_values_address(count, self.output_address)
            try:
                message = build_crop_message(width, height, count, self.settings, self.output_address)
                self.transport.send(message.address, *message.arguments)
            except (InvalidDimensionError, DegenerateLayoutError, ZeroTravelRangeError, OSError) as exc:
                logger.error("Failed to send %s: %s", address, exc)
                results.append(SendResult(count=count, address=address, sent=False, error=str(exc)))
                continue
            results.append(SendResult(count=count, address=address, sent=True))

        failed = sum(1 for result in results if not result.sent)
        if failed:
            logger.warning("Sent %d of %d message(s) for %sx%s", len(results) - failed, len(results), width, height)
        else:
            logger.info("Sent %d message(s) for %sx%s", len(results), width, height)
        return results
