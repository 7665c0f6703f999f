"""Relay layer for cropsy (OSC command handling and transport)."""

from .relay import (
    CropMessage,
    CropValuesRelay,
    RelayCommandError,
    SendResult,
    build_crop_message,
    build_crop_messages,
    parse_command_args,
)
from .transport import OscTransport, UdpOscTransport

__all__ = [
    "build_crop_message",
    "build_crop_messages",
    "CropMessage",
    "CropValuesRelay",
    "OscTransport",
    "parse_command_args",
    "RelayCommandError",
    "SendResult",
    "UdpOscTransport",
]
