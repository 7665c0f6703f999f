"""Formatting helpers for outbound crop value messages."""

from __future__ import annotations

from .constants import DEFAULT_RELAY_SETTINGS
from .models import PannerParams


def format_count_suffix(count: int) -> str:
    """
    Format a box count as an address suffix.

    Args:
        count: Number of boxes in the gallery.

    Returns:
        Count zero-padded to three digits (for example: "003"), or the plain
        number once it no longer fits in three digits.
    """
    if count <= 999:
        return f"{count:03d}"
    return str(count)


def build_crop_values_address(count: int, prefix: str = DEFAULT_RELAY_SETTINGS['output_address']) -> str:
    """Build the outbound address for one gallery size, e.g. /izzy/cropValues/003."""
    return f"{prefix.rstrip('/')}/{format_count_suffix(count)}"


def build_panner_arguments(params: PannerParams) -> list[float]:
    """
    Build the positional arguments for one gallery size.

    Layout is [width%, width%, h1, v1, ..., hn, vn]: the width percentage is sent
    in both size slots and the height percentage is not transmitted.
    """
    return [params.width_percent, params.width_percent, *params.crop_percents]
