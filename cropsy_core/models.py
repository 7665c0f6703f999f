"""Immutable value types passed between the solver, crop and panner layers."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import DEFAULT_LAYOUT_SETTINGS


@dataclass(frozen=True)
class LayoutDescription:
    """Best grid partition found for a box count: box size plus columns and rows."""
    area: float
    cols: int
    rows: int
    width: float
    height: float

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class CropValues:
    """Pixel margins trimmed from each edge of the full frame to isolate one box."""
    left: float
    right: float
    top: float
    bottom: float


@dataclass(frozen=True)
class RectValues:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class PannerParams:
    """
    Panner values for every box of a single gallery.

    Attributes:
        width_percent: Width of each box as a percentage of the screen width.
        height_percent: Height of each box as a percentage of the screen height.
        crop_percents: Flattened pan values, one (horizontal, vertical) pair per
            box, e.g. three boxes give (h1, v1, h2, v2, h3, v3).
    """
    width_percent: float
    height_percent: float
    crop_percents: tuple[float, ...] = ()

    @property
    def count(self) -> int:
        return len(self.crop_percents) // 2

    @property
    def pan_pairs(self) -> list[tuple[float, float]]:
        values = self.crop_percents
        return [(values[index], values[index + 1]) for index in range(0, len(values), 2)]


@dataclass(frozen=True)
class CropSettings:
    """Frame margins, box spacing and aspect ratio used by the crop calculator."""
    top_margin: float = DEFAULT_LAYOUT_SETTINGS['top_margin']
    bottom_margin: float = DEFAULT_LAYOUT_SETTINGS['bottom_margin']
    left_margin: float = DEFAULT_LAYOUT_SETTINGS['left_margin']
    right_margin: float = DEFAULT_LAYOUT_SETTINGS['right_margin']
    spacing: float = DEFAULT_LAYOUT_SETTINGS['spacing']
    aspect_ratio: float = DEFAULT_LAYOUT_SETTINGS['aspect_ratio']
    inset: float = DEFAULT_LAYOUT_SETTINGS['inset']


DEFAULT_CROP_SETTINGS = CropSettings()
