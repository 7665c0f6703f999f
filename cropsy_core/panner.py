"""Conversion of crop margins into panner scale and pan percentages."""

from __future__ import annotations

import math
import sys

from .constants import OSC_FLOAT_DECIMALS
from .crops import auto_crop
from .errors import DegenerateLayoutError, InvalidDimensionError, ZeroTravelRangeError
from .models import DEFAULT_CROP_SETTINGS, CropSettings, PannerParams

_OSC_FLOAT_SCALE = 10 ** OSC_FLOAT_DECIMALS


def osc_float_value(value: float) -> float:
    """
    Round a value to six decimals for transmission.

    Halves round away from zero. ``sys.float_info.epsilon`` is added first so
    values such as 0.1234565, stored just below the half, still round up.
    """
    scaled = (value + sys.float_info.epsilon) * _OSC_FLOAT_SCALE
    rounded = math.floor(abs(scaled) + 0.5)
    return math.copysign(rounded, scaled) / _OSC_FLOAT_SCALE


def _normalized_pan(screen_size: float, box_size: float, box_start: float, axis: str) -> float:
    travel = screen_size - box_size
    if travel == 0:
        raise ZeroTravelRangeError(
            f"Box {axis} {box_size} equals screen {axis} {screen_size}; no range left to pan"
        )
    offset = screen_size / 2 - (box_start + box_size / 2)
    return 0.5 - offset / travel


def to_panner_params(
    width: float,
    height: float,
    count: int,
    settings: CropSettings = DEFAULT_CROP_SETTINGS,
) -> PannerParams:
    """
    Calculate panner values for a screen size and number of boxes.

    All boxes of a layout share one size, so the first box's crop gives the scale.
    Each box's pan is the distance from screen centre to box centre, normalised
    over the range the box centre can travel, where 50 means centred.

    Args:
        width: Screen width.
        height: Screen height.
        count: Number of boxes. 0 gives full-size boxes and no pan values.
        settings: Crop settings forwarded to the crop calculator.

    Returns:
        PannerParams: Box size percentages and flattened (h, v) pan percentages.

    Raises:
        ZeroTravelRangeError: If a box is as large as the screen on either axis.
    """
    if count < 0:
        raise InvalidDimensionError(f"Box count must be >= 0, got {count}")

    crops = auto_crop(width, height, count, settings)
    if not crops:
        return PannerParams(width_percent=100.0, height_percent=100.0)

    box_width = width - crops[0].left - crops[0].right
    box_height = box_width / settings.aspect_ratio

    crop_percents: list[float] = []
    for crop in crops:
        pan_h = _normalized_pan(width, box_width, crop.left, "width")
        pan_v = _normalized_pan(height, box_height, crop.top, "height")
        crop_percents.extend((osc_float_value(pan_h * 100), osc_float_value(pan_v * 100)))

    return PannerParams(
        width_percent=osc_float_value(box_width / width * 100),
        height_percent=osc_float_value(box_height / height * 100),
        crop_percents=tuple(crop_percents),
    )


def ensure_usable_layout(params: PannerParams) -> PannerParams:
    """Reject panner values computed from zero-size boxes before they are sent."""
    if params.count > 0 and (params.width_percent <= 0 or params.height_percent <= 0):
        raise DegenerateLayoutError(params.count)
    return params
