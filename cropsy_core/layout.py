"""Grid layout solver shared by the crop, relay and output layers."""

from __future__ import annotations

import math

from .constants import HEIGHT_QUANTUM, WIDTH_QUANTUM
from .errors import InvalidDimensionError
from .models import LayoutDescription


def floor_to_quantum(value: float, quantum: int) -> int:
    """Round value down to a multiple of quantum, never below zero."""
    if value <= 0:
        return 0
    return math.floor(value / quantum) * quantum


def _validate_solver_inputs(
    frame_width: float,
    frame_height: float,
    box_count: int,
    aspect_ratio: float,
    spacing: float,
) -> None:
    if frame_width <= 0 or frame_height <= 0:
        raise InvalidDimensionError(
            f"Frame must be larger than 0x0, got {frame_width}x{frame_height}"
        )
    if isinstance(box_count, bool) or not isinstance(box_count, int) or box_count < 1:
        raise InvalidDimensionError(f"Box count must be an integer >= 1, got {box_count!r}")
    if aspect_ratio <= 0:
        raise InvalidDimensionError(f"Aspect ratio must be > 0, got {aspect_ratio}")
    if spacing < 0:
        raise InvalidDimensionError(f"Spacing must be >= 0, got {spacing}")


def solve_layout(
    frame_width: float,
    frame_height: float,
    box_count: int,
    aspect_ratio: float,
    spacing: float,
) -> LayoutDescription:
    """
    Calculate the layout that gives the most area to a number of same-sized boxes.

    Every column count from 1 to box_count is tried. For each, the spacing gaps are
    removed from the frame and the box size is taken from whichever axis is the
    tighter fit, then rounded down to the 16:9 quantum (16 for width, 9 for height).
    The candidate with the largest box area wins; ties keep the fewest columns.

    Args:
        frame_width: Width of the space holding the boxes.
        frame_height: Height of the space holding the boxes.
        box_count: Number of boxes to place.
        aspect_ratio: Ratio of box width to height (usually 16/9).
        spacing: Gap kept between neighbouring boxes on both axes.

    Returns:
        LayoutDescription: Columns, rows and the size of a single box.

    Raises:
        InvalidDimensionError: If any input is outside its valid range.
    """
    _validate_solver_inputs(frame_width, frame_height, box_count, aspect_ratio, spacing)

    best_layout: LayoutDescription | None = None

    for cols in range(1, box_count + 1):
        rows = math.ceil(box_count / cols)
        # space left for the boxes once the gaps between them are taken out
        packed_width = frame_width - spacing * (cols - 1)
        packed_height = frame_height - spacing * (rows - 1)
        h_scale = packed_width / (cols * aspect_ratio)
        v_scale = packed_height / rows

        if h_scale <= v_scale:
            width = floor_to_quantum(packed_width / cols, WIDTH_QUANTUM)
            height = floor_to_quantum(width / aspect_ratio, HEIGHT_QUANTUM)
        else:
            height = floor_to_quantum(packed_height / rows, HEIGHT_QUANTUM)
            width = floor_to_quantum(height * aspect_ratio, WIDTH_QUANTUM)

        area = width * height
        if best_layout is None or area > best_layout.area:
            best_layout = LayoutDescription(area=area, cols=cols, rows=rows, width=width, height=height)

    return best_layout
