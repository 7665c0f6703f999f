"""Crop margin calculation for a gallery of boxes laid out inside a frame."""

from __future__ import annotations

import logging

from .errors import InvalidDimensionError
from .layout import solve_layout
from .models import DEFAULT_CROP_SETTINGS, CropSettings, CropValues, RectValues

logger = logging.getLogger("cropsy")


def auto_crop(
    source_width: float,
    source_height: float,
    item_count: int,
    settings: CropSettings = DEFAULT_CROP_SETTINGS,
) -> list[CropValues]:
    """
    Calculate crop values for every box of a gallery inside a frame.

    The grid is solved on the frame minus its margins, centred horizontally in the
    full frame and vertically on the middle of the usable area. A short last row is
    centred on its own. Every margin is pushed in by ``settings.inset`` so rounding
    never lets a box touch the frame border.

    Args:
        source_width: Width of the enclosing frame.
        source_height: Height of the enclosing frame.
        item_count: Number of boxes to lay out.
        settings: Margins, spacing, aspect ratio and inset to apply.

    Returns:
        list[CropValues]: One entry per box in row-major order.
    """
    if source_width <= 0 or source_height <= 0:
        raise InvalidDimensionError(
            f"Source frame must be larger than 0x0, got {source_width}x{source_height}"
        )
    if item_count < 0:
        raise InvalidDimensionError(f"Item count must be >= 0, got {item_count}")
    if item_count == 0:
        return []

    spacing = settings.spacing
    inner_width = source_width - settings.left_margin - settings.right_margin
    inner_height = source_height - settings.top_margin - settings.bottom_margin
    center_v = inner_height / 2 + settings.top_margin

    layout = solve_layout(inner_width, inner_height, item_count, settings.aspect_ratio, spacing)
    logger.debug(
        "Layout for %d box(es) in %sx%s: %dx%d grid of %sx%s",
        item_count, source_width, source_height, layout.cols, layout.rows, layout.width, layout.height,
    )

    num_cols = layout.cols
    num_rows = layout.rows
    box_width = layout.width
    box_height = layout.height

    # last row might not be full
    last_row = num_rows - 1
    last_row_cols = num_cols - (num_rows * num_cols - item_count)
    box_height_sum = num_rows * box_height + spacing * (num_rows - 1)

    result: list[CropValues] = []
    for index in range(item_count):
        col_ind = index % num_cols
        row_ind = index // num_cols
        row_size = last_row_cols if row_ind == last_row else num_cols

        box_width_sum = row_size * box_width + spacing * (row_size - 1)
        h_margin = (source_width - box_width_sum) / 2

        crop_left = h_margin + col_ind * box_width + col_ind * spacing
        crop_right = source_width - (crop_left + box_width)
        crop_top = (center_v - box_height_sum / 2) + row_ind * (box_height + spacing)
        crop_bottom = source_height - (crop_top + box_height)

        result.append(CropValues(
            left=crop_left + settings.inset,
            right=crop_right + settings.inset,
            top=crop_top + settings.inset,
            bottom=crop_bottom + settings.inset,
        ))

    return result


def convert_crops_to_rect(frame_width: float, frame_height: float, crops: list[CropValues]) -> list[RectValues]:
    """Express crop margins as absolute rectangles within the frame."""
    return [
        RectValues(
            x=crop.left,
            y=crop.top,
            width=(frame_width - crop.right) - crop.left,
            height=(frame_height - crop.bottom) - crop.top,
        )
        for crop in crops
    ]
