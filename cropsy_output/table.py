"""Tabular export of panner values for every gallery size."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from cropsy_core.constants import DEFAULT_RELAY_SETTINGS
from cropsy_core.crops import auto_crop, convert_crops_to_rect
from cropsy_core.formatting import build_crop_values_address
from cropsy_core.models import DEFAULT_CROP_SETTINGS, CropSettings
from cropsy_core.panner import ensure_usable_layout, to_panner_params

logger = logging.getLogger("cropsy")

TABLE_COLUMNS = [
    'count',
    'box',
    'address',
    'left',
    'right',
    'top',
    'bottom',
    'x',
    'y',
    'rect_width',
    'rect_height',
    'width_percent',
    'height_percent',
    'pan_h',
    'pan_v',
]


def build_panner_table(
    width: float,
    height: float,
    max_count: int,
    settings: CropSettings = DEFAULT_CROP_SETTINGS,
    all_up_to: bool = True,
    output_address: str = DEFAULT_RELAY_SETTINGS['output_address'],
) -> pd.DataFrame:
    """
    Build one row per box for each gallery size.

    Args:
        width: Screen width.
        height: Screen height.
        max_count: Largest gallery size to include.
        settings: Crop settings used for every layout.
        all_up_to: Include every size from 1 to max_count, otherwise only max_count.
        output_address: Address prefix shown in the ``address`` column.

    Returns:
        DataFrame with the columns in TABLE_COLUMNS; ``box`` is 1-based.

    Raises:
        DegenerateLayoutError: If any gallery size has zero-size boxes.
    """
    counts = range(1, max_count + 1) if all_up_to else [max_count]
    rows: list[dict[str, object]] = []

    for count in counts:
        crops = auto_crop(width, height, count, settings)
        rects = convert_crops_to_rect(width, height, crops)
        params = ensure_usable_layout(to_panner_params(width, height, count, settings))
        address = build_crop_values_address(count, output_address)

        for box_index, (crop, rect, (pan_h, pan_v)) in enumerate(zip(crops, rects, params.pan_pairs), start=1):
            rows.append({
                'count': count,
                'box': box_index,
                'address': address,
                'left': crop.left,
                'right': crop.right,
                'top': crop.top,
                'bottom': crop.bottom,
                'x': rect.x,
                'y': rect.y,
                'rect_width': rect.width,
                'rect_height': rect.height,
                'width_percent': params.width_percent,
                'height_percent': params.height_percent,
                'pan_h': pan_h,
                'pan_v': pan_v,
            })

    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def export_panner_table(df: pd.DataFrame, path: Path) -> Path:
    """Write the panner table to CSV, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    logger.info("Wrote %d row(s) to %s", len(df), path)
    return path
