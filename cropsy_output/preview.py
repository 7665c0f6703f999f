"""Image previews of gallery layouts."""

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from cropsy_core.crops import auto_crop, convert_crops_to_rect
from cropsy_core.formatting import format_count_suffix
from cropsy_core.models import DEFAULT_CROP_SETTINGS, CropSettings
from cropsy_core.panner import to_panner_params

logger = logging.getLogger("cropsy")

FIGURE_WIDTH_IN = 12.0
PREVIEW_DPI = 100


def preview_filename(width: float, height: float, count: int) -> str:
    return f"layout_{width:g}x{height:g}_{format_count_suffix(count)}.png"


def render_layout_preview(
    width: float,
    height: float,
    count: int,
    out_dir: Path,
    settings: CropSettings = DEFAULT_CROP_SETTINGS,
    show_plot: bool = False,
) -> Path:
    """
    Draw the frame, its usable area and every box of one gallery size.

    Each box is labelled with its index and its (horizontal, vertical) pan
    percentages. The image is saved as ``layout_<W>x<H>_<NNN>.png`` in out_dir.

    Args:
        width: Screen width.
        height: Screen height.
        count: Number of boxes.
        out_dir: Directory for the PNG file.
        settings: Crop settings used for the layout.
        show_plot: Whether to display the figure on screen as well.

    Returns:
        Path of the saved image.
    """
    crops = auto_crop(width, height, count, settings)
    rects = convert_crops_to_rect(width, height, crops)
    params = to_panner_params(width, height, count, settings)

    fig_height = FIGURE_WIDTH_IN * height / width
    fig, ax = plt.subplots(figsize=(FIGURE_WIDTH_IN, fig_height))
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)  # screen coordinates: y grows downwards
    ax.set_aspect('equal')
    ax.set_facecolor('#202020')

    usable = Rectangle(
        (settings.left_margin, settings.top_margin),
        width - settings.left_margin - settings.right_margin,
        height - settings.top_margin - settings.bottom_margin,
        fill=False,
        linestyle='--',
        edgecolor='#808080',
    )
    ax.add_patch(usable)

    label_fontsize = max(6, 14 - count // 4)
    for box_index, (rect, (pan_h, pan_v)) in enumerate(zip(rects, params.pan_pairs), start=1):
        ax.add_patch(Rectangle((rect.x, rect.y), rect.width, rect.height, facecolor='#3070b0', edgecolor='white'))
        ax.text(
            rect.x + rect.width / 2,
            rect.y + rect.height / 2,
            f"{box_index}\n{pan_h:.2f}, {pan_v:.2f}",
            ha='center',
            va='center',
            color='white',
            fontsize=label_fontsize,
        )

    ax.set_title(
        f"{count} box(es) in {width:g}x{height:g}: box size {params.width_percent:.2f}% x {params.height_percent:.2f}%"
    )

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    save_file = out_dir / preview_filename(width, height, count)
    if show_plot:
        plt.show()
    fig.savefig(save_file, dpi=PREVIEW_DPI, bbox_inches="tight")
    plt.close(fig)
    logger.info("Saved layout preview %s", save_file)
    return save_file
