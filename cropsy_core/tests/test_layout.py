import math

import pytest

from cropsy_core.errors import InvalidDimensionError
from cropsy_core.layout import floor_to_quantum, solve_layout
from cropsy_core.models import LayoutDescription

ASPECT = 16 / 9


def _brute_force_areas(frame_width, frame_height, box_count, aspect_ratio, spacing):
    """Re-scan every column count and return {cols: area}."""
    areas = {}
    for cols in range(1, box_count + 1):
        rows = math.ceil(box_count / cols)
        packed_w = frame_width - spacing * (cols - 1)
        packed_h = frame_height - spacing * (rows - 1)
        if packed_w / (cols * aspect_ratio) <= packed_h / rows:
            width = max(0, math.floor(packed_w / cols / 16) * 16)
            height = max(0, math.floor(width / aspect_ratio / 9) * 9)
        else:
            height = max(0, math.floor(packed_h / rows / 9) * 9)
            width = max(0, math.floor(height * aspect_ratio / 16) * 16)
        areas[cols] = width * height
    return areas


def test_floor_to_quantum():
    assert floor_to_quantum(33, 16) == 32
    assert floor_to_quantum(32, 16) == 32
    assert floor_to_quantum(17.9, 9) == 9
    assert floor_to_quantum(8.99, 9) == 0
    assert floor_to_quantum(-5, 9) == 0


def test_solve_single_box_fills_height():
    # 1920x1080 frame minus the default margins
    layout = solve_layout(1908, 973, 1, ASPECT, 6)
    assert layout == LayoutDescription(area=1728 * 972, cols=1, rows=1, width=1728, height=972)


def test_solve_two_boxes_side_by_side():
    layout = solve_layout(1908, 973, 2, ASPECT, 6)
    assert (layout.cols, layout.rows) == (2, 1)
    assert (layout.width, layout.height) == (944, 531)
    assert layout.area == 944 * 531


@pytest.mark.parametrize("box_count", [3, 4])
def test_solve_three_and_four_boxes_use_two_by_two(box_count):
    layout = solve_layout(1908, 973, box_count, ASPECT, 6)
    assert (layout.cols, layout.rows) == (2, 2)
    assert (layout.width, layout.height) == (848, 477)


def test_solve_without_spacing_or_margins():
    layout = solve_layout(1920, 1080, 4, ASPECT, 0)
    assert (layout.cols, layout.rows, layout.width, layout.height) == (2, 2, 960, 540)


@pytest.mark.parametrize("frame", [(1908, 973), (1268, 613), (3828, 2053), (800, 1200)])
@pytest.mark.parametrize("box_count", [1, 2, 3, 5, 7, 9, 12, 16, 25, 49])
def test_solve_grid_has_capacity(frame, box_count):
    layout = solve_layout(frame[0], frame[1], box_count, ASPECT, 6)
    assert layout.cols * layout.rows >= box_count
    assert layout.rows == math.ceil(box_count / layout.cols)
    assert layout.width % 16 == 0
    assert layout.height % 9 == 0


@pytest.mark.parametrize(
    "frame_width,frame_height,box_count,aspect_ratio,spacing",
    [
        (1908, 973, 7, ASPECT, 6),
        (1908, 973, 20, ASPECT, 6),
        (1268, 613, 11, ASPECT, 4),
        (1000, 1000, 6, 1.0, 0),
        (640, 1136, 5, 4 / 3, 10),
    ],
)
def test_solve_no_column_count_gives_more_area(frame_width, frame_height, box_count, aspect_ratio, spacing):
    layout = solve_layout(frame_width, frame_height, box_count, aspect_ratio, spacing)
    areas = _brute_force_areas(frame_width, frame_height, box_count, aspect_ratio, spacing)
    best_area = max(areas.values())
    assert layout.area == best_area
    # ties keep the fewest columns
    assert layout.cols == min(cols for cols, area in areas.items() if area == best_area)


def test_solve_frame_too_small_is_degenerate():
    layout = solve_layout(10, 10, 4, ASPECT, 6)
    assert layout.area == 0
    assert (layout.cols, layout.rows) == (1, 4)
    assert (layout.width, layout.height) == (0, 0)
    assert layout.is_degenerate


@pytest.mark.parametrize(
    "frame_width,frame_height,box_count,aspect_ratio,spacing",
    [
        (0, 1080, 1, ASPECT, 6),
        (1920, -1, 1, ASPECT, 6),
        (1920, 1080, 0, ASPECT, 6),
        (1920, 1080, 2.5, ASPECT, 6),
        (1920, 1080, 2, 0, 6),
        (1920, 1080, 2, ASPECT, -1),
    ],
)
def test_solve_rejects_invalid_inputs(frame_width, frame_height, box_count, aspect_ratio, spacing):
    with pytest.raises(InvalidDimensionError):
        solve_layout(frame_width, frame_height, box_count, aspect_ratio, spacing)
