import pandas as pd
import pytest

from cropsy_core.errors import DegenerateLayoutError
from cropsy_output.table import TABLE_COLUMNS, build_panner_table, export_panner_table


def test_build_panner_table_rows_per_box():
    df = build_panner_table(1920, 1080, 4)
    assert list(df.columns) == TABLE_COLUMNS
    assert len(df) == 1 + 2 + 3 + 4
    assert df['count'].tolist() == [1, 2, 2, 3, 3, 3, 4, 4, 4, 4]
    assert df.loc[df['count'] == 3, 'box'].tolist() == [1, 2, 3]


def test_build_panner_table_single_box_values():
    df = build_panner_table(1920, 1080, 1)
    row = df.iloc[0]
    assert row['address'] == "/izzy/cropValues/001"
    assert (row['left'], row['right'], row['top'], row['bottom']) == (97, 97, 48.5, 61.5)
    assert row['rect_width'] == 1726
    assert row['width_percent'] == 89.895833
    assert (row['pan_h'], row['pan_v']) == (50.0, 44.444444)


def test_build_panner_table_single_count():
    df = build_panner_table(1280, 720, 6, all_up_to=False, output_address="/gallery")
    assert len(df) == 6
    assert set(df['address']) == {"/gallery/006"}


def test_build_panner_table_degenerate_layout():
    with pytest.raises(DegenerateLayoutError):
        build_panner_table(200, 110, 2)


def test_export_panner_table(tmp_path):
    df = build_panner_table(1920, 1080, 3)
    out_file = export_panner_table(df, tmp_path / "exports" / "crops.csv")

    assert out_file.exists()
    loaded = pd.read_csv(out_file)
    assert len(loaded) == 6
    assert loaded['pan_h'].tolist() == pytest.approx(df['pan_h'].tolist())
