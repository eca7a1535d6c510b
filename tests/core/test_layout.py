"""core.layout のセル配置をテスト。"""

from __future__ import annotations

import pytest

from gridpat.core.config import Mode
from gridpat.core.layout import SPACING_3D, Cell, layout


def test_single_cell_2d_is_canvas_center() -> None:
    cells = layout(Mode.TWO_D, 1, 1, 600.0, 600.0)
    assert cells == (Cell(300.0, 300.0, 0.0),)


@pytest.mark.parametrize("columns, rows", [(1, 1), (1, 7), (3, 2), (5, 5), (10, 4)])
def test_cell_count_is_columns_times_rows(columns: int, rows: int) -> None:
    for mode in Mode:
        assert len(layout(mode, columns, rows, 600.0, 400.0)) == columns * rows


def test_order_is_column_major() -> None:
    cells = layout(Mode.TWO_D, 3, 2, 300.0, 200.0)
    # 列ごとに行を走査する: (0,0), (0,1), (1,0), (1,1), (2,0), (2,1)
    assert [(c.x, c.y) for c in cells] == [
        (50.0, 50.0),
        (50.0, 150.0),
        (150.0, 50.0),
        (150.0, 150.0),
        (250.0, 50.0),
        (250.0, 150.0),
    ]


def test_2d_anchors_are_cell_centers_for_non_square_canvas() -> None:
    cells = layout(Mode.TWO_D, 2, 4, 600.0, 400.0)
    xs = sorted({c.x for c in cells})
    ys = sorted({c.y for c in cells})
    assert xs == [150.0, 450.0]
    assert ys == [50.0, 150.0, 250.0, 350.0]
    assert all(c.z == 0.0 for c in cells)


@pytest.mark.parametrize("n", [1, 2, 3, 5, 10])
def test_3d_square_grid_is_symmetric_about_origin(n: int) -> None:
    cells = layout(Mode.THREE_D, n, n, 600.0, 600.0)
    xs = sorted(c.x for c in cells)
    assert xs == sorted(-x for x in xs)
    ys = sorted(c.y for c in cells)
    assert ys == sorted(-y for y in ys)


def test_3d_spacing_does_not_depend_on_canvas() -> None:
    a = layout(Mode.THREE_D, 3, 3, 600.0, 600.0)
    b = layout(Mode.THREE_D, 3, 3, 100.0, 900.0)
    assert a == b
    assert a[1].y - a[0].y == SPACING_3D


def test_3d_offset_uses_smaller_dimension_for_both_axes() -> None:
    cells = layout(Mode.THREE_D, 4, 2, 600.0, 600.0)
    # min(4, 2) = 2 → offset = -(2-1)*100/2 = -50
    assert cells[0] == Cell(-50.0, -50.0, 0.0)
    assert max(c.x for c in cells) == 3 * SPACING_3D - 50.0
    assert max(c.y for c in cells) == 50.0


@pytest.mark.parametrize("columns, rows", [(0, 1), (1, 0), (-2, 3)])
def test_non_positive_counts_raise(columns: int, rows: int) -> None:
    with pytest.raises(ValueError):
        layout(Mode.TWO_D, columns, rows, 600.0, 600.0)
