"""
どこで: `src/gridpat/core/layout.py`。
何を: (mode, 列数, 行数, キャンバス寸法) から各セルのアンカー座標列を計算する。
なぜ: セル配置を描画処理から切り離し、順序と座標を単体で検証できるようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass

from gridpat.core.config import Mode

SPACING_3D = 100.0
"""3D モードのセル間隔（キャンバス寸法に依存しない）。"""


@dataclass(frozen=True, slots=True)
class Cell:
    """1 セルのアンカー座標。2D では z=0。"""

    x: float
    y: float
    z: float = 0.0


def layout(
    mode: Mode,
    columns: int,
    rows: int,
    canvas_width: float,
    canvas_height: float,
) -> tuple[Cell, ...]:
    """グリッドのセル列を列優先（各列について各行）の順で返す。

    Parameters
    ----------
    mode : Mode
        2D ならセル中心、3D なら固定間隔の格子点をアンカーにする。
    columns, rows : int
        列数・行数（>= 1）。
    canvas_width, canvas_height : float
        キャンバス寸法。2D のセル寸法計算にだけ使う。

    Returns
    -------
    tuple[Cell, ...]
        長さ `columns * rows` のセル列。

    Notes
    -----
    3D のオフセットは X/Y とも `min(columns, rows)` から求める。
    非正方グリッドでも小さい方の辺数で中心合わせする。
    """

    cols = int(columns)
    rws = int(rows)
    if cols < 1 or rws < 1:
        raise ValueError(f"columns/rows は 1 以上である必要がある: columns={columns}, rows={rows}")

    cells: list[Cell] = []
    if mode is Mode.THREE_D:
        spacing = SPACING_3D
        offset = -((min(cols, rws) - 1) * spacing) / 2.0
        for i in range(cols):
            for j in range(rws):
                cells.append(Cell(i * spacing + offset, j * spacing + offset, 0.0))
        return tuple(cells)

    cell_w = float(canvas_width) / cols
    cell_h = float(canvas_height) / rws
    for i in range(cols):
        for j in range(rws):
            cells.append(Cell(i * cell_w + cell_w / 2.0, j * cell_h + cell_h / 2.0))
    return tuple(cells)


__all__ = ["Cell", "SPACING_3D", "layout"]
