"""
どこで: `src/gridpat/core/shapes.py`。図形プリミティブ記述子の生成。
何を: 図形種別・サイズ・詳細パラメータから Ellipse/Rect/PolygonVertices/Solid3D を構築する。
なぜ: 描画バックエンドへ渡す幾何記述を、描画処理から独立した純粋関数として扱うため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

import numpy as np

from gridpat.core.config import Shape3D, ShapeKind, ShapeStyle, Zigzag
from gridpat.core.errors import ValidationError

Point2: TypeAlias = tuple[float, float]


@dataclass(frozen=True, slots=True)
class Ellipse:
    """円。ローカル box の中心 (d/2, d/2) に置く。"""

    diameter: float


@dataclass(frozen=True, slots=True)
class Rect:
    """矩形。ローカル box の原点 (0, 0) を左上とする。"""

    width: float
    height: float


@dataclass(frozen=True, slots=True)
class PolygonVertices:
    """閉じた多角形の頂点列（ローカル box 座標）。"""

    points: tuple[Point2, ...]

    def as_array(self) -> np.ndarray:
        """頂点列を float64 の shape (N, 2) 配列で返す。"""
        return np.asarray(self.points, dtype=np.float64).reshape(-1, 2)


@dataclass(frozen=True, slots=True)
class Solid3D:
    """3D ソリッドの記述。原点中心に置く。

    Parameters
    ----------
    kind : ShapeKind
        box / sphere / torus。
    size : float
        図形サイズ（box の一辺、sphere の直径、torus の外径相当）。
    detail_x, detail_y : int
        分割数。
    radius : float
        sphere/torus の半径（size/2）。box では size/2 を入れておく。
    tube : float
        torus のチューブ半径（size/4）。torus 以外では 0。
    """

    kind: ShapeKind
    size: float
    detail_x: int
    detail_y: int
    radius: float
    tube: float = 0.0


Primitive: TypeAlias = Ellipse | Rect | PolygonVertices | Solid3D


def zigzag_radius_ratios(vertices: int, depth_percent: float) -> np.ndarray:
    """zigzag の各頂点 i=0..vertices の半径比を返す。

    `i % vertices` が偶数なら 1、奇数なら `1 - depth_percent/100`。
    末尾（i=vertices）は先頭と同じ 1 になる。
    """

    n = int(vertices)
    idx = np.arange(n + 1) % n
    inner = 1.0 - float(depth_percent) / 100.0
    return np.where(idx % 2 == 0, 1.0, inner)


def zigzag_points(size: float, vertices: int, depth_percent: float) -> tuple[Point2, ...]:
    """zigzag（星形）輪郭の頂点列を生成する。

    Parameters
    ----------
    size : float
        ローカル box の一辺。
    vertices : int
        頂点数。i=0..vertices（両端含む）を走査するため `vertices + 1` 点を返す。
    depth_percent : float
        奇数 index 頂点の凹み量 [%]。

    Returns
    -------
    tuple[tuple[float, float], ...]
        先頭（0°）と末尾（360°）が一致する閉じた頂点列。
    """

    n = int(vertices)
    s = float(size)
    # angle(i) = map(i, 0, n, 0, 360)。i=n（360°）は 0° に畳んで先頭と同じ点にする。
    idx = np.arange(n + 1) % n
    theta = np.deg2rad(idx.astype(np.float64) * (360.0 / n))
    r = zigzag_radius_ratios(n, depth_percent)

    half = s / 2.0
    x = half + r / 2.0 * s * np.cos(theta)
    y = half + r / 2.0 * s * np.sin(theta)
    return tuple((float(px), float(py)) for px, py in zip(x.tolist(), y.tolist()))


def triangle_points(size: float) -> tuple[Point2, ...]:
    """size × size の box に内接する三角形（頂点・左下・右下）を返す。"""

    s = float(size)
    return ((s / 2.0, 0.0), (0.0, s), (s, s))


def generate_primitive(
    shape: ShapeStyle,
    zigzag: Zigzag | None = None,
    shape_3d: Shape3D | None = None,
) -> Primitive:
    """図形設定から Primitive を生成する。

    Raises
    ------
    ValidationError
        zigzag/3D の詳細パラメータが必要な図形で、それが与えられていない場合。
        検証済み Configuration から呼ぶ限り発生しない。
    """

    size = float(shape.size)
    match shape.kind:
        case ShapeKind.CIRCLE:
            return Ellipse(diameter=size)
        case ShapeKind.SQUARE:
            return Rect(width=size, height=size)
        case ShapeKind.TRIANGLE:
            return PolygonVertices(points=triangle_points(size))
        case ShapeKind.ZIGZAG:
            if zigzag is None:
                raise ValidationError("zigzag 図形には zigzag パラメータが必要", field="zigzag")
            return PolygonVertices(
                points=zigzag_points(size, zigzag.vertices, zigzag.depth_percent)
            )
        case ShapeKind.BOX | ShapeKind.SPHERE | ShapeKind.TORUS:
            if shape_3d is None:
                raise ValidationError("3D 図形には shape_3d パラメータが必要", field="shape_3d")
            tube = size / 4.0 if shape.kind is ShapeKind.TORUS else 0.0
            return Solid3D(
                kind=shape.kind,
                size=size,
                detail_x=int(shape_3d.detail_x),
                detail_y=int(shape_3d.detail_y),
                radius=size / 2.0,
                tube=tube,
            )
        case _:
            raise ValidationError(f"未対応の shape kind です: {shape.kind!r}", field="shape.kind")


__all__ = [
    "Ellipse",
    "PolygonVertices",
    "Primitive",
    "Rect",
    "Solid3D",
    "generate_primitive",
    "triangle_points",
    "zigzag_points",
    "zigzag_radius_ratios",
]
