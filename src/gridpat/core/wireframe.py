"""
どこで: `src/gridpat/core/wireframe.py`。Primitive をポリライン列へ展開する。
何を: 2D 図形の閉輪郭と、box/sphere/torus のワイヤーフレーム（子午線+緯線）を numpy 配列で生成する。
なぜ: ベクタ出力や簡易プレビューなど、曲面を直接描けないバックエンドでも同じ形状を線で描けるようにするため。
"""

from __future__ import annotations

import math

import numpy as np

from gridpat.core.color import ColorRGB255
from gridpat.core.config import ShapeKind
from gridpat.core.shapes import Ellipse, PolygonVertices, Primitive, Rect, Solid3D

DEFAULT_ELLIPSE_SEGMENTS = 64
HAIRLINE_WEIGHT = 1.0


def outline_2d(primitive: Primitive, *, segments: int = DEFAULT_ELLIPSE_SEGMENTS) -> np.ndarray:
    """2D Primitive の閉輪郭をローカル box 座標で返す。

    Parameters
    ----------
    primitive : Primitive
        Ellipse / Rect / PolygonVertices。
    segments : int, optional
        Ellipse の分割数。3 未満は 3 にクランプする。

    Returns
    -------
    np.ndarray
        shape (N, 2) の float64 配列。先頭と末尾は同じ点。

    Raises
    ------
    TypeError
        Solid3D など 2D 輪郭を持たない primitive の場合。
    """

    match primitive:
        case Ellipse(diameter=d):
            n = max(3, int(segments))
            theta = np.linspace(0.0, 2.0 * math.pi, num=n, endpoint=False)
            r = float(d) / 2.0
            pts = np.stack([r + r * np.cos(theta), r + r * np.sin(theta)], axis=1)
        case Rect(width=w, height=h):
            pts = np.array(
                [[0.0, 0.0], [float(w), 0.0], [float(w), float(h)], [0.0, float(h)]],
                dtype=np.float64,
            )
        case PolygonVertices() as poly:
            pts = poly.as_array()
            if pts.shape[0] >= 2 and np.array_equal(pts[0], pts[-1]):
                return pts
        case _:
            raise TypeError(f"2D 輪郭を持たない primitive です: {type(primitive)!r}")
    return np.concatenate([pts, pts[:1]], axis=0)


def _box_polylines(size: float) -> list[np.ndarray]:
    h = float(size) / 2.0
    bottom = np.array(
        [[-h, -h, -h], [h, -h, -h], [h, h, -h], [-h, h, -h], [-h, -h, -h]],
        dtype=np.float64,
    )
    top = bottom.copy()
    top[:, 2] = h
    lines = [bottom, top]
    for corner in bottom[:4]:
        lines.append(np.array([corner, [corner[0], corner[1], h]], dtype=np.float64))
    return lines


def _sphere_polylines(radius: float, detail_x: int, detail_y: int) -> list[np.ndarray]:
    """経線 detail_x 本と緯線 detail_y - 1 本。極を通る経線は開ポリライン。"""

    r = float(radius)
    lon = np.linspace(0.0, 2.0 * math.pi, num=detail_x, endpoint=False)
    lat = np.linspace(0.0, math.pi, num=detail_y + 1)

    lines: list[np.ndarray] = []
    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    for a in lon:
        x = r * sin_lat * math.cos(a)
        z = r * sin_lat * math.sin(a)
        y = -r * cos_lat
        lines.append(np.stack([x, y, z], axis=1))

    ring = np.linspace(0.0, 2.0 * math.pi, num=detail_x + 1)
    for b in lat[1:-1]:
        rr = r * math.sin(b)
        y = np.full_like(ring, -r * math.cos(b))
        lines.append(np.stack([rr * np.cos(ring), y, rr * np.sin(ring)], axis=1))
    return lines


def _torus_polylines(radius: float, tube: float, detail_x: int, detail_y: int) -> list[np.ndarray]:
    """子午線 detail_x 本と緯線 detail_y 本の閉ポリライン。"""

    major_r = float(radius)
    minor_r = float(tube)
    theta = np.linspace(0.0, 2.0 * math.pi, num=detail_x, endpoint=False)
    phi = np.linspace(0.0, 2.0 * math.pi, num=detail_y, endpoint=False)
    cos_theta, sin_theta = np.cos(theta), np.sin(theta)
    cos_phi, sin_phi = np.cos(phi), np.sin(phi)

    # --- 子午線（major 角ごとに 1 本）---
    r_phi = major_r + minor_r * cos_phi
    x_m = r_phi[None, :] * cos_theta[:, None]
    y_m = r_phi[None, :] * sin_theta[:, None]
    z_m = np.broadcast_to(minor_r * sin_phi, x_m.shape)
    meridians = np.stack([x_m, y_m, z_m], axis=2)
    meridians = np.concatenate([meridians, meridians[:, :1, :]], axis=1)

    # --- 緯線（minor 角ごとに 1 本）---
    x_p = r_phi[:, None] * cos_theta[None, :]
    y_p = r_phi[:, None] * sin_theta[None, :]
    z_p = np.broadcast_to((minor_r * sin_phi)[:, None], x_p.shape)
    parallels = np.stack([x_p, y_p, z_p], axis=2)
    parallels = np.concatenate([parallels, parallels[:, :1, :]], axis=1)

    return [*meridians, *parallels]


def wireframe_stroke(
    stroke: ColorRGB255,
    stroke_weight: float,
    fill: ColorRGB255,
) -> tuple[ColorRGB255, float]:
    """ワイヤーフレームを描く線色と線幅を返す。

    ソリッドは線でしか描けないため、stroke_weight が 0 以下なら fill 色の細線で描く。
    """

    if float(stroke_weight) <= 0.0:
        return fill, HAIRLINE_WEIGHT
    return stroke, float(stroke_weight)


def solid_wireframe(solid: Solid3D) -> list[np.ndarray]:
    """Solid3D のワイヤーフレームを原点中心の (N, 3) ポリライン列で返す。"""

    detail_x = max(3, int(solid.detail_x))
    detail_y = max(3, int(solid.detail_y))
    match solid.kind:
        case ShapeKind.BOX:
            return _box_polylines(solid.size)
        case ShapeKind.SPHERE:
            return _sphere_polylines(solid.radius, detail_x, detail_y)
        case ShapeKind.TORUS:
            return _torus_polylines(solid.radius, solid.tube, detail_x, detail_y)
        case _:
            raise ValueError(f"3D ソリッドではない kind です: {solid.kind!r}")


__all__ = [
    "DEFAULT_ELLIPSE_SEGMENTS",
    "HAIRLINE_WEIGHT",
    "outline_2d",
    "solid_wireframe",
    "wireframe_stroke",
]
