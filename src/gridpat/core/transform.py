# どこで: `src/gridpat/core/transform.py`。
# 何を: 描画面が共有する変換行列スタックと stroke/fill 状態を提供する。
# なぜ: SVG とプレビューで同じ座標変換（translate/rotate と正射影）を使い、出力を一致させるため。

from __future__ import annotations

import math
from dataclasses import dataclass, replace

import numpy as np

from gridpat.core.color import ColorRGB255
from gridpat.core.config import Mode


def translation_matrix(x: float, y: float, z: float = 0.0) -> np.ndarray:
    """平行移動の 4x4 同次変換行列を返す。"""
    m = np.eye(4, dtype=np.float64)
    m[:3, 3] = (float(x), float(y), float(z))
    return m


def rotation_matrix(axis: str, degrees: float) -> np.ndarray:
    """x/y/z 軸まわりの 4x4 回転行列を返す。

    Parameters
    ----------
    axis : str
        "x" / "y" / "z"。
    degrees : float
        回転角 [deg]。
    """

    t = math.radians(float(degrees))
    c, s = math.cos(t), math.sin(t)
    m = np.eye(4, dtype=np.float64)
    if axis == "x":
        m[1:3, 1:3] = [[c, -s], [s, c]]
    elif axis == "y":
        m[0, 0], m[0, 2], m[2, 0], m[2, 2] = c, s, -s, c
    elif axis == "z":
        m[0:2, 0:2] = [[c, -s], [s, c]]
    else:
        raise ValueError(f"axis は 'x'/'y'/'z' のいずれか: got={axis!r}")
    return m


@dataclass(frozen=True, slots=True)
class DrawState:
    """push/pop で保存される描画状態。"""

    matrix: np.ndarray
    stroke: ColorRGB255 = (0, 0, 0)
    stroke_weight: float = 1.0
    fill: ColorRGB255 = (255, 255, 255)


class StateStack:
    """変換行列と stroke/fill 状態のスタック。

    Notes
    -----
    - 変換は右から掛ける（後から呼んだ translate/rotate ほどローカル側）。
    - 2D ではキャンバス左上、3D ではキャンバス中心が原点（y は下向き）。
      3D は正射影で z を捨てる。
    """

    def __init__(self, width: int, height: int, mode: Mode) -> None:
        self.width = int(width)
        self.height = int(height)
        self.mode = mode
        self.current = DrawState(matrix=np.eye(4, dtype=np.float64))
        self._stack: list[DrawState] = []

    @property
    def depth(self) -> int:
        return len(self._stack)

    def push(self) -> None:
        self._stack.append(self.current)

    def pop(self) -> None:
        if not self._stack:
            raise RuntimeError("push されていない状態で pop が呼ばれた")
        self.current = self._stack.pop()

    def translate(self, x: float, y: float, z: float = 0.0) -> None:
        self.current = replace(self.current, matrix=self.current.matrix @ translation_matrix(x, y, z))

    def rotate(self, axis: str, degrees: float) -> None:
        self.current = replace(
            self.current,
            matrix=self.current.matrix @ rotation_matrix(axis, degrees),
        )

    def set_stroke(self, color: ColorRGB255) -> None:
        self.current = replace(self.current, stroke=color)

    def set_stroke_weight(self, weight: float) -> None:
        self.current = replace(self.current, stroke_weight=float(weight))

    def set_fill(self, color: ColorRGB255) -> None:
        self.current = replace(self.current, fill=color)

    def linear_is_identity(self) -> bool:
        """現在の変換が平行移動だけなら True。"""
        return bool(np.array_equal(self.current.matrix[:3, :3], np.eye(3)))

    def project(self, points: np.ndarray) -> np.ndarray:
        """ローカル座標 (N, 2|3) をキャンバス座標 (N, 2) へ写して返す。"""

        pts = np.asarray(points, dtype=np.float64)
        if pts.ndim != 2 or pts.shape[1] not in (2, 3):
            raise ValueError(f"points は shape (N, 2|3) である必要がある: got={pts.shape}")
        homo = np.zeros((pts.shape[0], 4), dtype=np.float64)
        homo[:, : pts.shape[1]] = pts
        homo[:, 3] = 1.0
        xy = (homo @ self.current.matrix.T)[:, :2]
        if self.mode is Mode.THREE_D:
            xy = xy + np.array([self.width / 2.0, self.height / 2.0])
        return xy


__all__ = ["DrawState", "StateStack", "rotation_matrix", "translation_matrix"]
