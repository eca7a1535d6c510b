# どこで: `src/gridpat/interactive/pyglet_backend.py`。
# 何を: pyglet.shapes でグリッドを描くプレビュー用の描画面とバックエンドを提供する。
# なぜ: pyglet 依存を interactive 層に閉じ込め、core/export をヘッドレスに保つため。

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import pyglet

from gridpat.core.color import ColorRGB255
from gridpat.core.config import Mode
from gridpat.core.errors import BackendUnavailable
from gridpat.core.shapes import Primitive, Solid3D
from gridpat.core.transform import StateStack
from gridpat.core.wireframe import outline_2d, solid_wireframe, wireframe_stroke

_logger = logging.getLogger(__name__)


def _rgba(color: ColorRGB255) -> tuple[int, int, int, int]:
    r, g, b = color
    return (int(r), int(g), int(b), 255)


class PygletSurface:
    """pyglet の Batch に図形を溜める描画面。

    Notes
    -----
    - 座標計算は SVG と同じ StateStack で行い、最後に y 軸を反転する
      （pyglet は左下原点、上向き y）。
    - 描画順はセル順。セルごとに Group の order を増やして重なり順を固定する。
    """

    def __init__(self, width: int, height: int, mode: Mode) -> None:
        self.width = int(width)
        self.height = int(height)
        self.mode = mode
        self.disposed = False
        self._state = StateStack(self.width, self.height, mode)
        self._batch = pyglet.graphics.Batch()
        self._shapes: list[Any] = []
        self._order = 0

    def _next_group(self) -> pyglet.graphics.Group:
        self._order += 1
        return pyglet.graphics.Group(order=self._order)

    def _to_window(self, xy: np.ndarray) -> np.ndarray:
        out = np.array(xy, dtype=np.float64, copy=True)
        out[:, 1] = float(self.height) - out[:, 1]
        return out

    def background(self, color: ColorRGB255) -> None:
        self._clear_shapes()
        self._shapes.append(
            pyglet.shapes.Rectangle(
                0,
                0,
                self.width,
                self.height,
                color=_rgba(color),
                batch=self._batch,
                group=self._next_group(),
            )
        )

    def push(self) -> None:
        self._state.push()

    def pop(self) -> None:
        self._state.pop()

    def translate(self, x: float, y: float, z: float = 0.0) -> None:
        self._state.translate(x, y, z)

    def rotate_x(self, degrees: float) -> None:
        self._state.rotate("x", degrees)

    def rotate_y(self, degrees: float) -> None:
        self._state.rotate("y", degrees)

    def rotate_z(self, degrees: float) -> None:
        self._state.rotate("z", degrees)

    def stroke(self, color: ColorRGB255) -> None:
        self._state.set_stroke(color)

    def stroke_weight(self, weight: float) -> None:
        self._state.set_stroke_weight(weight)

    def fill(self, color: ColorRGB255) -> None:
        self._state.set_fill(color)

    def _add_lines(
        self,
        xy: np.ndarray,
        group: pyglet.graphics.Group,
        *,
        color: ColorRGB255,
        weight: float,
    ) -> None:
        if weight <= 0.0:
            return
        rgba = _rgba(color)
        for (x0, y0), (x1, y1) in zip(xy[:-1].tolist(), xy[1:].tolist()):
            # thickness は 2.0 系/2.1 系で名前が違うため位置引数で渡す。
            self._shapes.append(
                pyglet.shapes.Line(x0, y0, x1, y1, weight, rgba, batch=self._batch, group=group)
            )

    def draw(self, primitive: Primitive) -> None:
        if isinstance(primitive, Solid3D):
            group = self._next_group()
            s = self._state.current
            color, weight = wireframe_stroke(s.stroke, s.stroke_weight, s.fill)
            for line in solid_wireframe(primitive):
                xy = self._to_window(self._state.project(line))
                self._add_lines(xy, group, color=color, weight=weight)
            return

        outline = outline_2d(primitive)
        xy = self._to_window(self._state.project(outline))

        # 輪郭はローカル box 中心に対して星形なので、中心からの扇で塗る。
        lo = outline.min(axis=0)
        hi = outline.max(axis=0)
        center = self._to_window(self._state.project(((lo + hi) / 2.0)[None, :]))[0]
        fill_group = self._next_group()
        fill = _rgba(self._state.current.fill)
        cx, cy = float(center[0]), float(center[1])
        for (x0, y0), (x1, y1) in zip(xy[:-1].tolist(), xy[1:].tolist()):
            self._shapes.append(
                pyglet.shapes.Triangle(cx, cy, x0, y0, x1, y1, color=fill, batch=self._batch, group=fill_group)
            )
        s = self._state.current
        self._add_lines(xy, self._next_group(), color=s.stroke, weight=s.stroke_weight)

    def render(self) -> None:
        """溜めた図形を現在のウィンドウへ描く。"""
        if not self.disposed:
            self._batch.draw()

    def _clear_shapes(self) -> None:
        for shape in self._shapes:
            shape.delete()
        self._shapes.clear()
        self._order = 0

    def delete(self) -> None:
        """図形と GPU リソースを解放する。"""
        self._clear_shapes()
        self.disposed = True


class PygletBackend:
    """pyglet ウィンドウに紐づく DrawingBackend。

    ウィンドウ（OpenGL コンテキスト）が attach されるまでは
    `create_surface` が `BackendUnavailable` を送出する。
    """

    def __init__(self) -> None:
        self._window: Any | None = None

    @property
    def window(self) -> Any | None:
        return self._window

    def attach(self, window: Any) -> None:
        """描画先のウィンドウを設定する。以降 surface を生成できる。"""
        self._window = window

    def detach(self) -> None:
        self._window = None

    def create_surface(self, width: int, height: int, mode: Mode) -> PygletSurface:
        if self._window is None:
            raise BackendUnavailable("pyglet ウィンドウがまだ作られていない")
        self._window.switch_to()
        return PygletSurface(width, height, mode)

    def dispose(self, surface: PygletSurface) -> None:
        surface.delete()
        _logger.debug("pyglet surface を破棄しました")


__all__ = ["PygletBackend", "PygletSurface"]
