# どこで: `src/gridpat/core/backend.py`。
# 何を: 描画バックエンド / 描画面 / パターンバックエンドの capability インターフェースを定義する。
# なぜ: core を具体的な描画ライブラリ（SVG, pyglet など）から切り離し、依存方向を一方向に保つため。

from __future__ import annotations

from typing import Protocol, runtime_checkable

from gridpat.core.color import ColorRGB255
from gridpat.core.config import Mode
from gridpat.core.pattern import PatternFillRequest
from gridpat.core.shapes import Primitive


@runtime_checkable
class Surface(Protocol):
    """1 つの描画面。変換スタックと現在の stroke/fill 状態を持つ。"""

    def background(self, color: ColorRGB255) -> None: ...

    def push(self) -> None: ...

    def pop(self) -> None: ...

    def translate(self, x: float, y: float, z: float = 0.0) -> None: ...

    def rotate_x(self, degrees: float) -> None: ...

    def rotate_y(self, degrees: float) -> None: ...

    def rotate_z(self, degrees: float) -> None: ...

    def stroke(self, color: ColorRGB255) -> None: ...

    def stroke_weight(self, weight: float) -> None: ...

    def fill(self, color: ColorRGB255) -> None: ...

    def draw(self, primitive: Primitive) -> None: ...


class DrawingBackend(Protocol):
    """描画面の生成と破棄を担うバックエンド。

    Notes
    -----
    バックエンドが未準備のとき `create_surface` は `BackendUnavailable` を送出してよい。
    """

    def create_surface(self, width: int, height: int, mode: Mode) -> Surface: ...

    def dispose(self, surface: Surface) -> None: ...


class PatternBackend(Protocol):
    """パターン塗りを行う任意 capability。

    現在の stroke 状態のまま、primitive の輪郭内をパターンで塗って描く。
    """

    def fill_pattern(
        self,
        surface: Surface,
        request: PatternFillRequest,
        primitive: Primitive,
    ) -> None: ...


__all__ = ["DrawingBackend", "PatternBackend", "Surface"]
