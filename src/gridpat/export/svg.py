"""
どこで: `src/gridpat/export/svg.py`。
何を: Surface プロトコルを満たす headless な SVG 描画面と、フレームを SVG ファイルへ保存する関数を提供する。
なぜ: interactive 依存なしでグリッド描画を反復・検証・保存できるようにするため。
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from gridpat.core.backend import PatternBackend
from gridpat.core.color import ColorRGB255, rgb255_to_hex
from gridpat.core.config import Mode
from gridpat.core.render import Frame, issue_frame
from gridpat.core.shapes import Ellipse, PolygonVertices, Primitive, Rect, Solid3D
from gridpat.core.transform import StateStack
from gridpat.core.wireframe import outline_2d, solid_wireframe, wireframe_stroke

_logger = logging.getLogger(__name__)

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def _polylines_to_d(polylines: list[np.ndarray]) -> str:
    """キャンバス座標の polyline 列（各 shape (N,2)）を SVG path の d 属性へ変換して返す。"""
    parts: list[str] = []
    for xy in polylines:
        if xy.shape[0] < 2:
            continue
        parts.append(f"M {_fmt(xy[0, 0])} {_fmt(xy[0, 1])}")
        parts.extend(f"L {_fmt(x)} {_fmt(y)}" for x, y in xy[1:])
    return " ".join(parts)


class SvgSurface:
    """SVG 要素列を蓄積する描画面。

    Notes
    -----
    - 3D ソリッドはワイヤーフレームを正射影した `<path>` 1 要素として出力する。
    - セル 1 つの描画は 1 要素になり、出力順はセル順と一致する。
    """

    def __init__(self, width: int, height: int, mode: Mode) -> None:
        self.width = int(width)
        self.height = int(height)
        self.mode = mode
        self.disposed = False
        self._state = StateStack(self.width, self.height, mode)
        self._background: ColorRGB255 | None = None
        self._elements: list[str] = []

    def _check_live(self) -> None:
        if self.disposed:
            raise RuntimeError("破棄済みの SvgSurface には描画できない")

    # --- 状態 ---

    def background(self, color: ColorRGB255) -> None:
        self._check_live()
        self._background = color
        self._elements.clear()

    def push(self) -> None:
        self._check_live()
        self._state.push()

    def pop(self) -> None:
        self._check_live()
        self._state.pop()

    def translate(self, x: float, y: float, z: float = 0.0) -> None:
        self._check_live()
        self._state.translate(x, y, z)

    def rotate_x(self, degrees: float) -> None:
        self._check_live()
        self._state.rotate("x", degrees)

    def rotate_y(self, degrees: float) -> None:
        self._check_live()
        self._state.rotate("y", degrees)

    def rotate_z(self, degrees: float) -> None:
        self._check_live()
        self._state.rotate("z", degrees)

    def stroke(self, color: ColorRGB255) -> None:
        self._check_live()
        self._state.set_stroke(color)

    def stroke_weight(self, weight: float) -> None:
        self._check_live()
        self._state.set_stroke_weight(weight)

    def fill(self, color: ColorRGB255) -> None:
        self._check_live()
        self._state.set_fill(color)

    # --- 描画 ---

    def _style_attrs(self) -> str:
        s = self._state.current
        fill = rgb255_to_hex(s.fill)
        if s.stroke_weight <= 0.0:
            return f'fill="{fill}" stroke="none"'
        return (
            f'fill="{fill}" stroke="{rgb255_to_hex(s.stroke)}" '
            f'stroke-width="{_fmt(s.stroke_weight)}"'
        )

    def draw(self, primitive: Primitive) -> None:
        self._check_live()
        state = self._state
        # 平行移動だけなら ellipse/rect 要素のまま出し、それ以外は輪郭を多角形にする。
        match primitive:
            case Ellipse(diameter=d) if state.linear_is_identity():
                r = float(d) / 2.0
                c = state.project(np.array([[r, r]]))[0]
                self._elements.append(
                    f'<ellipse cx="{_fmt(c[0])}" cy="{_fmt(c[1])}" rx="{_fmt(r)}" ry="{_fmt(r)}" '
                    f"{self._style_attrs()} />"
                )
            case Rect(width=w, height=h) if state.linear_is_identity():
                o = state.project(np.array([[0.0, 0.0]]))[0]
                self._elements.append(
                    f'<rect x="{_fmt(o[0])}" y="{_fmt(o[1])}" width="{_fmt(w)}" height="{_fmt(h)}" '
                    f"{self._style_attrs()} />"
                )
            case Ellipse() | Rect() | PolygonVertices():
                xy = state.project(outline_2d(primitive))
                points = " ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in xy[:-1])
                self._elements.append(
                    f'<polygon points="{points}" {self._style_attrs()} />'
                )
            case Solid3D():
                d = _polylines_to_d([state.project(line) for line in solid_wireframe(primitive)])
                s = state.current
                color, weight = wireframe_stroke(s.stroke, s.stroke_weight, s.fill)
                self._elements.append(
                    f'<path d="{d}" fill="none" stroke="{rgb255_to_hex(color)}" '
                    f'stroke-width="{_fmt(weight)}" '
                    f'stroke-linecap="round" stroke-linejoin="round" />'
                )
            case _:
                raise TypeError(f"未対応の primitive です: {type(primitive)!r}")

    # --- 出力 ---

    @property
    def element_count(self) -> int:
        """背景を除いた描画要素数。"""
        return len(self._elements)

    def to_svg_text(self) -> str:
        """蓄積した描画を SVG 文書の文字列で返す。"""

        w, h = self.width, self.height
        lines: list[str] = []
        lines.append('<?xml version="1.0" encoding="UTF-8"?>')
        lines.append(
            f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {w} {h}" width="{w}" height="{h}">'
        )
        if self._background is not None:
            lines.append(
                f'  <rect id="background" x="0" y="0" width="{w}" height="{h}" '
                f'fill="{rgb255_to_hex(self._background)}" />'
            )
        lines.append('  <g id="cells">')
        lines.extend(f"    {el}" for el in self._elements)
        lines.append("  </g>")
        lines.append("</svg>")
        return "\n".join(lines) + "\n"

    def save(self, path: str | Path) -> Path:
        """SVG をファイルへ保存し、保存先パスを返す。"""

        _path = Path(path)
        _path.parent.mkdir(parents=True, exist_ok=True)
        with _path.open("w", encoding="utf-8", newline="\n") as f:
            f.write(self.to_svg_text())
        return _path


class SvgBackend:
    """SvgSurface を生成する DrawingBackend。常に準備完了。"""

    def __init__(self) -> None:
        self.created = 0
        self.live: list[SvgSurface] = []

    def create_surface(self, width: int, height: int, mode: Mode) -> SvgSurface:
        surface = SvgSurface(width, height, mode)
        self.created += 1
        self.live.append(surface)
        return surface

    def dispose(self, surface: SvgSurface) -> None:
        surface.disposed = True
        if surface in self.live:
            self.live.remove(surface)


def export_frame_svg(
    frame: Frame,
    path: str | Path,
    *,
    pattern_backend: PatternBackend | None = None,
) -> Path:
    """Frame を新しい SvgSurface へ発行し、SVG として保存する。

    Parameters
    ----------
    frame : Frame
        `build_frame` の結果。
    path : str or Path
        出力先パス。
    pattern_backend : PatternBackend or None, optional
        パターン塗り capability。None なら単色塗り。

    Returns
    -------
    Path
        保存先パス。
    """

    canvas_w, canvas_h = frame.canvas_size
    surface = SvgSurface(canvas_w, canvas_h, frame.mode)
    issue_frame(frame, surface, pattern_backend=pattern_backend)
    saved = surface.save(path)
    _logger.info("SVG を保存しました: %s", saved)
    return saved


__all__ = ["SvgBackend", "SvgSurface", "export_frame_svg"]
