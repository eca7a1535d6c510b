"""
どこで: `src/gridpat/core/render.py`。
何を: committed 設定からフレーム（描画命令列）を組み立て、描画面へ発行する。
なぜ: 「計算」と「描画」を分け、途中で失敗したフレームが描画面に一切触れないようにするため。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from gridpat.core.backend import PatternBackend, Surface
from gridpat.core.color import ColorRGB255
from gridpat.core.config import Configuration, Mode
from gridpat.core.layout import Cell, layout
from gridpat.core.pattern import FillSpec, FlatFill, PatternFillRequest, resolve_fill
from gridpat.core.shapes import Primitive, Solid3D, generate_primitive
from gridpat.core.signature import compute_signature

_logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND: ColorRGB255 = (240, 240, 240)


@dataclass(frozen=True, slots=True)
class Stroke:
    color: ColorRGB255
    weight: float


@dataclass(frozen=True, slots=True)
class DrawInstruction:
    """1 セル分の描画命令。

    origin は描画前に translate する座標。2D ではローカル box の左上
    （アンカーから size/2 ずらした点）、3D ではアンカーそのもの。
    """

    cell: Cell
    origin: tuple[float, float, float]
    primitive: Primitive
    fill: FillSpec
    stroke: Stroke


@dataclass(frozen=True, slots=True)
class Frame:
    """1 回の描画パスの結果（発行前）。

    Parameters
    ----------
    mode : Mode
        描画モード。
    canvas_size : tuple[int, int]
        キャンバス寸法 (width, height)。
    background : ColorRGB255
        背景色。
    rotation : tuple[float, float, float]
        グリッド全体の回転 [deg]（rx, ry, rz）。2D では (0, 0, 0)。
    fallback_fill : ColorRGB255
        パターンを塗れないときに使う単色。
    instructions : tuple[DrawInstruction, ...]
        セル順（列優先）の描画命令。
    """

    mode: Mode
    canvas_size: tuple[int, int]
    background: ColorRGB255
    rotation: tuple[float, float, float]
    fallback_fill: ColorRGB255
    instructions: tuple[DrawInstruction, ...]


def build_frame(
    config: Configuration,
    canvas_size: tuple[int, int],
    *,
    background: ColorRGB255 = DEFAULT_BACKGROUND,
) -> Frame:
    """Configuration から 1 フレーム分の描画命令列を組み立てる。

    全セルの命令を先に組み立て終えてから返すため、例外が出た場合は
    描画面へ何も発行されない。

    Raises
    ------
    UnsupportedPatternKind
        パターン種別が未対応の場合。
    ValidationError
        パターン params が種別と一致しない場合。
    """

    canvas_w, canvas_h = canvas_size
    if int(canvas_w) <= 0 or int(canvas_h) <= 0:
        raise ValueError("canvas_size は正の (width, height) である必要がある")

    shape = config.shape
    # 形状・塗りは全セル共通なので 1 回だけ解決する。
    primitive = generate_primitive(shape, config.zigzag, config.shape_3d)
    fill = resolve_fill(shape, config.pattern)
    stroke = Stroke(color=shape.stroke_color, weight=float(shape.stroke_weight))

    cells = layout(
        config.mode,
        config.grid.columns,
        config.grid.rows,
        float(canvas_w),
        float(canvas_h),
    )
    half = 0.0 if config.mode is Mode.THREE_D else float(shape.size) / 2.0
    instructions = tuple(
        DrawInstruction(
            cell=cell,
            origin=(cell.x - half, cell.y - half, cell.z),
            primitive=primitive,
            fill=fill,
            stroke=stroke,
        )
        for cell in cells
    )

    rotation = (0.0, 0.0, 0.0)
    if config.shape_3d is not None:
        s3 = config.shape_3d
        rotation = (float(s3.rotation_x), float(s3.rotation_y), float(s3.rotation_z))

    return Frame(
        mode=config.mode,
        canvas_size=(int(canvas_w), int(canvas_h)),
        background=background,
        rotation=rotation,
        fallback_fill=shape.fill_color,
        instructions=instructions,
    )


def frame_signature(frame: Frame) -> str:
    """Frame の内容署名を返す。同じ内容のフレームは同じ署名になる。"""
    return compute_signature(frame)


def _apply_fill(
    surface: Surface,
    inst: DrawInstruction,
    *,
    fallback_fill: ColorRGB255,
    pattern_backend: PatternBackend | None,
) -> None:
    """塗りを適用して primitive を描く。"""

    match inst.fill:
        case FlatFill(color=color):
            surface.fill(color)
            surface.draw(inst.primitive)
        case PatternFillRequest() as request:
            if pattern_backend is not None and not isinstance(inst.primitive, Solid3D):
                pattern_backend.fill_pattern(surface, request, inst.primitive)
                return
            surface.fill(fallback_fill)
            surface.draw(inst.primitive)
        case _:
            raise TypeError(f"未対応の FillSpec: {type(inst.fill)!r}")


def issue_frame(
    frame: Frame,
    surface: Surface,
    *,
    pattern_backend: PatternBackend | None = None,
) -> None:
    """Frame の命令をセル順に描画面へ発行する。

    Parameters
    ----------
    frame : Frame
        `build_frame` の結果。
    surface : Surface
        発行先の描画面。
    pattern_backend : PatternBackend or None, optional
        パターン塗りの capability。None の場合は単色塗りにフォールバックする。
    """

    surface.background(frame.background)

    if frame.mode is Mode.THREE_D:
        rx, ry, rz = frame.rotation
        surface.rotate_x(rx)
        surface.rotate_y(ry)
        surface.rotate_z(rz)

    for inst in frame.instructions:
        surface.push()
        ox, oy, oz = inst.origin
        surface.translate(ox, oy, oz)
        surface.stroke(inst.stroke.color)
        surface.stroke_weight(inst.stroke.weight)
        _apply_fill(
            surface,
            inst,
            fallback_fill=frame.fallback_fill,
            pattern_backend=pattern_backend,
        )
        surface.pop()

    _logger.debug("frame issued: mode=%s cells=%d", frame.mode.value, len(frame.instructions))


__all__ = [
    "DEFAULT_BACKGROUND",
    "DrawInstruction",
    "Frame",
    "Stroke",
    "build_frame",
    "frame_signature",
    "issue_frame",
]
