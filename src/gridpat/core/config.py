"""
どこで: `src/gridpat/core/config.py`。
何を: グリッド描画設定（Configuration）の不変スナップショットと、その検証を定義する。
なぜ: 描画パスが参照する committed 設定を、常に検証済みの値オブジェクトとして扱うため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, TypeAlias

from gridpat.core.color import ColorRGB255
from gridpat.core.errors import ValidationError


class Mode(str, Enum):
    """描画モード。"""

    TWO_D = "2d"
    THREE_D = "3d"


class ShapeKind(str, Enum):
    """セルに置く図形の種別。"""

    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"
    ZIGZAG = "zigzag"
    BOX = "box"
    SPHERE = "sphere"
    TORUS = "torus"

    @property
    def is_solid(self) -> bool:
        """3D ソリッド（box/sphere/torus）なら True。"""
        return self in _SOLID_KINDS


_SOLID_KINDS = frozenset({ShapeKind.BOX, ShapeKind.SPHERE, ShapeKind.TORUS})


class PatternKind(str, Enum):
    """パターン種別。値はパターンバックエンドのファクトリ名と一致させる。"""

    STRIPE = "stripe"
    STRIPE_CIRCLE = "stripeCircle"
    STRIPE_POLYGON = "stripePolygon"
    STRIPE_RADIAL = "stripeRadial"
    WAVE = "wave"
    DOT = "dot"
    CHECKED = "checked"
    CROSS = "cross"
    TRIANGLE = "triangle"
    NOISE = "noise"
    NOISE_GRAD = "noiseGrad"


@dataclass(frozen=True, slots=True)
class Grid:
    columns: int
    rows: int


@dataclass(frozen=True, slots=True)
class ShapeStyle:
    """図形の種別・サイズ・色。"""

    kind: ShapeKind
    size: float
    stroke_color: ColorRGB255
    fill_color: ColorRGB255
    stroke_weight: float


@dataclass(frozen=True, slots=True)
class Shape3D:
    """3D モード専用の回転 [deg] と分割数。"""

    rotation_x: float
    rotation_y: float
    rotation_z: float
    detail_x: int
    detail_y: int


@dataclass(frozen=True, slots=True)
class Zigzag:
    """zigzag 図形専用のパラメータ。"""

    vertices: int
    depth_percent: float


# --- パターン種別ごとのパラメータ（閉じた variant 群）---


@dataclass(frozen=True, slots=True)
class StripeParams:
    KIND: ClassVar[PatternKind] = PatternKind.STRIPE
    stripe_size: float


@dataclass(frozen=True, slots=True)
class StripeCircleParams:
    KIND: ClassVar[PatternKind] = PatternKind.STRIPE_CIRCLE
    stripe_circle_size: float


@dataclass(frozen=True, slots=True)
class StripePolygonParams:
    KIND: ClassVar[PatternKind] = PatternKind.STRIPE_POLYGON
    sides: int
    stripe_size: float
    radius: float


@dataclass(frozen=True, slots=True)
class StripeRadialParams:
    KIND: ClassVar[PatternKind] = PatternKind.STRIPE_RADIAL
    radial_angle: float  # [rad]


@dataclass(frozen=True, slots=True)
class WaveParams:
    KIND: ClassVar[PatternKind] = PatternKind.WAVE
    amplitude: float
    frequency: float
    phase: float
    stripe_size: float


@dataclass(frozen=True, slots=True)
class DotParams:
    KIND: ClassVar[PatternKind] = PatternKind.DOT
    dot_size: float
    dot_spacing: float


@dataclass(frozen=True, slots=True)
class CheckedParams:
    KIND: ClassVar[PatternKind] = PatternKind.CHECKED
    checked_size: float
    checked_spacing: float


@dataclass(frozen=True, slots=True)
class CrossParams:
    KIND: ClassVar[PatternKind] = PatternKind.CROSS
    cross_size: float
    cross_weight: float


@dataclass(frozen=True, slots=True)
class TriangleParams:
    KIND: ClassVar[PatternKind] = PatternKind.TRIANGLE
    triangle_size: float
    triangle_spacing: float


@dataclass(frozen=True, slots=True)
class NoiseParams:
    KIND: ClassVar[PatternKind] = PatternKind.NOISE
    noise_scale: float


@dataclass(frozen=True, slots=True)
class NoiseGradParams:
    KIND: ClassVar[PatternKind] = PatternKind.NOISE_GRAD
    noise_scale: float


PatternParams: TypeAlias = (
    StripeParams
    | StripeCircleParams
    | StripePolygonParams
    | StripeRadialParams
    | WaveParams
    | DotParams
    | CheckedParams
    | CrossParams
    | TriangleParams
    | NoiseParams
    | NoiseGradParams
)

PATTERN_PARAMS_TYPES: dict[PatternKind, type] = {
    PatternKind.STRIPE: StripeParams,
    PatternKind.STRIPE_CIRCLE: StripeCircleParams,
    PatternKind.STRIPE_POLYGON: StripePolygonParams,
    PatternKind.STRIPE_RADIAL: StripeRadialParams,
    PatternKind.WAVE: WaveParams,
    PatternKind.DOT: DotParams,
    PatternKind.CHECKED: CheckedParams,
    PatternKind.CROSS: CrossParams,
    PatternKind.TRIANGLE: TriangleParams,
    PatternKind.NOISE: NoiseParams,
    PatternKind.NOISE_GRAD: NoiseGradParams,
}


@dataclass(frozen=True, slots=True)
class PatternSpec:
    """図形を塗るパターンの指定。

    Notes
    -----
    kind は文字列のまま保持する。未知の kind も設定としては受理し、
    パターン解決時に `UnsupportedPatternKind` として報告する。
    """

    kind: str
    palette: tuple[ColorRGB255, ColorRGB255]
    angle: float
    scale: float
    params: PatternParams | None


@dataclass(frozen=True, slots=True)
class Configuration:
    """描画に使う設定の不変スナップショット。

    生成時に `validate_configuration` で検証され、不正な値では生成できない。
    """

    mode: Mode
    grid: Grid
    shape: ShapeStyle
    shape_3d: Shape3D | None = None
    zigzag: Zigzag | None = None
    pattern: PatternSpec | None = None

    def __post_init__(self) -> None:
        validate_configuration(self)


def known_pattern_kind(kind: object) -> PatternKind | None:
    """kind が既知のパターン種別なら PatternKind を、そうでなければ None を返す。"""

    if isinstance(kind, PatternKind):
        return kind
    try:
        return PatternKind(str(kind))
    except ValueError:
        return None


def _require_finite(field: str, value: float) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field} は数値である必要がある: got={value!r}", field=field) from exc
    if not math.isfinite(v):
        raise ValidationError(f"{field} は有限の数値である必要がある: got={value!r}", field=field)
    return v


def _require_range(
    field: str,
    value: float,
    lo: float | None = None,
    hi: float | None = None,
    *,
    lo_open: bool = False,
    hi_open: bool = False,
) -> None:
    v = _require_finite(field, value)
    if lo is not None and (v < lo or (lo_open and v == lo)):
        bound = f"> {lo}" if lo_open else f">= {lo}"
        raise ValidationError(f"{field} は {bound} である必要がある: got={value!r}", field=field)
    if hi is not None and (v > hi or (hi_open and v == hi)):
        bound = f"< {hi}" if hi_open else f"<= {hi}"
        raise ValidationError(f"{field} は {bound} である必要がある: got={value!r}", field=field)


def _require_int(field: str, value: object, lo: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} は整数である必要がある: got={value!r}", field=field)
    if value < lo:
        raise ValidationError(f"{field} は >= {lo} である必要がある: got={value!r}", field=field)


def _require_color(field: str, value: object) -> None:
    try:
        ok = len(value) == 3 and all(  # type: ignore[arg-type]
            isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255
            for c in value  # type: ignore[union-attr]
        )
    except TypeError:
        ok = False
    if not ok:
        raise ValidationError(f"{field} は 0..255 の RGB である必要がある: got={value!r}", field=field)


def _validate_pattern_params(params: object) -> None:
    """既知 kind の params 値域を検証する。"""

    match params:
        case StripeParams(stripe_size=s):
            _require_range("pattern.stripe_size", s, 0.0, lo_open=True)
        case StripeCircleParams(stripe_circle_size=s):
            _require_range("pattern.stripe_circle_size", s, 0.0, lo_open=True)
        case StripePolygonParams(sides=n, stripe_size=s, radius=r):
            _require_int("pattern.sides", n, 3)
            _require_range("pattern.stripe_size", s, 0.0, lo_open=True)
            _require_range("pattern.radius", r, 0.0, lo_open=True)
        case StripeRadialParams(radial_angle=a):
            _require_range("pattern.radial_angle", a, 0.0, math.pi)
        case WaveParams(amplitude=a, frequency=f, phase=p, stripe_size=s):
            _require_range("pattern.amplitude", a, 0.0, lo_open=True)
            _require_range("pattern.frequency", f, 0.0, lo_open=True)
            _require_finite("pattern.phase", p)
            _require_range("pattern.stripe_size", s, 0.0, lo_open=True)
        case DotParams(dot_size=s, dot_spacing=d):
            _require_range("pattern.dot_size", s, 0.0, lo_open=True)
            _require_range("pattern.dot_spacing", d, 0.0, lo_open=True)
        case CheckedParams(checked_size=s, checked_spacing=d):
            _require_range("pattern.checked_size", s, 0.0, lo_open=True)
            _require_range("pattern.checked_spacing", d, 0.0, lo_open=True)
        case CrossParams(cross_size=s, cross_weight=w):
            _require_range("pattern.cross_size", s, 0.0, lo_open=True)
            _require_range("pattern.cross_weight", w, 0.0, lo_open=True)
        case TriangleParams(triangle_size=s, triangle_spacing=d):
            _require_range("pattern.triangle_size", s, 0.0, lo_open=True)
            _require_range("pattern.triangle_spacing", d, 0.0, lo_open=True)
        case NoiseParams(noise_scale=s) | NoiseGradParams(noise_scale=s):
            _require_range("pattern.noise_scale", s, 0.0, lo_open=True)
        case _:
            raise ValidationError(f"未知のパターンパラメータ型です: {type(params)!r}", field="pattern.params")


def _validate_pattern(pattern: PatternSpec) -> None:
    if len(pattern.palette) != 2:
        raise ValidationError("pattern.palette は 2 色である必要がある", field="pattern.palette")
    for i, color in enumerate(pattern.palette):
        _require_color(f"pattern.palette[{i}]", color)
    _require_finite("pattern.angle", pattern.angle)
    _require_range("pattern.scale", pattern.scale, 0.0, lo_open=True)

    kind = known_pattern_kind(pattern.kind)
    if kind is None:
        # 未知 kind はここでは受理し、解決時にフレーム単位のエラーとする。
        return
    if pattern.params is None or getattr(pattern.params, "KIND", None) is not kind:
        raise ValidationError(
            f"pattern.params が kind と一致しない: kind={kind.value!r}, params={pattern.params!r}",
            field="pattern.params",
        )
    _validate_pattern_params(pattern.params)


def validate_configuration(config: Configuration) -> None:
    """Configuration の不変条件を検証する。

    Raises
    ------
    ValidationError
        値域外の値、または mode/shape と任意フィールドの組み合わせが不整合な場合。
    """

    if not isinstance(config.mode, Mode):
        raise ValidationError(f"未対応の mode です: {config.mode!r}", field="mode")
    if not isinstance(config.shape.kind, ShapeKind):
        raise ValidationError(f"未対応の shape kind です: {config.shape.kind!r}", field="shape.kind")

    _require_int("grid.columns", config.grid.columns, 1)
    _require_int("grid.rows", config.grid.rows, 1)

    shape = config.shape
    _require_range("shape.size", shape.size, 0.0, lo_open=True)
    _require_range("shape.stroke_weight", shape.stroke_weight, 0.0)
    _require_color("shape.stroke_color", shape.stroke_color)
    _require_color("shape.fill_color", shape.fill_color)

    is_3d = config.mode is Mode.THREE_D
    if shape.kind.is_solid != is_3d:
        raise ValidationError(
            f"shape kind {shape.kind.value!r} は mode {config.mode.value!r} で使えない",
            field="shape.kind",
        )

    if is_3d != (config.shape_3d is not None):
        raise ValidationError("shape_3d は mode=3d のときだけ指定する", field="shape_3d")
    if config.shape_3d is not None:
        s3 = config.shape_3d
        _require_range("shape_3d.rotation_x", s3.rotation_x, 0.0, 360.0)
        _require_range("shape_3d.rotation_y", s3.rotation_y, 0.0, 360.0)
        _require_range("shape_3d.rotation_z", s3.rotation_z, 0.0, 360.0)
        _require_int("shape_3d.detail_x", s3.detail_x, 3)
        _require_int("shape_3d.detail_y", s3.detail_y, 3)

    is_zigzag = shape.kind is ShapeKind.ZIGZAG
    if is_zigzag != (config.zigzag is not None):
        raise ValidationError("zigzag は shape kind=zigzag のときだけ指定する", field="zigzag")
    if config.zigzag is not None:
        _require_int("zigzag.vertices", config.zigzag.vertices, 3)
        _require_range(
            "zigzag.depth_percent",
            config.zigzag.depth_percent,
            0.0,
            100.0,
            lo_open=True,
            hi_open=True,
        )

    if config.pattern is not None:
        _validate_pattern(config.pattern)


__all__ = [
    "CheckedParams",
    "Configuration",
    "CrossParams",
    "DotParams",
    "Grid",
    "Mode",
    "NoiseGradParams",
    "NoiseParams",
    "PATTERN_PARAMS_TYPES",
    "PatternKind",
    "PatternParams",
    "PatternSpec",
    "Shape3D",
    "ShapeKind",
    "ShapeStyle",
    "StripeCircleParams",
    "StripeParams",
    "StripePolygonParams",
    "StripeRadialParams",
    "TriangleParams",
    "WaveParams",
    "Zigzag",
    "known_pattern_kind",
    "validate_configuration",
]
