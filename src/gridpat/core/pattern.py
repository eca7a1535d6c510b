# どこで: `src/gridpat/core/pattern.py`。
# 何を: パターン指定から、外部パターンバックエンドへ渡す塗り要求（FillSpec）を組み立てる。
# なぜ: パターン種別ごとの引数の組み立てを 1 箇所に閉じ、未対応種別を確実に呼び出し側へ報告するため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias

from gridpat.core.color import ColorRGB255
from gridpat.core.config import (
    CheckedParams,
    CrossParams,
    DotParams,
    NoiseGradParams,
    NoiseParams,
    PatternKind,
    PatternSpec,
    ShapeStyle,
    StripeCircleParams,
    StripeParams,
    StripePolygonParams,
    StripeRadialParams,
    TriangleParams,
    WaveParams,
    known_pattern_kind,
)
from gridpat.core.errors import UnsupportedPatternKind, ValidationError


@dataclass(frozen=True, slots=True)
class FlatFill:
    """単色塗り。"""

    color: ColorRGB255


@dataclass(frozen=True, slots=True)
class PatternFillRequest:
    """パターンバックエンドへ渡す塗り要求。

    Parameters
    ----------
    kind : PatternKind
        パターン種別。
    angle : float
        パターンの回転角 [deg]。
    palette : tuple[ColorRGB255, ColorRGB255]
        2 色パレット。
    scale : float
        パターン全体の倍率。
    params : tuple[tuple[str, Any], ...]
        種別固有の引数。パターンファクトリの引数順に並べる。
    """

    kind: PatternKind
    angle: float
    palette: tuple[ColorRGB255, ColorRGB255]
    scale: float
    params: tuple[tuple[str, Any], ...]

    def params_dict(self) -> dict[str, Any]:
        """params を dict で返す。"""
        return dict(self.params)


FillSpec: TypeAlias = FlatFill | PatternFillRequest


def parse_pattern_kind(kind: object) -> PatternKind:
    """文字列/PatternKind を PatternKind に変換する。

    Raises
    ------
    UnsupportedPatternKind
        既知の種別でない場合。
    """

    parsed = known_pattern_kind(kind)
    if parsed is None:
        raise UnsupportedPatternKind(kind)
    return parsed


def _pattern_args(kind: PatternKind, params: object) -> tuple[tuple[str, Any], ...]:
    """params variant を (名前, 値) のタプル列へ展開する。"""

    match params:
        case StripeParams(stripe_size=s):
            args: tuple[tuple[str, Any], ...] = (("stripe_size", float(s)),)
        case StripeCircleParams(stripe_circle_size=s):
            args = (("stripe_circle_size", float(s)),)
        case StripePolygonParams(sides=n, stripe_size=s, radius=r):
            args = (("sides", int(n)), ("stripe_size", float(s)), ("radius", float(r)))
        case StripeRadialParams(radial_angle=a):
            args = (("radial_angle", float(a)),)
        case WaveParams(amplitude=a, frequency=f, phase=p, stripe_size=s):
            args = (
                ("amplitude", float(a)),
                ("frequency", float(f)),
                ("phase", float(p)),
                ("stripe_size", float(s)),
            )
        case DotParams(dot_size=s, dot_spacing=d):
            args = (("dot_size", float(s)), ("dot_spacing", float(d)))
        case CheckedParams(checked_size=s, checked_spacing=d):
            args = (("checked_size", float(s)), ("checked_spacing", float(d)))
        case CrossParams(cross_size=s, cross_weight=w):
            args = (("cross_size", float(s)), ("cross_weight", float(w)))
        case TriangleParams(triangle_size=s, triangle_spacing=d):
            args = (("triangle_size", float(s)), ("triangle_spacing", float(d)))
        case NoiseParams(noise_scale=s) | NoiseGradParams(noise_scale=s):
            args = (("noise_scale", float(s)),)
        case _:
            raise ValidationError(
                f"パターン params が不正です: kind={kind.value!r}, params={params!r}",
                field="pattern.params",
            )

    if getattr(params, "KIND", None) is not kind:
        raise ValidationError(
            f"pattern.params が kind と一致しない: kind={kind.value!r}, params={params!r}",
            field="pattern.params",
        )
    return args


def resolve_fill(shape: ShapeStyle, pattern: PatternSpec | None) -> FillSpec:
    """図形 1 つ分の塗りを解決する。

    Parameters
    ----------
    shape : ShapeStyle
        pattern 未指定時の単色塗りに fill_color を使う。
    pattern : PatternSpec or None
        パターン指定。

    Returns
    -------
    FillSpec
        FlatFill または PatternFillRequest。

    Raises
    ------
    UnsupportedPatternKind
        pattern.kind が未対応の種別の場合（セルを黙って飛ばさない）。
    """

    if pattern is None:
        return FlatFill(color=shape.fill_color)

    kind = parse_pattern_kind(pattern.kind)
    return PatternFillRequest(
        kind=kind,
        angle=float(pattern.angle),
        palette=(pattern.palette[0], pattern.palette[1]),
        scale=float(pattern.scale),
        params=_pattern_args(kind, pattern.params),
    )


__all__ = [
    "FillSpec",
    "FlatFill",
    "PatternFillRequest",
    "parse_pattern_kind",
    "resolve_fill",
]
