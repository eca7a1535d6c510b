"""core.pattern の塗り解決（FlatFill / PatternFillRequest）をテスト。"""

from __future__ import annotations

import math

import pytest

from gridpat.core.config import (
    PATTERN_PARAMS_TYPES,
    CheckedParams,
    CrossParams,
    DotParams,
    NoiseGradParams,
    NoiseParams,
    PatternKind,
    PatternSpec,
    ShapeKind,
    ShapeStyle,
    StripeCircleParams,
    StripeParams,
    StripePolygonParams,
    StripeRadialParams,
    TriangleParams,
    WaveParams,
)
from gridpat.core.errors import UnsupportedPatternKind, ValidationError
from gridpat.core.pattern import FlatFill, PatternFillRequest, parse_pattern_kind, resolve_fill

_SHAPE = ShapeStyle(
    kind=ShapeKind.CIRCLE,
    size=30.0,
    stroke_color=(0, 0, 0),
    fill_color=(12, 34, 56),
    stroke_weight=1.0,
)
_PALETTE = ((0, 0, 0), (0, 0, 240))


def _pattern(kind: str, params: object) -> PatternSpec:
    return PatternSpec(kind=kind, palette=_PALETTE, angle=15.0, scale=1.5, params=params)  # type: ignore[arg-type]


def test_no_pattern_is_flat_fill_with_shape_color() -> None:
    assert resolve_fill(_SHAPE, None) == FlatFill(color=(12, 34, 56))


def test_stripe_polygon_request() -> None:
    fill = resolve_fill(
        _SHAPE,
        _pattern("stripePolygon", StripePolygonParams(sides=4, stripe_size=20.0, radius=30.0)),
    )
    assert isinstance(fill, PatternFillRequest)
    assert fill.kind is PatternKind.STRIPE_POLYGON
    assert fill.params_dict() == {"sides": 4, "stripe_size": 20.0, "radius": 30.0}
    assert [name for name, _ in fill.params] == ["sides", "stripe_size", "radius"]
    assert fill.angle == 15.0
    assert fill.scale == 1.5
    assert fill.palette == _PALETTE


@pytest.mark.parametrize(
    "params, expected",
    [
        (StripeParams(stripe_size=20.0), {"stripe_size": 20.0}),
        (StripeCircleParams(stripe_circle_size=18.0), {"stripe_circle_size": 18.0}),
        (StripeRadialParams(radial_angle=math.pi / 15), {"radial_angle": math.pi / 15}),
        (
            WaveParams(amplitude=50.0, frequency=20.0, phase=40.0, stripe_size=20.0),
            {"amplitude": 50.0, "frequency": 20.0, "phase": 40.0, "stripe_size": 20.0},
        ),
        (DotParams(dot_size=10.0, dot_spacing=20.0), {"dot_size": 10.0, "dot_spacing": 20.0}),
        (
            CheckedParams(checked_size=20.0, checked_spacing=60.0),
            {"checked_size": 20.0, "checked_spacing": 60.0},
        ),
        (CrossParams(cross_size=20.0, cross_weight=5.0), {"cross_size": 20.0, "cross_weight": 5.0}),
        (
            TriangleParams(triangle_size=40.0, triangle_spacing=20.0),
            {"triangle_size": 40.0, "triangle_spacing": 20.0},
        ),
        (NoiseParams(noise_scale=0.5), {"noise_scale": 0.5}),
        (NoiseGradParams(noise_scale=0.25), {"noise_scale": 0.25}),
    ],
)
def test_every_kind_resolves_its_own_params(params: object, expected: dict) -> None:
    kind = params.KIND  # type: ignore[attr-defined]
    fill = resolve_fill(_SHAPE, _pattern(kind.value, params))
    assert isinstance(fill, PatternFillRequest)
    assert fill.kind is kind
    assert fill.params_dict() == expected


def test_params_table_covers_all_kinds() -> None:
    assert set(PATTERN_PARAMS_TYPES) == set(PatternKind)
    assert len(PatternKind) == 11


def test_unknown_kind_raises_unsupported() -> None:
    with pytest.raises(UnsupportedPatternKind) as excinfo:
        resolve_fill(_SHAPE, _pattern("unknownXYZ", None))
    assert excinfo.value.kind == "unknownXYZ"


def test_parse_pattern_kind_accepts_wire_names_and_enum() -> None:
    assert parse_pattern_kind("noiseGrad") is PatternKind.NOISE_GRAD
    assert parse_pattern_kind(PatternKind.DOT) is PatternKind.DOT
    with pytest.raises(UnsupportedPatternKind):
        parse_pattern_kind("NoiseGrad")


def test_mismatched_params_are_rejected_at_resolution() -> None:
    # Configuration を経由しない PatternSpec でも、kind と params の不一致は報告する。
    with pytest.raises(ValidationError):
        resolve_fill(_SHAPE, _pattern("dot", StripeParams(stripe_size=20.0)))
    with pytest.raises(ValidationError):
        resolve_fill(_SHAPE, _pattern("dot", None))
