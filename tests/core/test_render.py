"""core.render（フレーム組み立てと描画命令の発行）をテスト。"""

from __future__ import annotations

import pytest

from gridpat.core.config import Mode, PatternKind
from gridpat.core.draft import default_draft, to_configuration
from gridpat.core.errors import UnsupportedPatternKind
from gridpat.core.pattern import FlatFill, PatternFillRequest
from gridpat.core.render import DEFAULT_BACKGROUND, build_frame, frame_signature, issue_frame
from gridpat.core.shapes import Ellipse, PolygonVertices, Solid3D


def _config(**overrides):
    return to_configuration(default_draft(overrides))


def test_single_cell_frame() -> None:
    frame = build_frame(_config(columns=1, rows=1), (600, 600))
    assert len(frame.instructions) == 1
    inst = frame.instructions[0]
    assert (inst.cell.x, inst.cell.y) == (300.0, 300.0)
    # 2D は box の左上へ translate する
    assert inst.origin == (285.0, 285.0, 0.0)


def test_circle_without_pattern_is_ellipse_with_flat_fill() -> None:
    frame = build_frame(_config(shape_size=30, fill_color="#336699"), (600, 600))
    for inst in frame.instructions:
        assert inst.primitive == Ellipse(diameter=30.0)
        assert inst.fill == FlatFill(color=(0x33, 0x66, 0x99))
        assert inst.stroke.color == (0, 0, 0)
        assert inst.stroke.weight == 1.0


def test_stripe_polygon_pattern_request() -> None:
    frame = build_frame(
        _config(
            use_pattern=True,
            pattern_type="stripePolygon",
            polygon_sides=4,
            stripe_size=20,
            polygon_radius=30,
        ),
        (600, 600),
    )
    fill = frame.instructions[0].fill
    assert isinstance(fill, PatternFillRequest)
    assert fill.kind is PatternKind.STRIPE_POLYGON
    assert fill.params_dict() == {"sides": 4, "stripe_size": 20.0, "radius": 30.0}


def test_unknown_pattern_abandons_frame() -> None:
    config = _config(use_pattern=True, pattern_type="unknownXYZ")
    with pytest.raises(UnsupportedPatternKind):
        build_frame(config, (600, 600))


def test_frames_are_deterministic() -> None:
    config = _config(shape_type="zigzag", columns=3, rows=4, use_pattern=True, pattern_type="wave")
    a = build_frame(config, (600, 600))
    b = build_frame(config, (600, 600))
    assert a == b
    assert frame_signature(a) == frame_signature(b)


def test_signature_changes_with_content() -> None:
    a = build_frame(_config(columns=3), (600, 600))
    b = build_frame(_config(columns=4), (600, 600))
    assert frame_signature(a) != frame_signature(b)


def test_zigzag_frame_uses_polygon_vertices() -> None:
    frame = build_frame(_config(shape_type="zigzag", zigzag_vertices=6), (600, 600))
    prim = frame.instructions[0].primitive
    assert isinstance(prim, PolygonVertices)
    assert len(prim.points) == 7


def test_issue_2d_frame_order(recording_surface_factory) -> None:
    frame = build_frame(_config(columns=2, rows=1, shape_size=20), (200, 100))
    surface = recording_surface_factory(Mode.TWO_D, (200, 100))
    issue_frame(frame, surface)

    assert surface.calls[0] == ("background", DEFAULT_BACKGROUND)
    assert surface.names()[1:] == [
        "push",
        "translate",
        "stroke",
        "stroke_weight",
        "fill",
        "draw",
        "pop",
    ] * 2
    assert surface.calls_named("translate") == [
        ("translate", 40.0, 40.0, 0.0),
        ("translate", 140.0, 40.0, 0.0),
    ]
    assert not surface.calls_named("rotate_x")


def test_issue_3d_frame_rotates_once_before_cells(recording_surface_factory) -> None:
    config = _config(
        mode="3d",
        shape_type="sphere",
        columns=2,
        rows=2,
        rotation_x=10,
        rotation_y=20,
        rotation_z=30,
    )
    frame = build_frame(config, (600, 600))
    surface = recording_surface_factory(Mode.THREE_D)
    issue_frame(frame, surface)

    names = surface.names()
    assert names[:4] == ["background", "rotate_x", "rotate_y", "rotate_z"]
    assert names.count("rotate_x") == 1
    assert surface.calls[1:4] == [("rotate_x", 10.0), ("rotate_y", 20.0), ("rotate_z", 30.0)]
    # 3D はアンカーそのものへ translate する
    assert surface.calls_named("translate")[0] == ("translate", -50.0, -50.0, 0.0)
    assert all(isinstance(c[1], Solid3D) for c in surface.calls_named("draw"))


def test_pattern_uses_backend_when_available(recording_surface_factory, pattern_backend) -> None:
    frame = build_frame(_config(columns=2, rows=2, use_pattern=True, pattern_type="dot"), (600, 600))
    surface = recording_surface_factory()
    issue_frame(frame, surface, pattern_backend=pattern_backend)

    assert len(pattern_backend.requests) == 4
    assert all(r.kind is PatternKind.DOT for r in pattern_backend.requests)
    assert not surface.calls_named("fill")
    assert len(surface.calls_named("draw")) == 4


def test_pattern_falls_back_to_flat_fill_without_backend(recording_surface_factory) -> None:
    frame = build_frame(
        _config(use_pattern=True, pattern_type="noise", fill_color=(1, 2, 3), columns=1, rows=1),
        (600, 600),
    )
    surface = recording_surface_factory()
    issue_frame(frame, surface, pattern_backend=None)
    assert surface.calls_named("fill") == [("fill", (1, 2, 3))]
    assert len(surface.calls_named("draw")) == 1


def test_solids_fall_back_to_flat_fill_even_with_pattern_backend(
    recording_surface_factory, pattern_backend
) -> None:
    config = _config(mode="3d", shape_type="box", columns=1, rows=1, use_pattern=True, pattern_type="stripe")
    frame = build_frame(config, (600, 600))
    surface = recording_surface_factory(Mode.THREE_D)
    issue_frame(frame, surface, pattern_backend=pattern_backend)
    assert pattern_backend.requests == []
    assert surface.calls_named("fill") == [("fill", (255, 0, 0))]


@pytest.mark.parametrize("size", [(0, 600), (600, -1)])
def test_bad_canvas_size_raises(size: tuple[int, int]) -> None:
    with pytest.raises(ValueError):
        build_frame(_config(), size)
