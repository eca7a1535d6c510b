"""SVG export（`gridpat.export.svg`）のテスト。"""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from gridpat.core.config import Mode
from gridpat.core.draft import default_draft, to_configuration
from gridpat.core.render import build_frame, issue_frame
from gridpat.core.renderer import Renderer, RenderStatus
from gridpat.core.shapes import Ellipse
from gridpat.export.svg import SvgBackend, SvgSurface, _fmt, export_frame_svg

_SVG_NS = "http://www.w3.org/2000/svg"
_NS = {"svg": _SVG_NS}


def _config(**overrides):
    return to_configuration(default_draft(overrides))


def _parse_svg(text: str) -> ET.Element:
    root = ET.fromstring(text)
    assert root.tag == f"{{{_SVG_NS}}}svg"
    return root


def _cells(root: ET.Element) -> list[ET.Element]:
    group = root.find("svg:g[@id='cells']", _NS)
    assert group is not None
    return list(group)


def test_fmt_is_deterministic_and_has_no_negative_zero() -> None:
    assert _fmt(1.0) == "1.000"
    assert _fmt(-0.0001) == "0.000"
    assert _fmt(-2.5) == "-2.500"


def test_circle_grid_emits_one_ellipse_per_cell_in_order() -> None:
    frame = build_frame(_config(columns=2, rows=2, shape_size=20, fill_color="#336699"), (200, 200))
    surface = SvgSurface(200, 200, Mode.TWO_D)
    issue_frame(frame, surface)

    root = _parse_svg(surface.to_svg_text())
    assert root.attrib["viewBox"] == "0 0 200 200"
    background = root.find("svg:rect[@id='background']", _NS)
    assert background is not None
    assert background.attrib["fill"] == "#F0F0F0"

    cells = _cells(root)
    assert [el.tag for el in cells] == [f"{{{_SVG_NS}}}ellipse"] * 4
    # 列優先: (50,50), (50,150), (150,50), (150,150)
    centers = [(el.attrib["cx"], el.attrib["cy"]) for el in cells]
    assert centers == [
        ("50.000", "50.000"),
        ("50.000", "150.000"),
        ("150.000", "50.000"),
        ("150.000", "150.000"),
    ]
    assert all(el.attrib["rx"] == "10.000" for el in cells)
    assert all(el.attrib["fill"] == "#336699" for el in cells)
    assert all(el.attrib["stroke"] == "#000000" for el in cells)


def test_square_and_triangle_shapes() -> None:
    frame = build_frame(_config(columns=1, rows=1, shape_type="square", shape_size=40), (100, 100))
    surface = SvgSurface(100, 100, Mode.TWO_D)
    issue_frame(frame, surface)
    (rect,) = _cells(_parse_svg(surface.to_svg_text()))
    assert rect.tag == f"{{{_SVG_NS}}}rect"
    assert (rect.attrib["x"], rect.attrib["y"], rect.attrib["width"]) == ("30.000", "30.000", "40.000")

    frame = build_frame(_config(columns=1, rows=1, shape_type="triangle", shape_size=40), (100, 100))
    surface = SvgSurface(100, 100, Mode.TWO_D)
    issue_frame(frame, surface)
    (poly,) = _cells(_parse_svg(surface.to_svg_text()))
    assert poly.tag == f"{{{_SVG_NS}}}polygon"
    assert poly.attrib["points"] == "50.000,30.000 30.000,70.000 70.000,70.000"


def test_zero_stroke_weight_disables_stroke() -> None:
    frame = build_frame(_config(columns=1, rows=1, stroke_weight=0), (100, 100))
    surface = SvgSurface(100, 100, Mode.TWO_D)
    issue_frame(frame, surface)
    (el,) = _cells(_parse_svg(surface.to_svg_text()))
    assert el.attrib["stroke"] == "none"


def test_3d_solids_become_wireframe_paths() -> None:
    config = _config(mode="3d", shape_type="torus", columns=2, rows=3, rotation_x=30, detail_x=6, detail_y=4)
    frame = build_frame(config, (600, 600))
    surface = SvgSurface(600, 600, Mode.THREE_D)
    issue_frame(frame, surface)

    cells = _cells(_parse_svg(surface.to_svg_text()))
    assert len(cells) == 6
    for el in cells:
        assert el.tag == f"{{{_SVG_NS}}}path"
        assert el.attrib["fill"] == "none"
        assert el.attrib["d"].startswith("M ")


def test_background_clears_previous_elements() -> None:
    surface = SvgSurface(50, 50, Mode.TWO_D)
    surface.draw(Ellipse(diameter=10.0))
    assert surface.element_count == 1
    surface.background((0, 0, 0))
    assert surface.element_count == 0


def test_disposed_surface_rejects_drawing() -> None:
    backend = SvgBackend()
    surface = backend.create_surface(10, 10, Mode.TWO_D)
    backend.dispose(surface)
    assert backend.live == []
    with pytest.raises(RuntimeError):
        surface.draw(Ellipse(diameter=1.0))


def test_renderer_with_svg_backend_keeps_single_live_surface() -> None:
    backend = SvgBackend()
    renderer = Renderer(backend, canvas_size=(300, 300), ready=True)
    assert renderer.request(_config(columns=2)) is RenderStatus.RENDERED
    assert renderer.request(_config(columns=3)) is RenderStatus.RENDERED
    assert backend.created == 2
    assert backend.live == [renderer.surface]
    assert renderer.surface.element_count == 3 * 5


def test_export_frame_svg_writes_file(tmp_path) -> None:
    frame = build_frame(_config(shape_type="zigzag", columns=3, rows=2), (300, 200))
    out_path = tmp_path / "nested" / "grid.svg"

    returned = export_frame_svg(frame, out_path)
    assert returned == out_path
    assert out_path.exists()

    root = _parse_svg(out_path.read_text(encoding="utf-8"))
    assert root.attrib["width"] == "300"
    assert root.attrib["height"] == "200"
    cells = _cells(root)
    assert len(cells) == 6
    assert all(el.tag == f"{{{_SVG_NS}}}polygon" for el in cells)


def test_export_is_deterministic(tmp_path) -> None:
    frame = build_frame(_config(mode="3d", shape_type="sphere", rotation_y=45), (400, 400))
    a = export_frame_svg(frame, tmp_path / "a.svg").read_text(encoding="utf-8")
    b = export_frame_svg(frame, tmp_path / "b.svg").read_text(encoding="utf-8")
    assert a == b


def test_zero_stroke_weight_solids_stay_visible() -> None:
    frame = build_frame(
        _config(mode="3d", shape_type="box", columns=1, rows=1, stroke_weight=0, fill_color="#00FF00"),
        (200, 200),
    )
    surface = SvgSurface(200, 200, Mode.THREE_D)
    issue_frame(frame, surface)
    (el,) = _cells(_parse_svg(surface.to_svg_text()))
    assert el.attrib["fill"] == "none"
    assert el.attrib["stroke"] == "#00FF00"
    assert el.attrib["stroke-width"] == "1.000"
