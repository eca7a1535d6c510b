"""core.staging（draft/committed の 2 段ステージング）をテスト。"""

from __future__ import annotations

import pytest

from gridpat.core.config import ShapeKind
from gridpat.core.errors import UnsupportedPatternKind, ValidationError
from gridpat.core.renderer import Renderer, RenderStatus
from gridpat.core.staging import StagingController


@pytest.fixture
def staging(fake_backend) -> StagingController:
    return StagingController(Renderer(fake_backend, ready=True))


def test_draft_edits_never_render(staging, fake_backend) -> None:
    staging.apply_draft_edit("columns", 3)
    staging.apply_draft_edit("shape_type", "square")
    staging.apply_draft_edits({"rows": 2, "fill_color": "#00FF00"})
    assert fake_backend.surfaces == []
    assert staging.committed is None


def test_commit_renders_exactly_once(staging, fake_backend) -> None:
    staging.apply_draft_edit("columns", 3)
    assert staging.commit() is RenderStatus.RENDERED
    assert len(fake_backend.surfaces) == 1
    assert staging.committed is not None
    assert staging.committed.grid.columns == 3


def test_edits_after_commit_do_not_touch_committed(staging, fake_backend) -> None:
    staging.commit()
    committed = staging.committed
    staging.apply_draft_edit("shape_type", "triangle")
    staging.apply_draft_edit("columns", 9)
    assert staging.committed is committed
    assert staging.committed.shape.kind is ShapeKind.CIRCLE
    assert len(fake_backend.surfaces) == 1


def test_invalid_draft_leaves_committed_unchanged(staging, fake_backend) -> None:
    staging.commit()
    committed = staging.committed
    staging.apply_draft_edit("mode", "3d")  # circle は 3D で使えない
    with pytest.raises(ValidationError):
        staging.commit()
    assert staging.committed is committed
    assert len(fake_backend.surfaces) == 1


def test_failed_edit_leaves_draft_unchanged(staging) -> None:
    before = staging.draft
    with pytest.raises(ValidationError):
        staging.apply_draft_edit("columns", "many")
    with pytest.raises(ValidationError):
        staging.apply_draft_edits({"rows": 4, "columns": "many"})
    assert staging.draft is before


def test_unknown_pattern_commit_keeps_last_frame(staging, fake_backend) -> None:
    staging.commit()
    surface = staging.renderer.surface
    staging.apply_draft_edits({"use_pattern": True, "pattern_type": "unknownXYZ"})
    with pytest.raises(UnsupportedPatternKind):
        staging.commit()
    # commit 自体は成立するが、フレームは破棄されて直前の描画が残る。
    assert staging.committed is not None
    assert staging.committed.pattern is not None
    assert staging.committed.pattern.kind == "unknownXYZ"
    assert staging.renderer.surface is surface
    assert not surface.disposed


def test_commit_before_ready_is_pending(unavailable_backend) -> None:
    renderer = Renderer(unavailable_backend)
    staging = StagingController(renderer)
    assert staging.commit() is RenderStatus.PENDING
    staging.apply_draft_edit("columns", 2)
    assert staging.commit() is RenderStatus.PENDING

    unavailable_backend.available = True
    assert renderer.notify_ready() is RenderStatus.RENDERED
    assert len(unavailable_backend.surfaces) == 1
    assert len(renderer.surface.calls_named("draw")) == 2 * 5


def test_reset_and_discard_draft(staging) -> None:
    staging.apply_draft_edit("columns", 4)
    staging.commit()
    staging.apply_draft_edit("columns", 8)

    discarded = staging.discard_draft()
    assert discarded["columns"] == 4

    reset = staging.reset_draft()
    assert reset["columns"] == 5
    assert staging.committed is not None
    assert staging.committed.grid.columns == 4


def test_discard_before_any_commit_returns_defaults(staging) -> None:
    staging.apply_draft_edit("rows", 9)
    assert staging.discard_draft()["rows"] == 5


def test_non_finite_color_edit_is_a_validation_error(staging) -> None:
    before = staging.draft
    with pytest.raises(ValidationError) as excinfo:
        staging.apply_draft_edit("fill_color", (float("inf"), 0, 0))
    assert excinfo.value.field == "fill_color"
    assert staging.draft is before
