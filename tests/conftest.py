"""テスト共通の記録用 Surface / Backend。"""

from __future__ import annotations

from typing import Any

import pytest

from gridpat.core.config import Mode
from gridpat.core.errors import BackendUnavailable


class RecordingSurface:
    """呼ばれた描画コマンドを (名前, 引数...) のタプル列として記録する。"""

    def __init__(self, width: int, height: int, mode: Mode) -> None:
        self.size = (width, height)
        self.mode = mode
        self.calls: list[tuple[Any, ...]] = []
        self.disposed = False

    def background(self, color):
        self.calls.append(("background", color))

    def push(self):
        self.calls.append(("push",))

    def pop(self):
        self.calls.append(("pop",))

    def translate(self, x, y, z=0.0):
        self.calls.append(("translate", x, y, z))

    def rotate_x(self, degrees):
        self.calls.append(("rotate_x", degrees))

    def rotate_y(self, degrees):
        self.calls.append(("rotate_y", degrees))

    def rotate_z(self, degrees):
        self.calls.append(("rotate_z", degrees))

    def stroke(self, color):
        self.calls.append(("stroke", color))

    def stroke_weight(self, weight):
        self.calls.append(("stroke_weight", weight))

    def fill(self, color):
        self.calls.append(("fill", color))

    def draw(self, primitive):
        self.calls.append(("draw", primitive))

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    def calls_named(self, name: str) -> list[tuple[Any, ...]]:
        return [c for c in self.calls if c[0] == name]


class FakeBackend:
    """RecordingSurface を生成する DrawingBackend。available=False の間は未準備。"""

    def __init__(self, *, available: bool = True) -> None:
        self.available = available
        self.surfaces: list[RecordingSurface] = []
        self.events: list[tuple[str, int]] = []

    def create_surface(self, width: int, height: int, mode: Mode) -> RecordingSurface:
        if not self.available:
            raise BackendUnavailable("fake backend is not ready")
        surface = RecordingSurface(width, height, mode)
        self.surfaces.append(surface)
        self.events.append(("create", len(self.surfaces) - 1))
        return surface

    def dispose(self, surface: RecordingSurface) -> None:
        surface.disposed = True
        self.events.append(("dispose", self.surfaces.index(surface)))

    @property
    def live_surfaces(self) -> list[RecordingSurface]:
        return [s for s in self.surfaces if not s.disposed]


class RecordingPatternBackend:
    """fill_pattern の呼び出しを記録し、輪郭だけ描く PatternBackend。"""

    def __init__(self) -> None:
        self.requests: list[Any] = []

    def fill_pattern(self, surface, request, primitive) -> None:
        self.requests.append(request)
        surface.draw(primitive)


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def unavailable_backend() -> FakeBackend:
    return FakeBackend(available=False)


@pytest.fixture
def recording_surface_factory():
    def _make(mode: Mode = Mode.TWO_D, size: tuple[int, int] = (600, 600)) -> RecordingSurface:
        return RecordingSurface(size[0], size[1], mode)

    return _make


@pytest.fixture
def pattern_backend() -> RecordingPatternBackend:
    return RecordingPatternBackend()
