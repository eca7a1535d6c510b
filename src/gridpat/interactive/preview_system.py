# どこで: `src/gridpat/interactive/preview_system.py`。
# 何を: プレビューウィンドウ・PygletBackend・StagingController を配線し、キー入力で commit/保存を行う。
# なぜ: `gridpat.api.run()` を「配線」に寄せ、ウィンドウ側の責務を独立させるため。

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pyglet
from pyglet.window import key

from gridpat.core.errors import GridPatternError
from gridpat.core.renderer import Renderer
from gridpat.core.runtime_config import output_root_dir
from gridpat.core.staging import StagingController
from gridpat.export.svg import export_frame_svg
from gridpat.interactive.draw_window import create_draw_window
from gridpat.interactive.pyglet_backend import PygletBackend, PygletSurface

_logger = logging.getLogger(__name__)


class PreviewSystem:
    """プレビューウィンドウのサブシステム。

    Notes
    -----
    キー操作:
    - Enter: draft を commit して描き直す。
    - S: 最後に描いたフレームを SVG として保存する。
    - R: draft を既定値へ戻す（描き直しは次の commit）。
    """

    def __init__(
        self,
        staging: StagingController,
        backend: PygletBackend,
        *,
        canvas_size: tuple[int, int],
        window_position: tuple[int, int] | None = None,
    ) -> None:
        self._staging = staging
        self._backend = backend
        self._svg_output_path = output_root_dir() / "svg" / "gridpat.svg"

        self.window = create_draw_window(canvas_size, position=window_position)
        self.window.push_handlers(on_key_press=self._on_key_press)

        # ウィンドウ（GL コンテキスト）ができた時点でバックエンドが使えるようになる。
        backend.attach(self.window)
        self._report_errors(self.renderer.notify_ready)

    @property
    def renderer(self) -> Renderer:
        return self._staging.renderer

    def _report_errors(self, action: Callable[[], object]) -> None:
        try:
            action()
        except GridPatternError as exc:
            # 直前のフレームは残っているので、ウィンドウは閉じずに報告だけ行う。
            _logger.error("描画に失敗しました: %s", exc)

    def _on_key_press(self, symbol: int, _modifiers: int) -> None:
        if symbol in (key.ENTER, key.RETURN):
            self._report_errors(self._staging.commit)
            return
        if symbol == key.S:
            path = self.save_svg()
            if path is not None:
                print(f"Saved SVG: {path}")
            return
        if symbol == key.R:
            self._staging.reset_draft()

    def save_svg(self) -> Path | None:
        """最後に描画したフレームを SVG として保存し、保存先パスを返す。"""
        frame = self.renderer.last_frame
        if frame is None:
            _logger.info("まだ描画されたフレームがないため SVG を保存しません")
            return None
        return export_frame_svg(frame, self._svg_output_path)

    def draw_frame(self) -> None:
        """現在の surface をウィンドウへ描く（flip は pyglet が行う）。"""
        self.window.clear()
        surface = self.renderer.surface
        if isinstance(surface, PygletSurface):
            surface.render()

    def run(self, *, fps: float = 30.0) -> None:
        """ウィンドウが閉じられるまでループを実行する。"""

        def request_exit(*_: object) -> None:
            pyglet.app.exit()

        self.window.push_handlers(on_close=request_exit, on_draw=self.draw_frame)

        def draw_all(dt: float) -> None:
            if self.window in pyglet.app.windows:
                self.window.draw(dt)

        if fps <= 0:
            pyglet.clock.schedule(draw_all)
        else:
            pyglet.clock.schedule_interval(draw_all, 1.0 / float(fps))
        try:
            pyglet.app.run(interval=None)
        finally:
            pyglet.clock.unschedule(draw_all)

    def close(self) -> None:
        self.renderer.close()
        self._backend.detach()
        self.window.close()


__all__ = ["PreviewSystem"]
