# どこで: `src/gridpat/interactive/draw_window.py`。
# 何を: プレビュー用の pyglet ウィンドウ生成を行う。
# なぜ: interactive 依存をこの層に閉じ込め、core/export をヘッドレスに保つため。

from __future__ import annotations

import pyglet
from pyglet.gl import Config
from pyglet.window import Window


def create_draw_window(
    canvas_size: tuple[int, int],
    *,
    position: tuple[int, int] | None = None,
    caption: str = "gridpat",
) -> Window:
    """キャンバス寸法のプレビューウィンドウを生成する。"""
    # 図形の輪郭を滑らかにするために MSAA を有効化
    config = Config(double_buffer=True, sample_buffers=1, samples=4)  # type: ignore[abstract]
    canvas_w, canvas_h = canvas_size
    window = pyglet.window.Window(  # type: ignore[abstract]
        width=int(canvas_w),
        height=int(canvas_h),
        resizable=False,
        caption=caption,
        config=config,
    )
    if position is not None:
        window.set_location(int(position[0]), int(position[1]))
    return window
