"""
どこで: `src/gridpat/api/runner.py`。公開 API のランナー実装。
何を: pyglet ウィンドウでグリッドをプレビューし、Enter で draft を commit するランナーを提供する。
なぜ: `main.py` を実行して実際にグリッド描画を確認できる経路を用意するため。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import pyglet

from gridpat.core.backend import PatternBackend
from gridpat.core.draft import default_draft
from gridpat.core.errors import GridPatternError
from gridpat.core.renderer import Renderer
from gridpat.core.runtime_config import runtime_config, set_config_path
from gridpat.core.staging import StagingController
from gridpat.interactive.preview_system import PreviewSystem
from gridpat.interactive.pyglet_backend import PygletBackend

_logger = logging.getLogger(__name__)


def run(
    draft: Mapping[str, Any] | None = None,
    *,
    config_path: str | Path | None = None,
    pattern_backend: PatternBackend | None = None,
    fps: float = 30.0,
) -> None:
    """プレビューウィンドウを開き、draft 設定のグリッドを描画する。

    Parameters
    ----------
    draft : Mapping[str, Any] or None
        既定 draft を上書きするフィールド（例: `{"shape_type": "zigzag"}`）。
        起動直後に 1 回 commit する。
    config_path : str or Path or None
        実行時設定 config.yaml の明示パス。
    pattern_backend : PatternBackend or None
        パターン塗り capability。None の場合パターンは単色塗りになる。
    fps : float
        ウィンドウの再描画頻度。

    Returns
    -------
    None
        ウィンドウを閉じると制御を返す。
    """

    if config_path is not None:
        set_config_path(config_path)
    cfg = runtime_config()

    pyglet.options["vsync"] = True

    backend = PygletBackend()
    renderer = Renderer(
        backend,
        canvas_size=cfg.canvas_size,
        background=cfg.background_color,
        pattern_backend=pattern_backend,
    )
    staging = StagingController(renderer, default_draft(draft))

    # ウィンドウ作成前の commit は保留され、ウィンドウ作成時に 1 回だけ描かれる。
    try:
        staging.commit()
    except GridPatternError as exc:
        _logger.error("初期設定を適用できませんでした: %s", exc)

    preview = PreviewSystem(
        staging,
        backend,
        canvas_size=cfg.canvas_size,
        window_position=cfg.window_position,
    )
    try:
        preview.run(fps=fps)
    finally:
        preview.close()
