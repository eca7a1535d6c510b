# どこで: `src/gridpat/core/renderer.py`。
# 何を: 描画面（surface）の唯一の所有者として、準備完了シグナル待ち・保留描画・surface の張り替えを管理する。
# なぜ: 「どの設定をいつ描くか」の状態を 1 箇所に閉じ、surface が同時に 2 つ存在しないことを保証するため。

from __future__ import annotations

import logging
from enum import Enum

from gridpat.core.backend import DrawingBackend, PatternBackend, Surface
from gridpat.core.color import ColorRGB255
from gridpat.core.config import Configuration
from gridpat.core.errors import BackendUnavailable, GridPatternError
from gridpat.core.render import DEFAULT_BACKGROUND, Frame, build_frame, frame_signature, issue_frame

_logger = logging.getLogger(__name__)


class RenderStatus(str, Enum):
    """描画要求の結果。"""

    RENDERED = "rendered"
    PENDING = "pending"


class Renderer:
    """committed 設定を描画バックエンドへ描くランナー。

    Notes
    -----
    - 保留できる描画要求は高々 1 つ。未描画の要求は新しい要求で置き換える。
    - 新しい surface を作る前に、古い surface を必ず破棄する。
    - フレーム間で保持するのは surface と直近フレームだけで、
      フレームの内容は毎回 Configuration から作り直す。
    """

    def __init__(
        self,
        backend: DrawingBackend,
        *,
        canvas_size: tuple[int, int] = (600, 600),
        background: ColorRGB255 = DEFAULT_BACKGROUND,
        pattern_backend: PatternBackend | None = None,
        ready: bool = False,
    ) -> None:
        """Renderer を初期化する。

        Parameters
        ----------
        backend : DrawingBackend
            描画面を生成/破棄するバックエンド。
        canvas_size : tuple[int, int], optional
            キャンバス寸法 (width, height)。
        background : ColorRGB255, optional
            背景色。
        pattern_backend : PatternBackend or None, optional
            パターン塗りの capability。None ならパターンは単色塗りで代替する。
        ready : bool, optional
            True ならバックエンドが最初から利用可能とみなす（準備完了シグナル不要）。
        """

        canvas_w, canvas_h = canvas_size
        if int(canvas_w) <= 0 or int(canvas_h) <= 0:
            raise ValueError("canvas_size は正の (width, height) である必要がある")

        self._backend = backend
        self._pattern_backend = pattern_backend
        self._canvas_size = (int(canvas_w), int(canvas_h))
        self._background = background
        self._ready = bool(ready)
        self._surface: Surface | None = None
        self._pending: Configuration | None = None
        self._last_frame: Frame | None = None

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def pattern_available(self) -> bool:
        """パターン塗り capability が注入されていれば True。"""
        return self._pattern_backend is not None

    @property
    def surface(self) -> Surface | None:
        """現在有効な surface。まだ 1 度も描いていなければ None。"""
        return self._surface

    @property
    def pending(self) -> Configuration | None:
        """準備完了待ちの Configuration。"""
        return self._pending

    @property
    def last_frame(self) -> Frame | None:
        """最後に描画を完了したフレーム。"""
        return self._last_frame

    def request(self, config: Configuration) -> RenderStatus:
        """config で 1 フレーム描く。未準備なら保留する。

        Raises
        ------
        UnsupportedPatternKind
            パターン種別が未対応の場合。フレームは破棄され、既存の surface はそのまま残る。
        """

        if not self._ready:
            if self._pending is not None:
                _logger.debug("未描画の保留要求を新しい要求で置き換えます")
            self._pending = config
            return RenderStatus.PENDING
        return self._render(config)

    def notify_ready(self) -> RenderStatus | None:
        """バックエンドの準備完了を通知する。

        保留中の要求があればちょうど 1 フレーム描き、その結果を返す。
        保留がなければ None を返す。
        """

        self._ready = True
        pending = self._pending
        if pending is None:
            return None
        self._pending = None
        return self._render(pending)

    def _render(self, config: Configuration) -> RenderStatus:
        try:
            frame = build_frame(config, self._canvas_size, background=self._background)
        except GridPatternError as exc:
            _logger.warning("フレームを破棄しました（直前の描画を保持）: %s", exc)
            raise

        if self._surface is not None:
            self._backend.dispose(self._surface)
            self._surface = None

        try:
            surface = self._backend.create_surface(
                self._canvas_size[0],
                self._canvas_size[1],
                frame.mode,
            )
        except BackendUnavailable:
            _logger.info("描画バックエンドが未準備のため描画を保留します")
            self._ready = False
            self._pending = config
            return RenderStatus.PENDING

        try:
            issue_frame(frame, surface, pattern_backend=self._pattern_backend)
        except Exception:
            # 描きかけの surface は公開しない。
            _logger.warning("描画途中で失敗したためフレームを破棄しました", exc_info=True)
            self._backend.dispose(surface)
            raise
        self._surface = surface
        self._last_frame = frame
        _logger.debug("frame rendered: signature=%s", frame_signature(frame))
        return RenderStatus.RENDERED

    def close(self) -> None:
        """所有している surface を破棄する。"""

        if self._surface is not None:
            self._backend.dispose(self._surface)
            self._surface = None
        self._pending = None


__all__ = ["RenderStatus", "Renderer"]
