# どこで: `src/gridpat/core/staging.py`。
# 何を: draft（編集中）と committed（描画中）の 2 段の設定を持ち、明示的な commit でだけ描画を要求する。
# なぜ: UI の編集のたびに描き直さず、「適用」操作と描画を 1 対 1 に対応させるため。

from __future__ import annotations

import logging
from typing import Any, Mapping

from gridpat.core.config import Configuration
from gridpat.core.draft import DraftSettings, apply_edit, default_draft, to_configuration
from gridpat.core.errors import ValidationError
from gridpat.core.renderer import Renderer, RenderStatus

_logger = logging.getLogger(__name__)


class StagingController:
    """draft/committed の 2 段ステージングを管理する。

    Notes
    -----
    - draft の編集は描画を起こさない。
    - `commit` は draft を検証してから committed を置き換え、描画を 1 回要求する。
      検証に失敗した場合、committed は変わらない。
    """

    def __init__(self, renderer: Renderer, draft: DraftSettings | None = None) -> None:
        self._renderer = renderer
        self._draft = draft if draft is not None else default_draft()
        self._committed: Configuration | None = None
        self._committed_draft: DraftSettings | None = None

    @property
    def draft(self) -> DraftSettings:
        return self._draft

    @property
    def committed(self) -> Configuration | None:
        """最後に commit に成功した Configuration。"""
        return self._committed

    @property
    def renderer(self) -> Renderer:
        return self._renderer

    def apply_draft_edit(self, field: str, value: Any) -> DraftSettings:
        """draft の 1 フィールドを更新する。描画は起こさない。

        Raises
        ------
        ValidationError
            未知のフィールド、または正規化できない値の場合。draft は変わらない。
        """

        self._draft = apply_edit(self._draft, field, value)
        return self._draft

    def apply_draft_edits(self, edits: Mapping[str, Any]) -> DraftSettings:
        """複数フィールドをまとめて更新する。1 つでも失敗したら draft は変わらない。"""

        draft = self._draft
        for field, value in edits.items():
            draft = apply_edit(draft, field, value)
        self._draft = draft
        return draft

    def commit(self) -> RenderStatus:
        """draft を committed に昇格し、描画を 1 回要求する。

        Returns
        -------
        RenderStatus
            描画済みなら RENDERED、バックエンド未準備で保留されたなら PENDING。

        Raises
        ------
        ValidationError
            draft が Configuration に射影できない場合（committed は変わらない）。
        UnsupportedPatternKind
            committed は更新済みだが、フレームは破棄された場合。
        """

        try:
            config = to_configuration(self._draft)
        except ValidationError as exc:
            _logger.warning("commit を中止しました: %s", exc)
            raise
        self._committed = config
        self._committed_draft = self._draft
        _logger.info(
            "commit: mode=%s shape=%s grid=%dx%d pattern=%s",
            config.mode.value,
            config.shape.kind.value,
            config.grid.columns,
            config.grid.rows,
            None if config.pattern is None else config.pattern.kind,
        )
        return self._renderer.request(config)

    def reset_draft(self) -> DraftSettings:
        """draft を UI 既定値へ戻す。committed は変えない。"""

        self._draft = default_draft()
        return self._draft

    def discard_draft(self) -> DraftSettings:
        """未 commit の編集を捨て、draft を最後に commit した時点へ戻す。

        まだ commit していない場合は既定値へ戻す。
        """

        if self._committed_draft is None:
            self._draft = default_draft()
        else:
            self._draft = self._committed_draft
        return self._draft


__all__ = ["StagingController"]
