# どこで: `src/gridpat/core/errors.py`。
# 何を: 設定検証・パターン解決・バックエンド準備の例外階層を定義する。
# なぜ: 呼び出し側（設定層）が失敗の種類ごとに扱いを分けられるようにするため。

from __future__ import annotations


class GridPatternError(Exception):
    """gridpat が送出する例外の基底クラス。"""


class ValidationError(GridPatternError, ValueError):
    """設定値が不正な場合に送出する。

    draft は commit されず、直前の committed 設定がそのまま有効に残る。
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class UnsupportedPatternKind(GridPatternError):
    """未対応のパターン種別が指定された場合に送出する。

    フレームは破棄され、直前に描画済みのフレームが表示されたまま残る。
    """

    def __init__(self, kind: object) -> None:
        super().__init__(f"未対応のパターン種別です: {kind!r}")
        self.kind = kind


class BackendUnavailable(GridPatternError, RuntimeError):
    """描画バックエンドがまだ利用可能でない場合に送出する。

    Renderer はこれを失敗として扱わず、描画要求を保留する。
    """


__all__ = [
    "BackendUnavailable",
    "GridPatternError",
    "UnsupportedPatternKind",
    "ValidationError",
]
