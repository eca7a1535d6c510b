# どこで: `src/gridpat/core/meta.py`。
# 何を: ParamMeta（GUI 表示/入力正規化のためのメタ情報）と入力正規化関数を提供する。
# なぜ: draft 編集の型変換を UI 実装から切り離し、単体テスト可能に保つため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from gridpat.core.color import coerce_rgb255


@dataclass(frozen=True, slots=True)
class ParamMeta:
    """draft フィールドの UI/正規化用メタ情報。

    ui_min/ui_max はスライダー初期レンジを示すだけで、実値をクランプしない。
    値域の検証は Configuration 構築時に行う。
    """

    kind: str  # "float" | "int" | "bool" | "str" | "choice" | "rgb"
    ui_min: Any | None = None
    ui_max: Any | None = None
    choices: Sequence[str] | None = None


def normalize_input(value: Any, meta: ParamMeta) -> tuple[Any | None, str | None]:
    """kind に応じて UI 入力を正規化し、(正規化値, エラー種別) を返す。"""

    kind = meta.kind

    if kind == "bool":
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in {"true", "1", "on", "yes"}:
                return True, None
            if lowered in {"false", "0", "off", "no"}:
                return False, None
            return None, "invalid_bool"
        return bool(value), None

    if kind == "int":
        if isinstance(value, bool):
            return None, "invalid_int"
        try:
            f = float(value)
        except Exception:
            return None, "invalid_int"
        if not f.is_integer():
            return None, "invalid_int"
        return int(f), None

    if kind == "float":
        if isinstance(value, bool):
            return None, "invalid_float"
        try:
            return float(value), None
        except Exception:
            return None, "invalid_float"

    if kind == "str":
        if value is None:
            return None, "invalid_string"
        return str(value), None

    if kind == "choice":
        # choice は choices 外を丸めずにエラーとする（設定の取り違えを防ぐ）。
        text = str(value).strip()
        choices = list(meta.choices) if meta.choices is not None else []
        if choices and text not in choices:
            return None, "invalid_choice"
        return text, None

    if kind == "rgb":
        try:
            return coerce_rgb255(value), None
        except (TypeError, ValueError):
            return None, "invalid_rgb"

    return None, "unknown_kind"


__all__ = ["ParamMeta", "normalize_input"]
