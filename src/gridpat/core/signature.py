# src/gridpat/core/signature.py
# 描画命令列の内容署名（決定的ダイジェスト）を計算する。
# 同じ設定・同じキャンバスから同じ署名が得られることを検証/ログに使う。

from __future__ import annotations

import dataclasses
from enum import Enum
from hashlib import blake2b
from math import isfinite
from typing import Any

DEFAULT_SCHEMA_VERSION = 1


def _normalize_value(value: Any) -> Any:
    """値を署名用に正規化する。

    Raises
    ------
    TypeError
        サポートされない型が渡された場合。
    ValueError
        float の値が NaN/inf の場合。
    """
    if value is None:
        return None
    if isinstance(value, Enum):
        return f"{value.__class__.__name__}.{value.name}"
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        v = float(value)
        if not isfinite(v):
            raise ValueError("非有限の float は署名に使用できない")
        if v == 0.0:
            v = 0.0
        if isinstance(value, int):
            return int(v)
        return v
    if isinstance(value, str):
        return value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return (
            type(value).__name__,
            tuple(
                (f.name, _normalize_value(getattr(value, f.name)))
                for f in dataclasses.fields(value)
            ),
        )
    if isinstance(value, (list, tuple)):
        return tuple(_normalize_value(v) for v in value)
    raise TypeError(f"正規化できない値型: {type(value)!r}")


def _update_hash_with_value(hasher: blake2b, value: Any) -> None:
    """正規化済み値をハッシュに追加する。"""
    if value is None:
        hasher.update(b"n")
        return
    if isinstance(value, bool):
        hasher.update(b"b1" if value else b"b0")
        return
    if isinstance(value, (int, float)):
        hasher.update(b"f")
        hasher.update(f"{value:.17g}".encode("ascii"))
        return
    if isinstance(value, str):
        hasher.update(b"s")
        hasher.update(value.encode("utf-8"))
        return
    if isinstance(value, tuple):
        hasher.update(b"t[")
        for item in value:
            _update_hash_with_value(hasher, item)
            hasher.update(b",")
        hasher.update(b"]")
        return
    raise TypeError(f"署名に使用できない値型: {type(value)!r}")


def compute_signature(
    value: Any,
    *,
    schema_version: int = DEFAULT_SCHEMA_VERSION,
) -> str:
    """任意の dataclass/タプル構造から内容署名を計算する。

    Parameters
    ----------
    value : Any
        Frame や DrawInstruction 列など、dataclass とプリミティブ値からなる構造。
    schema_version : int, optional
        署名スキーマのバージョン。

    Returns
    -------
    str
        16 バイト blake2b の hexdigest。
    """
    h = blake2b(digest_size=16)
    h.update(f"v{schema_version}".encode("ascii"))
    h.update(b"|")
    _update_hash_with_value(h, _normalize_value(value))
    return h.hexdigest()


__all__ = ["compute_signature"]
