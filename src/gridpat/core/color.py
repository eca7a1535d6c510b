"""
どこで: `src/gridpat/core/color.py`。
何を: 色値（RGB255 タプル / `#RRGGBB` 文字列）の正規化と変換ユーティリティを提供する。
なぜ: UI 入力・設定モデル・各描画バックエンドで同じ色表現を共有するため。
"""

from __future__ import annotations

from typing import Any, cast

ColorRGB255 = tuple[int, int, int]


def parse_hex_color(text: str) -> ColorRGB255:
    """`#RRGGBB` / `RRGGBB` / `#RGB` 形式の文字列を RGB255 に変換して返す。

    Raises
    ------
    ValueError
        16 進カラー表記として解釈できない場合。
    """

    h = str(text).strip().lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    if len(h) != 6:
        raise ValueError(f"hex color must be #RRGGBB: {text!r}")
    try:
        return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
    except ValueError as exc:
        raise ValueError(f"hex color must be #RRGGBB: {text!r}") from exc


def coerce_rgb255(value: object) -> ColorRGB255:
    """値を RGB255 タプル `(r, g, b)`（0..255）に正規化して返す。

    Parameters
    ----------
    value : object
        `(r, g, b)` の 3 要素シーケンス、または `#RRGGBB` 文字列。

    Returns
    -------
    tuple[int, int, int]
        `int()` 化 + 0..255 clamp 済みの RGB。

    Raises
    ------
    ValueError
        長さ 3 のシーケンスでも 16 進カラー文字列でもない場合。
    """

    if isinstance(value, str):
        return parse_hex_color(value)

    r: object
    g: object
    b: object
    try:
        r, g, b = value  # type: ignore[misc]
    except Exception as exc:
        raise ValueError(f"rgb value must be a length-3 sequence: {value!r}") from exc

    def _clamp(v: object) -> int:
        try:
            iv = int(cast(Any, v))
        except OverflowError as exc:
            raise ValueError(f"rgb component must be finite: {v!r}") from exc
        return 0 if iv < 0 else 255 if iv > 255 else iv

    return _clamp(r), _clamp(g), _clamp(b)


def rgb255_to_hex(rgb: ColorRGB255) -> str:
    """RGB255 を `#RRGGBB` に変換して返す。"""

    r, g, b = coerce_rgb255(rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


__all__ = ["ColorRGB255", "coerce_rgb255", "parse_hex_color", "rgb255_to_hex"]
