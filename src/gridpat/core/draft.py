# どこで: `src/gridpat/core/draft.py`。
# 何を: UI が編集する draft 設定（フラットなフィールド表）と、その Configuration への射影を提供する。
# なぜ: UI の編集単位（フィールド名, 値）と検証済みの描画設定を分離し、編集と適用を切り分けるため。

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from gridpat.core.config import (
    PATTERN_PARAMS_TYPES,
    Configuration,
    Grid,
    Mode,
    PatternKind,
    PatternSpec,
    Shape3D,
    ShapeKind,
    ShapeStyle,
    Zigzag,
    known_pattern_kind,
)
from gridpat.core.errors import ValidationError
from gridpat.core.meta import ParamMeta, normalize_input

FIELD_META: dict[str, ParamMeta] = {
    "mode": ParamMeta(kind="choice", choices=tuple(m.value for m in Mode)),
    "columns": ParamMeta(kind="int", ui_min=1, ui_max=10),
    "rows": ParamMeta(kind="int", ui_min=1, ui_max=10),
    "shape_type": ParamMeta(kind="choice", choices=tuple(k.value for k in ShapeKind)),
    "shape_size": ParamMeta(kind="float", ui_min=10.0, ui_max=200.0),
    "fill_color": ParamMeta(kind="rgb", ui_min=0, ui_max=255),
    "stroke_color": ParamMeta(kind="rgb", ui_min=0, ui_max=255),
    "stroke_weight": ParamMeta(kind="float", ui_min=0.0, ui_max=10.0),
    "rotation_x": ParamMeta(kind="float", ui_min=0.0, ui_max=360.0),
    "rotation_y": ParamMeta(kind="float", ui_min=0.0, ui_max=360.0),
    "rotation_z": ParamMeta(kind="float", ui_min=0.0, ui_max=360.0),
    "detail_x": ParamMeta(kind="int", ui_min=3, ui_max=24),
    "detail_y": ParamMeta(kind="int", ui_min=3, ui_max=24),
    "zigzag_vertices": ParamMeta(kind="int", ui_min=3, ui_max=50),
    "zigzag_depth": ParamMeta(kind="float", ui_min=1.0, ui_max=50.0),
    "use_pattern": ParamMeta(kind="bool"),
    # 未知の種別も draft には入れられる（描画時に UnsupportedPatternKind になる）。
    "pattern_type": ParamMeta(kind="str", choices=tuple(k.value for k in PatternKind)),
    "pattern_color_a": ParamMeta(kind="rgb", ui_min=0, ui_max=255),
    "pattern_color_b": ParamMeta(kind="rgb", ui_min=0, ui_max=255),
    "pattern_angle": ParamMeta(kind="float", ui_min=0.0, ui_max=360.0),
    "pattern_scale": ParamMeta(kind="float", ui_min=0.1, ui_max=2.0),
    "stripe_size": ParamMeta(kind="float", ui_min=1.0, ui_max=100.0),
    "stripe_circle_size": ParamMeta(kind="float", ui_min=1.0, ui_max=100.0),
    "polygon_sides": ParamMeta(kind="int", ui_min=3, ui_max=10),
    "polygon_radius": ParamMeta(kind="float", ui_min=10.0, ui_max=100.0),
    "radial_angle": ParamMeta(kind="float", ui_min=0.0, ui_max=math.pi),
    "wave_amplitude": ParamMeta(kind="float", ui_min=1.0, ui_max=100.0),
    "wave_frequency": ParamMeta(kind="float", ui_min=1.0, ui_max=50.0),
    "wave_phase": ParamMeta(kind="float", ui_min=0.0, ui_max=100.0),
    "dot_size": ParamMeta(kind="float", ui_min=1.0, ui_max=50.0),
    "dot_spacing": ParamMeta(kind="float", ui_min=1.0, ui_max=100.0),
    "checked_size": ParamMeta(kind="float", ui_min=1.0, ui_max=50.0),
    "checked_spacing": ParamMeta(kind="float", ui_min=1.0, ui_max=100.0),
    "cross_size": ParamMeta(kind="float", ui_min=1.0, ui_max=50.0),
    "cross_weight": ParamMeta(kind="float", ui_min=1.0, ui_max=20.0),
    "triangle_size": ParamMeta(kind="float", ui_min=1.0, ui_max=100.0),
    "triangle_spacing": ParamMeta(kind="float", ui_min=1.0, ui_max=100.0),
    "noise_scale": ParamMeta(kind="float", ui_min=0.1, ui_max=2.0),
}
"""draft フィールド名 -> ParamMeta。並び順は UI の表示順。"""

DEFAULT_VALUES: dict[str, Any] = {
    "mode": Mode.TWO_D.value,
    "columns": 5,
    "rows": 5,
    "shape_type": ShapeKind.CIRCLE.value,
    "shape_size": 30.0,
    "fill_color": (255, 0, 0),
    "stroke_color": (0, 0, 0),
    "stroke_weight": 1.0,
    "rotation_x": 0.0,
    "rotation_y": 0.0,
    "rotation_z": 0.0,
    "detail_x": 24,
    "detail_y": 16,
    "zigzag_vertices": 20,
    "zigzag_depth": 10.0,
    "use_pattern": False,
    "pattern_type": PatternKind.STRIPE.value,
    "pattern_color_a": (0, 0, 0),
    "pattern_color_b": (0, 0, 240),
    "pattern_angle": 0.0,
    "pattern_scale": 1.0,
    "stripe_size": 20.0,
    "stripe_circle_size": 20.0,
    "polygon_sides": 4,
    "polygon_radius": 30.0,
    "radial_angle": math.pi / 15.0,
    "wave_amplitude": 50.0,
    "wave_frequency": 20.0,
    "wave_phase": 40.0,
    "dot_size": 10.0,
    "dot_spacing": 20.0,
    "checked_size": 20.0,
    "checked_spacing": 60.0,
    "cross_size": 20.0,
    "cross_weight": 5.0,
    "triangle_size": 40.0,
    "triangle_spacing": 20.0,
    "noise_scale": 0.5,
}
"""UI 既定値。"""

# パターン種別 -> params コンストラクタへ渡す draft フィールド（引数順）。
_PATTERN_FIELDS: dict[PatternKind, tuple[str, ...]] = {
    PatternKind.STRIPE: ("stripe_size",),
    PatternKind.STRIPE_CIRCLE: ("stripe_circle_size",),
    PatternKind.STRIPE_POLYGON: ("polygon_sides", "stripe_size", "polygon_radius"),
    PatternKind.STRIPE_RADIAL: ("radial_angle",),
    PatternKind.WAVE: ("wave_amplitude", "wave_frequency", "wave_phase", "stripe_size"),
    PatternKind.DOT: ("dot_size", "dot_spacing"),
    PatternKind.CHECKED: ("checked_size", "checked_spacing"),
    PatternKind.CROSS: ("cross_size", "cross_weight"),
    PatternKind.TRIANGLE: ("triangle_size", "triangle_spacing"),
    PatternKind.NOISE: ("noise_scale",),
    PatternKind.NOISE_GRAD: ("noise_scale",),
}


@dataclass(frozen=True, slots=True)
class DraftSettings:
    """UI から編集される draft 設定の不変スナップショット。

    Parameters
    ----------
    items : tuple[tuple[str, Any], ...]
        FIELD_META 順に並んだ (フィールド名, 正規化済み値) のタプル列。

    Notes
    -----
    編集は `with_value` で新しいスナップショットを作って行い、既存インスタンスは変更しない。
    """

    items: tuple[tuple[str, Any], ...]

    def __getitem__(self, field: str) -> Any:
        for name, value in self.items:
            if name == field:
                return value
        raise KeyError(field)

    def as_dict(self) -> dict[str, Any]:
        """フィールド名 -> 値 の dict を返す。"""
        return dict(self.items)

    def with_value(self, field: str, value: Any) -> "DraftSettings":
        """1 フィールドだけ差し替えた新しい DraftSettings を返す。"""
        return DraftSettings(
            items=tuple((name, value if name == field else v) for name, v in self.items)
        )


def default_draft(overrides: Mapping[str, Any] | None = None) -> DraftSettings:
    """UI 既定値から DraftSettings を作る。

    Parameters
    ----------
    overrides : Mapping[str, Any] or None, optional
        既定値を上書きするフィールド。各値は `apply_edit` と同じ規則で正規化する。
    """

    draft = DraftSettings(items=tuple((name, DEFAULT_VALUES[name]) for name in FIELD_META))
    if overrides:
        for field, value in overrides.items():
            draft = apply_edit(draft, field, value)
    return draft


def apply_edit(draft: DraftSettings, field: str, value: Any) -> DraftSettings:
    """draft の 1 フィールドを UI 入力で更新した新しいスナップショットを返す。

    Raises
    ------
    ValidationError
        未知のフィールド名、または kind に従って正規化できない値の場合。
    """

    meta = FIELD_META.get(field)
    if meta is None:
        raise ValidationError(f"未知の draft フィールドです: {field!r}", field=field)
    normalized, err = normalize_input(value, meta)
    if normalized is None:
        raise ValidationError(
            f"{field} に不正な値が指定された: value={value!r}, error={err}",
            field=field,
        )
    return draft.with_value(field, normalized)


def _pattern_from_draft(d: Mapping[str, Any]) -> PatternSpec:
    kind_text = str(d["pattern_type"])
    kind = known_pattern_kind(kind_text)
    params = None
    if kind is not None:
        args = [d[name] for name in _PATTERN_FIELDS[kind]]
        params = PATTERN_PARAMS_TYPES[kind](*args)
    return PatternSpec(
        kind=kind_text,
        palette=(tuple(d["pattern_color_a"]), tuple(d["pattern_color_b"])),  # type: ignore[arg-type]
        angle=float(d["pattern_angle"]),
        scale=float(d["pattern_scale"]),
        params=params,
    )


def to_configuration(draft: DraftSettings) -> Configuration:
    """draft を検証済み Configuration へ射影して返す。

    mode/shape に関係しないフィールド（2D 時の回転など）は射影で捨てる。

    Raises
    ------
    ValidationError
        射影結果が Configuration の不変条件を満たさない場合。
    """

    d = draft.as_dict()
    mode = Mode(d["mode"])
    kind = ShapeKind(d["shape_type"])

    shape_3d = None
    if mode is Mode.THREE_D:
        shape_3d = Shape3D(
            rotation_x=float(d["rotation_x"]),
            rotation_y=float(d["rotation_y"]),
            rotation_z=float(d["rotation_z"]),
            detail_x=int(d["detail_x"]),
            detail_y=int(d["detail_y"]),
        )

    zigzag = None
    if kind is ShapeKind.ZIGZAG:
        zigzag = Zigzag(vertices=int(d["zigzag_vertices"]), depth_percent=float(d["zigzag_depth"]))

    return Configuration(
        mode=mode,
        grid=Grid(columns=int(d["columns"]), rows=int(d["rows"])),
        shape=ShapeStyle(
            kind=kind,
            size=float(d["shape_size"]),
            stroke_color=tuple(d["stroke_color"]),  # type: ignore[arg-type]
            fill_color=tuple(d["fill_color"]),  # type: ignore[arg-type]
            stroke_weight=float(d["stroke_weight"]),
        ),
        shape_3d=shape_3d,
        zigzag=zigzag,
        pattern=_pattern_from_draft(d) if d["use_pattern"] else None,
    )


__all__ = [
    "DEFAULT_VALUES",
    "DraftSettings",
    "FIELD_META",
    "apply_edit",
    "default_draft",
    "to_configuration",
]
