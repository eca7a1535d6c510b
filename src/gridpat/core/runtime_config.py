# どこで: `src/gridpat/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: キャンバス寸法や出力先を、コードを変えずにユーザーが指定できるようにするため。

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from gridpat.core.color import ColorRGB255


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """gridpat の実行時設定。"""

    config_path: Path | None
    output_dir: Path
    canvas_size: tuple[int, int]
    background_color: ColorRGB255
    window_position: tuple[int, int]


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _CONFIG_CACHE = None
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()


def _default_config_candidates() -> tuple[Path, ...]:
    return (
        Path.cwd() / ".gridpat" / "config.yaml",
        Path.home() / ".config" / "gridpat" / "config.yaml",
    )


def _as_optional_path(value: Any) -> Path | None:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    return Path(os.path.expandvars(os.path.expanduser(s)))


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_int_tuple(value: Any, *, key: str, length: int) -> tuple[int, ...] | None:
    if value is None:
        return None
    if isinstance(value, (str, bytes)):
        raise RuntimeError(f"{key} は長さ {length} の整数配列である必要があります: got={value!r}")
    try:
        seq = list(value)
    except TypeError as exc:
        raise RuntimeError(f"{key} は長さ {length} の整数配列である必要があります: got={value!r}") from exc
    if len(seq) != length:
        raise RuntimeError(f"{key} は長さ {length} の整数配列である必要があります: got={value!r}")
    try:
        return tuple(int(v) for v in seq)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は長さ {length} の整数配列である必要があります: got={value!r}") from exc


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")
    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    return _load_yaml_text(path.read_text(encoding="utf-8"), source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("gridpat")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except OSError as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc
    return _load_yaml_text(blob, source="gridpat/resource/default_config.yaml")


def _require(value: Any, key: str) -> Any:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    return value


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち、トップレベルキー単位）:
    1) 同梱 default_config.yaml
    2) `./.gridpat/config.yaml` / `~/.config/gridpat/config.yaml`
    3) `set_config_path()` で指定したパス
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        payload.update(_load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload.update(_load_yaml_config(explicit_path))

    version = _require(payload.get("version"), "version")
    try:
        version_i = int(version)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"config.yaml の version は整数である必要があります: got={version!r}") from exc
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    paths = _as_mapping(payload.get("paths"), key="paths")
    output_dir = _require(_as_optional_path(paths.get("output_dir")), "paths.output_dir")

    canvas = _as_mapping(payload.get("canvas"), key="canvas")
    size = _require(_as_int_tuple(canvas.get("size"), key="canvas.size", length=2), "canvas.size")
    if size[0] <= 0 or size[1] <= 0:
        raise RuntimeError(f"canvas.size は正の [width, height] である必要があります: got={size!r}")
    background = _require(
        _as_int_tuple(canvas.get("background_color"), key="canvas.background_color", length=3),
        "canvas.background_color",
    )
    if not all(0 <= c <= 255 for c in background):
        raise RuntimeError(
            f"canvas.background_color は 0..255 の RGB である必要があります: got={background!r}"
        )

    ui = _as_mapping(payload.get("ui"), key="ui")
    window_position = _require(
        _as_int_tuple(ui.get("window_position"), key="ui.window_position", length=2),
        "ui.window_position",
    )

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        output_dir=output_dir,
        canvas_size=(size[0], size[1]),
        background_color=(background[0], background[1], background[2]),
        window_position=(window_position[0], window_position[1]),
    )
    _CONFIG_CACHE = cfg
    return cfg


def output_root_dir() -> Path:
    """出力ファイルを保存する既定ルートディレクトリを返す。"""

    return Path(runtime_config().output_dir)


__all__ = ["RuntimeConfig", "output_root_dir", "runtime_config", "set_config_path"]
