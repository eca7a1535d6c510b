# どこで: `src/gridpat/__init__.py`。
# 何を: ルート `gridpat` パッケージを定義し、主要な型と run を再エクスポートする。
# なぜ: import 起点を `gridpat` に統一するため。

from __future__ import annotations

from gridpat.api import run
from gridpat.core.config import Configuration, Mode, PatternKind, ShapeKind
from gridpat.core.draft import DraftSettings, apply_edit, default_draft, to_configuration
from gridpat.core.errors import (
    BackendUnavailable,
    GridPatternError,
    UnsupportedPatternKind,
    ValidationError,
)
from gridpat.core.render import build_frame, issue_frame
from gridpat.core.renderer import Renderer, RenderStatus
from gridpat.core.staging import StagingController

__all__ = [
    "BackendUnavailable",
    "Configuration",
    "DraftSettings",
    "GridPatternError",
    "Mode",
    "PatternKind",
    "RenderStatus",
    "Renderer",
    "ShapeKind",
    "StagingController",
    "UnsupportedPatternKind",
    "ValidationError",
    "apply_edit",
    "build_frame",
    "default_draft",
    "issue_frame",
    "run",
    "to_configuration",
]
