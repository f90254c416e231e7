"""Pill splitter core: pill model, split geometry and the gesture state machine.

The package has no GUI dependency; :mod:`pillsplit_playground` hosts it in a
PySide6 canvas and :mod:`pillsplit_core.cli` replays gestures headlessly.
"""
from __future__ import annotations

from .config import DEFAULT_CONFIG, SplitterConfig
from .geometry import SplitKind, decide_split, draft_rect, hit_test, split_shape, split_shapes
from .gestures import (
    Click,
    GestureController,
    GestureState,
    ManualScheduler,
    Move,
    Phase,
    Press,
    Release,
    ResetMoved,
    transition,
)
from .shapes import CornerStyle, Shape, ShapeStore

__all__ = [
    "DEFAULT_CONFIG",
    "Click",
    "CornerStyle",
    "GestureController",
    "GestureState",
    "ManualScheduler",
    "Move",
    "Phase",
    "Press",
    "Release",
    "ResetMoved",
    "Shape",
    "ShapeStore",
    "SplitKind",
    "SplitterConfig",
    "decide_split",
    "draft_rect",
    "hit_test",
    "split_shape",
    "split_shapes",
    "transition",
]
