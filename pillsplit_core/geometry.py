"""Geometry for pill drawing and splitting.

Everything here is pure: inputs are immutable :class:`~pillsplit_core.shapes.Shape`
values and plain coordinates, outputs are new values. The only outside hook is
the ``allocate_id`` callable used to stamp freshly created pills; it is called
once per emitted pill, in emission order, so ids stay monotonic.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np

from .config import DEFAULT_CONFIG, SplitterConfig
from .shapes import CornerStyle, IdAllocator, Point, Shape

logger = logging.getLogger(__name__)

Rect = Tuple[float, float, float, float]


class SplitKind(str, Enum):
    FOUR_WAY = "four_way"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    NUDGE = "nudge"
    NONE = "none"


@dataclass(frozen=True)
class SplitDecision:
    """Intermediate values of the split test for one pill and one click."""

    kind: SplitKind
    intersects_v: bool
    intersects_h: bool
    split_x: float
    split_y: float


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def draft_rect(start: Point, pointer: Point, config: SplitterConfig = DEFAULT_CONFIG) -> Rect:
    """Axis-aligned rect spanning ``start`` and ``pointer``, never below ``min_size``.

    The origin is pinned at 0 on each axis; a pointer past the surface edge
    stretches the rect up to that edge.
    """
    sx, sy = float(start[0]), float(start[1])
    px, py = float(pointer[0]), float(pointer[1])
    x = max(0.0, min(sx, px))
    y = max(0.0, min(sy, py))
    width = max(max(sx, px) - x, config.min_size)
    height = max(max(sy, py) - y, config.min_size)
    return (x, y, width, height)


def crossed_threshold(start: Point, pointer: Point, config: SplitterConfig = DEFAULT_CONFIG) -> bool:
    """True once the pointer is more than ``draw_threshold`` away on either axis."""
    return (
        abs(pointer[0] - start[0]) > config.draw_threshold
        or abs(pointer[1] - start[1]) > config.draw_threshold
    )


def decide_split(shape: Shape, click: Point, config: SplitterConfig = DEFAULT_CONFIG) -> SplitDecision:
    cx, cy = float(click[0]), float(click[1])
    sx, sy, w, h = shape.x, shape.y, shape.width, shape.height
    margin = config.split_margin

    intersects_v = sx <= cx <= sx + w
    intersects_h = sy <= cy <= sy + h
    split_x = clamp(cx - sx, 0.0, w)
    split_y = clamp(cy - sy, 0.0, h)
    can_split_v = intersects_v and split_x >= margin and (w - split_x) >= margin
    can_split_h = intersects_h and split_y >= margin and (h - split_y) >= margin

    if can_split_v and can_split_h:
        kind = SplitKind.FOUR_WAY
    elif can_split_v:
        kind = SplitKind.VERTICAL
    elif can_split_h:
        kind = SplitKind.HORIZONTAL
    elif intersects_v or intersects_h:
        kind = SplitKind.NUDGE
    else:
        kind = SplitKind.NONE
    return SplitDecision(kind, intersects_v, intersects_h, split_x, split_y)


def nudge_position(shape: Shape, click: Point, decision: SplitDecision, config: SplitterConfig = DEFAULT_CONFIG) -> Point:
    """New origin for a pill pushed away from a click too close to its edge.

    Each axis whose band contains the click is handled on its own; the other
    axis keeps its coordinate.
    """
    cx, cy = float(click[0]), float(click[1])
    center_x, center_y = shape.center
    gap = config.nudge_gap
    x, y = shape.x, shape.y
    if decision.intersects_v:
        x = max(0.0, cx - shape.width - gap) if center_x < cx else cx + gap
    if decision.intersects_h:
        y = max(0.0, cy - shape.height - gap) if center_y < cy else cy + gap
    return (x, y)


def split_shape(
    shape: Shape,
    click: Point,
    allocate_id: IdAllocator,
    config: SplitterConfig = DEFAULT_CONFIG,
) -> Tuple[SplitKind, Tuple[Shape, ...]]:
    """Outcome of one click against one pill.

    Returns the outcome kind and the pills that take the original's place:
    four or two sub-pills, a single nudged clone, or the untouched original.
    """
    decision = decide_split(shape, click, config)
    kind = decision.kind
    sx, sy, w, h = shape.x, shape.y, shape.width, shape.height
    split_x, split_y = decision.split_x, decision.split_y
    radius = config.corner_radius

    def make(x: float, y: float, width: float, height: float, *corners: str) -> Shape:
        return Shape(
            id=allocate_id(),
            x=x,
            y=y,
            width=width,
            height=height,
            color=shape.color,
            corners=CornerStyle.only(*corners, radius=radius),
        )

    if kind is SplitKind.FOUR_WAY:
        result = (
            make(sx, sy, split_x, split_y, "top_left"),
            make(sx + split_x, sy, w - split_x, split_y, "top_right"),
            make(sx, sy + split_y, split_x, h - split_y, "bottom_left"),
            make(sx + split_x, sy + split_y, w - split_x, h - split_y, "bottom_right"),
        )
    elif kind is SplitKind.VERTICAL:
        result = (
            make(sx, sy, split_x, h, "top_left", "bottom_left"),
            make(sx + split_x, sy, w - split_x, h, "top_right", "bottom_right"),
        )
    elif kind is SplitKind.HORIZONTAL:
        result = (
            make(sx, sy, w, split_y, "top_left", "top_right"),
            make(sx, sy + split_y, w, h - split_y, "bottom_left", "bottom_right"),
        )
    elif kind is SplitKind.NUDGE:
        x, y = nudge_position(shape, click, decision, config)
        result = (
            Shape(
                id=allocate_id(),
                x=x,
                y=y,
                width=w,
                height=h,
                color=shape.color,
                corners=CornerStyle.uniform(radius),
            ),
        )
    else:
        result = (shape,)

    if kind is not SplitKind.NONE:
        logger.info(
            "Shape %s: %s at (%.1f, %.1f) -> %s",
            shape.id,
            kind.value,
            click[0],
            click[1],
            [s.id for s in result],
        )
    return kind, result


def split_shapes(
    shapes: Sequence[Shape],
    click: Point,
    allocate_id: IdAllocator,
    config: SplitterConfig = DEFAULT_CONFIG,
) -> Tuple[Shape, ...]:
    """Map one click over every pill independently, preserving order."""
    out = []
    for shape in shapes:
        _, produced = split_shape(shape, click, allocate_id, config)
        out.extend(produced)
    return tuple(out)


def bounds_array(shapes: Sequence[Shape]) -> np.ndarray:
    """Nx4 array of ``(x0, y0, x1, y1)`` rows."""
    if not shapes:
        return np.zeros((0, 4), dtype=float)
    return np.asarray([s.bounds() for s in shapes], dtype=float)


def hit_test(shapes: Sequence[Shape], point: Point) -> Optional[int]:
    """Index of the topmost (last drawn) pill containing ``point``.

    Bounds are half-open, ``[x0, x1) x [y0, y1)``, so a point on a shared edge
    between two split siblings belongs to exactly one of them.
    """
    boxes = bounds_array(shapes)
    if boxes.shape[0] == 0:
        return None
    px, py = float(point[0]), float(point[1])
    inside = (boxes[:, 0] <= px) & (px < boxes[:, 2]) & (boxes[:, 1] <= py) & (py < boxes[:, 3])
    hits = np.flatnonzero(inside)
    if hits.size == 0:
        return None
    index = int(hits[-1])
    logger.debug("Hit test at (%.1f, %.1f) -> shape %s", px, py, shapes[index].id)
    return index


__all__ = [
    "Rect",
    "SplitDecision",
    "SplitKind",
    "bounds_array",
    "clamp",
    "crossed_threshold",
    "decide_split",
    "draft_rect",
    "hit_test",
    "nudge_position",
    "split_shape",
    "split_shapes",
]
