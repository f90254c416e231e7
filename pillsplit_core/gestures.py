"""Pointer gesture state machine: draw, drag and click-in-place.

The machine itself is :func:`transition`, a pure function from the current
:class:`GestureState` and one pointer event to the next state plus a tuple of
effects. :class:`GestureController` feeds host events through it and carries
the effects out against a :class:`~pillsplit_core.shapes.ShapeStore`.

A gesture is ``press -> move* -> release -> click``. The ``moved`` flag set by
a draw or a drag has to survive the release so the click that follows can see
it and skip splitting; it is cleared afterwards by a deferred ``ResetMoved``
tagged with the press generation, so a late reset never clears a newer
gesture's flag.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Tuple, Union

from .config import DEFAULT_CONFIG, SplitterConfig
from .geometry import Rect, crossed_threshold, draft_rect, split_shapes
from .shapes import CornerStyle, Point, Shape, ShapeStore

logger = logging.getLogger(__name__)

Scheduler = Callable[[int, Callable[[], None]], None]


class Phase(str, Enum):
    IDLE = "idle"
    POTENTIAL_DRAW = "potential_draw"
    DRAWING = "drawing"
    DRAGGING = "dragging"


# ---------------------------------------------------------------------------
# Events


@dataclass(frozen=True)
class Press:
    point: Point
    target_id: Optional[int] = None
    target_origin: Optional[Point] = None


@dataclass(frozen=True)
class Move:
    point: Point


@dataclass(frozen=True)
class Release:
    point: Point


@dataclass(frozen=True)
class Click:
    point: Point


@dataclass(frozen=True)
class ResetMoved:
    generation: int


Event = Union[Press, Move, Release, Click, ResetMoved]


# ---------------------------------------------------------------------------
# Effects


@dataclass(frozen=True)
class BeginDraft:
    rect: Rect


@dataclass(frozen=True)
class ResizeDraft:
    rect: Rect


@dataclass(frozen=True)
class CommitDraft:
    pass


@dataclass(frozen=True)
class DiscardDraft:
    pass


@dataclass(frozen=True)
class MoveShape:
    shape_id: int
    origin: Point


@dataclass(frozen=True)
class SplitAt:
    point: Point


@dataclass(frozen=True)
class ScheduleReset:
    generation: int


Effect = Union[BeginDraft, ResizeDraft, CommitDraft, DiscardDraft, MoveShape, SplitAt, ScheduleReset]


@dataclass(frozen=True)
class GestureState:
    phase: Phase = Phase.IDLE
    moved: bool = False
    start: Optional[Point] = None
    draft: Optional[Rect] = None
    drag_id: Optional[int] = None
    drag_offset: Optional[Point] = None
    cursor: Optional[Point] = None
    generation: int = 0


Transition = Tuple[GestureState, Tuple[Effect, ...]]


def transition(state: GestureState, event: Event, config: SplitterConfig = DEFAULT_CONFIG) -> Transition:
    """Advance the gesture machine by one event."""
    if isinstance(event, Press):
        return _on_press(state, event, config)
    if isinstance(event, Move):
        return _on_move(state, event, config)
    if isinstance(event, Release):
        return _on_release(state, event)
    if isinstance(event, Click):
        return _on_click(state, event)
    if isinstance(event, ResetMoved):
        if event.generation == state.generation and state.moved:
            return replace(state, moved=False), ()
        return state, ()
    raise TypeError(f"Unsupported pointer event: {event!r}")


def _on_press(state: GestureState, event: Press, config: SplitterConfig) -> Transition:
    effects: List[Effect] = []
    if state.draft is not None:
        effects.append(DiscardDraft())
    px, py = event.point
    generation = state.generation + 1
    if event.target_id is not None:
        ox, oy = event.target_origin if event.target_origin is not None else event.point
        new_state = GestureState(
            phase=Phase.DRAGGING,
            drag_id=event.target_id,
            drag_offset=(px - ox, py - oy),
            cursor=event.point,
            generation=generation,
        )
    else:
        rect = draft_rect(event.point, event.point, config)
        new_state = GestureState(
            phase=Phase.POTENTIAL_DRAW,
            start=event.point,
            draft=rect,
            cursor=event.point,
            generation=generation,
        )
        effects.append(BeginDraft(rect))
    return new_state, tuple(effects)


def _on_move(state: GestureState, event: Move, config: SplitterConfig) -> Transition:
    moved_state = replace(state, cursor=event.point)
    phase = state.phase
    if phase is Phase.POTENTIAL_DRAW:
        if state.start is None or not crossed_threshold(state.start, event.point, config):
            return moved_state, ()
        rect = draft_rect(state.start, event.point, config)
        return replace(moved_state, phase=Phase.DRAWING, moved=True, draft=rect), (ResizeDraft(rect),)
    if phase is Phase.DRAWING and state.start is not None:
        rect = draft_rect(state.start, event.point, config)
        return replace(moved_state, draft=rect), (ResizeDraft(rect),)
    if phase is Phase.DRAGGING and state.drag_id is not None and state.drag_offset is not None:
        origin = (
            max(0.0, event.point[0] - state.drag_offset[0]),
            max(0.0, event.point[1] - state.drag_offset[1]),
        )
        return replace(moved_state, moved=True), (MoveShape(state.drag_id, origin),)
    return moved_state, ()


def _on_release(state: GestureState, event: Release) -> Transition:
    idle = GestureState(
        phase=Phase.IDLE,
        moved=state.moved,
        cursor=event.point,
        generation=state.generation,
    )
    if state.phase is Phase.DRAWING:
        return idle, (CommitDraft(),)
    if state.phase is Phase.POTENTIAL_DRAW:
        return idle, (DiscardDraft(),)
    if state.phase is Phase.DRAGGING:
        return idle, ()
    return replace(state, cursor=event.point), ()


def _on_click(state: GestureState, event: Click) -> Transition:
    if state.phase is not Phase.IDLE:
        return state, ()
    reset = ScheduleReset(state.generation)
    if state.moved:
        return state, (reset,)
    return state, (SplitAt(event.point), reset)


# ---------------------------------------------------------------------------
# Controller


def immediate_scheduler(delay_ms: int, callback: Callable[[], None]) -> None:
    """Run deferred work right away; fine for headless hosts without an event loop."""
    callback()


class ManualScheduler:
    """Collects deferred callbacks until :meth:`run_pending` is called."""

    def __init__(self) -> None:
        self._pending: List[Tuple[int, Callable[[], None]]] = []

    def __call__(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self._pending.append((delay_ms, callback))

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_pending(self) -> int:
        jobs, self._pending = self._pending, []
        for _, callback in jobs:
            callback()
        return len(jobs)


class GestureController:
    """Drives a :class:`ShapeStore` from surface-local pointer events."""

    def __init__(
        self,
        store: Optional[ShapeStore] = None,
        *,
        config: SplitterConfig = DEFAULT_CONFIG,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.store = store if store is not None else ShapeStore()
        self.config = config
        self._scheduler: Scheduler = scheduler or immediate_scheduler
        self._rng = rng or random.Random()
        self._on_change = on_change
        self._state = GestureState()
        self._draft: Optional[Shape] = None

    # ------------------------------------------------------------------
    # Read-only views for renderers
    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def draft(self) -> Optional[Shape]:
        return self._draft

    @property
    def shapes(self) -> Tuple[Shape, ...]:
        return self.store.snapshot()

    @property
    def cursor(self) -> Optional[Point]:
        return self._state.cursor

    # ------------------------------------------------------------------
    # Host entry points
    def press(self, point: Optional[Point]) -> None:
        point = self._surface_point(point)
        target = self.store.shape_at(point)
        if target is None:
            self.dispatch(Press(point))
        else:
            self.dispatch(Press(point, target.id, target.origin))

    def move(self, point: Optional[Point]) -> None:
        self.dispatch(Move(self._surface_point(point)))

    def release(self, point: Optional[Point]) -> None:
        self.dispatch(Release(self._surface_point(point)))

    def click(self, point: Optional[Point]) -> None:
        self.dispatch(Click(self._surface_point(point)))

    def dispatch(self, event: Event) -> None:
        previous = self._state
        self._state, effects = transition(previous, event, self.config)
        if self._state.phase is not previous.phase:
            logger.debug("Gesture %s -> %s on %s", previous.phase.value, self._state.phase.value, type(event).__name__)
        for effect in effects:
            self._apply(effect)
        if effects or self._state != previous:
            self._notify()

    # ------------------------------------------------------------------
    # Effect interpreter
    def _apply(self, effect: Effect) -> None:
        if isinstance(effect, BeginDraft):
            x, y, w, h = effect.rect
            self._draft = Shape(
                id=self.store.allocate_id(),
                x=x,
                y=y,
                width=w,
                height=h,
                color=self._rng.choice(self.config.palette),
                corners=CornerStyle.uniform(self.config.corner_radius),
            )
        elif isinstance(effect, ResizeDraft):
            if self._draft is not None:
                x, y, w, h = effect.rect
                self._draft = replace(self._draft, x=x, y=y, width=w, height=h)
        elif isinstance(effect, CommitDraft):
            if self._draft is not None:
                self.store.append(self._draft)
                logger.info(
                    "Committed shape %s: (%.1f, %.1f) %.1fx%.1f",
                    self._draft.id,
                    self._draft.x,
                    self._draft.y,
                    self._draft.width,
                    self._draft.height,
                )
            self._draft = None
        elif isinstance(effect, DiscardDraft):
            if self._draft is not None:
                logger.debug("Discarded draft %s", self._draft.id)
            self._draft = None
        elif isinstance(effect, MoveShape):
            x, y = effect.origin
            self.store.update(effect.shape_id, lambda shape: shape.moved_to(x, y))
        elif isinstance(effect, SplitAt):
            before = len(self.store)
            result = split_shapes(self.store.snapshot(), effect.point, self.store.allocate_id, self.config)
            self.store.replace_all(result)
            logger.debug("Click at (%.1f, %.1f): %d -> %d shapes", effect.point[0], effect.point[1], before, len(result))
        elif isinstance(effect, ScheduleReset):
            generation = effect.generation
            self._scheduler(self.config.reset_delay_ms, lambda: self.dispatch(ResetMoved(generation)))
        else:  # pragma: no cover - exhaustive over Effect
            raise TypeError(f"Unsupported effect: {effect!r}")

    def _surface_point(self, point: Optional[Point]) -> Point:
        if point is None:
            logger.debug("No surface coordinate available; using (0, 0)")
            return (0.0, 0.0)
        return (float(point[0]), float(point[1]))

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()


__all__ = [
    "BeginDraft",
    "Click",
    "CommitDraft",
    "DiscardDraft",
    "Effect",
    "Event",
    "GestureController",
    "GestureState",
    "ManualScheduler",
    "Move",
    "MoveShape",
    "Phase",
    "Press",
    "Release",
    "ResetMoved",
    "ResizeDraft",
    "ScheduleReset",
    "Scheduler",
    "SplitAt",
    "immediate_scheduler",
    "transition",
]
