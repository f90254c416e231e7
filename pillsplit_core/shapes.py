"""Pill data model and the ordered store that owns committed pills."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .config import DEFAULT_CONFIG

Point = Tuple[float, float]
IdAllocator = Callable[[], int]

logger = logging.getLogger(__name__)

CORNER_NAMES = ("top_left", "top_right", "bottom_right", "bottom_left")


@dataclass(frozen=True)
class CornerStyle:
    """Independent corner radii, clockwise from the top-left corner."""

    top_left: float = DEFAULT_CONFIG.corner_radius
    top_right: float = DEFAULT_CONFIG.corner_radius
    bottom_right: float = DEFAULT_CONFIG.corner_radius
    bottom_left: float = DEFAULT_CONFIG.corner_radius

    @classmethod
    def uniform(cls, radius: float = DEFAULT_CONFIG.corner_radius) -> "CornerStyle":
        return cls(radius, radius, radius, radius)

    @classmethod
    def only(cls, *corners: str, radius: float = DEFAULT_CONFIG.corner_radius) -> "CornerStyle":
        """Round the named corners and square off the rest."""
        unknown = set(corners) - set(CORNER_NAMES)
        if unknown:
            raise ValueError(f"Unknown corner(s): {', '.join(sorted(unknown))}")
        return cls(**{name: (radius if name in corners else 0.0) for name in CORNER_NAMES})

    def radii(self) -> Tuple[float, float, float, float]:
        return (self.top_left, self.top_right, self.bottom_right, self.bottom_left)

    def is_uniform(self) -> bool:
        return len(set(self.radii())) == 1

    def css(self) -> str:
        """CSS ``border-radius`` shorthand, e.g. ``"20px 0 0 0"``."""
        return " ".join(_css_length(r) for r in self.radii())


def _css_length(value: float) -> str:
    if value == 0:
        return "0"
    text = f"{value:g}"
    return f"{text}px"


@dataclass(frozen=True)
class Shape:
    """A committed or draft pill. Immutable; edits produce a new value."""

    id: int
    x: float
    y: float
    width: float
    height: float
    color: str
    corners: CornerStyle = CornerStyle()

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Shape {self.id} needs a positive size, got {self.width}x{self.height}")
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Shape {self.id} origin must be non-negative, got ({self.x}, {self.y})")

    @property
    def origin(self) -> Point:
        return (self.x, self.y)

    @property
    def size(self) -> Tuple[float, float]:
        return (self.width, self.height)

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    @property
    def area(self) -> float:
        return self.width * self.height

    def bounds(self) -> Tuple[float, float, float, float]:
        """Return ``(x0, y0, x1, y1)``."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def moved_to(self, x: float, y: float) -> "Shape":
        return replace(self, x=x, y=y)


class ShapeStore:
    """Ordered, id-keyed collection of committed pills.

    The store also owns the id counter: every pill, draft or split product,
    takes its id from :meth:`allocate_id`, so ids only ever grow.
    """

    def __init__(self, shapes: Iterable[Shape] = (), *, first_id: int = 0) -> None:
        self._shapes: List[Shape] = []
        self._next_id = first_id
        self.replace_all(shapes)

    # ------------------------------------------------------------------
    # Identity
    def allocate_id(self) -> int:
        identifier = self._next_id
        self._next_id += 1
        return identifier

    @property
    def next_id(self) -> int:
        return self._next_id

    def _reseed_counter(self) -> None:
        if self._shapes:
            self._next_id = max(self._next_id, max(s.id for s in self._shapes) + 1)

    # ------------------------------------------------------------------
    # Mutation
    def append(self, shape: Shape) -> None:
        if any(existing.id == shape.id for existing in self._shapes):
            raise ValueError(f"Shape id {shape.id} is already in the store")
        self._shapes.append(shape)
        self._reseed_counter()
        logger.debug("Appended shape %s at (%.1f, %.1f)", shape.id, shape.x, shape.y)

    def replace_all(self, shapes: Iterable[Shape]) -> None:
        new_shapes = list(shapes)
        ids = [s.id for s in new_shapes]
        if len(ids) != len(set(ids)):
            raise ValueError("Shape ids must be unique")
        self._shapes = new_shapes
        self._reseed_counter()

    def update(self, shape_id: int, transform: Callable[[Shape], Shape]) -> Shape:
        """Apply ``transform`` to one pill in place of the old value."""
        for index, shape in enumerate(self._shapes):
            if shape.id == shape_id:
                updated = transform(shape)
                if updated.id != shape_id:
                    raise ValueError("update() must not change a shape's id")
                self._shapes[index] = updated
                return updated
        raise KeyError(shape_id)

    # ------------------------------------------------------------------
    # Queries
    def get(self, shape_id: int) -> Optional[Shape]:
        for shape in self._shapes:
            if shape.id == shape_id:
                return shape
        return None

    def shape_at(self, point: Point) -> Optional[Shape]:
        """Topmost pill under ``point``, or ``None`` on empty surface."""
        from .geometry import hit_test

        index = hit_test(self._shapes, point)
        return None if index is None else self._shapes[index]

    def snapshot(self) -> Tuple[Shape, ...]:
        return tuple(self._shapes)

    def by_id(self) -> Dict[int, Shape]:
        return {s.id: s for s in self._shapes}

    def __iter__(self) -> Iterator[Shape]:
        return iter(list(self._shapes))

    def __len__(self) -> int:
        return len(self._shapes)

    def __contains__(self, shape_id: object) -> bool:
        return any(s.id == shape_id for s in self._shapes)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"ShapeStore({len(self._shapes)} shapes, next_id={self._next_id})"


def total_area(shapes: Sequence[Shape]) -> float:
    return float(sum(s.area for s in shapes))


__all__ = [
    "CORNER_NAMES",
    "CornerStyle",
    "IdAllocator",
    "Point",
    "Shape",
    "ShapeStore",
    "total_area",
]
