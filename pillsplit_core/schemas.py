"""Pydantic schemas for scripted gestures and pill snapshots used by the CLI."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from .config import DEFAULT_CONFIG
from .shapes import CornerStyle, Point, Shape

EventKind = Literal["press", "move", "release", "click"]


class CornerStyleModel(BaseModel):
    top_left: float = Field(DEFAULT_CONFIG.corner_radius, ge=0.0, description="Top-left corner radius.")
    top_right: float = Field(DEFAULT_CONFIG.corner_radius, ge=0.0, description="Top-right corner radius.")
    bottom_right: float = Field(DEFAULT_CONFIG.corner_radius, ge=0.0, description="Bottom-right corner radius.")
    bottom_left: float = Field(DEFAULT_CONFIG.corner_radius, ge=0.0, description="Bottom-left corner radius.")

    def to_corner_style(self) -> CornerStyle:
        return CornerStyle(self.top_left, self.top_right, self.bottom_right, self.bottom_left)

    @classmethod
    def from_corner_style(cls, corners: CornerStyle) -> "CornerStyleModel":
        return cls(
            top_left=corners.top_left,
            top_right=corners.top_right,
            bottom_right=corners.bottom_right,
            bottom_left=corners.bottom_left,
        )


class ShapeModel(BaseModel):
    id: int = Field(..., ge=0, description="Process-unique pill id.")
    x: float = Field(..., ge=0.0, description="Left edge in surface coordinates.")
    y: float = Field(..., ge=0.0, description="Top edge in surface coordinates.")
    width: float = Field(..., gt=0.0, description="Pill width.")
    height: float = Field(..., gt=0.0, description="Pill height.")
    color: str = Field(DEFAULT_CONFIG.palette[0], description="Opaque palette color.")
    corners: CornerStyleModel = Field(
        default_factory=CornerStyleModel, description="Per-corner radii; uniform by default."
    )

    def to_shape(self) -> Shape:
        return Shape(
            id=self.id,
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            color=self.color,
            corners=self.corners.to_corner_style(),
        )

    @classmethod
    def from_shape(cls, shape: Shape) -> "ShapeModel":
        return cls(
            id=shape.id,
            x=shape.x,
            y=shape.y,
            width=shape.width,
            height=shape.height,
            color=shape.color,
            corners=CornerStyleModel.from_corner_style(shape.corners),
        )


class PointerEventModel(BaseModel):
    kind: EventKind = Field(..., description="press, move, release or click.")
    x: Optional[float] = Field(None, description="Surface-local x; omit when the surface is unmeasured.")
    y: Optional[float] = Field(None, description="Surface-local y; omit when the surface is unmeasured.")

    @model_validator(mode="after")
    def _both_or_neither(self) -> "PointerEventModel":
        if (self.x is None) != (self.y is None):
            raise ValueError("Pointer events need both x and y, or neither")
        return self

    def point(self) -> Optional[Point]:
        if self.x is None or self.y is None:
            return None
        return (self.x, self.y)


class GestureScript(BaseModel):
    shapes: List[ShapeModel] = Field(default_factory=list, description="Pills present before the first event.")
    events: List[PointerEventModel] = Field(default_factory=list, description="Pointer events in delivery order.")
    seed: Optional[int] = Field(None, description="Seed for draft color selection.")

    @model_validator(mode="after")
    def _unique_ids(self) -> "GestureScript":
        ids = [s.id for s in self.shapes]
        if len(ids) != len(set(ids)):
            raise ValueError("Shape ids in a script must be unique")
        return self


class SceneSnapshot(BaseModel):
    shapes: List[ShapeModel] = Field(default_factory=list, description="Committed pills in drawing order.")
    draft: Optional[ShapeModel] = Field(None, description="In-progress draft pill, if any.")


class SplitReport(BaseModel):
    kind: str = Field(..., description="four_way, vertical, horizontal, nudge or none.")
    shapes: List[ShapeModel] = Field(..., description="Pills that replace the clicked pill.")


__all__ = [
    "CornerStyleModel",
    "EventKind",
    "GestureScript",
    "PointerEventModel",
    "SceneSnapshot",
    "ShapeModel",
    "SplitReport",
]
