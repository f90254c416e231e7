"""Qt widgets for the pill splitter playground."""
from __future__ import annotations

import random
from typing import Callable, Dict, Optional, Tuple

from PySide6.QtCore import QPointF, QRectF, QSize, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QPainter, QPainterPath, QPen
from PySide6.QtWidgets import QWidget

from pillsplit_core.config import DEFAULT_CONFIG, SplitterConfig
from pillsplit_core.gestures import GestureController
from pillsplit_core.shapes import Shape

from .tools import PillTool

Point = Tuple[float, float]

BACKGROUND = QColor(243, 244, 246)
GUIDE = QColor(156, 163, 175, 160)


def pill_path(shape: Shape) -> QPainterPath:
    """Rounded rect path honoring each corner's own radius."""
    x, y, w, h = shape.x, shape.y, shape.width, shape.height
    limit = min(w, h) / 2.0
    tl, tr, br, bl = (min(r, limit) for r in shape.corners.radii())

    path = QPainterPath()
    path.moveTo(x + tl, y)
    path.lineTo(x + w - tr, y)
    if tr:
        path.arcTo(QRectF(x + w - 2 * tr, y, 2 * tr, 2 * tr), 90.0, -90.0)
    path.lineTo(x + w, y + h - br)
    if br:
        path.arcTo(QRectF(x + w - 2 * br, y + h - 2 * br, 2 * br, 2 * br), 0.0, -90.0)
    path.lineTo(x + bl, y + h)
    if bl:
        path.arcTo(QRectF(x, y + h - 2 * bl, 2 * bl, 2 * bl), 270.0, -90.0)
    path.lineTo(x, y + tl)
    if tl:
        path.arcTo(QRectF(x, y, 2 * tl, 2 * tl), 180.0, -90.0)
    path.closeSubpath()
    return path


class Canvas(QWidget):
    """Drawing surface: forwards pointer events to the gesture controller and paints pills."""

    status_changed = Signal(dict)

    def __init__(self, config: SplitterConfig = DEFAULT_CONFIG, rng: Optional[random.Random] = None):
        super().__init__()
        self.setObjectName("PillCanvas")
        self.setMinimumSize(QSize(640, 480))
        self.setMouseTracking(True)
        self.setToolTip(
            "Drag on empty space to draw a pill.\n"
            "Drag a pill to move it.\n"
            "Click a pill to split it."
        )

        self.controller = GestureController(
            config=config,
            scheduler=self._schedule,
            rng=rng,
            on_change=self._on_scene_changed,
        )
        self._tool = PillTool(self)
        self._show_guides = False

    # ------------------------------------------------------------------
    # Controller hooks
    def _schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        QTimer.singleShot(delay_ms, callback)

    def _on_scene_changed(self) -> None:
        self.update()
        self.status_changed.emit(self.status())

    def surface_point(self, event) -> Optional[Point]:
        """Widget-local pointer position, or ``None`` before the widget has a size."""
        if self.width() <= 0 or self.height() <= 0:
            return None
        pos = event.position()
        return (pos.x(), pos.y())

    def status(self) -> Dict[str, object]:
        state = self.controller.state
        return {
            "shapes": len(self.controller.store),
            "phase": state.phase.value,
            "cursor": state.cursor,
        }

    # ------------------------------------------------------------------
    # Painting
    def paintEvent(self, event):  # pragma: no cover - GUI entry point
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.fillRect(self.rect(), BACKGROUND)

        for shape in self.controller.shapes:
            self._draw_pill(painter, shape)

        draft = self.controller.draft
        if draft is not None:
            self._draw_pill(painter, draft, alpha=170)

        cursor = self.controller.cursor
        if self._show_guides and cursor is not None:
            self._draw_guides(painter, cursor)

    def _draw_pill(self, painter: QPainter, shape: Shape, alpha: int = 255) -> None:
        fill = QColor(shape.color)
        fill.setAlpha(alpha)
        painter.setPen(Qt.NoPen)
        painter.setBrush(fill)
        painter.drawPath(pill_path(shape))

    def _draw_guides(self, painter: QPainter, cursor: Point) -> None:
        pen = QPen(GUIDE, 1, Qt.DashLine)
        painter.setPen(pen)
        x, y = cursor
        painter.drawLine(QPointF(x, 0.0), QPointF(x, float(self.height())))
        painter.drawLine(QPointF(0.0, y), QPointF(float(self.width()), y))

    # ------------------------------------------------------------------
    # Qt event plumbing
    def enterEvent(self, event):  # pragma: no cover - GUI entry point
        self._show_guides = True
        super().enterEvent(event)

    def leaveEvent(self, event):  # pragma: no cover - GUI entry point
        self._show_guides = False
        self.update()
        super().leaveEvent(event)

    def mousePressEvent(self, event):  # pragma: no cover - GUI entry point
        self._tool.mouse_press(event)

    def mouseMoveEvent(self, event):  # pragma: no cover - GUI entry point
        self._show_guides = True
        self._tool.mouse_move(event)

    def mouseReleaseEvent(self, event):  # pragma: no cover - GUI entry point
        self._tool.mouse_release(event)
