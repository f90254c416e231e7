"""Pointer tools for the pill splitter canvas."""
from __future__ import annotations

from PySide6.QtCore import Qt


class ToolBase:
    """Common interface every tool implements."""

    def __init__(self, canvas):
        self.canvas = canvas

    def mouse_press(self, event):  # pragma: no cover - GUI entry point
        pass

    def mouse_move(self, event):  # pragma: no cover - GUI entry point
        pass

    def mouse_release(self, event):  # pragma: no cover - GUI entry point
        pass


class PillTool(ToolBase):
    """Draw, drag and split pills with the left button.

    Qt has no click event, so a click-in-place is delivered right after the
    release, with the release position.
    """

    def __init__(self, canvas):
        super().__init__(canvas)
        self._pressed = False

    def mouse_press(self, event):
        if event.button() != Qt.LeftButton:
            return
        self._pressed = True
        self.canvas.controller.press(self.canvas.surface_point(event))

    def mouse_move(self, event):
        # Hover moves still feed the guide lines
        self.canvas.controller.move(self.canvas.surface_point(event))

    def mouse_release(self, event):
        if event.button() != Qt.LeftButton or not self._pressed:
            return
        self._pressed = False
        point = self.canvas.surface_point(event)
        controller = self.canvas.controller
        controller.release(point)
        controller.click(point)
