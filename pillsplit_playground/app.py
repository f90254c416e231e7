"""Application bootstrap for the pill splitter playground."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable

from PySide6.QtWidgets import QApplication, QLabel, QMainWindow, QStatusBar

from pillsplit_core.config import SplitterConfig
from pillsplit_core.logging_config import setup_logging

from .widgets import Canvas

logger = logging.getLogger(__name__)


class Main(QMainWindow):
    """Top-level window holding the canvas and a status bar."""

    def __init__(self, config: SplitterConfig):
        super().__init__()
        self.setWindowTitle("Pill Splitter")

        self.canvas = Canvas(config)
        self.setCentralWidget(self.canvas)

        self._status_labels: dict[str, QLabel] = {}
        self._setup_status_bar()
        self.canvas.status_changed.connect(self._on_status_changed)
        self._on_status_changed(self.canvas.status())

        self.resize(1200, 800)

    def _setup_status_bar(self) -> None:
        bar = QStatusBar()
        bar.setSizeGripEnabled(False)
        self.setStatusBar(bar)

        self._status_labels = {
            "shapes": QLabel("pills: 0"),
            "phase": QLabel("gesture: idle"),
            "cursor": QLabel("x: -- y: --"),
        }
        status_help = {
            "shapes": "Number of committed pills.",
            "phase": "Current pointer gesture.",
            "cursor": "Pointer position in canvas coordinates.",
        }
        for key, label in self._status_labels.items():
            label.setToolTip(status_help.get(key, ""))
            bar.addPermanentWidget(label)

    def _on_status_changed(self, status: dict) -> None:
        self._status_labels["shapes"].setText(f"pills: {status.get('shapes', 0)}")
        self._status_labels["phase"].setText(f"gesture: {status.get('phase', 'idle')}")
        cursor = status.get("cursor")
        if cursor is None:
            self._status_labels["cursor"].setText("x: -- y: --")
        else:
            self._status_labels["cursor"].setText(f"x: {cursor[0]:.0f} y: {cursor[1]:.0f}")


def main(argv: Iterable[str] | None = None) -> int:  # pragma: no cover - GUI entry point
    parser = argparse.ArgumentParser(prog="pillsplit-playground", description="Interactive pill splitter")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", help="Also write logs to this file")
    args, qt_args = parser.parse_known_args(None if argv is None else list(argv))

    level = logging.DEBUG if args.verbose else logging.INFO
    setup_logging(level, args.log_file)

    config = SplitterConfig.from_env()
    logger.info("Starting playground (min size %.0f, split margin %.0f)", config.min_size, config.split_margin)

    app = QApplication([sys.argv[0], *qt_args])
    window = Main(config)
    window.show()
    return app.exec()


if __name__ == "__main__":  # pragma: no cover - GUI entry point
    raise SystemExit(main())
