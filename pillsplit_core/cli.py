"""Command line interface for headless pill splitting."""
from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Iterable

from .config import SplitterConfig
from .geometry import split_shape
from .gestures import GestureController, ManualScheduler
from .logging_config import setup_logging
from .schemas import GestureScript, PointerEventModel, SceneSnapshot, ShapeModel, SplitReport
from .shapes import CornerStyle, Shape, ShapeStore

logger = logging.getLogger(__name__)


def _read_script(path: str) -> GestureScript:
    if path == "-":
        text = sys.stdin.read()
    else:
        with Path(path).open("r", encoding="utf-8") as handle:
            text = handle.read()
    return GestureScript.model_validate_json(text)


def _deliver(controller: GestureController, event: PointerEventModel) -> None:
    handler = {
        "press": controller.press,
        "move": controller.move,
        "release": controller.release,
        "click": controller.click,
    }[event.kind]
    handler(event.point())


def replay(script: GestureScript, config: SplitterConfig) -> SceneSnapshot:
    """Run a scripted event sequence and return the resulting scene."""
    store = ShapeStore(model.to_shape() for model in script.shapes)
    scheduler = ManualScheduler()
    controller = GestureController(
        store,
        config=config,
        scheduler=scheduler,
        rng=random.Random(script.seed),
    )
    for event in script.events:
        _deliver(controller, event)
        # The host timer for the moved-flag reset fires between events
        scheduler.run_pending()
    draft = controller.draft
    return SceneSnapshot(
        shapes=[ShapeModel.from_shape(s) for s in controller.shapes],
        draft=None if draft is None else ShapeModel.from_shape(draft),
    )


def _cmd_replay(args: argparse.Namespace, config: SplitterConfig) -> None:
    script = _read_script(args.script)
    logger.info("Replaying %d events over %d shapes", len(script.events), len(script.shapes))
    snapshot = replay(script, config)
    print(snapshot.model_dump_json(indent=args.indent))


def _cmd_split(args: argparse.Namespace, config: SplitterConfig) -> None:
    x, y, width, height = args.shape
    shape = Shape(
        id=args.id,
        x=x,
        y=y,
        width=width,
        height=height,
        color=args.color or config.palette[0],
        corners=CornerStyle.uniform(config.corner_radius),
    )
    store = ShapeStore([shape])
    kind, result = split_shape(shape, tuple(args.at), store.allocate_id, config)
    report = SplitReport(kind=kind.value, shapes=[ShapeModel.from_shape(s) for s in result])
    print(report.model_dump_json(indent=args.indent))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pillsplit",
        description="Pill splitter command line interface",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation")
    sub = parser.add_subparsers(dest="command", required=True)

    replayer = sub.add_parser("replay", help="Replay a scripted pointer-event sequence")
    replayer.add_argument("script", help="Path to a JSON gesture script, or '-' for stdin")
    replayer.set_defaults(func=_cmd_replay)

    splitter = sub.add_parser("split", help="Evaluate one click against one pill")
    splitter.add_argument(
        "--shape",
        nargs=4,
        type=float,
        required=True,
        metavar=("X", "Y", "W", "H"),
        help="Pill origin and size",
    )
    splitter.add_argument(
        "--at",
        nargs=2,
        type=float,
        required=True,
        metavar=("CX", "CY"),
        help="Click position",
    )
    splitter.add_argument("--id", type=int, default=0, help="Id of the clicked pill")
    splitter.add_argument("--color", help="Pill color (defaults to the first palette entry)")
    splitter.set_defaults(func=_cmd_split)

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(None if argv is None else list(argv))
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)
    try:
        config = SplitterConfig.from_env()
        args.func(args, config)
    except (OSError, ValueError) as exc:
        parser.error(str(exc))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
