"""Handlers for the ``pillsplit_core`` and ``pillsplit_playground`` loggers."""
import logging
import sys
from typing import Iterable, List, Optional

PACKAGE_LOGGERS = ("pillsplit_core", "pillsplit_playground")
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def build_handlers(level: int, log_file: Optional[str] = None) -> List[logging.Handler]:
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    namespaces: Iterable[str] = PACKAGE_LOGGERS,
) -> List[logging.Handler]:
    """Attach one shared set of handlers to every package logger.

    Handlers installed by an earlier call are closed and replaced, so the CLI
    and the playground can reconfigure without duplicating output. Returns
    the new handlers.
    """
    handlers = build_handlers(level, log_file)
    for name in namespaces:
        logger = logging.getLogger(name)
        for old in list(logger.handlers):
            logger.removeHandler(old)
            old.close()
        logger.setLevel(level)
        for handler in handlers:
            logger.addHandler(handler)

    logging.getLogger(__name__).debug("Logging to %s", log_file or "stderr")
    return handlers
