"""Tunable constants for the pill splitter.

Every number the gesture machine and the split engine rely on lives on
:class:`SplitterConfig`. Hosts normally use :data:`DEFAULT_CONFIG`; the CLI and
the playground call :meth:`SplitterConfig.from_env` so a single value can be
overridden with ``PILLSPLIT_<FIELD>`` without touching code.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from typing import Mapping, Optional, Tuple

DEFAULT_PALETTE: Tuple[str, ...] = (
    "#ef4444",
    "#3b82f6",
    "#10b981",
    "#f59e0b",
    "#8b5cf6",
    "#ec4899",
)

ENV_PREFIX = "PILLSPLIT_"


@dataclass(frozen=True)
class SplitterConfig:
    """Geometry and gesture thresholds."""

    min_size: float = 40.0
    corner_radius: float = 20.0
    split_margin: float = 20.0
    nudge_gap: float = 10.0
    draw_threshold: float = 5.0
    reset_delay_ms: int = 10
    palette: Tuple[str, ...] = field(default=DEFAULT_PALETTE)

    def __post_init__(self) -> None:
        if self.min_size <= 0:
            raise ValueError(f"min_size must be positive, got {self.min_size}")
        if self.corner_radius < 0:
            raise ValueError(f"corner_radius must be non-negative, got {self.corner_radius}")
        if self.split_margin <= 0:
            raise ValueError(f"split_margin must be positive, got {self.split_margin}")
        if self.draw_threshold < 0:
            raise ValueError(f"draw_threshold must be non-negative, got {self.draw_threshold}")
        if self.reset_delay_ms < 0:
            raise ValueError(f"reset_delay_ms must be non-negative, got {self.reset_delay_ms}")
        if not self.palette:
            raise ValueError("palette needs at least one color")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SplitterConfig":
        """Build a config from ``PILLSPLIT_*`` variables, falling back to defaults.

        ``PILLSPLIT_PALETTE`` is a comma separated list of colors.
        """
        environ = os.environ if environ is None else environ
        overrides = {}
        for spec in fields(cls):
            raw = environ.get(ENV_PREFIX + spec.name.upper())
            if raw is None or raw.strip() == "":
                continue
            if spec.name == "palette":
                overrides["palette"] = tuple(c.strip() for c in raw.split(",") if c.strip())
            elif spec.name == "reset_delay_ms":
                overrides[spec.name] = int(raw)
            else:
                overrides[spec.name] = float(raw)
        return replace(cls(), **overrides)


DEFAULT_CONFIG = SplitterConfig()


__all__ = ["DEFAULT_CONFIG", "DEFAULT_PALETTE", "ENV_PREFIX", "SplitterConfig"]
