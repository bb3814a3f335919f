#!/usr/bin/env python3
from __future__ import annotations
import os
import sys
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Sequence, Tuple

from gridpath.core.algorithms import ALGORITHMS

Coord = Tuple[int, int]  # (row, col)

ALGORITHM_KEYS = tuple(ALGORITHMS)
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class Settings:
    ROWS: int = 20
    COLS: int = 20
    START: Coord = (10, 5)
    END: Coord = (10, 15)
    SEARCH_DELAY_MS: float = 150.0   # per search step at speed 1
    PATH_DELAY_MS: float = 100.0     # per path cell at speed 1
    SPEED: float = 5.0
    MIN_SPEED: float = 1.0
    MAX_SPEED: float = 10.0
    WALL_DENSITY: float = 0.2
    ALGORITHM: str = "astar"
    LOG_LEVEL: str = "INFO"

SETTINGS = Settings()


def parse_speed(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"speed must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"speed must be positive, got {value}")
    return value


def parse_algorithm(raw: str) -> str:
    key = raw.strip().lower()
    if key not in ALGORITHM_KEYS:
        raise ValueError(f"unknown algorithm {raw!r} (expected one of {', '.join(ALGORITHM_KEYS)})")
    return key


def parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"unknown log level {raw!r}")
    return level


def resolve_settings(argv: Optional[Sequence[str]] = None,
                     environ: Optional[Mapping[str, str]] = None,
                     base: Settings = SETTINGS) -> Settings:
    """
    Overlay environment variables, then --key=value flags, on top of `base`.

    - ENV: GRIDPATH_ALGO, GRIDPATH_SPEED, GRIDPATH_LOG_LEVEL
    - CLI: --algo=, --speed=, --log-level=
    Unrecognised flags are left for the caller.
    """
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ

    changes = {}
    if environ.get("GRIDPATH_ALGO"):
        changes["ALGORITHM"] = parse_algorithm(environ["GRIDPATH_ALGO"])
    if environ.get("GRIDPATH_SPEED"):
        changes["SPEED"] = parse_speed(environ["GRIDPATH_SPEED"])
    if environ.get("GRIDPATH_LOG_LEVEL"):
        changes["LOG_LEVEL"] = parse_log_level(environ["GRIDPATH_LOG_LEVEL"])

    for arg in argv:
        if arg.startswith("--algo="):
            changes["ALGORITHM"] = parse_algorithm(arg.split("=", 1)[1])
        elif arg.startswith("--speed="):
            changes["SPEED"] = parse_speed(arg.split("=", 1)[1])
        elif arg.startswith("--log-level="):
            changes["LOG_LEVEL"] = parse_log_level(arg.split("=", 1)[1])

    return replace(base, **changes)


def clamp_speed(speed: float, settings: Settings = SETTINGS) -> float:
    return max(settings.MIN_SPEED, min(settings.MAX_SPEED, speed))
