#!/usr/bin/env python3
"""
Headless runner: same grid, editor and stepper as the viewer, no window.

    gridpath-run --algo=bfs --seed=7
    gridpath-run --all --instant --density=0.3

Flags (on top of the shared --algo= / --speed= / --log-level=):
    --all         run every algorithm on the same walls
    --instant     virtual clock, no real waiting between steps
    --seed=N      seed for the random walls
    --density=F   wall probability per cell (0 disables walls)
"""

import random
import sys
import time
from typing import List, Optional

from gridpath.core.algorithms import ALGORITHMS
from gridpath.core.editor import GridEditor
from gridpath.core.grid import Grid
from gridpath.core.settings import resolve_settings
from gridpath.core.stepper import ManualClock, RunController
from gridpath.core.types import RunResult
from gridpath.utils.logger import get_logger, set_level

log = get_logger("gridpath.headless")


def _flag_value(argv: List[str], name: str) -> Optional[str]:
    for arg in argv:
        if arg.startswith(f"--{name}="):
            return arg.split("=", 1)[1]
    return None


def run(argv: List[str]) -> List[RunResult]:
    settings = resolve_settings(argv)
    set_level(settings.LOG_LEVEL)

    seed = _flag_value(argv, "seed")
    density = _flag_value(argv, "density")
    rng = random.Random(int(seed)) if seed is not None else random.Random()

    if "--instant" in argv:
        clock = ManualClock()
        now, sleep = clock.now, clock.advance
    else:
        now, sleep = time.perf_counter, time.sleep

    grid = Grid(settings.ROWS, settings.COLS, settings.START, settings.END)
    controller = RunController(grid, settings=settings, clock=now)
    editor = GridEditor(grid, controller, settings)
    editor.add_random_walls(float(density) if density is not None else None, rng=rng)
    log.info("grid %s with %d walls", grid, len(grid.walls()))

    keys = list(ALGORITHMS) if "--all" in argv else [settings.ALGORITHM]
    results: List[RunResult] = []
    for key in keys:
        result = controller.run(key, sleep=sleep)
        if result.found:
            log.info("%s", result.as_stats())
        else:
            log.warning("%s: no path found, try fewer walls", result.algorithm)
        results.append(result)
    return results


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        results = run(argv)
    except ValueError as ex:
        log.error("%s", ex)
        return 2
    return 0 if all(r.found for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
