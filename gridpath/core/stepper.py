#!/usr/bin/env python3
"""
Stepper + RunController: drive any engine one step at a time.

- One Stepper per run, one RunController per grid/session.
- The controller is pumped cooperatively: the viewer calls tick() from its
  frame loop, run_search() calls it in a loop and sleeps until the next step
  is due. Nothing here spawns threads.
- Cadence: SEARCH_DELAY_MS / speed between engine steps, then
  PATH_DELAY_MS / speed between path cells while the path is replayed.
- elapsed_ms covers the search only; the path replay is not timed.
"""

from __future__ import annotations
import time
from enum import Enum
from typing import Callable, List, Optional

from gridpath.core.algorithms import ALGORITHMS, SearchAlgo, make_algo
from gridpath.core.errors import UnknownAlgorithm
from gridpath.core.grid import Grid, reset_transient
from gridpath.core.path import build_result
from gridpath.core.settings import SETTINGS, Settings
from gridpath.core.types import Cell, RunResult, StepOutcome
from gridpath.utils.logger import get_logger

log = get_logger("gridpath.stepper")

Clock = Callable[[], float]
StepCallback = Callable[[Grid], None]

_EPS = 1e-9


class Phase(Enum):
    SEARCHING = "searching"
    TRACING = "tracing"
    FINISHED = "finished"


class ManualClock:
    """Virtual clock; pass `now` as the clock and `advance` as the sleep."""

    def __init__(self, start: float = 0.0):
        self.t = start

    def now(self) -> float:
        return self.t

    def advance(self, seconds: float) -> None:
        self.t += max(0.0, seconds)


def _check_speed(speed: float) -> float:
    if speed <= 0:
        raise ValueError(f"speed must be positive, got {speed}")
    return float(speed)


class RunHandle:
    """Future-like view of one run."""

    def __init__(self, algorithm: str, on_cancel: Callable[["RunHandle"], None]):
        self.algorithm = algorithm
        self.result: Optional[RunResult] = None
        self.cancelled = False
        self._on_cancel = on_cancel
        self._callbacks: List[Callable[[RunHandle], None]] = []

    @property
    def done(self) -> bool:
        return self.result is not None or self.cancelled

    def cancel(self) -> bool:
        if self.done:
            return False
        self.cancelled = True
        self._on_cancel(self)
        self._fire()
        return True

    def add_done_callback(self, fn: Callable[["RunHandle"], None]) -> None:
        if self.done:
            fn(self)
        else:
            self._callbacks.append(fn)

    def _resolve(self, result: RunResult) -> None:
        self.result = result
        self._fire()

    def _fire(self) -> None:
        callbacks, self._callbacks = self._callbacks, []
        for fn in callbacks:
            fn(self)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else ("done" if self.result else "pending")
        return f"<RunHandle {self.algorithm} {state}>"


class Stepper:
    def __init__(self, grid: Grid, engine: SearchAlgo, start: Cell, end: Cell, speed: float,
                 on_step: Optional[StepCallback] = None, settings: Settings = SETTINGS):
        self.grid = grid
        self.engine = engine
        self.start = start
        self.end = end
        self.on_step = on_step
        self.settings = settings
        self.set_speed(speed)

        self.phase = Phase.SEARCHING
        self.next_due: Optional[float] = None   # None -> due now
        self.started_at: Optional[float] = None
        self.search_steps = 0
        self.result: Optional[RunResult] = None
        self._trace_index = 0

    def set_speed(self, speed: float) -> None:
        speed = _check_speed(speed)
        self.speed = speed
        self.search_delay = self.settings.SEARCH_DELAY_MS / speed / 1000.0
        self.path_delay = self.settings.PATH_DELAY_MS / speed / 1000.0

    @property
    def finished(self) -> bool:
        return self.phase is Phase.FINISHED

    def is_due(self, now: float) -> bool:
        return self.next_due is None or now + _EPS >= self.next_due

    def tick(self, now: float) -> bool:
        """Perform at most one due action. Returns True once the run is over."""
        if self.finished:
            return True
        if not self.is_due(now):
            return False
        if self.started_at is None:
            self.started_at = now

        if self.phase is Phase.SEARCHING:
            self._search_step(now)
        else:
            self._trace_step(now)
        return self.finished

    def _emit(self) -> None:
        if self.on_step is not None:
            self.on_step(self.grid)

    def _search_step(self, now: float) -> None:
        outcome = self.engine.step(self.grid, self.end)
        self.search_steps += 1
        log.debug("%s step %d -> %s at %s", self.engine.name, self.search_steps,
                  outcome.value, getattr(self.engine.current, "coord", None))
        self._emit()

        if outcome is StepOutcome.CONTINUE:
            self.next_due = now + self.search_delay
            return

        found = outcome is StepOutcome.FOUND
        elapsed_ms = (now - self.started_at) * 1000.0
        self.result = build_result(self.grid, self.end, found, self.engine.name,
                                   elapsed_ms, self.search_steps)
        if found:
            self.phase = Phase.TRACING
            self.next_due = now
        else:
            self.phase = Phase.FINISHED

    def _trace_step(self, now: float) -> None:
        path = self.result.path
        path[self._trace_index].on_path = True
        self._trace_index += 1
        self._emit()
        if self._trace_index >= len(path):
            self.phase = Phase.FINISHED
        else:
            self.next_due = now + self.path_delay


class RunController:
    """Per-session run state: the grid, the selected algorithm, the speed and the active run."""

    def __init__(self, grid: Grid, settings: Settings = SETTINGS,
                 on_step: Optional[StepCallback] = None, clock: Clock = time.perf_counter):
        self.grid = grid
        self.settings = settings
        self.algorithm = settings.ALGORITHM
        self.speed = _check_speed(settings.SPEED)
        self.on_step = on_step
        self.clock = clock

        self.stepper: Optional[Stepper] = None
        self.handle: Optional[RunHandle] = None
        self.last_result: Optional[RunResult] = None

    # -------------------- session state --------------------

    @property
    def run_in_progress(self) -> bool:
        return self.stepper is not None

    def select_algorithm(self, key: str) -> bool:
        if key not in ALGORITHMS:
            raise UnknownAlgorithm(f"unknown algorithm {key!r}")
        if self.run_in_progress:
            return False
        self.algorithm = key
        return True

    def set_speed(self, speed: float) -> None:
        self.speed = _check_speed(speed)
        if self.stepper is not None:
            self.stepper.set_speed(self.speed)

    def clear_result(self) -> None:
        self.last_result = None

    # -------------------- runs --------------------

    def start_run(self, algorithm: Optional[str] = None,
                  speed: Optional[float] = None) -> Optional[RunHandle]:
        if self.run_in_progress:
            log.info("run already in progress; ignoring new request")
            return None

        start, end = self.grid.validate()
        engine = make_algo(algorithm or self.algorithm)
        speed = self.speed if speed is None else _check_speed(speed)

        reset_transient(self.grid)
        self.last_result = None
        engine.initialize(self.grid, start, end)
        self.stepper = Stepper(self.grid, engine, start, end, speed,
                               on_step=self.on_step, settings=self.settings)
        self.handle = RunHandle(engine.name, on_cancel=self._abandon)
        log.info("%s run started on %s, start=%s end=%s speed=%s",
                 engine.name, self.grid, start.coord, end.coord, speed)
        return self.handle

    def tick(self, now: Optional[float] = None) -> None:
        if self.stepper is None:
            return
        now = self.clock() if now is None else now
        stepper = self.stepper
        # on_step may cancel the run from inside the tick
        if stepper.tick(now) and self.stepper is stepper:
            self._finish()

    def next_due(self) -> Optional[float]:
        if self.stepper is None:
            return None
        return self.stepper.next_due

    def cancel(self) -> bool:
        if self.handle is None:
            return False
        return self.handle.cancel()

    def _abandon(self, handle: RunHandle) -> None:
        log.info("%s run cancelled after %d steps", handle.algorithm,
                 self.stepper.search_steps if self.stepper else 0)
        self.stepper = None
        self.handle = None

    def _finish(self) -> None:
        result = self.stepper.result
        handle = self.handle
        self.stepper = None
        self.handle = None
        self.last_result = result
        if result.found:
            log.info("%s found a path: %s", result.algorithm, result.as_stats())
        else:
            log.warning("%s found no path after visiting %d cells",
                        result.algorithm, result.visited_count)
        handle._resolve(result)

    def run(self, algorithm: Optional[str] = None, speed: Optional[float] = None,
            sleep: Callable[[float], None] = time.sleep) -> Optional[RunResult]:
        """Start a run and pump it to completion. None if it was rejected or cancelled."""
        handle = self.start_run(algorithm, speed)
        if handle is None:
            return None
        while not handle.done:
            self.tick()
            due = self.next_due()
            if due is not None:
                wait = due - self.clock()
                if wait > 0:
                    sleep(wait)
        return handle.result


def run_search(grid: Grid, algorithm: str, speed: float,
               on_step: Optional[StepCallback] = None, *,
               settings: Settings = SETTINGS,
               clock: Clock = time.perf_counter,
               sleep: Callable[[float], None] = time.sleep) -> Optional[RunResult]:
    controller = RunController(grid, settings=settings, on_step=on_step, clock=clock)
    return controller.run(algorithm, speed, sleep=sleep)
