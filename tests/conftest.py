from typing import Iterable, List, Tuple

import pytest

from gridpath.core.grid import Grid, reset_transient
from gridpath.core.stepper import ManualClock
from gridpath.core.types import Coord, StepOutcome


def make_grid(rows: int = 5, cols: int = 5, start: Coord = (0, 0), end: Coord = (0, 4),
              walls: Iterable[Coord] = ()) -> Grid:
    return Grid(rows, cols, start, end, walls)


def drive(engine, grid: Grid) -> Tuple[StepOutcome, int]:
    """Reset, initialize and step `engine` until it stops. Returns (outcome, steps)."""
    start, end = grid.validate()
    reset_transient(grid)
    engine.initialize(grid, start, end)
    steps = 0
    while True:
        outcome = engine.step(grid, end)
        steps += 1
        if outcome is not StepOutcome.CONTINUE:
            return outcome, steps
        assert steps <= len(grid), "engine did not terminate within rows*cols steps"


def coords(cells) -> List[Coord]:
    return [c.coord for c in cells]


# Scenario B: wall column at col 2, open only at row 4
WALL_COLUMN = [(0, 2), (1, 2), (2, 2), (3, 2)]

# Scenario C: start (2, 2) boxed in on all four sides
BOXED_START = [(1, 2), (3, 2), (2, 1), (2, 3)]


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def open_grid():
    return make_grid()
