#!/usr/bin/env python3
"""
Grid model shared by the engines, the editor and the viewer.

- Grid owns every Cell; cells point back to each other only by coordinate.
- neighbors() returns up, down, left, right (in that order), walls included.
- heuristic() is the Manhattan distance used by A*.
"""

from __future__ import annotations
from typing import Iterable, Iterator, List, Tuple

from gridpath.core.errors import InvalidGridState
from gridpath.core.types import Cell, Coord, Role

# up, down, left, right
DIRECTIONS: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Grid:
    def __init__(self, rows: int, cols: int, start: Coord, end: Coord,
                 walls: Iterable[Coord] = ()):
        if rows <= 0 or cols <= 0:
            raise ValueError("rows and cols must be positive")
        self.rows = rows
        self.cols = cols
        self.cells: List[List[Cell]] = [[Cell(r, c) for c in range(cols)] for r in range(rows)]

        if start == end:
            raise InvalidGridState(f"start and end overlap at {start}")
        for label, coord in (("start", start), ("end", end)):
            if not self.in_bounds(*coord):
                raise InvalidGridState(f"{label} {coord} out of bounds")
        self.at(start).role = Role.START
        self.at(end).role = Role.END
        for coord in walls:
            self.at(coord).is_wall = True
        self.validate()

    # -------------------- access --------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def at(self, coord: Coord) -> Cell:
        row, col = coord
        return self.cells[row][col]

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def __len__(self) -> int:
        return self.rows * self.cols

    @property
    def start(self) -> Cell:
        return self._find(Role.START)

    @property
    def end(self) -> Cell:
        return self._find(Role.END)

    def _find(self, role: Role) -> Cell:
        for c in self:
            if c.role is role:
                return c
        raise InvalidGridState(f"grid has no {role.value} cell")

    def walls(self) -> List[Coord]:
        return [c.coord for c in self if c.is_wall]

    # -------------------- invariants --------------------

    def validate(self) -> Tuple[Cell, Cell]:
        """Return (start, end) or raise InvalidGridState."""
        starts = [c for c in self if c.role is Role.START]
        ends = [c for c in self if c.role is Role.END]
        if len(starts) != 1:
            raise InvalidGridState(f"expected exactly one start cell, found {len(starts)}")
        if len(ends) != 1:
            raise InvalidGridState(f"expected exactly one end cell, found {len(ends)}")
        start, end = starts[0], ends[0]
        if start.is_wall or end.is_wall:
            raise InvalidGridState("start/end cell is a wall")
        return start, end

    # -------------------- transient state --------------------

    def reset_transient(self) -> None:
        for c in self:
            c.reset_transient()

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols}, walls={len(self.walls())})"


def reset_transient(grid: Grid) -> None:
    grid.reset_transient()


def neighbors(grid: Grid, cell: Cell) -> List[Cell]:
    out: List[Cell] = []
    for dr, dc in DIRECTIONS:
        r, c = cell.row + dr, cell.col + dc
        if grid.in_bounds(r, c):
            out.append(grid.cells[r][c])
    return out


def heuristic(a: Cell, b: Cell) -> int:
    return abs(a.row - b.row) + abs(a.col - b.col)


def count_visited(grid: Grid) -> int:
    return sum(1 for c in grid if c.visited)
