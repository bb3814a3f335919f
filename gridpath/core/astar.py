#!/usr/bin/env python3
"""
A* — one expansion per step() for animation.

Heuristic:
- Manhattan distance; admissible and consistent on a unit-cost 4-connected grid.

Open set:
- a plain list scanned linearly for the lowest f_score; on ties the first
  one found wins, so insertion order (start, then neighbors up/down/left/right)
  decides between equally good cells.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set

from gridpath.core.grid import Grid, heuristic, neighbors
from gridpath.core.types import Cell, Coord, Role, StepOutcome


@dataclass
class AStarAlgo:
    name: str = "A*"

    # Internal state
    open_list: List[Cell] = field(default_factory=list)
    closed_set: Set[Coord] = field(default_factory=set)
    current: Optional[Cell] = None
    popped_count: int = 0

    # -------------------- lifecycle --------------------

    def initialize(self, grid: Grid, start: Cell, end: Cell) -> None:
        """Clear all state and seed with the start cell."""
        self.open_list.clear()
        self.closed_set.clear()
        self.current = None
        self.popped_count = 0

        start.g_score = 0
        start.f_score = heuristic(start, end)
        self.open_list.append(start)

    # -------------------- helpers --------------------

    def _pop_lowest_f(self) -> Cell:
        best = 0
        for i in range(1, len(self.open_list)):
            if self.open_list[i].f_score < self.open_list[best].f_score:
                best = i
        return self.open_list.pop(best)

    def _in_open(self, cell: Cell) -> bool:
        return any(c is cell for c in self.open_list)

    # -------------------- main stepping logic --------------------

    def step(self, grid: Grid, end: Cell) -> StepOutcome:
        """
        Run ONE A* expansion step:
          - Pop the lowest-f cell and close it.
          - If it is End, stop.
          - Else relax its open neighbors with edge cost 1.
        """
        if not self.open_list:
            return StepOutcome.EXHAUSTED

        u = self._pop_lowest_f()
        self.current = u
        self.popped_count += 1
        self.closed_set.add(u.coord)

        if u is end:
            return StepOutcome.FOUND

        if u.role is Role.NORMAL:
            u.visited = True

        for v in neighbors(grid, u):
            if v.coord in self.closed_set or v.is_wall:
                continue

            tentative = u.g_score + 1
            if not self._in_open(v):
                self.open_list.append(v)
            elif tentative >= v.g_score:
                continue

            v.came_from = u.coord
            v.g_score = tentative
            v.f_score = tentative + heuristic(v, end)

        return StepOutcome.CONTINUE

    # -------------------- metrics --------------------

    def frontier_size(self) -> int:
        return len(self.open_list)

    def metrics(self) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": self.frontier_size(),
            "closed_count": len(self.closed_set),
        }
