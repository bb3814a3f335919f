#!/usr/bin/env python3

from dataclasses import dataclass, field
from math import inf
from typing import List, Optional

from gridpath.core.grid import Grid, neighbors
from gridpath.core.types import Cell, Role, StepOutcome


@dataclass
class DijkstraAlgo:
    name: str = "Dijkstra"

    # every not-yet-finalized cell, row-major; scanned linearly for the minimum
    unvisited: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    popped_count: int = 0

    def initialize(self, grid: Grid, start: Cell, end: Cell) -> None:
        self.unvisited.clear()
        self.current = None
        self.popped_count = 0
        for c in grid:
            c.distance = 0 if c is start else inf
            self.unvisited.append(c)

    def _pop_closest(self) -> Cell:
        best = 0
        for i in range(1, len(self.unvisited)):
            if self.unvisited[i].distance < self.unvisited[best].distance:
                best = i
        return self.unvisited.pop(best)

    def step(self, grid: Grid, end: Cell) -> StepOutcome:
        if not self.unvisited:
            return StepOutcome.EXHAUSTED

        u = self._pop_closest()
        self.current = u
        self.popped_count += 1

        # only unreachable cells remain
        if u.distance == inf:
            return StepOutcome.EXHAUSTED

        if u is end:
            return StepOutcome.FOUND

        if u.role is Role.NORMAL:
            u.visited = True

        for v in neighbors(grid, u):
            if v.is_wall:
                continue
            alt = u.distance + 1
            if alt < v.distance:
                v.distance = alt
                v.came_from = u.coord

        return StepOutcome.CONTINUE

    def frontier_size(self) -> int:
        return sum(1 for c in self.unvisited if c.distance < inf)

    def metrics(self) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": self.frontier_size(),
        }
