#!/usr/bin/env python3
"""
Breadth-first search, one dequeued cell per step() for animation.

Every edge costs 1, so the FIFO order already processes cells in
non-decreasing distance and the first time End is dequeued its
came_from chain is a shortest path.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional, Set

from gridpath.core.grid import Grid, neighbors
from gridpath.core.types import Cell, Coord, Role, StepOutcome


@dataclass
class BFSAlgo:
    name: str = "BFS"

    queue: Deque[Cell] = field(default_factory=deque)
    seen: Set[Coord] = field(default_factory=set)
    current: Optional[Cell] = None
    popped_count: int = 0

    # -------------------- lifecycle --------------------

    def initialize(self, grid: Grid, start: Cell, end: Cell) -> None:
        self.queue.clear()
        self.seen.clear()
        self.current = None
        self.popped_count = 0

        start.distance = 0
        self.queue.append(start)
        self.seen.add(start.coord)

    # -------------------- main stepping logic --------------------

    def step(self, grid: Grid, end: Cell) -> StepOutcome:
        if not self.queue:
            return StepOutcome.EXHAUSTED

        u = self.queue.popleft()
        self.current = u
        self.popped_count += 1

        if u is end:
            return StepOutcome.FOUND

        if u.role is Role.NORMAL:
            u.visited = True

        for v in neighbors(grid, u):
            if v.coord in self.seen or v.is_wall:
                continue
            self.seen.add(v.coord)
            v.came_from = u.coord
            v.distance = u.distance + 1
            self.queue.append(v)

        return StepOutcome.CONTINUE

    # -------------------- metrics --------------------

    def frontier_size(self) -> int:
        return len(self.queue)

    def metrics(self) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": self.frontier_size(),
        }
