#!/usr/bin/env python3
from typing import List

from gridpath.core.grid import Grid, count_visited
from gridpath.core.types import Cell, RunResult

__all__ = ["reconstruct_path", "count_visited", "build_result"]


def reconstruct_path(grid: Grid, end: Cell) -> List[Cell]:
    """Cells from just after Start through End, following came_from backwards."""
    path: List[Cell] = []
    cur = end
    while not cur.is_start:
        path.append(cur)
        if cur.came_from is None:
            break  # End never reached
        cur = grid.at(cur.came_from)
    path.reverse()
    return path


def build_result(grid: Grid, end: Cell, found: bool, algorithm: str,
                 elapsed_ms: float, search_steps: int) -> RunResult:
    path = reconstruct_path(grid, end) if found else []
    return RunResult(
        found=found,
        algorithm=algorithm,
        path=path,
        visited_count=count_visited(grid),
        elapsed_ms=elapsed_ms,
        search_steps=search_steps,
    )
