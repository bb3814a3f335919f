#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from math import inf
from typing import List, Tuple, Optional, Dict, Any

Coord = Tuple[int, int]  # (row, col)


class Role(Enum):
    NORMAL = "normal"
    START = "start"
    END = "end"


class StepOutcome(Enum):
    CONTINUE = "continue"
    FOUND = "found"
    EXHAUSTED = "exhausted"


@dataclass(eq=False)
class Cell:
    row: int
    col: int
    role: Role = Role.NORMAL
    is_wall: bool = False

    # search-transient, see Grid.reset_transient()
    visited: bool = False
    on_path: bool = False
    came_from: Optional[Coord] = None   # coordinate of the discovering cell
    distance: float = inf
    g_score: float = inf
    f_score: float = inf

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    @property
    def is_start(self) -> bool:
        return self.role is Role.START

    @property
    def is_end(self) -> bool:
        return self.role is Role.END

    def reset_transient(self) -> None:
        self.visited = False
        self.on_path = False
        self.came_from = None
        self.distance = inf
        self.g_score = inf
        self.f_score = inf

    def __repr__(self) -> str:
        return f"Cell({self.row}, {self.col}, {self.role.value}{', wall' if self.is_wall else ''})"


@dataclass
class RunResult:
    found: bool
    algorithm: str = ""
    path: List[Cell] = field(default_factory=list)
    visited_count: int = 0
    elapsed_ms: float = 0.0
    search_steps: int = 0

    @property
    def path_length(self) -> int:
        return len(self.path)

    def as_stats(self) -> Dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "elapsed_ms": round(self.elapsed_ms),
            "path_length": self.path_length,
            "visited_count": self.visited_count,
        }
