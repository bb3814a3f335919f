#!/usr/bin/env python3
from typing import Dict, Optional, Protocol, Type, Union

from gridpath.core.astar import AStarAlgo
from gridpath.core.bfs import BFSAlgo
from gridpath.core.dijkstra import DijkstraAlgo
from gridpath.core.errors import UnknownAlgorithm
from gridpath.core.grid import Grid
from gridpath.core.types import Cell, StepOutcome


class SearchAlgo(Protocol):
    """What the Stepper needs from an engine."""
    name: str
    current: Optional[Cell]
    popped_count: int

    def initialize(self, grid: Grid, start: Cell, end: Cell) -> None: ...
    def step(self, grid: Grid, end: Cell) -> StepOutcome: ...
    def metrics(self) -> dict: ...


Algo = Union[AStarAlgo, DijkstraAlgo, BFSAlgo]

ALGORITHMS: Dict[str, Type[Algo]] = {
    "astar": AStarAlgo,
    "dijkstra": DijkstraAlgo,
    "bfs": BFSAlgo,
}

LABELS: Dict[str, str] = {
    "astar": "A*",
    "dijkstra": "Dijkstra",
    "bfs": "BFS",
}


def make_algo(key: str) -> Algo:
    try:
        impl = ALGORITHMS[key]
    except KeyError:
        raise UnknownAlgorithm(f"unknown algorithm {key!r}") from None
    return impl(name=LABELS[key])
