import random

import pytest

from conftest import BOXED_START, WALL_COLUMN, coords, drive, make_grid
from gridpath.core.algorithms import ALGORITHMS, LABELS, make_algo
from gridpath.core.astar import AStarAlgo
from gridpath.core.bfs import BFSAlgo
from gridpath.core.dijkstra import DijkstraAlgo
from gridpath.core.errors import UnknownAlgorithm
from gridpath.core.grid import count_visited, heuristic
from gridpath.core.path import reconstruct_path
from gridpath.core.types import StepOutcome

ALL_KEYS = ["astar", "dijkstra", "bfs"]


def solve(key, grid):
    outcome, steps = drive(make_algo(key), grid)
    path = reconstruct_path(grid, grid.end) if outcome is StepOutcome.FOUND else []
    return outcome, steps, path, count_visited(grid)


class TestRegistry:
    def test_make_algo_names(self):
        assert isinstance(make_algo("astar"), AStarAlgo)
        assert isinstance(make_algo("dijkstra"), DijkstraAlgo)
        assert isinstance(make_algo("bfs"), BFSAlgo)
        assert [make_algo(k).name for k in ALGORITHMS] == [LABELS[k] for k in ALGORITHMS]

    def test_unknown_algorithm(self):
        with pytest.raises(UnknownAlgorithm):
            make_algo("dfs")


class TestOpenGridScenario:
    """5x5, Start (0,0), End (0,4), no walls."""

    def test_bfs(self, open_grid):
        outcome, steps, path, visited = solve("bfs", open_grid)
        assert outcome is StepOutcome.FOUND
        assert coords(path) == [(0, 1), (0, 2), (0, 3), (0, 4)]
        # every cell at distance 1..3 plus the distance-4 cells queued ahead of End
        assert visited == 13
        assert steps == 15

    def test_dijkstra(self, open_grid):
        outcome, steps, path, visited = solve("dijkstra", open_grid)
        assert outcome is StepOutcome.FOUND
        assert coords(path) == [(0, 1), (0, 2), (0, 3), (0, 4)]
        assert visited == 9
        assert steps == 11

    def test_astar(self, open_grid):
        outcome, steps, path, visited = solve("astar", open_grid)
        assert outcome is StepOutcome.FOUND
        assert coords(path) == [(0, 1), (0, 2), (0, 3), (0, 4)]
        assert visited == 3
        assert steps == 5


class TestWallColumnScenario:
    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_routes_through_gap(self, key):
        grid = make_grid(walls=WALL_COLUMN)
        outcome, _, path, _ = solve(key, grid)
        assert outcome is StepOutcome.FOUND
        assert (4, 2) in coords(path)
        # 4 down + 2 right to the gap, 4 up + 2 right to End
        assert len(path) == 12
        assert not any(c.is_wall for c in path)


class TestUnreachable:
    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_boxed_start(self, key):
        grid = make_grid(start=(2, 2), end=(0, 0), walls=BOXED_START)
        outcome, steps, _, visited = solve(key, grid)
        assert outcome is StepOutcome.EXHAUSTED
        assert visited == 0
        assert steps == 2

    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_walled_in_end_terminates(self, key):
        grid = make_grid(start=(4, 4), end=(0, 0), walls=[(0, 1), (1, 0)])
        outcome, steps, _, visited = solve(key, grid)
        assert outcome is StepOutcome.EXHAUSTED
        assert steps <= len(grid)
        # everything except Start, End and the two walls got explored
        assert visited == 25 - 4

    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_step_after_exhaustion_stays_exhausted(self, key):
        grid = make_grid(start=(2, 2), end=(0, 0), walls=BOXED_START)
        engine = make_algo(key)
        drive(engine, grid)
        assert engine.step(grid, grid.end) is StepOutcome.EXHAUSTED


class TestStepContract:
    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_at_most_one_visited_flag_per_step(self, key):
        grid = make_grid(rows=6, cols=6, start=(5, 0), end=(0, 5), walls=[(2, 2), (3, 3)])
        start, end = grid.validate()
        engine = make_algo(key)
        engine.initialize(grid, start, end)
        before = count_visited(grid)
        while True:
            outcome = engine.step(grid, end)
            after = count_visited(grid)
            assert after - before in (0, 1)
            before = after
            if outcome is not StepOutcome.CONTINUE:
                break
        assert not start.visited and not end.visited

    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_walls_are_never_visited(self, key):
        grid = make_grid(walls=WALL_COLUMN)
        solve(key, grid)
        assert not any(c.visited for c in grid if c.is_wall)

    def test_astar_seeds_start_scores(self, open_grid):
        engine = AStarAlgo()
        start, end = open_grid.validate()
        engine.initialize(open_grid, start, end)
        assert start.g_score == 0
        assert start.f_score == heuristic(start, end) == 4
        assert engine.frontier_size() == 1

    def test_dijkstra_frontier_holds_every_cell(self, open_grid):
        engine = DijkstraAlgo()
        start, end = open_grid.validate()
        engine.initialize(open_grid, start, end)
        assert len(engine.unvisited) == 25
        assert start.distance == 0


class TestProperties:
    PAIRS = [((0, 0), (5, 5)), ((2, 3), (4, 0)), ((5, 1), (0, 1)), ((3, 3), (3, 4))]

    @pytest.mark.parametrize("start,end", PAIRS)
    def test_open_grid_agreement(self, start, end):
        results = {}
        for key in ALL_KEYS:
            grid = make_grid(rows=6, cols=6, start=start, end=end)
            outcome, _, path, visited = solve(key, grid)
            assert outcome is StepOutcome.FOUND
            results[key] = (len(path), visited)

        manhattan = abs(start[0] - end[0]) + abs(start[1] - end[1])
        assert {length for length, _ in results.values()} == {manhattan}
        assert results["astar"][1] <= results["bfs"][1]
        assert results["astar"][1] <= results["dijkstra"][1]

    @pytest.mark.parametrize("seed", range(8))
    def test_random_walls_agreement(self, seed):
        rng = random.Random(seed)
        walls = [(r, c) for r in range(10) for c in range(10)
                 if (r, c) not in ((0, 0), (9, 9)) and rng.random() < 0.25]
        lengths = set()
        found = set()
        for key in ALL_KEYS:
            grid = make_grid(rows=10, cols=10, start=(0, 0), end=(9, 9), walls=walls)
            outcome, steps, path, _ = solve(key, grid)
            assert steps <= 100
            found.add(outcome)
            if outcome is StepOutcome.FOUND:
                lengths.add(len(path))
                assert len(path) >= 18
        assert len(found) == 1
        assert len(lengths) <= 1

    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_deterministic(self, key):
        grid = make_grid(rows=8, cols=8, start=(7, 0), end=(0, 7), walls=[(3, c) for c in range(6)])
        first = solve(key, grid)
        second = solve(key, grid)
        assert coords(first[2]) == coords(second[2])
        assert first[3] == second[3]
        assert first[1] == second[1]
