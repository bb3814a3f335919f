from conftest import coords, drive, make_grid
from gridpath.core.bfs import BFSAlgo
from gridpath.core.path import build_result, count_visited, reconstruct_path
from gridpath.core.types import RunResult


def test_reconstruct_excludes_start_and_ends_at_end(open_grid):
    drive(BFSAlgo(), open_grid)
    path = reconstruct_path(open_grid, open_grid.end)
    assert path[-1] is open_grid.end
    assert open_grid.start not in path
    assert len(path) == 4


def test_path_is_contiguous(open_grid):
    open_grid.cell(1, 1).is_wall = True
    open_grid.cell(0, 2).is_wall = True
    drive(BFSAlgo(), open_grid)
    path = [open_grid.start] + reconstruct_path(open_grid, open_grid.end)
    for a, b in zip(path, path[1:]):
        assert abs(a.row - b.row) + abs(a.col - b.col) == 1


def test_reconstruct_stops_without_back_reference(open_grid):
    # End never reached: only End itself comes back
    assert coords(reconstruct_path(open_grid, open_grid.end)) == [(0, 4)]


def test_manual_chain():
    grid = make_grid(rows=1, cols=4, start=(0, 0), end=(0, 3))
    grid.cell(0, 3).came_from = (0, 2)
    grid.cell(0, 2).came_from = (0, 1)
    grid.cell(0, 1).came_from = (0, 0)
    assert coords(reconstruct_path(grid, grid.end)) == [(0, 1), (0, 2), (0, 3)]


def test_build_result_found(open_grid):
    drive(BFSAlgo(), open_grid)
    result = build_result(open_grid, open_grid.end, True, "BFS", 123.4, 15)
    assert result.found
    assert result.path_length == 4
    assert result.visited_count == count_visited(open_grid) == 13
    assert result.as_stats() == {
        "algorithm": "BFS",
        "elapsed_ms": 123,
        "path_length": 4,
        "visited_count": 13,
    }


def test_build_result_not_found_has_no_path(open_grid):
    result = build_result(open_grid, open_grid.end, False, "A*", 0.0, 2)
    assert not result.found
    assert result.path == []
    assert result.path_length == 0


def test_run_result_defaults():
    result = RunResult(found=False)
    assert result.path_length == 0
    assert result.as_stats()["visited_count"] == 0
