import pytest

from gridpath.core.settings import SETTINGS, Settings, clamp_speed, resolve_settings


def test_defaults():
    s = resolve_settings([], {})
    assert s == SETTINGS
    assert (s.ROWS, s.COLS) == (20, 20)
    assert s.START == (10, 5) and s.END == (10, 15)
    assert s.ALGORITHM == "astar"


def test_environment_overrides():
    s = resolve_settings([], {"GRIDPATH_ALGO": "BFS", "GRIDPATH_SPEED": "7",
                              "GRIDPATH_LOG_LEVEL": "debug"})
    assert s.ALGORITHM == "bfs"
    assert s.SPEED == 7.0
    assert s.LOG_LEVEL == "DEBUG"


def test_flags_win_over_environment():
    s = resolve_settings(["--algo=dijkstra", "--speed=2.5", "--other"], {"GRIDPATH_ALGO": "bfs"})
    assert s.ALGORITHM == "dijkstra"
    assert s.SPEED == 2.5


def test_base_is_kept():
    base = Settings(ROWS=5, COLS=5, START=(0, 0), END=(4, 4))
    s = resolve_settings(["--speed=3"], {}, base=base)
    assert s.ROWS == 5 and s.END == (4, 4) and s.SPEED == 3.0


@pytest.mark.parametrize("argv", [["--speed=0"], ["--speed=-1"], ["--speed=fast"],
                                  ["--algo=dfs"], ["--log-level=loud"]])
def test_bad_values(argv):
    with pytest.raises(ValueError):
        resolve_settings(argv, {})


def test_clamp_speed():
    assert clamp_speed(0.2) == SETTINGS.MIN_SPEED
    assert clamp_speed(11) == SETTINGS.MAX_SPEED
    assert clamp_speed(4) == 4


def test_algorithm_keys_follow_registry():
    from gridpath.core.algorithms import ALGORITHMS, LABELS
    from gridpath.core.settings import ALGORITHM_KEYS, parse_algorithm

    assert ALGORITHM_KEYS == tuple(ALGORITHMS) == tuple(LABELS)
    for key in ALGORITHMS:
        assert parse_algorithm(key.upper()) == key
