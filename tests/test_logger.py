import logging

from gridpath.utils.logger import get_logger, set_level


def test_unknown_environment_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("GRIDPATH_LOG_LEVEL", "verbose")
    log = get_logger("gridpath.tests.bad_env_level")
    assert log.level == logging.INFO


def test_environment_level_is_used(monkeypatch):
    monkeypatch.setenv("GRIDPATH_LOG_LEVEL", "warning")
    log = get_logger("gridpath.tests.env_level")
    assert log.level == logging.WARNING


def test_handlers_are_added_once(monkeypatch):
    monkeypatch.delenv("GRIDPATH_LOG_FILE", raising=False)
    first = get_logger("gridpath.tests.once")
    second = get_logger("gridpath.tests.once")
    assert first is second
    assert len(second.handlers) == 1
    assert not second.propagate


def test_set_level_applies_to_gridpath_loggers():
    log = get_logger("gridpath.tests.set_level")
    set_level("debug")
    assert log.level == logging.DEBUG
    set_level("INFO")
