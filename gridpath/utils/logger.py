import logging
import os
from typing import Optional

from gridpath.core.settings import LOG_LEVELS

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"


def _ensure_dir(path: str) -> None:
    if path:
        os.makedirs(path, exist_ok=True)


def get_logger(name: str,
               file_path: Optional[str] = None,
               level: Optional[str] = None) -> logging.Logger:
    """
    Logger with consistent formatting. Writes to stderr, and also to a file
    when `file_path` (or GRIDPATH_LOG_FILE) is given.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger  # already configured

    level = (level or os.getenv("GRIDPATH_LOG_LEVEL") or "INFO").upper()
    if level not in LOG_LEVELS:
        level = "INFO"  # bad values are reported by resolve_settings
    logger.setLevel(level)
    fmt = logging.Formatter(fmt=FORMAT, datefmt=DATEFMT)

    file_path = file_path or os.getenv("GRIDPATH_LOG_FILE")
    if file_path:
        _ensure_dir(os.path.dirname(file_path))
        fh = logging.FileHandler(file_path, encoding="utf-8")
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    sh = logging.StreamHandler()
    sh.setFormatter(fmt)
    logger.addHandler(sh)

    logger.propagate = False
    return logger


def set_level(level: str) -> None:
    """Apply `level` to every gridpath logger created so far."""
    for name, obj in logging.Logger.manager.loggerDict.items():
        if name.startswith("gridpath") and isinstance(obj, logging.Logger):
            obj.setLevel(level.upper())
