from __future__ import annotations

import logging
import sys


class _ConsoleNoiseFilter(logging.Filter):
    """Keep localturk logs; let third-party loggers (uvicorn, httpx) through only at WARNING+."""

    def __init__(self, verbose: bool = False):
        super().__init__()
        self.verbose = verbose

    def filter(self, record: logging.LogRecord) -> bool:
        if self.verbose or record.name.startswith("localturk"):
            return True
        return record.levelno >= logging.WARNING


def setup_logging(level: str | int = logging.INFO) -> None:
    """Configure the root logger with one stderr handler. Call once at startup."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    handler.addFilter(_ConsoleNoiseFilter(verbose=level <= logging.DEBUG))
    root.addHandler(handler)
    logging.captureWarnings(True)
