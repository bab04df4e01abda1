from __future__ import annotations

import logging
import os
from typing import Literal

import coloredlogs  # type: ignore[import]

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]

DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
DEFAULT_DATE_FORMAT = "%H:%M:%S"

# bleak logs every D-Bus signal and advertisement at debug
BACKEND_LOGGERS = ("bleak", "dbus_fast")


def level_for_verbosity(verbosity: int) -> LogLevel | None:
    """Map repeated --verbose flags to a level; zero defers to LOGLEVEL."""
    return "DEBUG" if verbosity > 0 else None


def setup_logging(level: LogLevel | None = None, backend_debug: bool = False) -> None:
    resolved = (level or os.environ.get("LOGLEVEL", "INFO")).upper()

    coloredlogs.install(
        level=resolved,
        fmt=DEFAULT_FORMAT,
        datefmt=DEFAULT_DATE_FORMAT,
    )

    backend_level = logging.DEBUG if backend_debug else logging.WARNING
    for name in BACKEND_LOGGERS:
        logging.getLogger(name).setLevel(backend_level)
