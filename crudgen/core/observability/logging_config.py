"""
Logging configuration — set up once by the CLI group.

Every module does ``logger = logging.getLogger(__name__)`` and inherits
this config.  Log records go to stderr so they never mix with ``--json``
output on stdout.

Level precedence:
    --debug / --verbose / --quiet  >  CRUDGEN_LOG_LEVEL  >  WARNING

Optional file output via CRUDGEN_LOG_FILE (level CRUDGEN_LOG_FILE_LEVEL,
defaulting to the console level).
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# ── Format strings ──────────────────────────────────────────────

_FMT_MINIMAL = "%(levelname)s: %(message)s"
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_SHORT = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# Only crudgen's own loggers go below WARNING unless debugging
_PACKAGE_LOGGER = "crudgen"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure Python logging for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a log file, always written in full detail.
        log_file_level: Level for the file handler (default: ``level``).
        stream: Console stream (default: ``sys.stderr``).
    """
    numeric_level = parse_level(level)

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_SHORT
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_SHORT
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(stream or sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    effective_level = numeric_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    # Third-party loggers stay at WARNING unless we're debugging
    root.setLevel(effective_level if effective_level <= logging.DEBUG else logging.WARNING)
    logging.getLogger(_PACKAGE_LOGGER).setLevel(effective_level)

    logging.raiseExceptions = False


def parse_level(level: str | None) -> int:
    """Convert a level name to its numeric constant (WARNING if unknown)."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
