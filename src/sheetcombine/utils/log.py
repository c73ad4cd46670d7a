# src/sheetcombine/utils/log.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging and reporting utilities for sheetcombine.

Provides:
    - `get_logger(name, level)`: standardized logger configuration
    - `configure_logging(level)`: root setup + one level for the whole package
    - `print_merge_summary(stats, output_path)`: console report of a merge pass

Notes
-----
- Output of the *print_* helpers is intended for human-readable console reports.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from sheetcombine.core.merge import MergeStats

# ─────────────────────────────────────────────────────────────────────────────
# Log formatting
# ─────────────────────────────────────────────────────────────────────────────

_LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s: %(message)s"
_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

PACKAGE_LOGGER: str = "sheetcombine"


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return a configured `logging.Logger` with a consistent format.

    The logger:
      - Writes to `stdout` via a single `StreamHandler`.
      - Uses a unified timestamped format across the project.
      - Does not propagate to ancestor loggers (avoids duplicate lines).

    Args:
        name: Logger name to create/retrieve.
        level: Initial log level (e.g., `logging.INFO`). Defaults to the level
            set on the package logger by `configure_logging`, else INFO.

    Returns:
        A configured `logging.Logger` instance.
    """
    logger = logging.getLogger(name)

    # Already configured: return as-is (prevents duplicate handlers).
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))

    if level is None:
        level = logging.getLogger(PACKAGE_LOGGER).level or logging.INFO

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def configure_logging(level: int) -> None:
    """Configure the root logger and apply `level` to every sheetcombine logger.

    Plain module loggers (`logging.getLogger(__name__)`) inherit the level from
    the package logger; loggers built by `get_logger` carry their own level
    and are updated in place. Loggers created afterwards pick it up as well.
    """
    logging.basicConfig(level=level, format=_LOG_FORMAT, datefmt=_DATE_FORMAT)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)

    for name, logger in list(logging.root.manager.loggerDict.items()):
        if not name.startswith(PACKAGE_LOGGER + ".") or not isinstance(logger, logging.Logger):
            continue
        if logger.level != logging.NOTSET:
            logger.setLevel(level)


# ─────────────────────────────────────────────────────────────────────────────
# Console reporting helpers
# ─────────────────────────────────────────────────────────────────────────────

def print_merge_summary(stats: MergeStats, output_path: Optional[Path] = None) -> None:
    """Print row counts and match rate of a merge pass.

    Args:
        stats: Counters returned by `merge_tables`.
        output_path: File the merged CSV was written to, if any.
    """
    rate = (stats.matched / stats.primary_rows * 100.0) if stats.primary_rows else 0.0

    print("=== MERGE SUMMARY ===")
    if output_path is not None:
        print(f"  Output          : {output_path}")
    print(f"  Primary rows    : {stats.primary_rows}")
    print(f"  Secondary rows  : {stats.secondary_rows}")
    print(f"  Matched rows    : {stats.matched} ({rate:.1f}%)")
    print(f"  Unmatched rows  : {stats.unmatched}")


__all__ = ["PACKAGE_LOGGER", "configure_logging", "get_logger", "print_merge_summary"]
