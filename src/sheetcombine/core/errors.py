# src/sheetcombine/core/errors.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exceptions raised by the combine job.

An empty source table is *not* an error: the pipeline reports it as a
skipped run instead (see `sheetcombine.pipelines.combine_sheets.RunStatus`).
"""

from __future__ import annotations


class CombineError(Exception):
    """Base class for fatal combine-job failures."""


class SourceNotFoundError(CombineError, KeyError):
    """A required named table (sheet/tab) is missing from the source."""

    def __init__(self, title: str, available: object = None) -> None:
        self.title = title
        self.available = list(available) if available is not None else []
        super().__init__(title)

    def __str__(self) -> str:
        msg = f"Source table not found: '{self.title}'"
        if self.available:
            msg += f" (available: {', '.join(map(str, self.available))})"
        return msg


class SourceUnavailableError(CombineError):
    """The source document exists in config but cannot be opened or read."""


class WriteFailureError(CombineError, OSError):
    """The merged CSV could not be written to its destination."""


__all__ = ["CombineError", "SourceNotFoundError", "SourceUnavailableError", "WriteFailureError"]
