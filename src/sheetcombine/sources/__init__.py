# src/sheetcombine/sources/__init__.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
sources package initializer
───────────────────────────
Lazy factory for table sources.

`get_source("<kind>", config)` lazily imports the matching module and returns
a ready-to-use source object implementing the `TableSource` protocol:

    describe() -> str             # human-readable name of the document
    fetch(title: str) -> Table    # raises SourceNotFoundError if absent

Design
------
- Heavy client libraries (gspread, pandas/openpyxl) are only imported when the
  corresponding source kind is requested.
"""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Dict, Protocol

if TYPE_CHECKING:  # pragma: no cover
    from sheetcombine.config.combine_config import CombineConfig
    from sheetcombine.core.table import Table


class TableSource(Protocol):
    """Protocol for a named-table provider."""

    def describe(self) -> str:  # pragma: no cover - protocol signature
        ...

    def fetch(self, title: str) -> "Table":  # pragma: no cover - protocol signature
        ...


# Map source kinds to their module paths; each module exposes `from_config`
_SOURCE_MODULES: Dict[str, str] = {
    "google": "sheetcombine.sources.google_sheet",
    "workbook": "sheetcombine.sources.workbook",
}


def get_source(kind: str, config: "CombineConfig") -> TableSource:
    """Build the source of the given `kind` from `config`.

    Raises:
        ValueError: If `kind` is not a recognized source.
    """
    try:
        module_path = _SOURCE_MODULES[kind]
    except KeyError as exc:
        valid = ", ".join(sorted(_SOURCE_MODULES.keys()))
        raise ValueError(f"Unknown source '{kind}'. Valid options are: {valid}") from exc

    module = import_module(module_path)
    return module.from_config(config)


__all__ = ["get_source", "TableSource"]
