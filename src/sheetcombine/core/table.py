# src/sheetcombine/core/table.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
In-memory table type shared by every stage of the combine job.

A `Table` holds one header (ordered column names) and its data rows. Rows are
stored as tuples of strings so they cannot be modified once read.

Notes
-----
- Sources return raw grids (list of lists, header first); `Table.from_grid`
  turns them into a `Table`, coercing every cell to `str` (`None` → "").
- Rows may be shorter or longer than the header: spreadsheets commonly drop
  trailing empty cells. Consumers must not assume `len(row) == len(header)`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence, Tuple

Row = Tuple[str, ...]
Header = Tuple[str, ...]


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Table:
    """A named header plus its immutable data rows.

    Attributes:
        header: Ordered column names.
        rows: Data rows (the header row is never included here).
        title: Name of the sheet/tab the table was read from (informational).
    """

    header: Header
    rows: Tuple[Row, ...] = field(default_factory=tuple)
    title: str = ""

    @classmethod
    def from_grid(cls, grid: Iterable[Sequence[Any]], title: str = "") -> "Table":
        """Build a table from a raw grid whose first row is the header."""
        materialized = [tuple(_cell(v) for v in row) for row in grid]
        if not materialized:
            return cls(header=(), rows=(), title=title)
        return cls(header=materialized[0], rows=tuple(materialized[1:]), title=title)

    @property
    def is_empty(self) -> bool:
        """True when the table has no data rows (a header alone counts as empty)."""
        return len(self.rows) == 0

    def __len__(self) -> int:
        return len(self.rows)


__all__ = ["Row", "Header", "Table"]
