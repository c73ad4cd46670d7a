# src/sheetcombine/sources/workbook.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Local workbook table source.

Two layouts are supported:
  - an Excel workbook (`.xlsx`/`.xls`): one table per sheet;
  - a directory of CSV exports: one table per `<title>.csv` file.

Every cell is read as text (no numeric coercion) so values are written back
exactly as they appear in the sheet. Blank cells become "".

Notes
-----
- CSV exports may be ragged (a data row wider than the header). The file is
  scanned once for per-record widths, read with that many columns, then every
  record is cut back to its own width so no padding cells are invented.
"""

from __future__ import annotations

import csv
import zipfile
from pathlib import Path
from typing import Any, List

import pandas as pd

from sheetcombine.config.combine_config import CombineConfig
from sheetcombine.core.errors import SourceNotFoundError, SourceUnavailableError
from sheetcombine.core.table import Table

Grid = List[List[Any]]


class WorkbookSource:
    """Reads named tables from an `.xlsx` file or a CSV directory."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def describe(self) -> str:
        return self.path.name

    def titles(self) -> List[str]:
        """Names of all tables available in the workbook."""
        if self.path.is_dir():
            return sorted(p.stem for p in self.path.glob("*.csv"))
        try:
            with pd.ExcelFile(self.path) as xls:
                return [str(name) for name in xls.sheet_names]
        except zipfile.BadZipFile as exc:
            raise SourceUnavailableError(f"Cannot open workbook {self.path}: {exc}") from exc

    def fetch(self, title: str) -> Table:
        if not self.path.exists():
            raise FileNotFoundError(f"Workbook not found: {self.path}")

        if self.path.is_dir():
            csv_path = self.path / f"{title}.csv"
            if not csv_path.exists():
                raise SourceNotFoundError(title, self.titles())
            grid = self._read_csv(csv_path)
        else:
            available = self.titles()
            if title not in available:
                raise SourceNotFoundError(title, available)
            df = pd.read_excel(self.path, sheet_name=title, header=None, dtype=str)
            grid = df.fillna("").values.tolist()

        return Table.from_grid(grid, title=title)

    @staticmethod
    def _read_csv(path: Path) -> Grid:
        with open(path, newline="", encoding="utf-8") as fh:
            # pandas skips blank lines; so does this scan
            widths = [len(record) for record in csv.reader(fh) if record]
        if not widths:
            return []

        df = pd.read_csv(
            path,
            header=None,
            names=range(max(widths)),
            dtype=str,
            keep_default_na=False,
        )
        return [row[:width] for row, width in zip(df.fillna("").values.tolist(), widths)]


def from_config(config: CombineConfig) -> WorkbookSource:
    """Build a `WorkbookSource` from `config.workbook_path`.

    Raises:
        KeyError: If no workbook path is configured.
    """
    if config.workbook_path is None:
        raise KeyError("'workbook_path' must be set for the workbook source.")
    return WorkbookSource(config.workbook_path)


__all__ = ["WorkbookSource", "from_config"]
