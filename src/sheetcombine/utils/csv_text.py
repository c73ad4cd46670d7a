# src/sheetcombine/utils/csv_text.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CSV rendering and persistence for the merged table.

This module provides:
- `to_csv`: render header + rows as CSV text, every field double-quoted,
  embedded quotes doubled, lines joined by `\\n` (no trailing newline).
- `write_csv_atomic`: write text to a temporary sibling file and rename it
  over the destination, so readers never see a partial file.
"""

from __future__ import annotations

import csv
import io
import os
import uuid
from pathlib import Path
from typing import Any, Iterable, List, Sequence

from sheetcombine.core.errors import WriteFailureError


# ─────────────────────────────────────────────────────────────────────────────
# Rendering
# ─────────────────────────────────────────────────────────────────────────────

def to_csv(header: Sequence[Any], rows: Iterable[Sequence[Any]]) -> str:
    """Render a header line plus data lines as fully-quoted CSV text.

    `None` cells are written as empty strings.

    >>> to_csv(["a"], [['a"b,c']])
    '"a"\\n"a""b,c"'
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")

    lines: List[Sequence[Any]] = [header, *rows]
    for line in lines:
        writer.writerow(["" if v is None else str(v) for v in line])

    text = buffer.getvalue()
    return text[:-1] if text.endswith("\n") else text


# ─────────────────────────────────────────────────────────────────────────────
# Persistence
# ─────────────────────────────────────────────────────────────────────────────

def write_csv_atomic(path: str | Path, text: str, encoding: str = "utf-8") -> Path:
    """Write `text` to `path` atomically.

    Raises:
        WriteFailureError: If the temporary file cannot be written or renamed.
            The destination is left untouched in that case.
    """
    dest = Path(path)
    temp = dest.parent / f"_temp_{uuid.uuid4().hex[:6]}_{dest.name}"
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps "\n" as-is on every platform
        with open(temp, "w", encoding=encoding, newline="") as fh:
            fh.write(text)
        os.replace(temp, dest)
    except OSError as exc:
        if temp.exists():
            temp.unlink()
        raise WriteFailureError(f"Could not write {dest}: {exc}") from exc
    return dest


__all__ = ["to_csv", "write_csv_atomic"]
