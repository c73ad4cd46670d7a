# src/sheetcombine/core/merge.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Column merger: primary table + columns only the secondary table has.

Pipeline
--------
1) `compute_merged_header`: primary header followed by every secondary column
   whose name (exact, case-sensitive) is absent from the primary header.
2) `merge_row`: for one primary row, look up its key in the secondary index
   and append the added columns' values (empty strings when unmatched).
3) `merge_tables`: run (1)+(2) over a whole primary table and count matches.

Guarantee
---------
Every merged row has exactly `len(primary_header) + len(added_headers)` cells,
whether or not its key matched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from sheetcombine.core.index import KeyIndex, build_index
from sheetcombine.core.keys import resolve_key_columns, row_key
from sheetcombine.core.table import Table


@dataclass(frozen=True)
class MergeStats:
    """Counters reported after a merge pass."""

    primary_rows: int
    secondary_rows: int
    matched: int
    unmatched: int


@dataclass(frozen=True)
class MergeResult:
    """Merged header, merged rows and their statistics."""

    header: List[str]
    rows: List[List[str]]
    added_headers: List[str]
    stats: MergeStats


# ─────────────────────────────────────────────────────────────────────────────
# Header
# ─────────────────────────────────────────────────────────────────────────────

def added_columns(primary_header: Sequence[str], secondary_header: Sequence[str]) -> List[str]:
    """Secondary column names missing from the primary header, in secondary order."""
    present = set(primary_header)
    return [h for h in secondary_header if h not in present]


def compute_merged_header(primary_header: Sequence[str], secondary_header: Sequence[str]) -> List[str]:
    """Primary header + secondary-only columns.

    >>> compute_merged_header(["Name", "Pos", "Team"], ["Name", "Team", "Proj"])
    ['Name', 'Pos', 'Team', 'Proj']
    """
    return list(primary_header) + added_columns(primary_header, secondary_header)


# ─────────────────────────────────────────────────────────────────────────────
# Rows
# ─────────────────────────────────────────────────────────────────────────────

def _resolve_secondary(
    primary_row: Sequence[str],
    secondary_header: Sequence[str],
    index: KeyIndex,
    name_column: int,
    team_column: int,
) -> Tuple[Sequence[str], bool]:
    match = index.get(row_key(primary_row, name_column, team_column))
    if match is None:
        return [""] * len(secondary_header), False
    return match, True


def merge_row(
    primary_row: Sequence[str],
    primary_header: Sequence[str],
    secondary_header: Sequence[str],
    index: KeyIndex,
    added_headers: Sequence[str],
    name_column: int = 0,
    team_column: int = 2,
    positions: Optional[Dict[str, int]] = None,
) -> List[str]:
    """Merge one primary row with its matching secondary row.

    Args:
        primary_row: Raw cells of the primary row.
        primary_header: Primary table header (fixes the width of the left part).
        secondary_header: Secondary table header.
        index: Secondary rows keyed by join key (see `build_index`).
        added_headers: Columns to append, usually from `added_columns`.
        name_column: Position of the name column in the primary row.
        team_column: Position of the team column in the primary row.
        positions: Optional precomputed `column name → secondary position`.

    Returns:
        A new list: the primary cells (padded/truncated to the primary header
        width) followed by one value per added header.
    """
    merged, _ = _merge_row(
        primary_row, primary_header, secondary_header, index, added_headers,
        name_column, team_column, positions,
    )
    return merged


def _merge_row(
    primary_row: Sequence[str],
    primary_header: Sequence[str],
    secondary_header: Sequence[str],
    index: KeyIndex,
    added_headers: Sequence[str],
    name_column: int,
    team_column: int,
    positions: Optional[Dict[str, int]],
) -> Tuple[List[str], bool]:
    if positions is None:
        positions = _first_positions(secondary_header)

    secondary_row, matched = _resolve_secondary(
        primary_row, secondary_header, index, name_column, team_column
    )

    width = len(primary_header)
    left = list(primary_row[:width])
    left.extend([""] * (width - len(left)))

    right: List[str] = []
    for name in added_headers:
        pos = positions.get(name, -1)
        value = secondary_row[pos] if 0 <= pos < len(secondary_row) else ""
        right.append(value or "")
    return left + right, matched


def _first_positions(header: Sequence[str]) -> Dict[str, int]:
    # Duplicate column names resolve to their first occurrence.
    positions: Dict[str, int] = {}
    for i, name in enumerate(header):
        positions.setdefault(name, i)
    return positions


# ─────────────────────────────────────────────────────────────────────────────
# Whole tables
# ─────────────────────────────────────────────────────────────────────────────

def merge_tables(
    primary: Table,
    secondary: Table,
    name_column: int = 0,
    team_column: int = 2,
    name_header: Optional[str] = "Name",
    team_header: Optional[str] = "Team",
) -> MergeResult:
    """Join `primary` with `secondary` by key and return the merged table.

    Row order and the left-hand columns come from `primary`; unmatched rows
    get empty strings in every added column.

    The key columns are resolved separately for each table: by header text
    (`name_header`, `team_header`) when present, else by `name_column` and
    `team_column`. Pass `None` headers for purely positional matching.
    """
    p_name, p_team = resolve_key_columns(primary.header, name_header, team_header, name_column, team_column)
    s_name, s_team = resolve_key_columns(secondary.header, name_header, team_header, name_column, team_column)

    index = build_index(secondary.rows, s_name, s_team)
    added = added_columns(primary.header, secondary.header)
    header = list(primary.header) + added
    positions = _first_positions(secondary.header)

    rows: List[List[str]] = []
    matched = 0
    for row in primary.rows:
        merged, hit = _merge_row(
            row, primary.header, secondary.header, index, added,
            p_name, p_team, positions,
        )
        rows.append(merged)
        matched += int(hit)

    stats = MergeStats(
        primary_rows=len(primary.rows),
        secondary_rows=len(secondary.rows),
        matched=matched,
        unmatched=len(primary.rows) - matched,
    )
    return MergeResult(header=header, rows=rows, added_headers=added, stats=stats)


__all__ = [
    "MergeStats",
    "MergeResult",
    "added_columns",
    "compute_merged_header",
    "merge_row",
    "merge_tables",
]
