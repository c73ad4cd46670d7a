# src/sheetcombine/core/keys.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Join-key derivation.

Two rows describe the same player iff their keys are equal, so the very same
transform must be applied to both source tables.

Key = `<name>|<TEAM>` where:
  - name: lowercased, every character outside `[a-z ]` removed, backticks
    turned into apostrophes, then trimmed;
  - team: uppercased and trimmed.

The name and team cells are located by header text ("Name", "Team") when a
table's header has them, otherwise by the fixed positions 0 and 2.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence, Tuple

KEY_SEPARATOR: str = "|"

_NON_NAME_CHARS = re.compile(r"[^a-z ]")


def normalize(raw_name: Optional[str], raw_team: Optional[str]) -> str:
    """Return the join key for a (name, team) pair. Never raises.

    >>> normalize("LeBron James", "lal ")
    'lebron james|LAL'
    """
    name = (raw_name or "").lower()
    name = _NON_NAME_CHARS.sub("", name)
    # Backtick → apostrophe (no-op once the character filter has run)
    name = name.replace("`", "'").strip()
    team = (raw_team or "").upper().strip()
    return f"{name}{KEY_SEPARATOR}{team}"


def _at(row: Sequence[str], position: int) -> str:
    return row[position] if 0 <= position < len(row) else ""


def resolve_key_columns(
    header: Sequence[str],
    name_header: Optional[str] = "Name",
    team_header: Optional[str] = "Team",
    name_column: int = 0,
    team_column: int = 2,
) -> Tuple[int, int]:
    """Positions of the name and team columns within `header`.

    A column is located by its header text when `name_header`/`team_header`
    is set and present (exact match); otherwise the positional fallback is used.

    >>> resolve_key_columns(["Name", "Team", "Proj"])
    (0, 1)
    >>> resolve_key_columns(["Player", "Pos", "Tm"])
    (0, 2)
    """
    if name_header is not None and name_header in header:
        name_column = list(header).index(name_header)
    if team_header is not None and team_header in header:
        team_column = list(header).index(team_header)
    return name_column, team_column


def row_key(row: Sequence[str], name_column: int = 0, team_column: int = 2) -> str:
    """Key for a raw row, reading name/team by position (missing cells → "")."""
    return normalize(_at(row, name_column), _at(row, team_column))


__all__ = ["KEY_SEPARATOR", "normalize", "resolve_key_columns", "row_key"]
