# src/sheetcombine/core/index.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Lookup index over the secondary table.

`build_index` maps each data row's join key to the full raw row. Duplicate
keys are tolerated: the last row seen wins and a DEBUG line is emitted.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable

from sheetcombine.core.keys import row_key
from sheetcombine.core.table import Row

logger = logging.getLogger(__name__)

KeyIndex = Dict[str, Row]


def build_index(
    rows: Iterable[Row],
    name_column_index: int = 0,
    team_column_index: int = 2,
) -> KeyIndex:
    """Index data rows (header excluded) by their join key.

    Args:
        rows: Data rows of the secondary table.
        name_column_index: Position of the player-name column.
        team_column_index: Position of the team column.

    Returns:
        Mapping join key → raw row. Empty input gives an empty mapping.
    """
    index: KeyIndex = {}
    for row in rows:
        key = row_key(row, name_column_index, team_column_index)
        if key in index:
            logger.debug("Duplicate key %r: later row replaces earlier one", key)
        index[key] = row
    return index


__all__ = ["KeyIndex", "build_index"]
