# src/sheetcombine/pipelines/combine_sheets.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
combine_sheets.py

Fetch the two projection tables, join them by player key and write the merged
table as one CSV file (default: `nba_stats.csv`).

The pipeline:
1) Parse CLI arguments and load `CombineConfig` (YAML + environment).
2) Build the table source (`google` or `workbook`) via `sheetcombine.sources`.
3) Fetch the primary and secondary tables; a missing table aborts the run.
4) If either table has no data rows, skip without touching the output file.
5) Merge (`sheetcombine.core.merge.merge_tables`) and render CSV text.
6) Write the file atomically and print a merge summary.

Outcomes
--------
`run_combine` returns a `CombineResult` whose status is one of:
    SKIPPED  - a source table was empty; nothing written (exit code 0)
    WRITTEN  - merged CSV persisted (exit code 0)
    FAILED   - missing table or write failure; nothing written (exit code 1)

Usage
-----
    python -m sheetcombine.pipelines.combine_sheets \
        --config configs/combine.yaml \
        --source workbook --workbook projections.xlsx \
        --output nba_stats.csv
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from sheetcombine.config.combine_config import SOURCE_KINDS, CombineConfig
from sheetcombine.core.errors import CombineError
from sheetcombine.core.merge import MergeStats, merge_tables
from sheetcombine.core.table import Table
from sheetcombine.sources import TableSource, get_source
from sheetcombine.utils.csv_text import to_csv, write_csv_atomic
from sheetcombine.utils.log import configure_logging, get_logger, print_merge_summary

log = get_logger(__name__)


class RunStatus(str, Enum):
    SKIPPED = "skipped"
    WRITTEN = "written"
    FAILED = "failed"


@dataclass(frozen=True)
class CombineResult:
    """Outcome of one combine run."""

    status: RunStatus
    output_path: Optional[Path] = None
    rows_written: int = 0
    stats: Optional[MergeStats] = None
    error: Optional[BaseException] = None
    reason: str = ""

    @property
    def exit_code(self) -> int:
        return 1 if self.status is RunStatus.FAILED else 0


# ─────────────────────────────────────────────────────────────────────────────
# Core run
# ─────────────────────────────────────────────────────────────────────────────
def combine_tables(
    primary: Table,
    secondary: Table,
    output_path: Path,
    name_column: int = 0,
    team_column: int = 2,
    name_header: Optional[str] = "Name",
    team_header: Optional[str] = "Team",
) -> CombineResult:
    """Merge two loaded tables and write the CSV, or skip if either is empty.

    Raises:
        WriteFailureError: If the output file cannot be written.
    """
    if primary.is_empty or secondary.is_empty:
        empty = [t.title or "<unnamed>" for t in (primary, secondary) if t.is_empty]
        log.warning("One or both sheets are empty (%s). Skipping update.", ", ".join(empty))
        return CombineResult(
            status=RunStatus.SKIPPED,
            output_path=output_path,
            reason=f"empty source: {', '.join(empty)}",
        )

    merged = merge_tables(primary, secondary, name_column, team_column, name_header, team_header)
    log.debug("Added columns: %s", merged.added_headers)

    written = write_csv_atomic(output_path, to_csv(merged.header, merged.rows))
    log.info("Successfully wrote %d players to %s", len(merged.rows), written)

    return CombineResult(
        status=RunStatus.WRITTEN,
        output_path=written,
        rows_written=len(merged.rows),
        stats=merged.stats,
    )


def run_combine(config: CombineConfig, source: TableSource) -> CombineResult:
    """Fetch both tables from `source` and combine them per `config`.

    Fatal `CombineError`s (missing table, write failure) are logged and
    returned as a FAILED result; no output is written in that case.
    """
    try:
        log.info("Connected to spreadsheet: %s", source.describe())

        primary = source.fetch(config.primary_sheet)
        secondary = source.fetch(config.secondary_sheet)

        log.info("Loaded %d rows from %s", len(primary), config.primary_sheet)
        log.info("Loaded %d rows from %s", len(secondary), config.secondary_sheet)

        return combine_tables(
            primary,
            secondary,
            config.output_path,
            config.name_column,
            config.team_column,
            config.name_header,
            config.team_header,
        )
    except CombineError as exc:
        log.error("Combine failed: %s", exc)
        return CombineResult(status=RunStatus.FAILED, output_path=config.output_path, error=exc)


# ─────────────────────────────────────────────────────────────────────────────
# CLI
# ─────────────────────────────────────────────────────────────────────────────
def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Combine two spreadsheet tables by player key into one CSV."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file (default: configs/combine.yaml).",
    )
    parser.add_argument(
        "--source",
        choices=list(SOURCE_KINDS),
        default=None,
        help="Override the table source kind from the config.",
    )
    parser.add_argument(
        "--workbook",
        type=Path,
        default=None,
        help="Local .xlsx file or directory of <sheet>.csv (workbook source).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Override the output CSV path from the config.",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("SHEETCOMBINE_LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity level.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the combine job; return the process exit code."""
    args = parse_args(argv)
    configure_logging(getattr(logging, args.log_level))
    log.info("Starting combine-sheets...")

    try:
        config = CombineConfig.load(args.config)
        overrides = {}
        if args.source:
            overrides["source"] = args.source
        if args.workbook:
            overrides["workbook_path"] = args.workbook
        if args.output:
            overrides["output_path"] = args.output
        if overrides:
            config = dataclasses.replace(config, **overrides)

        source = get_source(config.source, config)
        result = run_combine(config, source)
    except (FileNotFoundError, KeyError, ValueError) as exc:
        log.error("Error in combine-sheets: %s", exc)
        return 1

    if result.status is RunStatus.WRITTEN and result.stats is not None:
        print_merge_summary(result.stats, result.output_path)
    return result.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
