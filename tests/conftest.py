"""Shared fixtures: in-memory table source and sample projection tables."""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

import pytest

from sheetcombine.core.errors import SourceNotFoundError
from sheetcombine.core.table import Table


class FakeSource:
    """`TableSource` backed by raw grids held in memory."""

    def __init__(self, grids: Dict[str, Sequence[Sequence[str]]], title: str = "Fake projections") -> None:
        self.grids = grids
        self.title = title
        self.fetched: List[str] = []

    def describe(self) -> str:
        return self.title

    def fetch(self, title: str) -> Table:
        self.fetched.append(title)
        if title not in self.grids:
            raise SourceNotFoundError(title, self.grids.keys())
        return Table.from_grid(self.grids[title], title=title)


@pytest.fixture
def cheat_grid() -> List[List[str]]:
    return [
        ["Name", "Pos", "Team", "Salary"],
        ["LeBron James", "SF", "LAL", "10500"],
        ["Nikola Jokić", "C", "den", "11800"],
        ["De'Aaron Fox", "PG", "SAC ", "8900"],
        ["Unknown Guy", "SG", "BOS", "3000"],
    ]


@pytest.fixture
def projections_grid() -> List[List[str]]:
    return [
        ["Name", "Pos", "Team", "Proj", "Value"],
        ["LEBRON JAMES", "SF", "LAL", "48.1", "4.6"],
        ["NIKOLA JOKIĆ", "C", "DEN", "61.0", "5.2"],
        ["DeAaron Fox", "PG", "SAC", "42.5"],
    ]


@pytest.fixture
def fake_source(cheat_grid, projections_grid) -> FakeSource:
    return FakeSource({"CHEAT SHEET": cheat_grid, "FINAL PROJECTIONS": projections_grid})


@pytest.fixture
def restore_log_levels():
    """Undo level changes made to sheetcombine loggers during a test."""

    def _package_loggers():
        return {
            name: logger
            for name, logger in logging.root.manager.loggerDict.items()
            if name.split(".")[0] == "sheetcombine" and isinstance(logger, logging.Logger)
        }

    saved = {name: logger.level for name, logger in _package_loggers().items()}
    yield
    for name, logger in _package_loggers().items():
        logger.setLevel(saved.get(name, logging.NOTSET))
