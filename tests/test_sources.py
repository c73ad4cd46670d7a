"""Source factory, local workbook source and Google Sheets source."""

import gspread
import pandas as pd
import pytest

from sheetcombine.config.combine_config import CombineConfig
from sheetcombine.core.errors import SourceNotFoundError, SourceUnavailableError
from sheetcombine.sources import get_source
from sheetcombine.sources.google_sheet import GoogleSheetSource
from sheetcombine.sources.workbook import WorkbookSource


def _config(**kwargs) -> CombineConfig:
    base = dict(source="workbook", primary_sheet="A", secondary_sheet="B", output_path="out.csv")
    base.update(kwargs)
    return CombineConfig(**base)


def test_get_source_unknown_kind():
    with pytest.raises(ValueError, match="Unknown source"):
        get_source("ftp", _config())


def test_get_source_workbook(tmp_path):
    source = get_source("workbook", _config(workbook_path=tmp_path))
    assert isinstance(source, WorkbookSource)
    assert source.path == tmp_path


def test_get_source_workbook_requires_path():
    with pytest.raises(KeyError):
        get_source("workbook", _config())


def test_get_source_google_requires_credentials():
    with pytest.raises(KeyError, match="GOOGLE_PRIVATE_KEY"):
        get_source("google", _config(source="google", spreadsheet_id="x", service_account_email="a@b"))


def test_csv_directory_reads_cells_as_text(tmp_path):
    (tmp_path / "FINAL PROJECTIONS.csv").write_text(
        "Name,Team,Proj,Notes\nLeBron James,LAL,27.30,\nStephen Curry,GSW,007,\"out, knee\"\n",
        encoding="utf-8",
    )

    table = WorkbookSource(tmp_path).fetch("FINAL PROJECTIONS")

    assert table.header == ("Name", "Team", "Proj", "Notes")
    assert table.rows == (
        ("LeBron James", "LAL", "27.30", ""),
        ("Stephen Curry", "GSW", "007", "out, knee"),
    )
    assert table.title == "FINAL PROJECTIONS"


def test_csv_directory_missing_sheet_lists_available(tmp_path):
    (tmp_path / "CHEAT SHEET.csv").write_text("Name\n", encoding="utf-8")

    with pytest.raises(SourceNotFoundError) as excinfo:
        WorkbookSource(tmp_path).fetch("FINAL PROJECTIONS")

    assert excinfo.value.available == ["CHEAT SHEET"]


def test_csv_directory_empty_file_is_empty_table(tmp_path):
    (tmp_path / "EMPTY.csv").write_text("", encoding="utf-8")

    table = WorkbookSource(tmp_path).fetch("EMPTY")

    assert table.header == ()
    assert table.is_empty


def test_xlsx_workbook(tmp_path):
    path = tmp_path / "projections.xlsx"
    with pd.ExcelWriter(path) as writer:
        pd.DataFrame([["Name", "Team"], ["LeBron James", "LAL"]]).to_excel(
            writer, sheet_name="CHEAT SHEET", header=False, index=False
        )
        pd.DataFrame([["Name", "Team", "Proj"], ["LeBron James", "LAL", "27.3"]]).to_excel(
            writer, sheet_name="FINAL PROJECTIONS", header=False, index=False
        )

    source = WorkbookSource(path)

    assert source.titles() == ["CHEAT SHEET", "FINAL PROJECTIONS"]
    table = source.fetch("FINAL PROJECTIONS")
    assert table.header == ("Name", "Team", "Proj")
    assert table.rows == (("LeBron James", "LAL", "27.3"),)
    with pytest.raises(SourceNotFoundError):
        source.fetch("MISSING")


def test_missing_workbook_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        WorkbookSource(tmp_path / "nope.xlsx").fetch("A")


def test_csv_directory_tolerates_rows_wider_or_narrower_than_header(tmp_path):
    (tmp_path / "FINAL PROJECTIONS.csv").write_text(
        "Name,Pos,Team\nLeBron James,SF,LAL,48.1\nStephen Curry,PG\n\nLuka Doncic,PG,DAL\n",
        encoding="utf-8",
    )

    table = WorkbookSource(tmp_path).fetch("FINAL PROJECTIONS")

    assert table.header == ("Name", "Pos", "Team")
    assert table.rows == (
        ("LeBron James", "SF", "LAL", "48.1"),
        ("Stephen Curry", "PG"),
        ("Luka Doncic", "PG", "DAL"),
    )


def test_corrupt_xlsx_is_source_unavailable(tmp_path):
    path = tmp_path / "projections.xlsx"
    path.write_bytes(b"PK\x03\x04" + b"truncated" * 8)

    with pytest.raises(SourceUnavailableError):
        WorkbookSource(path).fetch("CHEAT SHEET")


# ─────────────────────────────────────────────────────────────────────────────
# Google Sheets source (gspread replaced by in-memory fakes)
# ─────────────────────────────────────────────────────────────────────────────

class _Worksheet:
    def __init__(self, title, grid):
        self.title = title
        self.grid = grid

    def get_all_values(self):
        return [list(row) for row in self.grid]


class _Spreadsheet:
    def __init__(self, title, sheets):
        self.title = title
        self._sheets = {name: _Worksheet(name, grid) for name, grid in sheets.items()}

    def worksheet(self, title):
        try:
            return self._sheets[title]
        except KeyError:
            raise gspread.exceptions.WorksheetNotFound(title) from None

    def worksheets(self):
        return list(self._sheets.values())


class _Client:
    def __init__(self, spreadsheet=None, error=None):
        self.spreadsheet = spreadsheet
        self.error = error
        self.opened = []

    def open_by_key(self, key):
        self.opened.append(key)
        if self.error is not None:
            raise self.error
        return self.spreadsheet


@pytest.fixture
def gspread_client(monkeypatch):
    spreadsheet = _Spreadsheet(
        "NBA DFS 2026",
        {
            "CHEAT SHEET": [["Name", "Team"], ["LeBron James", "LAL"]],
            "FINAL PROJECTIONS": [["Name", "Team", "Proj"], ["LeBron James", "LAL", "27.3"]],
        },
    )
    client = _Client(spreadsheet)
    calls = []

    def service_account_from_dict(info):
        calls.append(info)
        return client

    monkeypatch.setattr(gspread, "service_account_from_dict", service_account_from_dict)
    client.calls = calls
    return client


def _google_source() -> GoogleSheetSource:
    return GoogleSheetSource("sheet-123", "bot@example.iam.gserviceaccount.com", "-----KEY-----\n")


def test_google_describe_and_fetch(gspread_client):
    source = _google_source()

    assert source.describe() == "NBA DFS 2026"
    table = source.fetch("FINAL PROJECTIONS")

    assert table.header == ("Name", "Team", "Proj")
    assert table.rows == (("LeBron James", "LAL", "27.3"),)
    assert table.title == "FINAL PROJECTIONS"


def test_google_connects_once(gspread_client):
    source = _google_source()

    source.describe()
    source.fetch("CHEAT SHEET")
    source.fetch("FINAL PROJECTIONS")

    assert len(gspread_client.calls) == 1
    assert gspread_client.opened == ["sheet-123"]
    info = gspread_client.calls[0]
    assert info["type"] == "service_account"
    assert info["client_email"] == "bot@example.iam.gserviceaccount.com"
    assert info["private_key"] == "-----KEY-----\n"
    assert info["token_uri"].startswith("https://")


def test_google_missing_worksheet_lists_available(gspread_client):
    with pytest.raises(SourceNotFoundError) as excinfo:
        _google_source().fetch("PROJECTIONS")

    assert excinfo.value.title == "PROJECTIONS"
    assert excinfo.value.available == ["CHEAT SHEET", "FINAL PROJECTIONS"]


def test_google_unreachable_spreadsheet(gspread_client):
    gspread_client.error = gspread.exceptions.SpreadsheetNotFound("sheet-123")

    with pytest.raises(SourceUnavailableError, match="sheet-123"):
        _google_source().describe()


def test_google_from_config(gspread_client):
    source = get_source(
        "google",
        _config(
            source="google",
            spreadsheet_id="sheet-123",
            service_account_email="bot@example.iam.gserviceaccount.com",
            private_key="-----KEY-----\n",
        ),
    )

    assert isinstance(source, GoogleSheetSource)
    assert source.fetch("CHEAT SHEET").rows == (("LeBron James", "LAL"),)
