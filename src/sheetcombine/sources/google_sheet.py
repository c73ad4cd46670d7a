# src/sheetcombine/sources/google_sheet.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Google Sheets table source (gspread, service-account auth).

Each worksheet (tab) of the spreadsheet is one table; its first row is the
header. The client connects lazily on first use and is then reused.

API and auth failures surface as `SourceUnavailableError`; a missing tab as
`SourceNotFoundError` listing the tabs that do exist.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import gspread
from google.auth.exceptions import GoogleAuthError

from sheetcombine.config.combine_config import (
    ENV_PRIVATE_KEY,
    ENV_SERVICE_ACCOUNT_EMAIL,
    ENV_SPREADSHEET_ID,
    CombineConfig,
)
from sheetcombine.core.errors import SourceNotFoundError, SourceUnavailableError
from sheetcombine.core.table import Table
from sheetcombine.utils.log import get_logger

log = get_logger(__name__)

_TOKEN_URI = "https://oauth2.googleapis.com/token"


class GoogleSheetSource:
    """Reads worksheets from one Google spreadsheet."""

    def __init__(self, spreadsheet_id: str, client_email: str, private_key: str) -> None:
        self.spreadsheet_id = spreadsheet_id
        self._credentials: Dict[str, Any] = {
            "type": "service_account",
            "client_email": client_email,
            "private_key": private_key,
            "token_uri": _TOKEN_URI,
        }
        self._spreadsheet: Optional[gspread.Spreadsheet] = None

    def _open(self) -> gspread.Spreadsheet:
        if self._spreadsheet is None:
            try:
                client = gspread.service_account_from_dict(self._credentials)
                self._spreadsheet = client.open_by_key(self.spreadsheet_id)
            except (gspread.exceptions.GSpreadException, GoogleAuthError) as exc:
                raise SourceUnavailableError(
                    f"Cannot open spreadsheet {self.spreadsheet_id}: {exc!r}"
                ) from exc
            log.debug("Opened spreadsheet %s", self.spreadsheet_id)
        return self._spreadsheet

    def describe(self) -> str:
        return self._open().title

    def fetch(self, title: str) -> Table:
        spreadsheet = self._open()
        try:
            grid = spreadsheet.worksheet(title).get_all_values()
        except gspread.exceptions.WorksheetNotFound as exc:
            available = [ws.title for ws in spreadsheet.worksheets()]
            raise SourceNotFoundError(title, available) from exc
        except gspread.exceptions.GSpreadException as exc:
            raise SourceUnavailableError(f"Cannot read worksheet '{title}': {exc!r}") from exc
        return Table.from_grid(grid, title=title)


def from_config(config: CombineConfig) -> GoogleSheetSource:
    """Build a `GoogleSheetSource` from credentials held in `config`.

    Raises:
        KeyError: If a required credential is missing from the environment.
    """
    required = {
        ENV_SPREADSHEET_ID: config.spreadsheet_id,
        ENV_SERVICE_ACCOUNT_EMAIL: config.service_account_email,
        ENV_PRIVATE_KEY: config.private_key,
    }
    missing = [name for name, value in required.items() if not value]
    if missing:
        raise KeyError(f"Missing environment variables: {', '.join(missing)}")

    return GoogleSheetSource(
        spreadsheet_id=config.spreadsheet_id,  # type: ignore[arg-type]
        client_email=config.service_account_email,  # type: ignore[arg-type]
        private_key=config.private_key,  # type: ignore[arg-type]
    )


__all__ = ["GoogleSheetSource", "from_config"]
