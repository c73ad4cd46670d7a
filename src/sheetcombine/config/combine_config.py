# src/sheetcombine/config/combine_config.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Typed loader for the combine job configuration.

Tunables (sheet titles, output path, join columns, source kind) live in
`configs/combine.yaml`. Credentials and the spreadsheet identifier are read
from the environment, after `python-dotenv` has loaded any local `.env`.

Usage
-----
    from sheetcombine.config.combine_config import CombineConfig

    cfg = CombineConfig.load()
    # cfg.primary_sheet, cfg.secondary_sheet, cfg.output_path, ...

Notes
-----
- The instance is frozen: build it once at startup, derive variants with
  `dataclasses.replace` (e.g. CLI overrides), never mutate it.
- `GOOGLE_PRIVATE_KEY` is often stored with literal `\\n` sequences; they are
  turned into real newlines here.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Mapping, Optional

import yaml
from dotenv import load_dotenv

SOURCE_KINDS = ("google", "workbook")

ENV_SPREADSHEET_ID = "SPREADSHEET_ID"
ENV_SERVICE_ACCOUNT_EMAIL = "GOOGLE_SERVICE_ACCOUNT_EMAIL"
ENV_PRIVATE_KEY = "GOOGLE_PRIVATE_KEY"


@dataclass(frozen=True)
class CombineConfig:
    """Configuration for one combine run.

    Attributes:
        source: Source kind, one of `SOURCE_KINDS`.
        primary_sheet: Title of the table that anchors rows and columns.
        secondary_sheet: Title of the table whose extra columns are appended.
        output_path: Destination CSV file.
        name_column: 0-based position of the name column in both tables.
        name_header: Header text of the name column (None: positional only).
        team_header: Header text of the team column (None: positional only).
        team_column: 0-based position of the team column in both tables.
        workbook_path: Local `.xlsx` file or CSV directory (`workbook` source).
        spreadsheet_id: Google spreadsheet identifier (`google` source).
        service_account_email: Service-account client e-mail.
        private_key: Service-account private key (PEM text).
    """

    # Repository-relative default location for the YAML config
    config_path: ClassVar[Path] = Path(__file__).resolve().parents[3] / "configs" / "combine.yaml"

    source: str
    primary_sheet: str
    secondary_sheet: str
    output_path: Path
    name_column: int = 0
    team_column: int = 2
    name_header: Optional[str] = "Name"
    team_header: Optional[str] = "Team"
    workbook_path: Optional[Path] = None
    spreadsheet_id: Optional[str] = None
    service_account_email: Optional[str] = None
    private_key: Optional[str] = None

    # --------------------------------------------------------------------- #
    # Factory
    # --------------------------------------------------------------------- #
    @classmethod
    def load(
        cls,
        path: Optional[Path] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> "CombineConfig":
        """Load tunables from YAML and credentials from the environment.

        Args:
            path: YAML file to read (defaults to `configs/combine.yaml`).
            env: Environment mapping; when omitted, `.env` is loaded and
                `os.environ` is used.

        Returns:
            An initialized `CombineConfig` instance.

        Raises:
            FileNotFoundError: If the YAML config file is missing.
            KeyError/ValueError: If required YAML keys are missing or invalid.
        """
        cfg_path = Path(path) if path is not None else cls.config_path
        if not cfg_path.exists():
            raise FileNotFoundError(f"Combine config not found: {cfg_path}")

        raw = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"Invalid YAML structure in {cfg_path}; expected a mapping.")

        required_keys = ("primary_sheet", "secondary_sheet", "output_path")
        missing = [k for k in required_keys if k not in raw]
        if missing:
            raise KeyError(f"Missing keys in {cfg_path.name}: {', '.join(missing)}")

        source = str(raw.get("source", "google"))
        if source not in SOURCE_KINDS:
            raise ValueError(f"Unknown source '{source}' in {cfg_path.name}; expected one of {SOURCE_KINDS}")

        name_column = int(raw.get("name_column", 0))
        team_column = int(raw.get("team_column", 2))
        if name_column < 0 or team_column < 0:
            raise ValueError("'name_column' and 'team_column' must be non-negative.")

        if env is None:
            load_dotenv()
            env = os.environ

        private_key = env.get(ENV_PRIVATE_KEY)
        if private_key:
            private_key = private_key.replace("\\n", "\n")

        name_header = raw.get("name_header", "Name")
        team_header = raw.get("team_header", "Team")

        workbook = raw.get("workbook_path")
        return cls(
            source=source,
            primary_sheet=str(raw["primary_sheet"]),
            secondary_sheet=str(raw["secondary_sheet"]),
            output_path=Path(raw["output_path"]),
            name_column=name_column,
            team_column=team_column,
            name_header=str(name_header) if name_header is not None else None,
            team_header=str(team_header) if team_header is not None else None,
            workbook_path=Path(workbook) if workbook else None,
            spreadsheet_id=env.get(ENV_SPREADSHEET_ID) or None,
            service_account_email=env.get(ENV_SERVICE_ACCOUNT_EMAIL) or None,
            private_key=private_key or None,
        )
