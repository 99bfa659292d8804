from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Protocol, Sequence

import pandas as pd
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from core.config import SheetSettings


logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]


class SourceUnavailable(RuntimeError):
    """The response sheet could not be read."""


class RowSource(Protocol):
    def fetch_rows(self) -> List[List[Any]]:
        """Return the raw cell grid, header row first."""


class SheetsRowSource:
    """Reads one range of a Google Sheet with a service-account credential."""

    def __init__(self, settings: SheetSettings) -> None:
        self.settings = settings

    def _load_credentials(self) -> service_account.Credentials:
        key_text = self.settings.service_key
        key_file = self.settings.service_key_file
        try:
            if key_text:
                return service_account.Credentials.from_service_account_info(json.loads(key_text), scopes=SCOPES)
            if key_file:
                if not Path(key_file).exists():
                    raise SourceUnavailable(f"Google service key file not found: {key_file}")
                return service_account.Credentials.from_service_account_file(key_file, scopes=SCOPES)
        except (ValueError, GoogleAuthError) as exc:
            raise SourceUnavailable("Google service key is not a valid service-account credential.") from exc
        raise SourceUnavailable("No Google credentials configured. Set GOOGLE_SERVICE_KEY or GOOGLE_SERVICE_KEY_FILE.")

    def _sheets_service(self):
        return build("sheets", "v4", credentials=self._load_credentials(), cache_discovery=False)

    def fetch_rows(self) -> List[List[Any]]:
        if not self.settings.sheet_id:
            raise SourceUnavailable("SHEET_ID is not set.")
        sheets = self._sheets_service()
        try:
            payload = (
                sheets.spreadsheets()
                .values()
                .get(spreadsheetId=self.settings.sheet_id, range=self.settings.sheet_range, majorDimension="ROWS")
                .execute()
            )
        except (HttpError, GoogleAuthError, OSError) as exc:
            raise SourceUnavailable(f"Sheets API request failed: {exc}") from exc
        values = payload.get("values", []) if isinstance(payload, dict) else []
        return values if isinstance(values, list) else []


def _cell_text(value: Any) -> str:
    return "" if value is None else str(value)


def rows_to_frame(rows: Sequence[Sequence[Any]]) -> pd.DataFrame:
    """Key every data row by the trimmed header row.

    Short rows leave their trailing columns missing (NaN) rather than blank, and
    cells past the last header are dropped. A repeated header keeps its last cell.
    """
    if not rows:
        return pd.DataFrame()
    headers = [_cell_text(h).strip() for h in rows[0]]
    columns = list(dict.fromkeys(headers))
    records: List[Dict[str, str]] = []
    for row in rows[1:]:
        cells = list(row) if isinstance(row, (list, tuple)) else []
        records.append({headers[i]: _cell_text(v) for i, v in enumerate(cells[: len(headers)])})
    if not records:
        return pd.DataFrame(columns=columns, dtype=object)
    return pd.DataFrame.from_records(records, columns=columns).astype(object)


def load_records(source: RowSource) -> pd.DataFrame:
    """Fetch the sheet once and return its records; failures surface as SourceUnavailable."""
    try:
        rows = source.fetch_rows()
    except SourceUnavailable:
        raise
    except Exception as exc:
        raise SourceUnavailable(f"Row source failed: {exc}") from exc
    frame = rows_to_frame(rows or [])
    logger.info("Fetched %d record(s) across %d column(s)", len(frame), len(frame.columns))
    return frame


def column_values(frame: pd.DataFrame, column: str) -> pd.Series:
    """Trimmed string values of ``column``; absent cells and absent columns read as ''."""
    if column not in frame.columns:
        return pd.Series("", index=frame.index, dtype=object)
    values = frame[column].map(lambda v: "" if v is None or (isinstance(v, float) and pd.isna(v)) else str(v).strip())
    return values.astype(object)
