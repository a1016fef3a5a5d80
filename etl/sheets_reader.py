"""
Google Sheets reader
- Reads a worksheet range as a grid of strings (row 0 = headers)
- Service-account auth, read-only scope
- Any auth / network / API failure surfaces as SourceUnavailableError
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from tqdm import tqdm

PROJECT_ROOT = Path(__file__).parent.parent.absolute()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config.config import (
    SHEETS,
    get_google_credentials_info,
    get_sheet_range,
    get_spreadsheet_id,
)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]

RawTable = List[List[str]]


class SourceUnavailableError(RuntimeError):
    """The spreadsheet could not be reached, authenticated against, or read."""


class SheetsReader:
    def __init__(self, spreadsheet_id: str, credentials_info: Dict[str, Any]):
        if not spreadsheet_id:
            raise SourceUnavailableError("GOOGLE_SPREADSHEET_ID is not configured")
        self.spreadsheet_id = spreadsheet_id
        self.credentials_info = credentials_info
        self._spreadsheet = None

    @classmethod
    def from_config(cls) -> "SheetsReader":
        try:
            info = get_google_credentials_info()
        except (OSError, ValueError) as e:
            raise SourceUnavailableError(f"Could not load Google credentials: {e}") from e
        return cls(get_spreadsheet_id(), info)

    def _open(self):
        if self._spreadsheet is None:
            creds = Credentials.from_service_account_info(self.credentials_info, scopes=SCOPES)
            client = gspread.authorize(creds)
            self._spreadsheet = client.open_by_key(self.spreadsheet_id)
        return self._spreadsheet

    def fetch(self, table_name: str, cell_range: Optional[str] = None) -> RawTable:
        """Rows of `table_name!cell_range`; an empty worksheet gives []."""
        cell_range = cell_range or get_sheet_range()
        try:
            data = self._open().values_get(f"{table_name}!{cell_range}")
        except (gspread.exceptions.GSpreadException, GoogleAuthError,
                requests.exceptions.RequestException, ValueError) as e:
            raise SourceUnavailableError(f"Failed to read sheet '{table_name}': {e}") from e
        return [[str(cell) for cell in row] for row in data.get("values", [])]


def fetch_all_tables(reader, sheets: Mapping[str, str] = SHEETS,
                     cell_range: Optional[str] = None) -> Dict[str, RawTable]:
    """
    Read every configured worksheet, one after another.
    The first failure aborts the whole read.
    """
    tables: Dict[str, RawTable] = {}
    print(f"[INFO] Loading {len(sheets)} sheets from Google Sheets...")
    for key, sheet_name in tqdm(sheets.items(), total=len(sheets)):
        tables[key] = reader.fetch(sheet_name, cell_range)
    return tables
