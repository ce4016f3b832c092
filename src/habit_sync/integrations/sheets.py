from __future__ import annotations

from typing import List, Optional

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from habit_sync.errors import AuthError, FetchError, WriteError

TOKEN_URI = "https://oauth2.googleapis.com/token"
SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

# gspread lets token refresh failures from its session through unwrapped.
SHEETS_ERRORS = (
    gspread.exceptions.GSpreadException,
    GoogleAuthError,
    requests.RequestException,
)


def refresh_credentials(
    refresh_token: str, client_id: str, client_secret: str
) -> Credentials:
    """Trade the stored refresh token for a fresh access token."""

    creds = Credentials(
        token=None,
        refresh_token=refresh_token,
        client_id=client_id,
        client_secret=client_secret,
        token_uri=TOKEN_URI,
        scopes=SCOPES,
    )
    try:
        creds.refresh(Request())
    except (GoogleAuthError, requests.RequestException) as e:
        raise AuthError(f"could not refresh Google API token: {e}") from e
    return creds


class SheetStore:
    """Reads whole tabs and writes single rows/columns of one spreadsheet."""

    def __init__(self, client: gspread.Client, spreadsheet_id: str):
        self.client = client
        self.spreadsheet_id = spreadsheet_id
        self._spreadsheet: Optional[gspread.Spreadsheet] = None

    @classmethod
    def connect(cls, credentials: Credentials, spreadsheet_id: str) -> "SheetStore":
        return cls(gspread.authorize(credentials), spreadsheet_id)

    def spreadsheet(self) -> gspread.Spreadsheet:
        if self._spreadsheet is None:
            try:
                self._spreadsheet = self.client.open_by_key(self.spreadsheet_id)
            except SHEETS_ERRORS as e:
                raise FetchError(
                    f"could not open spreadsheet {self.spreadsheet_id}: {e}"
                ) from e
        return self._spreadsheet

    def read_table(self, sheet_name: str) -> List[List[str]]:
        try:
            return self.spreadsheet().worksheet(sheet_name).get_all_values()
        except gspread.WorksheetNotFound:
            raise FetchError(f"sheet '{sheet_name}' does not exist") from None
        except SHEETS_ERRORS as e:
            raise FetchError(f"could not read sheet '{sheet_name}': {e}") from e

    def write_row(self, sheet_range: str, row: List[str]) -> None:
        self._put(sheet_range, [row], "ROWS")

    def write_column(self, sheet_range: str, values: List[str]) -> None:
        self._put(sheet_range, [values], "COLUMNS")

    def _put(self, sheet_range: str, values: List[List[str]], dimension: str) -> None:
        body = {"range": sheet_range, "majorDimension": dimension, "values": values}
        try:
            self.spreadsheet().values_update(
                sheet_range, params={"valueInputOption": "RAW"}, body=body
            )
        except SHEETS_ERRORS as e:
            raise WriteError(f"could not write {sheet_range}: {e}") from e
