import gspread
import pytest
from google.auth.exceptions import RefreshError

from habit_sync.errors import AuthError, FetchError, WriteError
from habit_sync.integrations import sheets
from habit_sync.integrations.sheets import SheetStore, refresh_credentials


class FakeWorksheet:
    def __init__(self, values):
        self.values = values

    def get_all_values(self):
        return self.values


class FakeSpreadsheet:
    def __init__(self, worksheets, fail_writes=False):
        self.worksheets = worksheets
        self.fail_writes = fail_writes
        self.updates = []

    def worksheet(self, title):
        if title not in self.worksheets:
            raise gspread.WorksheetNotFound(title)
        return FakeWorksheet(self.worksheets[title])

    def values_update(self, range, params=None, body=None):
        if self.fail_writes:
            raise gspread.exceptions.GSpreadException("quota exceeded")
        self.updates.append((range, params, body))
        return {}


class FakeClient:
    def __init__(self, spreadsheet):
        self.spreadsheet = spreadsheet
        self.opened = []

    def open_by_key(self, key):
        self.opened.append(key)
        if self.spreadsheet is None:
            raise gspread.SpreadsheetNotFound(key)
        return self.spreadsheet


def test_refresh_credentials_failure(monkeypatch):
    def refuse(self, request):
        raise RefreshError("invalid_grant")

    monkeypatch.setattr(sheets.Credentials, "refresh", refuse)

    with pytest.raises(AuthError, match="invalid_grant"):
        refresh_credentials("refresh", "client", "secret")


def test_refresh_credentials_success(monkeypatch):
    def accept(self, request):
        self.token = "access"

    monkeypatch.setattr(sheets.Credentials, "refresh", accept)

    creds = refresh_credentials("refresh", "client", "secret")

    assert creds.token == "access"
    assert creds.refresh_token == "refresh"


def test_read_table_opens_spreadsheet_once():
    client = FakeClient(FakeSpreadsheet({"day": [["Day", "Run"]]}))
    store = SheetStore(client, "sheet-id")

    assert store.read_table("day") == [["Day", "Run"]]
    store.read_table("day")
    assert client.opened == ["sheet-id"]


def test_read_missing_sheet():
    store = SheetStore(FakeClient(FakeSpreadsheet({})), "sheet-id")
    with pytest.raises(FetchError, match="week"):
        store.read_table("week")


def test_missing_spreadsheet():
    store = SheetStore(FakeClient(None), "sheet-id")
    with pytest.raises(FetchError, match="sheet-id"):
        store.read_table("day")


def test_write_row_and_column():
    spreadsheet = FakeSpreadsheet({})
    store = SheetStore(FakeClient(spreadsheet), "sheet-id")

    store.write_row("day!3:3", ["6 January 2025", "pass"])
    store.write_column("Habits!E:E", ["nextDueDate", "8 January 2025"])

    assert spreadsheet.updates == [
        (
            "day!3:3",
            {"valueInputOption": "RAW"},
            {"range": "day!3:3", "majorDimension": "ROWS", "values": [["6 January 2025", "pass"]]},
        ),
        (
            "Habits!E:E",
            {"valueInputOption": "RAW"},
            {
                "range": "Habits!E:E",
                "majorDimension": "COLUMNS",
                "values": [["nextDueDate", "8 January 2025"]],
            },
        ),
    ]


def test_write_failure():
    store = SheetStore(FakeClient(FakeSpreadsheet({}, fail_writes=True)), "sheet-id")
    with pytest.raises(WriteError, match="quota"):
        store.write_row("day!2:2", ["x"])


class ExpiredTokenSpreadsheet(FakeSpreadsheet):
    def worksheet(self, title):
        raise RefreshError("Token has been expired or revoked.")

    def values_update(self, range, params=None, body=None):
        raise RefreshError("Token has been expired or revoked.")


def test_token_failure_while_reading_is_a_fetch_error():
    store = SheetStore(FakeClient(ExpiredTokenSpreadsheet({})), "sheet-id")
    with pytest.raises(FetchError, match="expired"):
        store.read_table("day")


def test_token_failure_while_writing_is_a_write_error():
    store = SheetStore(FakeClient(ExpiredTokenSpreadsheet({})), "sheet-id")
    with pytest.raises(WriteError, match="expired"):
        store.write_column("Habits!E:E", ["nextDueDate"])


def test_token_failure_while_opening_is_a_fetch_error():
    class ExpiredClient(FakeClient):
        def open_by_key(self, key):
            raise RefreshError("invalid_grant")

    with pytest.raises(FetchError, match="invalid_grant"):
        SheetStore(ExpiredClient(None), "sheet-id").read_table("day")
