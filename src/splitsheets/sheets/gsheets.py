"""
Google Sheets table adapter.

The worksheet is read once per pass with unformatted values, so checkboxes
arrive as booleans and percentage cells as fractions. All writes of a pass go
out in a single batch with RAW input so breakdown text is stored verbatim.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

import gspread
from google.oauth2.service_account import Credentials
from gspread.utils import ValueInputOption, ValueRenderOption
from tenacity import retry, stop_after_attempt, wait_exponential

from splitsheets.config import Settings
from splitsheets.logging import get_logger
from splitsheets.models import CellUpdate


SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]


class SheetsConnectionError(ConnectionError):
    pass


def _cell_value(value: object) -> object:
    if isinstance(value, Decimal):
        return float(value)
    if value is None:
        return ""
    return value


class WorksheetTable:
    def __init__(self, worksheet: gspread.Worksheet) -> None:
        self._worksheet = worksheet
        self._log = get_logger(__name__)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def get_values(self) -> list[list[object]]:
        values = self._worksheet.get_values(value_render_option=ValueRenderOption.unformatted)
        self._log.info("sheets.read", worksheet=self._worksheet.title, rows=len(values))
        return values

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def update_cells(self, updates: Sequence[CellUpdate]) -> None:
        if not updates:
            return
        cells = [gspread.Cell(row=u.row, col=u.col, value=_cell_value(u.value)) for u in updates]
        self._worksheet.update_cells(cells, value_input_option=ValueInputOption.raw)
        self._log.info("sheets.write", worksheet=self._worksheet.title, cells=len(cells))


def open_worksheet(settings: Settings, worksheet_name: Optional[str] = None) -> WorksheetTable:
    log = get_logger(__name__)
    try:
        credentials = Credentials.from_service_account_file(settings.credentials_path, scopes=SCOPES)
        client = gspread.authorize(credentials)
        spreadsheet = client.open_by_key(settings.spreadsheet_id)
        name = worksheet_name or settings.worksheet_name
        worksheet = spreadsheet.worksheet(name) if name else spreadsheet.sheet1
    except FileNotFoundError as exc:
        raise SheetsConnectionError(f"Google credentials file not found: {settings.credentials_path}") from exc
    except gspread.SpreadsheetNotFound as exc:
        raise SheetsConnectionError(f"Spreadsheet not found: {settings.spreadsheet_id}") from exc
    except gspread.WorksheetNotFound as exc:
        raise SheetsConnectionError(f"Worksheet not found: {worksheet_name or settings.worksheet_name}") from exc

    log.info("sheets.connect", spreadsheet_id=settings.spreadsheet_id, worksheet=worksheet.title)
    return WorksheetTable(worksheet)
