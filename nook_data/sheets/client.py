from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..models.record import CellValue, RawRecord

"""Google Sheets access for the export.

Values are requested with valueRenderOption=FORMULA so that image cells come
back as their =IMAGE("...") formula rather than an empty rendered value.

Row layout: the first row of each tab is the header, every following row is
a data row. The API omits trailing empty cells, so short rows are padded with
None; cells to the right of the last header are ignored.
"""

__all__ = [
    "SCOPES",
    "SheetFetchError",
    "SheetsClient",
    "build_sheets_service",
    "rows_to_records",
]

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]

VALUE_RENDER_OPTION = "FORMULA"


class SheetFetchError(Exception):
    """Raised when credentials cannot be loaded or a tab cannot be fetched."""


def build_sheets_service(credentials_file: Path) -> Any:
    """Build an authorized Sheets v4 service from a service-account key file."""
    if not credentials_file.exists():
        raise SheetFetchError(f"credentials file not found: {credentials_file}")
    try:
        creds = service_account.Credentials.from_service_account_file(
            str(credentials_file), scopes=SCOPES
        )
    except (ValueError, OSError) as e:
        raise SheetFetchError(f"invalid service account key {credentials_file}: {e}") from e
    return build("sheets", "v4", credentials=creds, cache_discovery=False)


def _a1_sheet_range(sheet_name: str) -> str:
    # タブ名に空白や記号を含むためクォートする ("Bugs - North" 等)
    escaped = sheet_name.replace("'", "''")
    return f"'{escaped}'"


class SheetsClient:
    """Thin wrapper over spreadsheets.values.get for one spreadsheet."""

    def __init__(self, service: Any, spreadsheet_id: str) -> None:
        self.service = service
        self.spreadsheet_id = spreadsheet_id

    def fetch_values(self, sheet_name: str) -> list[list[CellValue]]:
        """Return the raw value grid of a tab (header row included).

        Raises:
            SheetFetchError: on any API error
        """
        logger.debug(f"fetching sheet={sheet_name!r} spreadsheet={self.spreadsheet_id}")
        try:
            response = (
                self.service.spreadsheets()
                .values()
                .get(
                    spreadsheetId=self.spreadsheet_id,
                    range=_a1_sheet_range(sheet_name),
                    valueRenderOption=VALUE_RENDER_OPTION,
                )
                .execute()
            )
        except HttpError as e:
            raise SheetFetchError(f"failed to fetch sheet '{sheet_name}': {e}") from e
        return response.get("values", [])


def _is_blank(cell: CellValue) -> bool:
    return cell is None or (isinstance(cell, str) and cell.strip() == "")


def rows_to_records(values: Sequence[Sequence[CellValue]], sheet_name: str) -> list[RawRecord]:
    """Zip each data row with the header row of a tab.

    Every data row becomes a record, blank ones included (all cells None or
    empty), so row positions match the tab.
    """
    if not values:
        return []
    header = [str(label) for label in values[0]]
    records: list[RawRecord] = []
    blank_rows = 0
    for row in values[1:]:
        if all(_is_blank(cell) for cell in row):
            blank_rows += 1
        padded = list(row[: len(header)]) + [None] * (len(header) - len(row))
        records.append(RawRecord(source_sheet=sheet_name, cells=dict(zip(header, padded))))
    if blank_rows:
        logger.debug(f"sheet={sheet_name!r} kept {blank_rows} blank row(s)")
    return records
