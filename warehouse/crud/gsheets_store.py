# path: warehouse/crud/gsheets_store.py
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Sequence

import gspread
from google.auth.exceptions import GoogleAuthError
from gspread.exceptions import APIError, SpreadsheetNotFound, WorksheetNotFound
from gspread.utils import rowcol_to_a1

from warehouse.app_logging import get_logger
from warehouse.core.exceptions import SchemaMissing, StoreUnavailable
from warehouse.crud.tabular_store import KeyedRowsMixin, Row, trim_trailing_blank_rows


log = get_logger("repo.gsheets")

NEW_SHEET_ROWS = 1000
NEW_SHEET_COLS = 26


class GoogleSheetsTabularStore(KeyedRowsMixin):
    """
    Хранилище в Google Sheets (gspread, service account).

    Правило:
    - таблица открывается по spreadsheet_id на каждый вызов;
    - ошибки открытия (нет доступа, неверный id, нет файла ключа) -> StoreUnavailable;
    - ошибки API на любом вызове (квота, права, токен) -> StoreUnavailable.
    """

    def __init__(
        self,
        spreadsheet_id: str,
        credentials_file: Optional[str] = None,
        *,
        client: Optional[gspread.Client] = None,
    ) -> None:
        self.spreadsheet_id = spreadsheet_id
        self.credentials_file = credentials_file
        self._gc = client

    @contextmanager
    def _api(self, action: str, sheet: str = "") -> Iterator[None]:
        try:
            yield
        except (APIError, GoogleAuthError) as e:
            log.info({
                "event": "sheets_api_failed",
                "action": action,
                "sheet": sheet,
                "error": type(e).__name__,
                "details": str(e),
            })
            raise StoreUnavailable(f"Google Sheets request failed ({action}). Details: {e}") from e

    def _client(self) -> gspread.Client:
        if self._gc is None:
            kwargs = {"filename": self.credentials_file} if self.credentials_file else {}
            try:
                self._gc = gspread.service_account(**kwargs)
            except (OSError, ValueError, KeyError, GoogleAuthError) as e:
                raise StoreUnavailable(f"Cannot load Google credentials. Details: {e}") from e
        return self._gc

    def _open(self) -> gspread.Spreadsheet:
        if not self.spreadsheet_id:
            raise StoreUnavailable("Cannot open spreadsheet: spreadsheet id is not configured.")
        try:
            return self._client().open_by_key(self.spreadsheet_id)
        except (SpreadsheetNotFound, APIError, GoogleAuthError) as e:
            log.info({"event": "spreadsheet_open_failed", "spreadsheet_id": self.spreadsheet_id, "error": str(e)})
            raise StoreUnavailable(
                "Cannot open spreadsheet. Check spreadsheet id and sharing permissions. "
                f"Details: {e}"
            ) from e

    def _worksheet(self, name: str) -> gspread.Worksheet:
        spreadsheet = self._open()
        try:
            with self._api("worksheet", name):
                return spreadsheet.worksheet(name)
        except WorksheetNotFound as e:
            raise SchemaMissing(f"Missing sheet: {name}") from e

    def has_table(self, name: str) -> bool:
        try:
            self._worksheet(name)
        except SchemaMissing:
            return False
        return True

    def create_table(self, name: str) -> None:
        spreadsheet = self._open()
        with self._api("add_worksheet", name):
            spreadsheet.add_worksheet(title=name, rows=NEW_SHEET_ROWS, cols=NEW_SHEET_COLS)
        log.info({"event": "sheet_created", "sheet": name})

    def read_rows(self, name: str) -> List[Row]:
        ws = self._worksheet(name)
        with self._api("get_all_values", name):
            values = ws.get_all_values()
        return trim_trailing_blank_rows([list(r) for r in values])

    def append_row(self, name: str, values: Sequence[Any]) -> None:
        ws = self._worksheet(name)
        with self._api("append_row", name):
            ws.append_row(list(values), value_input_option="RAW")

    def write_row(self, name: str, row: int, values: Sequence[Any]) -> None:
        range_name = f"{rowcol_to_a1(row, 1)}:{rowcol_to_a1(row, len(values))}"
        ws = self._worksheet(name)
        with self._api("update", name):
            ws.update(range_name=range_name, values=[list(values)], value_input_option="RAW")

    def delete_row(self, name: str, row: int) -> None:
        ws = self._worksheet(name)
        with self._api("delete_rows", name):
            ws.delete_rows(row)

    def freeze_header(self, name: str) -> None:
        ws = self._worksheet(name)
        with self._api("freeze", name):
            ws.freeze(rows=1)
