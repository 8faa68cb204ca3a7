# path: warehouse/crud/xlsx_store.py
from __future__ import annotations

import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Optional, Sequence

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from warehouse.app_logging import get_logger
from warehouse.core.exceptions import InvalidDepartment, NotFound, SchemaMissing, StoreUnavailable
from warehouse.crud.tabular_store import KeyedRowsMixin, Row, trim_trailing_blank_rows


log = get_logger("repo.xlsx")


class XlsxTabularStore(KeyedRowsMixin):
    """
    Хранилище в локальном .xlsx (openpyxl).

    Правило:
    - книга открывается заново на каждый вызов, после изменения сразу сохраняется;
    - никакого кэша между вызовами;
    - имена листов в Excel регистронезависимы: "hr" находит существующий лист "HR".
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> Workbook:
        try:
            return load_workbook(self.path)
        except (OSError, InvalidFileException, zipfile.BadZipFile, KeyError) as e:
            raise StoreUnavailable(
                f"Cannot open workbook {self.path}. Check the path and file permissions. Details: {e}"
            ) from e

    @contextmanager
    def _edit(self) -> Iterator[Workbook]:
        wb = self._load()
        yield wb
        try:
            wb.save(self.path)
        except OSError as e:
            raise StoreUnavailable(
                f"Cannot save workbook {self.path}. Check that the file is not locked or read-only. Details: {e}"
            ) from e

    @staticmethod
    def _title(wb: Workbook, name: str) -> Optional[str]:
        wanted = name.casefold()
        return next((t for t in wb.sheetnames if t.casefold() == wanted), None)

    @classmethod
    def _sheet(cls, wb: Workbook, name: str) -> Worksheet:
        title = cls._title(wb, name)
        if title is None:
            raise SchemaMissing(f"Missing sheet: {name}")
        return wb[title]

    @staticmethod
    def _rows(ws: Worksheet) -> List[Row]:
        rows = [list(r) for r in ws.iter_rows(values_only=True)]
        return trim_trailing_blank_rows(rows)

    @staticmethod
    def _put(ws: Worksheet, row: int, values: Sequence[Any]) -> None:
        for col, value in enumerate(values, start=1):
            ws.cell(row=row, column=col, value=value)

    def has_table(self, name: str) -> bool:
        return self._title(self._load(), name) is not None

    def create_table(self, name: str) -> None:
        with self._edit() as wb:
            if self._title(wb, name) is not None:
                return
            try:
                wb.create_sheet(title=name)
            except ValueError as e:
                raise InvalidDepartment(f"'{name}' cannot be used as a sheet title: {e}") from e
        log.info({"event": "sheet_created", "sheet": name, "path": str(self.path)})

    def read_rows(self, name: str) -> List[Row]:
        return self._rows(self._sheet(self._load(), name))

    def append_row(self, name: str, values: Sequence[Any]) -> None:
        with self._edit() as wb:
            ws = self._sheet(wb, name)
            self._put(ws, len(self._rows(ws)) + 1, values)

    def write_row(self, name: str, row: int, values: Sequence[Any]) -> None:
        with self._edit() as wb:
            self._put(self._sheet(wb, name), row, values)

    def delete_row(self, name: str, row: int) -> None:
        with self._edit() as wb:
            ws = self._sheet(wb, name)
            if not 1 <= row <= len(self._rows(ws)):
                raise NotFound(f"Row {row} is out of range in {name}.")
            ws.delete_rows(row)

    def freeze_header(self, name: str) -> None:
        with self._edit() as wb:
            self._sheet(wb, name).freeze_panes = "A2"
