# path: warehouse/crud/memory_store.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from warehouse.core.exceptions import NotFound, SchemaMissing, StoreUnavailable
from warehouse.crud.tabular_store import KeyedRowsMixin, Row, trim_trailing_blank_rows


class MemoryTabularStore(KeyedRowsMixin):
    """
    Хранилище в памяти процесса.

    Нужен для тестов и локального запуска без Google/xlsx.
    available=False имитирует недоступную таблицу (StoreUnavailable на любой вызов).
    """

    def __init__(self, tables: Optional[Dict[str, List[Row]]] = None, *, available: bool = True) -> None:
        self._tables: Dict[str, List[Row]] = {
            name: [list(r) for r in rows] for name, rows in (tables or {}).items()
        }
        self.available = available
        self.frozen: set[str] = set()

    @classmethod
    def with_departments(cls, sheet: str, departments: Iterable[str]) -> "MemoryTabularStore":
        rows: List[Row] = [["Department"]]
        rows.extend([d] for d in departments)
        return cls({sheet: rows})

    def _check_available(self) -> None:
        if not self.available:
            raise StoreUnavailable("Cannot open spreadsheet. Check spreadsheet id and sharing permissions.")

    def _table(self, name: str) -> List[Row]:
        self._check_available()
        try:
            return self._tables[name]
        except KeyError as e:
            raise SchemaMissing(f"Missing sheet: {name}") from e

    def has_table(self, name: str) -> bool:
        self._check_available()
        return name in self._tables

    def create_table(self, name: str) -> None:
        self._check_available()
        self._tables.setdefault(name, [])

    def read_rows(self, name: str) -> List[Row]:
        return trim_trailing_blank_rows([list(r) for r in self._table(name)])

    def append_row(self, name: str, values: Sequence[Any]) -> None:
        table = self._table(name)
        trim_trailing_blank_rows(table)
        table.append(list(values))

    def write_row(self, name: str, row: int, values: Sequence[Any]) -> None:
        table = self._table(name)
        while len(table) < row:
            table.append([])
        table[row - 1] = list(values)

    def delete_row(self, name: str, row: int) -> None:
        table = self._table(name)
        if not 1 <= row <= len(table):
            raise NotFound(f"Row {row} is out of range in {name}.")
        del table[row - 1]

    def freeze_header(self, name: str) -> None:
        self._table(name)
        self.frozen.add(name)
