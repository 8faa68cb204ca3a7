# path: warehouse/crud/tabular_store.py
from __future__ import annotations

from typing import Any, Iterable, List, Optional, Protocol, Sequence


Row = List[Any]


def cell_text(value: Any) -> str:
    """Ячейка -> обрезанная строка (None -> "")."""
    if value is None:
        return ""
    return str(value).strip()


def is_blank_row(row: Iterable[Any]) -> bool:
    return all(cell_text(c) == "" for c in row)


def trim_trailing_blank_rows(rows: List[Row]) -> List[Row]:
    """Аналог getDataRange(): хвостовые пустые строки в диапазон данных не входят."""
    while rows and is_blank_row(rows[-1]):
        rows.pop()
    return rows


class ITabularStore(Protocol):
    """
    Интерфейс табличного хранилища (DI-контракт).

    Семантика:
    - таблица = вкладка (sheet) по имени;
    - read_rows отдаёт ВСЕ строки, включая заголовок (строка 1);
    - номера строк 1-based, как в самой таблице;
    - каждая запись переписывает строку целиком.
    """

    def has_table(self, name: str) -> bool: ...
    def create_table(self, name: str) -> None: ...
    def read_rows(self, name: str) -> List[Row]: ...
    def append_row(self, name: str, values: Sequence[Any]) -> None: ...
    def write_row(self, name: str, row: int, values: Sequence[Any]) -> None: ...
    def delete_row(self, name: str, row: int) -> None: ...
    def freeze_header(self, name: str) -> None: ...

    def update_row_by_key(self, name: str, key: str, values: Sequence[Any]) -> bool: ...
    def delete_row_by_key(self, name: str, key: str) -> bool: ...


class KeyedRowsMixin:
    """
    Поиск строки по ключу (колонка A) на свежем чтении.

    Номер строки живёт только внутри одного вызова адаптера:
    наружу не отдаётся и между запросами не переносится.
    """

    def find_row_by_key(self, name: str, key: str) -> Optional[int]:
        target = cell_text(key)
        rows = self.read_rows(name)  # type: ignore[attr-defined]
        for idx, row in enumerate(rows[1:], start=2):
            if row and cell_text(row[0]) == target:
                return idx
        return None

    def update_row_by_key(self, name: str, key: str, values: Sequence[Any]) -> bool:
        row = self.find_row_by_key(name, key)
        if row is None:
            return False
        self.write_row(name, row, values)  # type: ignore[attr-defined]
        return True

    def delete_row_by_key(self, name: str, key: str) -> bool:
        row = self.find_row_by_key(name, key)
        if row is None:
            return False
        self.delete_row(name, row)  # type: ignore[attr-defined]
        return True
