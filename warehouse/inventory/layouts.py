# path: warehouse/inventory/layouts.py
from __future__ import annotations

from typing import Any, List, Sequence, Tuple

from warehouse.core.config import InventoryConfig
from warehouse.crud.tabular_store import Row, cell_text, is_blank_row
from warehouse.inventory.models.enums import StoreLayout
from warehouse.inventory.schemas.item import ItemFields, ItemRead


DEPT_HEADERS: Tuple[str, ...] = (
    "Item Code", "Item Name", "Category", "Stock", "Unit", "Status", "Image",
)

MASTER_HEADERS: Tuple[str, ...] = (
    "Item Code", "Item Name", "Category", "Department", "Stock", "Unit", "Status", "Image",
)


def coerce_stock(value: Any) -> int:
    """Пусто/не число -> 0."""
    try:
        return int(float(cell_text(value) or 0))
    except (TypeError, ValueError, OverflowError):
        return 0


def _padded(row: Sequence[Any], width: int) -> List[Any]:
    cells = list(row)[:width]
    return cells + [""] * (width - len(cells))


class DepartmentTabLayout:
    """
    Вкладка на отдел.
    Колонки: A code | B name | C category | D stock | E unit | F status | G image
    """

    headers = DEPT_HEADERS

    def __init__(self, config: InventoryConfig) -> None:
        self._config = config

    def table_for(self, department: str) -> str:
        return department

    def scope_label(self, department: str) -> str:
        return department

    def data_rows(self, rows: List[Row], department: str) -> List[Row]:
        return [r for r in rows[1:] if not is_blank_row(r)]

    def to_item(self, row: Row, department: str) -> ItemRead:
        code, name, category, stock, unit, status, image = _padded(row, len(self.headers))
        return ItemRead(
            code=cell_text(code),
            name=cell_text(name),
            category=cell_text(category),
            department=department,
            stock=coerce_stock(stock),
            unit=cell_text(unit),
            status=cell_text(status),
            image=cell_text(image),
        )

    def to_row(self, data: ItemFields, code: str, status: str) -> Row:
        return [code, data.name, data.category, data.stock, data.unit, status, data.image]


class SingleTableLayout:
    """
    Одна вкладка ITEMS_MASTER, отдел хранится в колонке D.
    Код уникален в пределах всей таблицы.
    """

    headers = MASTER_HEADERS

    def __init__(self, config: InventoryConfig) -> None:
        self._config = config

    def table_for(self, department: str) -> str:
        return self._config.items_sheet

    def scope_label(self, department: str) -> str:
        return self._config.items_sheet

    def data_rows(self, rows: List[Row], department: str) -> List[Row]:
        return [
            r for r in rows[1:]
            if not is_blank_row(r) and cell_text(_padded(r, len(self.headers))[3]) == department
        ]

    def to_item(self, row: Row, department: str) -> ItemRead:
        code, name, category, dept, stock, unit, status, image = _padded(row, len(self.headers))
        return ItemRead(
            code=cell_text(code),
            name=cell_text(name),
            category=cell_text(category),
            department=cell_text(dept),
            stock=coerce_stock(stock),
            unit=cell_text(unit),
            status=cell_text(status),
            image=cell_text(image),
        )

    def to_row(self, data: ItemFields, code: str, status: str) -> Row:
        return [code, data.name, data.category, data.department, data.stock, data.unit, status, data.image]


def build_layout(config: InventoryConfig) -> DepartmentTabLayout | SingleTableLayout:
    if config.layout == StoreLayout.SINGLE_TABLE:
        return SingleTableLayout(config)
    return DepartmentTabLayout(config)
