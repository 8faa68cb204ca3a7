# path: warehouse/inventory/services/inventory_service.py
from __future__ import annotations

from typing import List, Optional

from warehouse.app_logging import get_logger
from warehouse.core.config import InventoryConfig
from warehouse.core.exceptions import (
    DuplicateCode,
    InvalidDepartment,
    MissingRequiredField,
    NotFound,
    SchemaMissing,
)
from warehouse.crud.tabular_store import ITabularStore, Row, cell_text, is_blank_row
from warehouse.inventory.layouts import build_layout
from warehouse.inventory.models.enums import ItemStatus, StoreLayout
from warehouse.inventory.schemas.item import (
    AddItemResult,
    ItemCreate,
    ItemRead,
    ItemUpdate,
    OperationResult,
)
from warehouse.inventory.services.codes import generate_code, normalize_prefix


log = get_logger("service.inventory")


def _require(*fields: tuple[str, str]) -> None:
    missing = [label for label, value in fields if not value]
    if missing:
        raise MissingRequiredField("Required: " + ", ".join(missing))


class InventoryService:
    """
    Сервис склада: отделы и позиции поверх табличного хранилища.

    Важно:
    - store приходит через DI (ITabularStore), конфиг передаётся явным объектом;
    - состояние между вызовами не держим: каждая операция заново читает диапазон;
    - блокировок нет: два параллельных add_item могут получить один и тот же код.
    """

    def __init__(self, store: ITabularStore, config: InventoryConfig) -> None:
        self._store = store
        self._config = config
        self._layout = build_layout(config)

    # --- helpers ---

    def status_for(self, stock: int) -> ItemStatus:
        return ItemStatus.LOW if stock <= self._config.low_stock_threshold else ItemStatus.OK

    def _ensure_table(self, table: str) -> None:
        """Вкладка существует и строка 1 = канонический заголовок."""
        headers = list(self._layout.headers)

        if not self._store.has_table(table):
            self._store.create_table(table)
            log.info({"event": "table_provisioned", "table": table})
            current: Row = []
        else:
            rows = self._store.read_rows(table)
            current = rows[0] if rows else []

        headers_ok = all(
            cell_text(current[i] if i < len(current) else "") == h for i, h in enumerate(headers)
        )
        if not headers_ok:
            self._store.write_row(table, 1, headers)
            self._store.freeze_header(table)
            log.info({"event": "headers_rewritten", "table": table})

    def _table_for(self, department: str) -> str:
        table = self._layout.table_for(department)
        if self._config.auto_provision:
            self._ensure_table(table)
        return table

    @staticmethod
    def _codes(rows: List[Row]) -> List[str]:
        return [cell_text(r[0]) for r in rows[1:] if r and not is_blank_row(r)]

    # --- READ ---

    def list_departments(self) -> List[str]:
        sheet = self._config.departments_sheet
        if not self._store.has_table(sheet):
            raise SchemaMissing(f"Missing sheet tab: {sheet} (must exist in your spreadsheet)")

        rows = self._store.read_rows(sheet)
        departments = [name for name in (cell_text(r[0]) for r in rows[1:] if r) if name]

        if self._config.auto_provision:
            for table in dict.fromkeys(self._layout.table_for(d) for d in departments):
                self._ensure_table(table)

        log.info({"event": "list_departments", "count": len(departments)})
        return departments

    def list_items(self, department: str) -> List[ItemRead]:
        dept = cell_text(department)
        _require(("Department", dept))

        table = self._table_for(dept)
        rows = self._store.read_rows(table)
        items = [self._layout.to_item(r, dept) for r in self._layout.data_rows(rows, dept)]

        log.info({"event": "list_items", "department": dept, "count": len(items)})
        return items

    # --- CREATE ---

    def add_item(self, data: ItemCreate) -> AddItemResult:
        auto = self._config.auto_code
        _require(
            *([] if auto else [("Item Code", data.code)]),
            ("Item Name", data.name),
            ("Department", data.department),
        )
        if auto and not normalize_prefix(data.department):
            raise InvalidDepartment("Invalid department for code generation.")

        table = self._table_for(data.department)
        codes = self._codes(self._store.read_rows(table))

        code = generate_code(data.department, codes, self._config.code_width) if auto else data.code
        if code in codes:
            raise DuplicateCode(f"Item Code already exists in {self._layout.scope_label(data.department)}.")

        status = self.status_for(data.stock)
        self._store.append_row(table, self._layout.to_row(data, code, status.value))

        log.info({
            "event": "item_added",
            "department": data.department,
            "code": code,
            "stock": data.stock,
            "status": status.value,
        })
        return AddItemResult(code=code)

    # --- UPDATE ---

    def update_item(self, data: ItemUpdate) -> OperationResult:
        if not data.original_code:
            raise MissingRequiredField("Missing originalCode")
        _require(("Item Code", data.code), ("Item Name", data.name), ("Department", data.department))

        table = self._table_for(data.department)
        scope = self._layout.scope_label(data.department)

        if data.code != data.original_code:
            codes = self._codes(self._store.read_rows(table))
            if data.code in codes:
                raise DuplicateCode(f"New Item Code already exists in {scope}.")

        status = self.status_for(data.stock)
        row = self._layout.to_row(data, data.code, status.value)
        if not self._store.update_row_by_key(table, data.original_code, row):
            raise NotFound(f"Item not found for update in {scope}.")

        log.info({
            "event": "item_updated",
            "department": data.department,
            "original_code": data.original_code,
            "code": data.code,
            "status": status.value,
        })
        return OperationResult()

    # --- DELETE ---

    def delete_item(self, code: str, department: Optional[str] = None) -> OperationResult:
        target = cell_text(code)
        dept = cell_text(department)

        _require(("Item Code", target))
        if self._config.layout == StoreLayout.PER_DEPARTMENT:
            _require(("Department", dept))

        table = self._table_for(dept)
        if not self._store.delete_row_by_key(table, target):
            raise NotFound(f"Item not found for delete in {self._layout.scope_label(dept)}.")

        log.info({"event": "item_deleted", "department": dept, "code": target})
        return OperationResult()

