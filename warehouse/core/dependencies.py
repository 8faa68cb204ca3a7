# path: warehouse/core/dependencies.py
from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from warehouse.app_logging import get_logger
from warehouse.core.config import settings
from warehouse.crud.gsheets_store import GoogleSheetsTabularStore
from warehouse.crud.memory_store import MemoryTabularStore
from warehouse.crud.tabular_store import ITabularStore
from warehouse.crud.xlsx_store import XlsxTabularStore
from warehouse.inventory.services.inventory_service import InventoryService


log = get_logger("deps")


@lru_cache(maxsize=1)
def _store_singleton() -> ITabularStore:
    """
    Один адаптер на процесс.

    Адаптер сам по себе stateless (кроме memory): таблицу он открывает на каждый вызов.
    """
    cfg = settings.store
    log.info({"event": "store_init", "backend": cfg.backend})

    if cfg.backend == "xlsx":
        return XlsxTabularStore(cfg.xlsx_path)

    if cfg.backend == "gsheets":
        return GoogleSheetsTabularStore(
            spreadsheet_id=cfg.spreadsheet_id,
            credentials_file=cfg.credentials_file,
        )

    return MemoryTabularStore.with_departments(settings.inventory.departments_sheet, cfg.seed_departments)


def get_tabular_store() -> ITabularStore:
    return _store_singleton()


def get_inventory_service(
    store: ITabularStore = Depends(get_tabular_store),
) -> InventoryService:
    return InventoryService(store=store, config=settings.inventory)
