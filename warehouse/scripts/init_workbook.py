# path: warehouse/scripts/init_workbook.py
"""
Создание локальной книги .xlsx для backend=xlsx.

Использование:
  python -m warehouse.scripts.init_workbook --path data/warehouse.xlsx --department HR --department "Billing and Collection"

Книга получает вкладку DEPARTMENTS (заголовок + отделы), затем вкладки отделов
создаются тем же провижинингом, что и при работе приложения.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from openpyxl import Workbook

from warehouse.app_logging import get_logger
from warehouse.core.config import InventoryConfig, settings
from warehouse.crud.xlsx_store import XlsxTabularStore
from warehouse.inventory.services.inventory_service import InventoryService


logger = get_logger(__name__)


def create_workbook(path: Path, departments: Sequence[str], config: InventoryConfig) -> list[str]:
    """Создаёт книгу (перезаписывает файл) и возвращает список отделов после провижининга."""
    path.parent.mkdir(parents=True, exist_ok=True)

    wb = Workbook()
    ws = wb.active
    ws.title = config.departments_sheet
    ws.append(["Department"])
    for d in departments:
        ws.append([d])
    ws.freeze_panes = "A2"
    wb.save(path)

    service = InventoryService(store=XlsxTabularStore(path), config=config)
    return service.list_departments()


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Create a local inventory workbook.")
    parser.add_argument("--path", default=settings.store.xlsx_path, help="Target .xlsx file")
    parser.add_argument("--department", action="append", default=[], help="Department name (repeatable)")
    parser.add_argument("--force", action="store_true", help="Overwrite an existing file")
    args = parser.parse_args(argv)

    path = Path(args.path)
    if path.exists() and not args.force:
        parser.error(f"{path} already exists (use --force to overwrite)")

    logger.info({"event": "init_workbook_start", "path": str(path)})
    departments = create_workbook(path, args.department, settings.inventory)
    logger.info({"event": "init_workbook_done", "path": str(path), "departments": departments})


if __name__ == "__main__":
    main()
