# path: warehouse/inventory/api/api_v1/departments.py
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from warehouse.core.dependencies import get_inventory_service
from warehouse.inventory.schemas.item import ItemRead
from warehouse.inventory.services.inventory_service import InventoryService


router = APIRouter(tags=["Departments"])


@router.get("", response_model=list[str])
def list_departments(
    service: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """
    Список отделов (в порядке вкладки DEPARTMENTS).

    Побочный эффект: недостающие вкладки отделов создаются с заголовком.
    """
    return service.list_departments()


@router.get("/{department:path}/items", response_model=list[ItemRead])
def list_department_items(
    department: str,
    service: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """Позиции отдела в порядке хранения; status берётся из таблицы."""
    return service.list_items(department)
