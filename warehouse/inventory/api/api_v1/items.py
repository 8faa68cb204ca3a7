# path: warehouse/inventory/api/api_v1/items.py
from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, status

from warehouse.core.dependencies import get_inventory_service
from warehouse.inventory.schemas.item import (
    AddItemResult,
    ItemCreate,
    ItemUpdate,
    OperationResult,
)
from warehouse.inventory.services.inventory_service import InventoryService


router = APIRouter(tags=["Items"])


@router.post("", response_model=AddItemResult, status_code=status.HTTP_201_CREATED)
def add_item(
    item: ItemCreate,
    service: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """
    Создать позицию.

    При включённой автогенерации код всегда считается сервисом
    (PREFIX-NNNN), присланный code игнорируется. Итоговый код возвращается в ответе.
    """
    return service.add_item(item)


@router.put("", response_model=OperationResult)
def update_item(
    item: ItemUpdate,
    service: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """Перезаписать строку целиком; строка ищется по originalCode."""
    return service.update_item(item)


@router.delete("/{code:path}", response_model=OperationResult)
def delete_item(
    code: str,
    service: Annotated[InventoryService, Depends(get_inventory_service)],
    department: Optional[str] = None,
):
    """Удалить строку по коду; department обязателен для раскладки per_department."""
    return service.delete_item(code, department)
