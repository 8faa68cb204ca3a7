# warehouse/inventory/api/api_v1/__init__.py
from __future__ import annotations
from fastapi import APIRouter

from warehouse.core.config import settings
from .departments import router as departments_router
from .items import router as items_router

router = APIRouter()
router.include_router(departments_router, prefix=settings.api.v1.departments)
router.include_router(items_router, prefix=settings.api.v1.items)
