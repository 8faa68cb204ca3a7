# /warehouse/core/views/__init__.py
from fastapi import APIRouter
from .web import router as web_router

from warehouse.inventory.views.inventory import router as inventory_router

# Единая точка подключения HTML-вьюх
router = APIRouter()
router.include_router(web_router)
router.include_router(inventory_router)
