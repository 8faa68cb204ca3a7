# /warehouse/core/api/api_v1/__init__.py
from fastapi import APIRouter

from warehouse.core.config import settings
from warehouse.inventory.api.api_v1 import router as inventory_router


router = APIRouter(prefix=settings.api.v1.prefix)

# /api/<v1>/departments/... и /api/<v1>/items/...
router.include_router(inventory_router, prefix="", tags=["inventory"])
