# path: warehouse/core/exception_handler.py
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import ORJSONResponse

from warehouse.app_logging import get_logger
from warehouse.core.exceptions import InventoryError


log = get_logger("errors")


def setup_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(InventoryError)
    async def inventory_exception_handler(request: Request, exc: InventoryError):
        log.info({
            "event": "inventory_error",
            "path": request.url.path,
            "method": request.method,
            "error": type(exc).__name__,
            "message": exc.message,
        })
        return ORJSONResponse(
            content={"success": False, "error": exc.message},
            status_code=exc.status_code,
        )
