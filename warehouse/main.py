# /warehouse/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from warehouse.app_logging import get_logger
from warehouse.core.api import router as api_router
from warehouse.core.config import settings
from warehouse.core.exception_handler import setup_exception_handlers
from warehouse.core.views import router as views_router  # HTML-вьюхи (/, /items/...)

PACKAGE_DIR = Path(__file__).resolve().parent
STATIC_DIR = PACKAGE_DIR / "static"

log = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    log.info({
        "event": "startup",
        "store_backend": settings.store.backend,
        "layout": settings.inventory.layout.value,
    })
    yield
    # shutdown
    log.info({"event": "shutdown"})


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.site.title,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    # cookie-сессия нужна для flash-сообщений после POST -> redirect
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session.secret_key,
        session_cookie=settings.session.cookie_name,
    )

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # HTML-views и API
    app.include_router(views_router)
    app.include_router(api_router)

    setup_exception_handlers(app)
    return app


# Экспортируемый объект приложения
main_app = create_app()


if __name__ == "__main__":
    # Запуск: uvicorn warehouse.main:main_app --reload
    uvicorn.run(
        "warehouse.main:main_app",
        host=settings.run.host,
        port=settings.run.port,
        reload=True,
    )
