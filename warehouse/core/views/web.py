# path: warehouse/core/views/web.py
from __future__ import annotations

from fastapi import APIRouter


router = APIRouter()


@router.get("/healthz", name="healthz")
async def health():
    """
    Проверка живости для оркестратора/балансировщика.
    Таблицу не трогаем: ответ не зависит от доступности хранилища.
    """
    return {"status": "healthy"}
