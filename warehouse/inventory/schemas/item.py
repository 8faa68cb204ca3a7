# path: warehouse/inventory/schemas/item.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_str(v: Any) -> str:
    if v is None:
        return ""
    return str(v).strip()


class ItemFields(BaseModel):
    """
    Общие поля позиции из формы/JSON.

    Строки обрезаются, None -> "" (обязательность проверяет сервис).
    """

    code: str = ""
    name: str = ""
    category: str = ""
    department: str = ""
    unit: str = ""
    image: str = ""
    stock: int = Field(0, ge=0)

    @field_validator("code", "name", "category", "department", "unit", "image", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> str:
        return _clean_str(v)

    @field_validator("stock", mode="before")
    @classmethod
    def _blank_stock_is_zero(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and v.strip() == ""):
            return 0
        return v


class ItemCreate(ItemFields):
    pass


class ItemUpdate(ItemFields):
    model_config = ConfigDict(populate_by_name=True)

    original_code: str = Field("", alias="originalCode")

    @field_validator("original_code", mode="before")
    @classmethod
    def _strip_original(cls, v: Any) -> str:
        return _clean_str(v)


class ItemRead(BaseModel):
    code: str
    name: str
    category: str = ""
    department: str
    stock: int = 0
    unit: str = ""
    status: str = ""
    image: str = ""


class AddItemResult(BaseModel):
    success: bool = True
    code: str


class OperationResult(BaseModel):
    success: bool = True
