# path: warehouse/inventory/models/enums.py
from __future__ import annotations

from enum import Enum


class ItemStatus(str, Enum):
    """
    Статус остатка позиции.

    Значения:
    - OK:   остаток выше порога low_stock_threshold
    - LOW:  остаток на пороге или ниже
    Никогда не задаётся вручную: пересчитывается при каждом create/update.
    """

    OK = "OK"
    LOW = "LOW"


class StoreLayout(str, Enum):
    """
    Раскладка данных в таблице.

    - per_department: отдельная вкладка на каждый отдел (7 колонок)
    - single_table:   одна вкладка ITEMS_MASTER с колонкой Department (8 колонок)
    """

    PER_DEPARTMENT = "per_department"
    SINGLE_TABLE = "single_table"
