# path: warehouse/core/exceptions.py
from __future__ import annotations


class InventoryError(Exception):
    """
    Базовая ошибка склада.

    Сообщение человекочитаемое: уходит пользователю как есть
    (поле error в JSON API, alert в HTML).
    """

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StoreUnavailable(InventoryError):
    """Таблицу не удалось открыть (неверный идентификатор, нет доступа, битый файл)."""

    status_code = 503


class SchemaMissing(InventoryError):
    """Нет обязательной вкладки (например, DEPARTMENTS)."""

    status_code = 500


class InvalidDepartment(InventoryError):
    """Название отдела не даёт префикса для кода / не годится как имя вкладки."""

    status_code = 400


class MissingRequiredField(InventoryError):
    status_code = 400


class DuplicateCode(InventoryError):
    status_code = 409


class NotFound(InventoryError):
    status_code = 404
