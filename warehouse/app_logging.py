"""
# path: warehouse/app_logging.py

Единый JSON-логгер для проекта.

ВАЖНО:
- Файл НЕ должен называться logging.py, иначе он перекрывает стандартный модуль `logging`.
- Сообщение можно передавать строкой или dict-ом: dict вливается в JSON "как есть",
  поэтому события пишем так: log.info({"event": "item_added", "code": code}).
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from warehouse.core.config import settings


class JsonFormatter(logging.Formatter):
    """Форматтер, превращающий LogRecord в JSON строку."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "func": record.funcName,
        }

        if isinstance(record.msg, dict):
            payload.update(record.msg)
        else:
            payload["message"] = record.getMessage()

        extra: Optional[Dict[str, Any]] = getattr(record, "extra", None)
        if isinstance(extra, dict) and extra:
            payload.update(extra)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


class JsonLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter, который безопасно прокидывает user extra в record.extra."""

    def process(self, msg: Any, kwargs: Dict[str, Any]):
        user_extra = kwargs.pop("extra", None)
        kwargs["extra"] = {"extra": user_extra} if user_extra else {}
        return msg, kwargs


def _resolve_level() -> int:
    return getattr(logging, settings.log.level.upper(), logging.INFO)


def get_logger(name: str) -> JsonLoggerAdapter:
    """Создаёт/возвращает настроенный JSON-логгер (stdout, idempotent)."""
    logger = logging.getLogger(name)
    logger.propagate = False

    if logger.handlers:
        return JsonLoggerAdapter(logger, {})

    level = _resolve_level()
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())

    logger.addHandler(handler)
    return JsonLoggerAdapter(logger, {})
