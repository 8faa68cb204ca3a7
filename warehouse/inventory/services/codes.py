# path: warehouse/inventory/services/codes.py
"""
Автогенерация кодов позиций: PREFIX-NNNN.

"Billing and Collection" -> BILLINGANDCOLLECTION-0001
"Marketing/Creative"     -> MARKETINGCREATIVE-0001
"""

from __future__ import annotations

import re
from typing import Any, Iterable

from warehouse.core.exceptions import InvalidDepartment


_NOT_ALNUM = re.compile(r"[^A-Z0-9]")

DEFAULT_WIDTH = 4


def normalize_prefix(department: Any) -> str:
    """trim + upper + убрать всё, кроме A-Z/0-9."""
    return _NOT_ALNUM.sub("", str(department or "").strip().upper())


def next_code(prefix: str, codes: Iterable[Any], width: int = DEFAULT_WIDTH) -> str:
    """
    Следующий код последовательности prefix.

    Учитываются только коды вида ровно PREFIX-<цифры> (без учёта регистра);
    номер = max + 1, дополняется нулями до width, более длинный номер не обрезается.
    """
    if not prefix:
        raise InvalidDepartment("Invalid department for code generation.")

    pattern = re.compile(re.escape(prefix.upper()) + r"-([0-9]+)")

    max_num = 0
    for c in codes:
        m = pattern.fullmatch(str(c or "").strip().upper())
        if m:
            max_num = max(max_num, int(m.group(1)))

    return f"{prefix}-{max_num + 1:0{width}d}"


def generate_code(department: Any, codes: Iterable[Any], width: int = DEFAULT_WIDTH) -> str:
    prefix = normalize_prefix(department)
    if not prefix:
        raise InvalidDepartment("Invalid department for code generation.")
    return next_code(prefix, codes, width)
