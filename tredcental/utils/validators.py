from __future__ import annotations

import math
import re
from typing import Any

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_DECIMAL = re.compile(r"^[+-]?(\d+([.,]\d*)?|[.,]\d+)([eE][+-]?\d+)?$")


def require_non_negative_number(v: float, name: str = "value") -> None:
    if v < 0:
        raise ValueError(f"{name} must be >= 0")


def parse_int_prefix(value: Any) -> int | None:
    """Read a leading integer the way a browser number field does ("2.5" -> 2, "7abc" -> 7)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    m = _INT_PREFIX.match(str(value or ""))
    return int(m.group(1)) if m else None


def parse_rental_days(value: Any) -> int:
    days = parse_int_prefix(value)
    if days is None or days < 1:
        return 1
    return days


def parse_discount(value: Any) -> float:
    # out-of-range percents pass through, only garbage becomes 0
    if isinstance(value, bool):
        return 0.0
    text = str(value).strip()
    # number-field syntax only: no "1_0", no "nan"
    if not _DECIMAL.match(text):
        return 0.0
    pct = float(text.replace(",", "."))
    return pct if math.isfinite(pct) else 0.0
