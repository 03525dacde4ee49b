from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Union

from tredcental.models import RentedItem
from tredcental.utils.validators import parse_discount, parse_rental_days

DateLike = Union[datetime, date, str, None]


@dataclass(frozen=True)
class BillingFigures:
    rental_days: int
    subtotal: float
    discount_percent: float
    discount_amount: float
    total: float


def line_subtotal(item: RentedItem, rental_days: int) -> float:
    return item.price_per_day * item.quantity * rental_days


def calc_subtotal(items: Iterable[RentedItem], rental_days: int) -> float:
    return sum((line_subtotal(it, rental_days) for it in items), 0.0)


def calc_discount(subtotal: float, discount_percent: float) -> float:
    return subtotal * discount_percent / 100


def calculate(items: Iterable[RentedItem], rental_days=1, discount_percent=0) -> BillingFigures:
    days = parse_rental_days(rental_days)
    pct = parse_discount(discount_percent)
    subtotal = calc_subtotal(items, days)
    discount_amount = calc_discount(subtotal, pct)
    return BillingFigures(
        rental_days=days,
        subtotal=subtotal,
        discount_percent=pct,
        discount_amount=discount_amount,
        total=subtotal - discount_amount,
    )


def parse_date(value: DateLike) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value or "").strip())
    except ValueError:
        return None


def rental_days_between(start: DateLike, end: DateLike) -> int:
    """Billable days for a date range; anything odd (bad dates, end before start, same day) bills 1 day."""
    d_start, d_end = parse_date(start), parse_date(end)
    if d_start is None or d_end is None or d_end < d_start:
        return 1
    span = abs((d_end - d_start).total_seconds()) / 86400
    days = math.ceil(span)
    return days if days > 0 else 1
