from __future__ import annotations

from datetime import date

from tredcental.config import settings


def money(v: float) -> str:
    # id-ID grouping: 300.000 / 1.234,50
    s = f"{v:,.{settings.decimals}f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{settings.currency_symbol} {s}"


def fmt_date(d: date | None) -> str:
    return d.strftime("%d/%m/%Y") if d else "-"
