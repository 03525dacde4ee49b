from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from html import escape
from typing import Iterable, List, Optional, Tuple

from tredcental.config import settings
from tredcental.constants import RECEIPT_FOOTER, RECEIPT_TITLE
from tredcental.models import RentedItem
from tredcental.services.billing import BillingFigures, line_subtotal
from tredcental.utils.formatters import fmt_date, money


@dataclass(frozen=True)
class ReceiptLine:
    gear_id: int
    name: str
    unit_price: float
    quantity: int
    rental_days: int
    line_total: float


@dataclass(frozen=True)
class Receipt:
    shop_name: str
    title: str
    generated_on: date
    customer_name: str
    rental_days: int
    start_date: Optional[date]
    end_date: Optional[date]
    lines: Tuple[ReceiptLine, ...]
    subtotal: float
    discount_percent: float
    discount_amount: float
    total: float
    payment_code_url: Optional[str]
    payment_reference: Optional[str]
    footer: str

    @property
    def has_dates(self) -> bool:
        return self.start_date is not None and self.end_date is not None


def build_receipt(
    items: Iterable[RentedItem],
    figures: BillingFigures,
    *,
    customer_name: str = "",
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    payment_code_url: Optional[str] = None,
    payment_reference: Optional[str] = None,
    generated_on: Optional[date] = None,
    shop_name: Optional[str] = None,
) -> Receipt:
    shop = shop_name or settings.shop_name
    lines = tuple(
        ReceiptLine(
            gear_id=it.id,
            name=it.name,
            unit_price=it.price_per_day,
            quantity=it.quantity,
            rental_days=figures.rental_days,
            line_total=line_subtotal(it, figures.rental_days),
        )
        for it in items
    )
    return Receipt(
        shop_name=shop,
        title=RECEIPT_TITLE,
        generated_on=generated_on or date.today(),
        customer_name=customer_name.strip(),
        rental_days=figures.rental_days,
        start_date=start_date,
        end_date=end_date,
        lines=lines,
        subtotal=figures.subtotal,
        discount_percent=figures.discount_percent,
        discount_amount=figures.discount_amount,
        total=figures.total,
        payment_code_url=payment_code_url,
        payment_reference=payment_reference,
        footer=RECEIPT_FOOTER.format(shop=shop),
    )


def receipt_text(receipt: Receipt) -> str:
    """Receipt as Telegram HTML."""
    out: List[str] = [
        f"<b>{escape(receipt.shop_name)} — {escape(receipt.title)}</b>",
        f"Tanggal: {fmt_date(receipt.generated_on)}",
    ]
    if receipt.customer_name:
        out.append(f"Penyewa: {escape(receipt.customer_name)}")
    if receipt.has_dates:
        out.append(f"Periode: {fmt_date(receipt.start_date)} – {fmt_date(receipt.end_date)}")
    out.append(f"Durasi Sewa: {receipt.rental_days} hari")
    out.append("")

    for ln in receipt.lines:
        out.append(
            f"• {escape(ln.name)} × {ln.quantity} ({money(ln.unit_price)}/hari) = {money(ln.line_total)}"
        )

    out.append("")
    out.append(f"Subtotal: {money(receipt.subtotal)}")
    if receipt.discount_amount:
        out.append(f"Diskon ({receipt.discount_percent:g}%): -{money(receipt.discount_amount)}")
    out.append(f"<b>Total: {money(receipt.total)}</b>")
    if receipt.payment_reference:
        out.append(f"QRIS: <code>{escape(receipt.payment_reference)}</code>")
    out.append("")
    out.append(escape(receipt.footer))
    return "\n".join(out)
