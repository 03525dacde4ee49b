from __future__ import annotations

import logging
import os
from datetime import datetime

from reportlab.graphics import renderPDF
from reportlab.graphics.barcode.qr import QrCodeWidget
from reportlab.graphics.shapes import Drawing
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from tredcental.config import settings
from tredcental.services.receipt import Receipt
from tredcental.utils.formatters import fmt_date, money

logger = logging.getLogger(__name__)

QR_BOX = 130


def _draw_qr(c: canvas.Canvas, data: str, x: float, y: float) -> None:
    widget = QrCodeWidget(data)
    x1, y1, x2, y2 = widget.getBounds()
    w, h = x2 - x1, y2 - y1
    d = Drawing(QR_BOX, QR_BOX, transform=[QR_BOX / w, 0, 0, QR_BOX / h, 0, 0])
    d.add(widget)
    renderPDF.draw(d, c, x, y)


def generate_receipt_pdf(receipt: Receipt, export_dir: str | None = None) -> str:
    out_dir = export_dir or settings.export_dir
    os.makedirs(out_dir, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    path = os.path.join(out_dir, f"receipt_{ts}.pdf")

    c = canvas.Canvas(path, pagesize=A4)
    w, h = A4

    y = h - 50
    c.setFont("Helvetica-Bold", 16)
    c.drawString(40, y, receipt.shop_name.upper())
    c.setFont("Helvetica", 12)
    c.drawRightString(550, y, receipt.title)
    y -= 24

    c.setFont("Helvetica", 11)
    c.drawString(40, y, f"Tanggal: {fmt_date(receipt.generated_on)}")
    y -= 16
    if receipt.customer_name:
        c.drawString(40, y, f"Penyewa: {receipt.customer_name}")
        y -= 16
    if receipt.has_dates:
        c.drawString(40, y, f"Periode: {fmt_date(receipt.start_date)} - {fmt_date(receipt.end_date)}")
        y -= 16
    c.drawString(40, y, f"Durasi Sewa: {receipt.rental_days} hari")
    y -= 24

    # header
    c.setFont("Helvetica-Bold", 10)
    c.drawString(40, y, "Barang")
    c.drawString(300, y, "Jml")
    c.drawString(360, y, "Harga/hari")
    c.drawString(480, y, "Subtotal")
    y -= 10
    c.line(40, y, 550, y)
    y -= 16

    c.setFont("Helvetica", 10)
    for ln in receipt.lines:
        c.drawString(40, y, ln.name[:45])
        c.drawRightString(320, y, str(ln.quantity))
        c.drawRightString(440, y, money(ln.unit_price))
        c.drawRightString(550, y, money(ln.line_total))
        y -= 14
        if y < 80:
            c.showPage()
            y = h - 50
            c.setFont("Helvetica", 10)

    y -= 10
    c.line(40, y, 550, y)
    y -= 18
    c.setFont("Helvetica", 11)
    c.drawRightString(550, y, f"Subtotal: {money(receipt.subtotal)}")
    if receipt.discount_amount:
        y -= 16
        c.drawRightString(
            550, y, f"Diskon ({receipt.discount_percent:g}%): -{money(receipt.discount_amount)}"
        )
    y -= 20
    c.setFont("Helvetica-Bold", 12)
    c.drawRightString(550, y, f"TOTAL: {money(receipt.total)}")
    y -= 30

    if y - QR_BOX < 60:
        c.showPage()
        y = h - 50

    c.setFont("Helvetica", 10)
    if receipt.payment_reference:
        c.drawCentredString(w / 2, y, "Scan QRIS untuk membayar")
        y -= QR_BOX + 6
        _draw_qr(c, receipt.payment_reference, (w - QR_BOX) / 2, y)
        y -= 14
        c.drawCentredString(w / 2, y, receipt.payment_reference)
    else:
        c.drawCentredString(w / 2, y, "Kode QRIS tidak tersedia")
    y -= 30

    c.setFont("Helvetica-Oblique", 9)
    c.drawCentredString(w / 2, y, receipt.footer)

    c.save()
    logger.info("receipt pdf written: %s", path)
    return path
