from datetime import date

from tredcental.models import RentedItem
from tredcental.services.billing import calculate
from tredcental.services.receipt import build_receipt, receipt_text
from tredcental.services.receipt_pdf import generate_receipt_pdf


def _receipt(tent, sleeping_bag, **kw):
    items = [RentedItem(gear=tent, quantity=2), RentedItem(gear=sleeping_bag, quantity=1)]
    figures = calculate(items, rental_days=3, discount_percent=10)
    return items, build_receipt(items, figures, generated_on=date(2024, 5, 1), shop_name="Tredcental", **kw)


def test_receipt_lines_and_totals(tent, sleeping_bag):
    _, r = _receipt(tent, sleeping_bag)
    assert r.title == "Struk Sewa"
    assert r.rental_days == 3
    assert [(ln.name, ln.quantity, ln.line_total) for ln in r.lines] == [
        ("Tenda Dome (4 Orang)", 2, 300000),
        ("Sleeping Bag Hangat", 1, 75000),
    ]
    assert r.lines[0].unit_price == 50000
    assert r.subtotal == 375000
    assert r.discount_amount == 37500
    assert r.total == 337500
    assert r.footer == "Terima kasih telah menyewa di Tredcental!"
    assert not r.has_dates
    assert r.payment_code_url is None


def test_receipt_does_not_touch_cart(tent, sleeping_bag):
    items, _ = _receipt(tent, sleeping_bag)
    assert [it.quantity for it in items] == [2, 1]


def test_receipt_with_dates_and_customer(tent, sleeping_bag):
    _, r = _receipt(
        tent,
        sleeping_bag,
        customer_name="  Budi  ",
        start_date=date(2024, 5, 1),
        end_date=date(2024, 5, 4),
        payment_code_url="https://qr.example/x.png",
        payment_reference="QRIS-TREDCENTAL-337500",
    )
    assert r.customer_name == "Budi"
    assert r.has_dates

    text = receipt_text(r)
    assert "Penyewa: Budi" in text
    assert "Periode: 01/05/2024 – 04/05/2024" in text
    assert "Diskon (10%): -Rp 37.500" in text
    assert "<b>Total: Rp 337.500</b>" in text
    assert "QRIS-TREDCENTAL-337500" in text


def test_receipt_text_escapes_customer(tent, sleeping_bag):
    _, r = _receipt(tent, sleeping_bag, customer_name="<b>x</b>")
    assert "&lt;b&gt;x&lt;/b&gt;" in receipt_text(r)


def test_pdf_written(tmp_path, tent, sleeping_bag):
    _, r = _receipt(tent, sleeping_bag, payment_reference="QRIS-TREDCENTAL-337500")
    path = generate_receipt_pdf(r, str(tmp_path))
    with open(path, "rb") as f:
        assert f.read(4) == b"%PDF"


def test_pdf_without_payment_code(tmp_path, tent, sleeping_bag):
    _, r = _receipt(tent, sleeping_bag)
    path = generate_receipt_pdf(r, str(tmp_path / "nested"))
    assert path.startswith(str(tmp_path / "nested"))
