import logging
from html import escape

from aiogram import Router
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import FSInputFile, Message, ReplyKeyboardRemove

from tredcental.bot.keyboards import main_kb
from tredcental.bot.states import CustomerSet
from tredcental.config import settings
from tredcental.services.catalog import Catalog
from tredcental.services.receipt import receipt_text
from tredcental.services.receipt_pdf import generate_receipt_pdf
from tredcental.services.session import RentalSession, SessionStore
from tredcental.utils.formatters import money
from tredcental.utils.validators import parse_int_prefix

logger = logging.getLogger(__name__)

router = Router()


def _is_admin(message: Message) -> bool:
    try:
        return int(message.from_user.id) == int(settings.admin_id)
    except (AttributeError, TypeError, ValueError):
        return False


def _session(message: Message, sessions: SessionStore) -> RentalSession:
    return sessions.get(int(message.from_user.id))


def _args(message: Message) -> list[str]:
    return (message.text or "").split()[1:]


def _cart_text(session: RentalSession) -> str:
    if session.cart.is_empty:
        return "🧺 Keranjang sewa kosong. Tambah barang: /add ID (lihat /gear)"

    f = session.billing()
    lines = ["<b>Ringkasan Tagihan</b>"]
    if session.customer_name:
        lines.append(f"Penyewa: {escape(session.customer_name)}")
    lines.append(f"Durasi Sewa: {f.rental_days} hari")
    lines.append("")
    for it in session.cart.items():
        lines.append(f"• [{it.id}] {it.name} × {it.quantity} — {money(it.price_per_day)} x {f.rental_days} hari")
    lines.append("")
    lines.append(f"Subtotal: {money(f.subtotal)}")
    if f.discount_amount:
        lines.append(f"Diskon ({f.discount_percent:g}%): -{money(f.discount_amount)}")
    lines.append(f"<b>Total: {money(f.total)}</b>")
    return "\n".join(lines)


@router.message(Command("start"))
async def cmd_start(message: Message):
    if not _is_admin(message):
        return
    await message.answer(f"✅ {settings.shop_name} siap. /help untuk daftar perintah", reply_markup=main_kb())


@router.message(Command("cancel"))
async def cmd_cancel(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    await state.clear()
    await message.answer("❎ Dibatalkan.", reply_markup=ReplyKeyboardRemove())


@router.message(Command("help"))
async def cmd_help(message: Message):
    if not _is_admin(message):
        return

    text = (
        f"<b>{settings.shop_name} — perintah</b>\n\n"
        "<b>Umum</b>\n"
        "/start — mulai\n"
        "/cancel — batalkan input\n"
        "/help — bantuan\n"
        "/ping — cek\n\n"
        "<b>Katalog</b>\n"
        "/gear [kata kunci] — daftar barang\n\n"
        "<b>Keranjang</b>\n"
        "/add ID — tambah 1 barang\n"
        "/qty ID JUMLAH — ubah jumlah (0 = hapus)\n"
        "/remove ID — hapus barang\n"
        "/cart — ringkasan tagihan\n\n"
        "<b>Tagihan</b>\n"
        "/customer NAMA — nama penyewa\n"
        "/days N — durasi sewa dalam hari\n"
        "/dates YYYY-MM-DD YYYY-MM-DD — periode sewa\n"
        "/discount PERSEN — diskon\n"
        "/receipt — struk + QRIS + PDF\n"
        "/new — transaksi baru\n"
    )
    await message.answer(text)


@router.message(Command("ping"))
async def cmd_ping(message: Message):
    if not _is_admin(message):
        return
    await message.answer("pong ✅")


@router.message(Command("gear"))
async def cmd_gear(message: Message, catalog: Catalog):
    if not _is_admin(message):
        return

    parts = (message.text or "").split(maxsplit=1)
    query = parts[1] if len(parts) > 1 else ""
    rows = catalog.search(query)
    if not rows:
        await message.answer(f"Barang tidak ditemukan: {escape(query)}")
        return
    lines = ["<b>Peralatan:</b>"]
    for g in rows:
        lines.append(f"• [{g.id}] {g.name} — {money(g.price_per_day)}/hari ({g.category})")
    await message.answer("\n".join(lines))


@router.message(Command("add"))
async def cmd_add(message: Message, sessions: SessionStore, catalog: Catalog):
    if not _is_admin(message):
        return

    args = _args(message)
    gear_id = parse_int_prefix(args[0]) if len(args) == 1 else None
    if gear_id is None:
        await message.answer("Format: /add ID")
        return

    gear = catalog.get(gear_id)
    if gear is None:
        await message.answer(f"❌ Barang #{gear_id} tidak ada di katalog")
        return

    item = _session(message, sessions).cart.add(gear)
    await message.answer(f"✅ {gear.name} × {item.quantity}")


@router.message(Command("qty"))
async def cmd_qty(message: Message, sessions: SessionStore):
    if not _is_admin(message):
        return

    args = _args(message)
    if len(args) != 2:
        await message.answer("Format: /qty ID JUMLAH")
        return
    gear_id, qty = parse_int_prefix(args[0]), parse_int_prefix(args[1])
    if gear_id is None or qty is None:
        await message.answer("ID dan JUMLAH harus angka, contoh: /qty 1 3")
        return

    session = _session(message, sessions)
    if session.cart.get(gear_id) is None:
        await message.answer(f"❌ Barang #{gear_id} tidak ada di keranjang")
        return

    session.cart.set_quantity(gear_id, qty)
    await message.answer(_cart_text(session))


@router.message(Command("remove"))
async def cmd_remove(message: Message, sessions: SessionStore):
    if not _is_admin(message):
        return

    args = _args(message)
    gear_id = parse_int_prefix(args[0]) if len(args) == 1 else None
    if gear_id is None:
        await message.answer("Format: /remove ID")
        return

    session = _session(message, sessions)
    session.cart.remove(gear_id)
    await message.answer(_cart_text(session))


@router.message(Command("cart"))
async def cmd_cart(message: Message, sessions: SessionStore):
    if not _is_admin(message):
        return
    await message.answer(_cart_text(_session(message, sessions)))


@router.message(Command("days"))
async def cmd_days(message: Message, sessions: SessionStore):
    if not _is_admin(message):
        return

    args = _args(message)
    if len(args) != 1:
        await message.answer("Format: /days N")
        return
    days = _session(message, sessions).set_days(args[0])
    await message.answer(f"✅ Durasi Sewa: {days} hari")


@router.message(Command("dates"))
async def cmd_dates(message: Message, sessions: SessionStore):
    if not _is_admin(message):
        return

    args = _args(message)
    if len(args) != 2:
        await message.answer("Format: /dates YYYY-MM-DD YYYY-MM-DD")
        return
    start, end = args
    days = _session(message, sessions).set_dates(start, end)
    await message.answer(f"✅ Periode {escape(start)} – {escape(end)}: {days} hari")


@router.message(Command("discount"))
async def cmd_discount(message: Message, sessions: SessionStore):
    if not _is_admin(message):
        return

    args = _args(message)
    if len(args) != 1:
        await message.answer("Format: /discount PERSEN")
        return
    pct = _session(message, sessions).set_discount(args[0])
    await message.answer(f"✅ Diskon: {pct:g}%")


@router.message(Command("customer"))
async def cmd_customer(message: Message, state: FSMContext, sessions: SessionStore):
    if not _is_admin(message):
        return

    parts = (message.text or "").split(maxsplit=1)
    if len(parts) >= 2 and parts[1].strip():
        _session(message, sessions).set_customer(parts[1])
        await message.answer(f"✅ Penyewa: {escape(parts[1].strip())}")
        return

    await state.set_state(CustomerSet.waiting_name)
    await message.answer(
        "Masukkan nama penyewa dalam satu pesan.\nContoh: Budi\n\nBatal: /cancel",
        reply_markup=ReplyKeyboardRemove(),
    )


@router.message(CustomerSet.waiting_name)
async def customer_wait_name(message: Message, state: FSMContext, sessions: SessionStore):
    if not _is_admin(message):
        return

    name = (message.text or "").strip()
    if not name or name.startswith("/"):
        await message.answer("Masukkan nama sebagai teks. Batal: /cancel")
        return

    _session(message, sessions).set_customer(name)
    await state.clear()
    await message.answer(f"✅ Penyewa: {escape(name)}")


@router.message(Command("receipt"))
async def cmd_receipt(message: Message, sessions: SessionStore):
    if not _is_admin(message):
        return

    session = _session(message, sessions)
    if session.cart.is_empty:
        await message.answer("🧺 Keranjang sewa kosong. Tambah barang: /add ID")
        return

    await message.answer("⏳ Membuat kode QRIS...")
    receipt = await session.open_receipt()
    await message.answer(receipt_text(receipt))

    error = session.payment_error()
    if error:
        await message.answer(f"❌ {error}")
    elif receipt.payment_code_url:
        await message.answer(f"QRIS: {receipt.payment_code_url}")

    try:
        pdf_path = generate_receipt_pdf(receipt)
        await message.answer_document(FSInputFile(pdf_path))
    except OSError as e:
        logger.exception("receipt pdf failed")
        await message.answer(f"⚠️ Struk dibuat, tapi PDF gagal: {e}")
    finally:
        session.close_receipt()


@router.message(Command("new"))
async def cmd_new(message: Message, state: FSMContext, sessions: SessionStore):
    if not _is_admin(message):
        return
    await state.clear()
    _session(message, sessions).reset()
    await message.answer("🆕 Transaksi baru. Keranjang dikosongkan.", reply_markup=main_kb())
