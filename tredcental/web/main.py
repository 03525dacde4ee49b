from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from tredcental.config import settings
from tredcental.constants import PERIOD_DATES, PERIOD_DAYS
from tredcental.services.catalog import Catalog
from tredcental.services.receipt_pdf import generate_receipt_pdf
from tredcental.services.session import RentalSession
from tredcental.utils.formatters import fmt_date, money
from tredcental.utils.validators import parse_int_prefix

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["money"] = money
templates.env.filters["fmt_date"] = fmt_date


def _session(request: Request) -> RentalSession:
    return request.app.state.session


def _render(request: Request, name: str, ctx: dict[str, Any]) -> HTMLResponse:
    base = {
        "shop_name": settings.shop_name,
        "period_dates": PERIOD_DATES,
        "period_days": PERIOD_DAYS,
    }
    base.update(ctx)
    return templates.TemplateResponse(request, name, base)


def _home(msg: str = "") -> RedirectResponse:
    url = f"/?msg={msg}" if msg else "/"
    return RedirectResponse(url=url, status_code=303)


def create_app(
    session: Optional[RentalSession] = None,
    catalog: Optional[Catalog] = None,
    export_dir: Optional[str] = None,
) -> FastAPI:
    app = FastAPI(title=f"{settings.shop_name} Rental Billing")
    app.state.session = session or RentalSession()
    app.state.catalog = catalog or Catalog()
    app.state.export_dir = export_dir or settings.export_dir

    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # ---------------- billing page ----------------

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request, q: str = "", category: str = "", msg: str = ""):
        s = _session(request)
        cat: Catalog = request.app.state.catalog
        return _render(
            request,
            "index.html",
            {
                "gear": cat.search(q, category or None),
                "categories": cat.categories(),
                "q": q,
                "selected_category": category,
                "items": s.cart.items(),
                "session": s,
                "figures": s.billing(),
                "message": msg,
            },
        )

    @app.get("/api/billing")
    def billing_json(request: Request):
        s = _session(request)
        f = s.billing()
        return {
            "rental_days": f.rental_days,
            "subtotal": f.subtotal,
            "discount_percent": f.discount_percent,
            "discount_amount": f.discount_amount,
            "total": f.total,
            "items": [
                {"id": it.id, "name": it.name, "price_per_day": it.price_per_day, "quantity": it.quantity}
                for it in s.cart.items()
            ],
        }

    # ---------------- cart ----------------

    @app.post("/cart/add")
    def cart_add(request: Request, gear_id: int = Form(...)):
        gear = request.app.state.catalog.get(gear_id)
        if gear is None:
            raise HTTPException(status_code=404, detail=f"gear {gear_id} not found")
        _session(request).cart.add(gear)
        return _home()

    @app.post("/cart/{gear_id}/quantity")
    def cart_quantity(request: Request, gear_id: int, quantity: str = Form(...)):
        n = parse_int_prefix(quantity)
        if n is None:
            return _home("Jumlah harus berupa angka")
        _session(request).cart.set_quantity(gear_id, n)
        return _home()

    @app.post("/cart/{gear_id}/remove")
    def cart_remove(request: Request, gear_id: int):
        _session(request).cart.remove(gear_id)
        return _home()

    @app.post("/billing")
    def billing_update(
        request: Request,
        customer_name: str = Form(""),
        period_mode: str = Form(PERIOD_DATES),
        start_date: str = Form(""),
        end_date: str = Form(""),
        rental_days: str = Form("1"),
        discount: str = Form("0"),
    ):
        s = _session(request)
        s.set_customer(customer_name)
        if period_mode == PERIOD_DAYS:
            s.set_days(rental_days)
        else:
            s.set_dates(start_date, end_date)
        s.set_discount(discount)
        return _home()

    # ---------------- receipt ----------------

    @app.get("/receipt", response_class=HTMLResponse)
    async def receipt_view(request: Request):
        s = _session(request)
        if s.cart.is_empty:
            return _home()
        receipt = await s.open_receipt()
        logger.info("receipt opened: total=%s payment=%s", receipt.total, s.payment.state.status.value)
        return _render(
            request,
            "receipt.html",
            {
                "receipt": receipt,
                "ready": receipt.payment_code_url is not None,
                "payment_error": s.payment_error(),
            },
        )

    # runs on the event loop: close() cancels the in-flight payment task
    @app.post("/receipt/close")
    async def receipt_close(request: Request):
        _session(request).close_receipt()
        return _home()

    @app.get("/receipt.pdf", response_class=FileResponse)
    def receipt_pdf(request: Request):
        s = _session(request)
        if s.cart.is_empty:
            raise HTTPException(status_code=404, detail="cart is empty")
        path = generate_receipt_pdf(s.receipt(), request.app.state.export_dir)
        return FileResponse(path, media_type="application/pdf", filename=Path(path).name)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    uvicorn.run(app, host=settings.web_host, port=settings.web_port)
