from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, Optional

from tredcental.constants import PERIOD_DATES, PERIOD_DAYS
from tredcental.services.billing import BillingFigures, calculate, parse_date, rental_days_between
from tredcental.services.cart import Cart
from tredcental.services.payment_qr import PaymentCodeFlow, PaymentStatus
from tredcental.services.receipt import Receipt, build_receipt
from tredcental.utils.validators import parse_discount, parse_rental_days


def _today() -> str:
    return date.today().isoformat()


def _tomorrow() -> str:
    return (date.today() + timedelta(days=1)).isoformat()


@dataclass
class RentalSession:
    cart: Cart = field(default_factory=Cart)
    customer_name: str = ""
    period_mode: str = PERIOD_DATES
    start_date: str = field(default_factory=_today)
    end_date: str = field(default_factory=_tomorrow)
    days: int = 1
    discount_percent: float = 0.0
    payment: PaymentCodeFlow = field(default_factory=PaymentCodeFlow)

    def set_customer(self, name: str) -> None:
        self.customer_name = (name or "").strip()

    def set_days(self, value) -> int:
        self.period_mode = PERIOD_DAYS
        self.days = parse_rental_days(value)
        return self.days

    def set_dates(self, start: str, end: str) -> int:
        self.period_mode = PERIOD_DATES
        self.start_date = (start or "").strip()
        self.end_date = (end or "").strip()
        return self.rental_days()

    def set_discount(self, value) -> float:
        self.discount_percent = parse_discount(value)
        return self.discount_percent

    def rental_days(self) -> int:
        if self.period_mode == PERIOD_DAYS:
            return self.days
        return rental_days_between(self.start_date, self.end_date)

    def billing(self) -> BillingFigures:
        return calculate(self.cart.items(), self.rental_days(), self.discount_percent)

    def receipt(self, generated_on: Optional[date] = None) -> Receipt:
        figures = self.billing()
        state = self.payment.state
        # a code issued for an older total is not shown
        ready = state.status == PaymentStatus.READY and state.total == figures.total
        dates: Dict[str, Optional[date]] = {"start_date": None, "end_date": None}
        if self.period_mode == PERIOD_DATES:
            dates = {"start_date": parse_date(self.start_date), "end_date": parse_date(self.end_date)}
        return build_receipt(
            self.cart.items(),
            figures,
            customer_name=self.customer_name,
            payment_code_url=state.image_url if ready else None,
            payment_reference=state.reference if ready else None,
            generated_on=generated_on,
            **dates,
        )

    def payment_error(self) -> Optional[str]:
        state = self.payment.state
        if state.status == PaymentStatus.ERROR and state.total == self.billing().total:
            return state.error
        return None

    async def open_receipt(self) -> Receipt:
        await self.payment.open(self.billing().total)
        return self.receipt()

    def close_receipt(self) -> None:
        self.payment.close()

    def reset(self) -> None:
        self.payment.close()
        self.cart.clear()
        self.customer_name = ""
        self.period_mode = PERIOD_DATES
        self.start_date = _today()
        self.end_date = _tomorrow()
        self.days = 1
        self.discount_percent = 0.0


class SessionStore:
    """One rental session per clerk (Telegram user id)."""

    def __init__(self, flow_factory=PaymentCodeFlow) -> None:
        self._sessions: Dict[int, RentalSession] = {}
        self._flow_factory = flow_factory

    def get(self, user_id: int) -> RentalSession:
        session = self._sessions.get(user_id)
        if session is None:
            session = RentalSession(payment=self._flow_factory())
            self._sessions[user_id] = session
        return session

