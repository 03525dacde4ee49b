from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple
from urllib.parse import urlencode

from tredcental.config import settings

logger = logging.getLogger(__name__)


class PaymentStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class PaymentCodeState:
    status: PaymentStatus = PaymentStatus.IDLE
    request_id: int = 0
    total: float = 0.0
    image_url: Optional[str] = None
    reference: Optional[str] = None
    error: Optional[str] = None


class PaymentCodeProvider:
    """
    Stand-in for the QRIS gateway: waits a fixed delay, then hands back a QR image URL.
    Fails for an empty bill (total <= 0).
    """

    def __init__(
        self,
        delay: float | None = None,
        base_url: str | None = None,
        size: int | None = None,
        shop_name: str | None = None,
    ) -> None:
        self.delay = settings.qr_delay_seconds if delay is None else delay
        self.base_url = base_url or settings.qr_base_url
        self.size = size or settings.qr_size
        self.shop_name = shop_name or settings.shop_name

    def reference(self, total: float) -> str:
        return f"QRIS-{self.shop_name.upper()}-{int(round(total))}"

    def image_url(self, total: float) -> str:
        query = urlencode({"size": f"{self.size}x{self.size}", "data": self.reference(total)})
        return f"{self.base_url}?{query}"

    async def request(self, total: float) -> Tuple[bool, str]:
        await asyncio.sleep(self.delay)
        if total <= 0:
            return False, "Gagal membuat kode QRIS: total tagihan harus lebih dari 0"
        return True, self.image_url(total)


class PaymentCodeFlow:
    """
    Receipt view payment state: idle -> loading -> ready | error, back to idle on close().

    Every open() gets a new request id; a completion whose id is no longer
    current is dropped, so a closed or reopened view never sees a stale code.
    """

    def __init__(self, provider: Optional[PaymentCodeProvider] = None) -> None:
        self.provider = provider or PaymentCodeProvider()
        self.state = PaymentCodeState()
        self._request_id = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def request_id(self) -> int:
        return self._request_id

    async def open(self, total: float) -> PaymentCodeState:
        self.close()
        self._request_id += 1
        request_id = self._request_id
        self.state = PaymentCodeState(status=PaymentStatus.LOADING, request_id=request_id, total=total)
        logger.info("payment code request #%s for total=%s", request_id, total)

        task = asyncio.ensure_future(self.provider.request(total))
        self._task = task
        try:
            ok, value = await task
        except asyncio.CancelledError:
            if request_id != self._request_id:
                # superseded by close()/open(), not our own cancellation
                return self.state
            self.close()
            raise
        finally:
            if self._task is task:
                self._task = None

        if request_id != self._request_id:
            logger.info("payment code request #%s finished after close, ignored", request_id)
            return self.state

        if ok:
            self.state = PaymentCodeState(
                status=PaymentStatus.READY,
                request_id=request_id,
                total=total,
                image_url=value,
                reference=self.provider.reference(total),
            )
        else:
            logger.warning("payment code request #%s failed: %s", request_id, value)
            self.state = PaymentCodeState(
                status=PaymentStatus.ERROR, request_id=request_id, total=total, error=value
            )
        return self.state

    def close(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        if self.state.status != PaymentStatus.IDLE:
            self._request_id += 1
        self.state = PaymentCodeState(request_id=self._request_id)
