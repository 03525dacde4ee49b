from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]  # .../tredcental repo
load_dotenv(dotenv_path=ROOT_DIR / ".env")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int | None = None) -> int | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return int(v)


def _get_float(*keys: str, default: float | None = None) -> float | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return float(v.replace(",", "."))


def _get_path(*keys: str, default: str) -> str:
    v = _get_env(*keys, default=default)
    return str(v)


@dataclass(frozen=True)
class Settings:
    bot_token: str
    admin_id: int
    export_dir: str
    shop_name: str
    currency: str
    currency_symbol: str
    decimals: int
    qr_delay_seconds: float
    qr_base_url: str
    qr_size: int
    web_host: str
    web_port: int


settings = Settings(
    bot_token=_get_env("BOT_TOKEN", "TELEGRAM_BOT_TOKEN", default="") or "",
    admin_id=_get_int("ADMIN_ID", "ADMIN_TG_ID", "ADMIN_TG", default=0) or 0,
    export_dir=_get_path("EXPORT_DIR", default=str(ROOT_DIR / "exports")),
    shop_name=_get_env("SHOP_NAME", default="Tredcental") or "Tredcental",
    currency=_get_env("CURRENCY", default="IDR") or "IDR",
    currency_symbol=_get_env("CURRENCY_SYMBOL", default="Rp") or "Rp",
    # 0 decimals is valid for IDR, so no `or` fallback here
    decimals=_get_int("DECIMALS", default=0),
    qr_delay_seconds=_get_float("QR_DELAY_SECONDS", default=1.5),
    qr_base_url=_get_env("QR_BASE_URL", default="https://api.qrserver.com/v1/create-qr-code/")
    or "https://api.qrserver.com/v1/create-qr-code/",
    qr_size=_get_int("QR_SIZE", default=200) or 200,
    web_host=_get_env("WEB_HOST", default="127.0.0.1") or "127.0.0.1",
    web_port=_get_int("WEB_PORT", default=8000) or 8000,
)


def check_bot_settings(s: Settings = settings) -> None:
    if not s.bot_token:
        raise RuntimeError("BOT_TOKEN is empty. Set BOT_TOKEN in .env")
    if not s.admin_id:
        raise RuntimeError("ADMIN_ID is empty. Set ADMIN_ID (or ADMIN_TG_ID) in .env")
