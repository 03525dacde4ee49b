import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from tredcental.bot.handlers import router
from tredcental.config import check_bot_settings, settings
from tredcental.services.catalog import Catalog
from tredcental.services.session import SessionStore


async def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    check_bot_settings()

    bot = Bot(token=settings.bot_token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    # handlers get these by keyword: sessions=, catalog=
    dp = Dispatcher(sessions=SessionStore(), catalog=Catalog())
    dp.include_router(router)

    await dp.start_polling(bot)


if __name__ == "__main__":
    asyncio.run(main())
