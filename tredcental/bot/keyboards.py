from aiogram.types import KeyboardButton, ReplyKeyboardMarkup


def main_kb() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text="/gear"), KeyboardButton(text="/cart")],
            [KeyboardButton(text="/receipt"), KeyboardButton(text="/help")],
            [KeyboardButton(text="/new"), KeyboardButton(text="/ping")],
        ],
        resize_keyboard=True,
    )
