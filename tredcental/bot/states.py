from aiogram.fsm.state import State, StatesGroup


class CustomerSet(StatesGroup):
    waiting_name = State()
