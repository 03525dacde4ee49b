from __future__ import annotations

from typing import Dict, List, Optional

from tredcental.models import Gear, RentedItem


class Cart:
    """In-memory ledger of rented gear, one entry per gear id, in the order it was added."""

    def __init__(self) -> None:
        self._items: Dict[int, RentedItem] = {}

    def add(self, gear: Gear) -> RentedItem:
        item = self._items.get(gear.id)
        if item:
            item.quantity += 1
        else:
            item = RentedItem(gear=gear, quantity=1)
            self._items[gear.id] = item
        return item

    def set_quantity(self, gear_id: int, quantity: int) -> None:
        if quantity <= 0:
            self.remove(gear_id)
            return
        item = self._items.get(gear_id)
        if item:
            item.quantity = quantity

    def remove(self, gear_id: int) -> None:
        self._items.pop(gear_id, None)

    def get(self, gear_id: int) -> Optional[RentedItem]:
        return self._items.get(gear_id)

    def items(self) -> List[RentedItem]:
        return list(self._items.values())

    def clear(self) -> None:
        self._items.clear()

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)
