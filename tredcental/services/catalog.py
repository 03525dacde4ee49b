from __future__ import annotations

from typing import Iterable, List, Optional

from tredcental.constants import AVAILABLE_GEAR
from tredcental.models import Gear


class Catalog:
    def __init__(self, gear: Iterable[Gear] = AVAILABLE_GEAR) -> None:
        self._gear = tuple(gear)
        self._by_id = {g.id: g for g in self._gear}

    def all(self) -> List[Gear]:
        return list(self._gear)

    def get(self, gear_id: int) -> Optional[Gear]:
        return self._by_id.get(gear_id)

    def search(self, query: str = "", category: Optional[str] = None) -> List[Gear]:
        q = (query or "").strip().lower()
        cat = (category or "").strip().lower()
        rows = []
        for g in self._gear:
            if cat and g.category.lower() != cat:
                continue
            if q and q not in g.name.lower() and q not in g.category.lower():
                continue
            rows.append(g)
        return rows

    def categories(self) -> List[str]:
        seen: List[str] = []
        for g in self._gear:
            if g.category not in seen:
                seen.append(g.category)
        return seen
