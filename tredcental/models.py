from __future__ import annotations

from dataclasses import dataclass

from tredcental.utils.validators import require_non_negative_number


@dataclass(frozen=True)
class Gear:
    id: int
    name: str
    price_per_day: float
    image_url: str
    category: str

    def __post_init__(self) -> None:
        require_non_negative_number(self.price_per_day, "price_per_day")


@dataclass
class RentedItem:
    gear: Gear
    quantity: int = 1

    @property
    def id(self) -> int:
        return self.gear.id

    @property
    def name(self) -> str:
        return self.gear.name

    @property
    def price_per_day(self) -> float:
        return self.gear.price_per_day

    @property
    def category(self) -> str:
        return self.gear.category

    @property
    def image_url(self) -> str:
        return self.gear.image_url
