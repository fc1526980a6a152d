"""
Booking price calculation.

Two pricing sources exist:

* a provider's own per-person rate, where children pay half, and
* a static tier table for generic products, where every guest pays the
  per-person price of the band the whole party falls into.

The tier table is built once at import and exposed read-only.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

CHILD_RATE = 0.5


class PricingError(ValueError):
    """Base class for pricing failures that map to a client error."""


class UnknownProductError(PricingError):
    def __init__(self, product_type: str):
        self.product_type = product_type
        super().__init__("Invalid product type or no pricing available")


class NoMatchingTierError(PricingError):
    def __init__(self, product_type: str, persons: int):
        self.product_type = product_type
        self.persons = persons
        super().__init__(f"No pricing tier available for {persons} persons")


@dataclass(frozen=True)
class PriceTier:
    min_persons: int
    max_persons: Optional[int]  # None: no upper bound
    price: float

    def contains(self, persons: int) -> bool:
        if persons < self.min_persons:
            return False
        return self.max_persons is None or persons <= self.max_persons


def _tiers(*bands: Tuple[int, Optional[int], float]) -> Tuple[PriceTier, ...]:
    return tuple(PriceTier(lo, hi, price) for lo, hi, price in bands)


PRICING_TABLE: Mapping[str, Optional[Tuple[PriceTier, ...]]] = MappingProxyType({
    "Jeep Safari": _tiers((1, 3, 38), (4, 5, 30), (6, 10, 20), (11, 20, 15)),
    "Catamaran Boat Ride": _tiers((1, 1, 9.8), (2, None, 7)),
    "Village Cooking Experience": _tiers((1, 5, 15), (6, 10, 13), (11, 20, 11), (21, 50, 10)),
    "Bullock Cart Ride": _tiers((1, 5, 9.9), (6, 20, 5), (21, 50, 4)),
    "Village Tour": _tiers((1, 5, 19.9), (6, 10, 18.2), (11, 20, 17.3), (21, 30, 16.3), (31, 50, 15)),
    "Traditional Village Lunch": _tiers((1, None, 15)),
    # provider-only experiences
    "Sundowners Cocktail": None,
    "High Tea": None,
    "Tuk Tuk Adventures": None,
})


def round_price(amount: float) -> float:
    return round(amount, 2)


def tiers_for(product_type: str) -> Tuple[PriceTier, ...]:
    tiers = PRICING_TABLE.get(product_type)
    if not tiers:
        raise UnknownProductError(product_type)
    return tiers


def select_tier(tiers: Tuple[PriceTier, ...], persons: int) -> Optional[PriceTier]:
    """Return the first tier whose closed range contains `persons`."""
    for tier in tiers:
        if tier.contains(persons):
            return tier
    return None


def product_total(product_type: str, adults: int, children: int = 0) -> float:
    persons = adults + children
    tier = select_tier(tiers_for(product_type), persons)
    if tier is None:
        raise NoMatchingTierError(product_type, persons)
    return round_price(persons * tier.price)


def provider_total(rate: float, adults: int, children: int = 0) -> float:
    # unrounded: the stored total is exactly rate * (adults + children / 2)
    return rate * (adults + children * CHILD_RATE)


def describe_table():
    """Serializable view of the tier table for the products endpoint."""
    products = []
    for name, tiers in PRICING_TABLE.items():
        products.append({
            "productType": name,
            "bookable": tiers is not None,
            "tiers": [
                {"min": t.min_persons, "max": t.max_persons, "price": t.price}
                for t in (tiers or ())
            ],
        })
    return products
