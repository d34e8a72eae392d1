"""
Request-scoped value types shared by every movers revision.

Upstream records live next to their clients (services/integrations/*/adapter.py);
everything here is the common shape the frontend consumes.
"""

from typing import NamedTuple, Optional


class RequestParameters(NamedTuple):
    limit: str         # upstream fetch size, passed through as a string
    order_by: str      # ranking window token: 24h | 7d | 30d | 90d
    page: str          # pagination cursor (tcgdex only)
    top: int           # output truncation count


class Variant(NamedTuple):
    price: float
    price_change_30d: Optional[float]
    price_change_7d: Optional[float]
    price_history: list[float]
    label: str = ""    # e.g. "Near Mint Holofoil"

    def to_dict(self) -> dict:
        return {
            "price": self.price,
            "priceChange30d": self.price_change_30d,
            "priceChange7d": self.price_change_7d,
            "priceHistory": list(self.price_history),
            "label": self.label,
        }


class NormalizedCard(NamedTuple):
    id: str
    name: str
    set: str
    image: str
    variants: list[Variant]
    source: str        # upstream that produced the record

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "set": self.set,
            "image": self.image,
            "variants": [v.to_dict() for v in self.variants],
            "source": self.source,
        }
