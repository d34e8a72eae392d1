"""
JustTCG record shape -> NormalizedCard.

Relevant response fields:
{
    "data": [{
        "id": "pokemon-base-set-charizard-holo-rare",
        "name": "Charizard",
        "set": "base-set-pokemon",
        "set_name": "Base Set",
        "number": "4/102",
        "variants": [{
            "id": "...", "condition": "Near Mint", "printing": "Holofoil",
            "price": 412.5,
            "priceChange7d": -1.2, "priceChange30d": 8.4,
            "avgPrice7d": 415.0, "avgPrice30d": 380.0,
            "priceHistory": [{"p": 399.0, "t": 1717200000}, ...]
        }]
    }]
}
"""

import logging
from typing import List, NamedTuple, Optional

from ...models import NormalizedCard, Variant
from ...pricing.numbers import (
    card_image, card_number, finite_number, first_text, price_history, resolve_pct_change,
)

logger = logging.getLogger(__name__)

SOURCE = "justtcg"


class JustTCGVariant(NamedTuple):
    id: str
    condition: str
    printing: str
    price: object              # raw, may be missing / non-numeric
    price_change_7d: object
    price_change_30d: object
    avg_price_7d: object
    avg_price_30d: object
    price_history: object

    @classmethod
    def from_payload(cls, d: dict) -> "JustTCGVariant":
        return cls(
            id=str(d.get("id") or ""),
            condition=first_text(d.get("condition")),
            printing=first_text(d.get("printing")),
            price=d.get("price"),
            price_change_7d=d.get("priceChange7d"),
            price_change_30d=d.get("priceChange30d"),
            avg_price_7d=d.get("avgPrice7d"),
            avg_price_30d=d.get("avgPrice30d"),
            price_history=d.get("priceHistory"),
        )


class JustTCGCard(NamedTuple):
    id: str
    name: str
    set_id: str
    set_name: str
    number: str
    image: str
    variants: List[JustTCGVariant]

    @classmethod
    def from_payload(cls, d: dict) -> "JustTCGCard":
        variants = d.get("variants")
        return cls(
            id=str(d.get("id") or ""),
            name=first_text(d.get("name")),
            set_id=first_text(d.get("set")),
            set_name=first_text(d.get("set_name"), d.get("set")),
            number=first_text(d.get("number")),
            image=first_text(d.get("image"), d.get("image_url")),
            variants=[JustTCGVariant.from_payload(v) for v in variants if isinstance(v, dict)]
            if isinstance(variants, list) else [],
        )


def normalize_variant(v: JustTCGVariant) -> Optional[Variant]:
    price = finite_number(v.price)
    if price is None:
        return None
    avg7 = finite_number(v.avg_price_7d)
    avg30 = finite_number(v.avg_price_30d)

    return Variant(
        price=price,
        price_change_30d=resolve_pct_change(v.price_change_30d, price, avg30),
        price_change_7d=resolve_pct_change(v.price_change_7d, price, avg7),
        price_history=price_history(v.price_history, price, avg30),
        label=" ".join(p for p in (v.condition, v.printing) if p),
    )


def normalize_card(card: JustTCGCard) -> Optional[NormalizedCard]:
    """Only priced variants survive; a card with none is dropped."""
    variants = [nv for nv in (normalize_variant(v) for v in card.variants) if nv is not None]
    if not variants:
        return None
    return NormalizedCard(
        id=card.id,
        name=card.name,
        set=card.set_name,
        image=card_image(card.image, card.set_id, card_number(card.number)),
        variants=variants,
        source=SOURCE,
    )


def parse_cards(payload) -> List[NormalizedCard]:
    rows = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(rows, list):
        return []

    out = []
    for row in rows:
        if not isinstance(row, dict):
            continue
        try:
            card = normalize_card(JustTCGCard.from_payload(row))
        except (TypeError, ValueError, AttributeError) as e:
            logger.debug(f"Dropping JustTCG record {row.get('id')!r}: {e}")
            continue
        if card is not None:
            out.append(card)
    return out
