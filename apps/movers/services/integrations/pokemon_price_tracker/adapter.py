"""
PokemonPriceTracker record shape -> NormalizedCard.

Response shape (relevant fields; both `data` arrays and bare arrays occur):
{
    "data": [{
        "id": "...", "tcgPlayerId": 490294,
        "name": "Charizard ex",
        "setName": "Obsidian Flames", "setCode": "sv3", "cardNumber": "125",
        "imageUrl": "...",
        "prices": {"market": 125.50, ...},
        "previousPrice": 110.0,
        "priceChange": 14.09,
        "priceHistory": [{"date": "...", "price": 110.0}, ...],
        "variants": [{"name": "Holofoil", "price": 125.5}, ...]
    }]
}
"""

import logging
from typing import List, NamedTuple, Optional

from ...models import NormalizedCard, Variant
from ...pricing.numbers import (
    card_image, finite_number, first_text, price_history, resolve_pct_change,
)

logger = logging.getLogger(__name__)

SOURCE = "pokemonpricetracker"
CHANGE_KEYS = ("priceChange", "percentChange", "changePercent", "pctChange")


class PPTVariant(NamedTuple):
    name: str
    price: object

    @classmethod
    def from_payload(cls, d: dict) -> "PPTVariant":
        prices = d.get("prices") if isinstance(d.get("prices"), dict) else {}
        price = d.get("price")
        if price is None:
            price = prices.get("market")
        return cls(name=first_text(d.get("name"), d.get("printing")), price=price)


class PPTCard(NamedTuple):
    id: str
    name: str
    set_name: str
    set_code: str
    card_number: str
    image: str
    price: object
    previous_price: object
    pct_change: object
    price_history: object
    variants: List[PPTVariant]

    @classmethod
    def from_payload(cls, d: dict) -> "PPTCard":
        prices = d.get("prices") if isinstance(d.get("prices"), dict) else {}
        price = prices.get("market")
        if price is None:
            price = d.get("price")

        # first non-zero delta wins; a reported zero is kept only if nothing else moves
        change = None
        for key in CHANGE_KEYS:
            value = finite_number(d.get(key))
            if value:
                change = value
                break
            if change is None:
                change = value

        variants = d.get("variants")
        return cls(
            id=str(d.get("id") or d.get("tcgPlayerId") or ""),
            name=first_text(d.get("name")),
            set_name=first_text(d.get("setName"), d.get("set")),
            set_code=first_text(d.get("setCode"), d.get("setId")),
            card_number=first_text(str(d.get("cardNumber") or "")),
            image=first_text(d.get("imageCdnUrl"), d.get("imageUrl"), d.get("image")),
            price=price,
            previous_price=d.get("previousPrice"),
            pct_change=change,
            price_history=d.get("priceHistory"),
            variants=[PPTVariant.from_payload(v) for v in variants if isinstance(v, dict)]
            if isinstance(variants, list) else [],
        )


def pick_variant(variants: List[PPTVariant]) -> Optional[PPTVariant]:
    """First priced variant; otherwise the first variant regardless of price."""
    for v in variants:
        if finite_number(v.price) is not None:
            return v
    return variants[0] if variants else None


def normalize_card(card: PPTCard) -> Optional[NormalizedCard]:
    variant = pick_variant(card.variants)
    price = finite_number(variant.price) if variant else None
    if price is None:
        price = finite_number(card.price)
    if price is None:
        return None

    previous = finite_number(card.previous_price)
    label = variant.name if variant and variant.name else "market"
    return NormalizedCard(
        id=card.id,
        name=card.name,
        set=card.set_name,
        image=card_image(card.image, card.set_code, card.card_number),
        variants=[Variant(
            price=price,
            price_change_30d=resolve_pct_change(card.pct_change, price, previous),
            price_change_7d=None,
            price_history=price_history(card.price_history, price, previous),
            label=label,
        )],
        source=SOURCE,
    )


def parse_cards(payload) -> List[NormalizedCard]:
    if isinstance(payload, dict):
        rows = payload.get("data", payload.get("cards"))
    else:
        rows = payload
    if not isinstance(rows, list):
        return []

    out = []
    for row in rows:
        if not isinstance(row, dict):
            continue
        try:
            card = normalize_card(PPTCard.from_payload(row))
        except (TypeError, ValueError, AttributeError) as e:
            logger.debug(f"Dropping PPT record {row.get('name')!r}: {e}")
            continue
        if card is not None:
            out.append(card)
    return out
