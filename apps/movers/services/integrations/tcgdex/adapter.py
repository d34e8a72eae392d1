"""
TCGdex record shapes -> NormalizedCard.

Brief (listing):
    {"id": "swsh3-136", "localId": "136", "name": "Furret",
     "image": "https://assets.tcgdex.net/en/swsh/swsh3/136"}

Detail (relevant fields):
    {"id": "swsh3-136", "localId": "136", "name": "Furret",
     "image": "https://assets.tcgdex.net/en/swsh/swsh3/136",
     "set": {"id": "swsh3", "name": "Darkness Ablaze"},
     "pricing": {
        "cardmarket": {"trend": 0.21, "avg": 0.2, "avg7": 0.19, "avg30": 0.17, ...},
        "tcgplayer": {"normal": {"marketPrice": 0.25, ...}, ...}
     }}

TCGdex only reports reference averages, so each window's % change is
(price - avgN) / avgN * 100, computed independently.
"""

import logging
import re
from typing import List, NamedTuple, Optional

from ...models import NormalizedCard, Variant
from ...pricing.numbers import (
    card_image, finite_number, first_text, pct_change, price_history,
)

logger = logging.getLogger(__name__)

SOURCE = "tcgdex"
ASSET_IMAGE = "https://assets.tcgdex.net/en/{serie}/{set_code}/{number}/high.png"
TCGPLAYER_PRINTINGS = ("holofoil", "normal", "reverse-holofoil", "1st-edition-holofoil")


class TCGdexBrief(NamedTuple):
    id: str
    name: str

    @classmethod
    def from_payload(cls, d: dict) -> "TCGdexBrief":
        return cls(id=str(d.get("id") or ""), name=first_text(d.get("name")))


class TCGdexCard(NamedTuple):
    id: str
    local_id: str
    name: str
    image: str
    set_id: str
    set_name: str
    trend: object
    avg: object
    avg7: object
    avg30: object
    tcgplayer_market: object

    @classmethod
    def from_payload(cls, d: dict) -> "TCGdexCard":
        set_ = d.get("set") if isinstance(d.get("set"), dict) else {}
        pricing = d.get("pricing") if isinstance(d.get("pricing"), dict) else {}
        cm = pricing.get("cardmarket") if isinstance(pricing.get("cardmarket"), dict) else {}
        tp = pricing.get("tcgplayer") if isinstance(pricing.get("tcgplayer"), dict) else {}

        market = None
        for printing in TCGPLAYER_PRINTINGS:
            row = tp.get(printing)
            if isinstance(row, dict) and finite_number(row.get("marketPrice")) is not None:
                market = row.get("marketPrice")
                break

        return cls(
            id=str(d.get("id") or ""),
            local_id=first_text(str(d.get("localId") or "")),
            name=first_text(d.get("name")),
            image=first_text(d.get("image")),
            set_id=first_text(set_.get("id")),
            set_name=first_text(set_.get("name"), set_.get("id")),
            trend=cm.get("trend"),
            avg=cm.get("avg"),
            avg7=cm.get("avg7"),
            avg30=cm.get("avg30"),
            tcgplayer_market=market,
        )


def serie_of(set_id: str) -> str:
    """'swsh3' -> 'swsh', 'sv03.5' -> 'sv', 'base1' -> 'base'"""
    m = re.match(r"[a-z]+", set_id or "")
    return m.group(0) if m else ""


def _image(card: TCGdexCard) -> str:
    if card.image:
        return f"{card.image}/high.png"
    serie = serie_of(card.set_id)
    if serie and card.set_id and card.local_id:
        return ASSET_IMAGE.format(serie=serie, set_code=card.set_id, number=card.local_id)
    return card_image()


def normalize_card(card: TCGdexCard) -> Optional[NormalizedCard]:
    price = None
    for candidate in (card.trend, card.avg, card.tcgplayer_market):
        price = finite_number(candidate)
        if price is not None:
            break
    if price is None:
        return None

    avg7 = finite_number(card.avg7)
    avg30 = finite_number(card.avg30)
    variant = Variant(
        price=price,
        price_change_30d=pct_change(price, avg30) if avg30 is not None else None,
        price_change_7d=pct_change(price, avg7) if avg7 is not None else None,
        price_history=price_history(None, price, avg30),
        label="cardmarket trend" if finite_number(card.trend) is not None else "market",
    )
    return NormalizedCard(
        id=card.id,
        name=card.name,
        set=card.set_name,
        image=_image(card),
        variants=[variant],
        source=SOURCE,
    )


def parse_briefs(payload) -> List[TCGdexBrief]:
    """The list endpoint returns a bare JSON array."""
    if not isinstance(payload, list):
        return []
    return [TCGdexBrief.from_payload(d) for d in payload
            if isinstance(d, dict) and d.get("id")]


def normalize_details(details: List[dict]) -> List[NormalizedCard]:
    out = []
    for d in details:
        try:
            card = normalize_card(TCGdexCard.from_payload(d))
        except (TypeError, ValueError, AttributeError) as e:
            logger.debug(f"Dropping TCGdex record {d.get('id')!r}: {e}")
            continue
        if card is not None:
            out.append(card)
    return out
