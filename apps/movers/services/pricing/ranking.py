# apps/movers/services/pricing/ranking.py
from typing import List

from ..models import NormalizedCard, Variant


def variant_move(v: Variant) -> float:
    """|30d change|, falling back to |7d change|, then 0."""
    if v.price_change_30d is not None:
        return abs(v.price_change_30d)
    if v.price_change_7d is not None:
        return abs(v.price_change_7d)
    return 0.0


def card_move(card: NormalizedCard) -> float:
    """Biggest absolute movement among the card's variants."""
    return max((variant_move(v) for v in card.variants), default=0.0)


def rank_movers(cards: List[NormalizedCard], top: int) -> List[NormalizedCard]:
    """
    Sort by absolute % change (desc) and keep the first `top`.
    sorted() is stable, so ties keep upstream order.
    """
    ranked = sorted(cards, key=card_move, reverse=True)
    return ranked[:max(0, int(top))]
