# apps/movers/services/pricing/numbers.py
import math
from typing import Optional

PLACEHOLDER_IMAGE = "https://images.pokemontcg.io/placeholder.png"
POKEMONTCG_IMAGE = "https://images.pokemontcg.io/{set_code}/{number}.png"


def finite_number(x) -> Optional[float]:
    """
    Strict numeric check: real ints/floats that are finite.
    Strings, bools, None, NaN and +/-inf all -> None.
    """
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        return None
    x = float(x)
    return x if math.isfinite(x) else None


def pct_change(current: Optional[float], reference: Optional[float]) -> float:
    """
    (current - reference) / reference * 100, or 0 when either side is missing
    or the result is not finite (reference == 0 included).
    """
    if current is None or reference is None or reference == 0:
        return 0.0
    out = (current - reference) / reference * 100.0
    return out if math.isfinite(out) else 0.0


def resolve_pct_change(explicit, current: Optional[float],
                       previous: Optional[float]) -> Optional[float]:
    """
    Resolution order:
      1) explicit delta field when present and non-zero
      2) computed from a previous/reference price
      3) an explicit zero stays 0
      4) None: nothing to compute from, the ranker falls back to the next window
    """
    e = finite_number(explicit)
    if e:
        return e
    if previous is not None:
        return pct_change(current, previous)
    return e


def card_number(raw: str) -> str:
    """'4/102' -> '4'"""
    return (raw or "").split("/", 1)[0].strip()


def history_samples(raw) -> list[float]:
    """
    Accepts [1.2, 3.4] or [{"p": 1.2, "t": ...}, {"price": 3.4}, ...].
    Unusable points are skipped.
    """
    if not isinstance(raw, list):
        return []
    out = []
    for pt in raw:
        if isinstance(pt, dict):
            pt = pt.get("p", pt.get("price"))
        v = finite_number(pt)
        if v is not None:
            out.append(v)
    return out


def price_history(raw, current: float, previous: Optional[float] = None) -> list[float]:
    """Upstream history if usable, else [previous, current], else [current]."""
    samples = history_samples(raw)
    if samples:
        return samples
    if previous is not None:
        return [previous, current]
    return [current]


def first_text(*values) -> str:
    for v in values:
        if isinstance(v, str) and v.strip():
            return v.strip()
    return ""


def card_image(explicit: str = "", set_code: str = "", number: str = "") -> str:
    """Explicit image, else built from set code + card number, else placeholder."""
    if explicit:
        return explicit
    if set_code and number:
        return POKEMONTCG_IMAGE.format(set_code=set_code, number=number)
    return PLACEHOLDER_IMAGE
