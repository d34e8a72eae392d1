"""
Fetch/Fallback Chain.

An explicit, ordered list of Candidate queries tried one at a time (each
response is awaited before the next request goes out). The chain stops at the
first candidate whose parsed payload yields at least one usable card.

Fall-through policies:
    "4xx"  - a client-error status moves on to the next (simpler) candidate;
             any other non-2xx status is raised as UpstreamError unchanged.
             A 4xx on the last candidate is raised too.
    "any"  - every failure (status, transport, malformed JSON) moves on.
             Exhaustion returns an empty result instead of raising.
"""

import logging
from typing import Callable, NamedTuple, Optional, Sequence

import requests

from ..errors import UpstreamError

logger = logging.getLogger(__name__)

FALL_THROUGH_4XX = "4xx"
FALL_THROUGH_ANY = "any"


class Candidate(NamedTuple):
    label: str      # for logs, e.g. "rich" / "simple" / "24h /v2/movers"
    url: str
    params: dict


class ChainResult(NamedTuple):
    cards: list                      # whatever `parse` returned (cards, or tcgdex briefs)
    candidate: Optional[Candidate]   # None when nothing usable was found
    attempts: int


def _is_success(status: int) -> bool:
    return 200 <= status < 300


def _upstream_error(cand: Candidate, r) -> UpstreamError:
    return UpstreamError(
        f"{cand.label} query failed with {r.status_code}",
        r.status_code,
        r.text,
        r.headers.get("Content-Type"),
    )


def run_chain(fetch: Callable[[Candidate], "requests.Response"],
              candidates: Sequence[Candidate],
              parse: Callable[[object], list],
              *, fall_through: str = FALL_THROUGH_4XX) -> ChainResult:
    """
    fetch:      issues one GET for a candidate (the client owns auth headers)
    parse:      payload -> usable records (unusable ones already dropped)
    """
    if fall_through not in (FALL_THROUGH_4XX, FALL_THROUGH_ANY):
        raise ValueError(f"Unknown fall-through policy: {fall_through}")
    tolerant = fall_through == FALL_THROUGH_ANY

    attempts = 0
    for i, cand in enumerate(candidates):
        is_last = i == len(candidates) - 1
        attempts += 1

        try:
            r = fetch(cand)
        except requests.exceptions.RequestException as e:
            if not tolerant:
                raise
            logger.warning(f"{cand.label}: request failed ({e}), trying next candidate")
            continue

        if not _is_success(r.status_code):
            if tolerant:
                logger.warning(f"{cand.label}: upstream returned {r.status_code}, trying next candidate")
                continue
            if 400 <= r.status_code < 500 and not is_last:
                logger.warning(f"{cand.label}: upstream returned {r.status_code}, falling back")
                continue
            raise _upstream_error(cand, r)

        try:
            payload = r.json()
        except ValueError as e:
            if not tolerant:
                raise ValueError(f"{cand.label}: malformed upstream JSON: {e}") from e
            logger.warning(f"{cand.label}: malformed upstream JSON, trying next candidate")
            continue

        cards = parse(payload)
        if cards:
            logger.info(f"{cand.label}: {len(cards)} usable cards")
            return ChainResult(cards, cand, attempts)
        logger.info(f"{cand.label}: no usable cards")

    return ChainResult([], None, attempts)
