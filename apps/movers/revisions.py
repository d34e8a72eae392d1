"""
The six movers revisions.

Each revision is an independent implementation of the same endpoint: build
candidate queries, run them through the fallback chain, normalize, rank,
truncate. They do not share a fallback policy.

    justtcg           - JustTCG rich query only; errors pass through
    justtcg-fallback  - JustTCG rich query, then a simple one on 4xx / empty
    justtcg-averages  - JustTCG statistics query; % change from 7d/30d averages
    tcgdex            - TCGdex listing + parallel per-card detail fan-out
    ppt               - PokemonPriceTracker windows x path variants, demo data last
    justtcg-tcgdex    - JustTCG with fallback, then TCGdex when JustTCG is unusable
"""

import logging
from typing import Callable, Dict, List, Mapping, NamedTuple

from .errors import MissingCredentialError, UnknownRevisionError, UpstreamError
from .services.chain import FALL_THROUGH_ANY, run_chain
from .services.demo import demo_cards
from .services.integrations.justtcg import adapter as justtcg_adapter
from .services.integrations.justtcg.client import JustTCGClient
from .services.integrations.pokemon_price_tracker import adapter as ppt_adapter
from .services.integrations.pokemon_price_tracker.client import PPTClient
from .services.integrations.tcgdex import adapter as tcgdex_adapter
from .services.integrations.tcgdex.client import TCGdexClient
from .services.models import NormalizedCard, RequestParameters
from .services.pricing.ranking import rank_movers

logger = logging.getLogger(__name__)


class Revision(NamedTuple):
    id: str
    description: str
    default_limit: int
    run: Callable[..., List[NormalizedCard]]


# ==========================================
# CLIENT FACTORIES
# ==========================================

def _timeout(config: Mapping) -> float:
    return float(config.get("MOVERS_HTTP_TIMEOUT") or 15)


def _justtcg(config: Mapping, session=None) -> JustTCGClient:
    # Raises MissingCredentialError before any network call.
    return JustTCGClient(
        config.get("JUSTTCG_API_KEY"),
        config.get("JUSTTCG_BASE_URL") or "https://api.justtcg.com/v1",
        timeout=_timeout(config),
        session=session,
    )


def _tcgdex(config: Mapping, session=None) -> TCGdexClient:
    return TCGdexClient(
        config.get("TCGDEX_BASE_URL") or "https://api.tcgdex.net/v2/en",
        timeout=_timeout(config),
        max_workers=int(config.get("MOVERS_MAX_WORKERS") or 8),
        session=session,
    )


# ==========================================
# SHARED STEPS
# ==========================================

def _justtcg_with_fallback(config: Mapping, params: RequestParameters, session=None):
    client = _justtcg(config, session)
    candidates = [
        client.rich_query(params.order_by, params.limit),
        client.simple_query(params.order_by, params.limit),
    ]
    return run_chain(client.fetch, candidates, justtcg_adapter.parse_cards).cards


def _tcgdex_cards(config: Mapping, params: RequestParameters, session=None):
    client = _tcgdex(config, session)
    listing = run_chain(client.fetch, [client.list_query(params.page, params.limit)],
                        tcgdex_adapter.parse_briefs)
    ids = [b.id for b in listing.cards]
    details = client.get_cards_settled(ids)
    logger.info(f"tcgdex: {len(details)}/{len(ids)} card details settled")
    return tcgdex_adapter.normalize_details(details)


# ==========================================
# REVISIONS
# ==========================================

def justtcg(config: Mapping, params: RequestParameters, session=None) -> List[NormalizedCard]:
    client = _justtcg(config, session)
    result = run_chain(client.fetch, [client.rich_query(params.order_by, params.limit)],
                       justtcg_adapter.parse_cards)
    return rank_movers(result.cards, params.top)


def justtcg_fallback(config: Mapping, params: RequestParameters, session=None) -> List[NormalizedCard]:
    return rank_movers(_justtcg_with_fallback(config, params, session), params.top)


def justtcg_averages(config: Mapping, params: RequestParameters, session=None) -> List[NormalizedCard]:
    client = _justtcg(config, session)
    candidates = [
        client.statistics_query(params.order_by, params.limit),
        client.simple_query(params.order_by, params.limit),
    ]
    result = run_chain(client.fetch, candidates, justtcg_adapter.parse_cards)
    return rank_movers(result.cards, params.top)


def tcgdex(config: Mapping, params: RequestParameters, session=None) -> List[NormalizedCard]:
    return rank_movers(_tcgdex_cards(config, params, session), params.top)


def ppt(config: Mapping, params: RequestParameters, session=None) -> List[NormalizedCard]:
    """Never errors and never comes back empty: demo data fills every gap."""
    api_key = config.get("PPT_API_KEY")
    if not api_key:
        logger.warning("PPT_API_KEY not set, serving demo data")
        return rank_movers(demo_cards(), params.top)

    client = PPTClient(
        api_key,
        config.get("PPT_BASE_URL") or "https://www.pokemonpricetracker.com/api",
        timeout=_timeout(config),
        session=session,
    )
    result = run_chain(client.fetch, client.mover_queries(params.limit),
                       ppt_adapter.parse_cards, fall_through=FALL_THROUGH_ANY)
    if not result.cards:
        logger.warning(f"PPT exhausted {result.attempts} window/path combinations, serving demo data")
        return rank_movers(demo_cards(), params.top)
    return rank_movers(result.cards, params.top)


def justtcg_tcgdex(config: Mapping, params: RequestParameters, session=None) -> List[NormalizedCard]:
    try:
        cards = _justtcg_with_fallback(config, params, session)
    except MissingCredentialError as e:
        logger.warning(f"JustTCG unavailable ({e}), switching to TCGdex")
        cards = []
    except UpstreamError as e:
        if not (e.status_code and 400 <= e.status_code < 500):
            raise
        logger.warning(f"JustTCG exhausted with {e.status_code}, switching to TCGdex")
        cards = []

    if not cards:
        cards = _tcgdex_cards(config, params, session)
    return rank_movers(cards, params.top)


REVISIONS: Dict[str, Revision] = {r.id: r for r in (
    Revision("justtcg", "JustTCG rich query, upstream errors passed through", 40, justtcg),
    Revision("justtcg-fallback", "JustTCG rich query, simple query on 4xx or empty result", 40, justtcg_fallback),
    Revision("justtcg-averages", "JustTCG statistics, % change from 7d/30d reference averages", 40, justtcg_averages),
    Revision("tcgdex", "TCGdex listing with parallel per-card pricing fetch", 20, tcgdex),
    Revision("ppt", "PokemonPriceTracker 24h/7d/30d windows, demo data fallback", 30, ppt),
    Revision("justtcg-tcgdex", "JustTCG with fallback, TCGdex when JustTCG is unusable", 40, justtcg_tcgdex),
)}


def get_revision(revision_id: str) -> Revision:
    try:
        return REVISIONS[revision_id]
    except KeyError:
        raise UnknownRevisionError(revision_id) from None
