"""
PokemonPriceTracker API Client
Adapted for the movers proxy: ranking-window queries against several endpoint
path variants, tried in order until one returns usable cards.
"""

import logging
from typing import List

import requests

from ...chain import Candidate

logger = logging.getLogger(__name__)

UA = "tcg-movers-proxy/1.0"
DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": UA,
}
API_KEY_ENV = "PPT_API_KEY"

DEFAULT_WINDOWS = ("24h", "7d", "30d")


class PPTClient:
    """
    Client for PokemonPriceTracker API v2.

    Endpoints used (path variants, in priority order per window):
        GET  /api/v2/cards/movers   - window, limit
        GET  /api/v2/movers         - window, limit
        GET  /api/v2/cards          - sortBy=priceChange, sortOrder=desc, timeframe, limit
    """

    def __init__(self, api_key: str, base_url: str = "https://www.pokemonpricetracker.com/api",
                 *, timeout: float = 15, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {**DEFAULT_HEADERS, "Authorization": f"Bearer {api_key}"}

    # ------------------------------------------------------------------
    # Query Builder
    # ------------------------------------------------------------------

    def window_queries(self, window: str, limit: str) -> List[Candidate]:
        return [
            Candidate(f"ppt {window} /v2/cards/movers", f"{self.base_url}/v2/cards/movers",
                      {"window": window, "limit": limit}),
            Candidate(f"ppt {window} /v2/movers", f"{self.base_url}/v2/movers",
                      {"window": window, "limit": limit}),
            Candidate(f"ppt {window} /v2/cards", f"{self.base_url}/v2/cards",
                      {"sortBy": "priceChange", "sortOrder": "desc",
                       "timeframe": window, "limit": limit}),
        ]

    def mover_queries(self, limit: str, windows=DEFAULT_WINDOWS) -> List[Candidate]:
        """Every (window, path) combination, windows outermost."""
        out = []
        for w in windows:
            out.extend(self.window_queries(w, limit))
        return out

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def fetch(self, candidate: Candidate):
        logger.debug(f"GET {candidate.url} params={candidate.params}")
        return self.session.get(candidate.url, headers=self.headers,
                                params=candidate.params, timeout=self.timeout)
