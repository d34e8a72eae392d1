"""
JustTCG API Client
Builds the card-listing queries used by the movers revisions and issues them
with the account key. No retry/backoff: a failed call is handed back to the
fallback chain as-is.
"""

import logging

import requests

from ....errors import MissingCredentialError
from ...chain import Candidate

logger = logging.getLogger(__name__)

UA = "tcg-movers-proxy/1.0"
DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": UA,
}
API_KEY_ENV = "JUSTTCG_API_KEY"


class JustTCGClient:
    """
    Client for JustTCG v1.

    Endpoints used:
        GET  /v1/cards   - Card listing sorted by % change period (orderBy=7d|30d|90d)
    """

    def __init__(self, api_key: str, base_url: str = "https://api.justtcg.com/v1",
                 *, game: str = "pokemon", timeout: float = 15, session=None):
        if not api_key:
            raise MissingCredentialError(API_KEY_ENV)
        self.base_url = base_url.rstrip("/")
        self.game = game
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {**DEFAULT_HEADERS, "x-api-key": api_key}

    # ------------------------------------------------------------------
    # Query Builder
    # ------------------------------------------------------------------

    def _base_params(self, order_by: str, limit: str) -> dict:
        return {
            "game": self.game,
            "orderBy": order_by,   # JustTCG sorts by % change period
            "limit": limit,        # upstream page size
        }

    def rich_query(self, order_by: str, limit: str) -> Candidate:
        """Extra statistics + price history so the frontend can draw sparklines."""
        params = self._base_params(order_by, limit)
        params["include_price_history"] = "true"
        params["include_statistics"] = "7d,30d"
        return Candidate("justtcg rich", f"{self.base_url}/cards", params)

    def simple_query(self, order_by: str, limit: str) -> Candidate:
        return Candidate("justtcg simple", f"{self.base_url}/cards",
                         self._base_params(order_by, limit))

    def statistics_query(self, order_by: str, limit: str) -> Candidate:
        """Statistics only (avgPrice7d/avgPrice30d), no history payload."""
        params = self._base_params(order_by, limit)
        params["include_statistics"] = "7d,30d"
        return Candidate("justtcg statistics", f"{self.base_url}/cards", params)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def fetch(self, candidate: Candidate):
        logger.debug(f"GET {candidate.url} params={candidate.params}")
        return self.session.get(candidate.url, headers=self.headers,
                                params=candidate.params, timeout=self.timeout)
