"""
TCGdex API Client
Public API, no key. Listing returns brief records (id, localId, name, image);
pricing only comes with the per-card detail call, so the movers revision fans
the detail calls out in parallel.

Endpoints used:
    GET  /v2/en/cards          - Paginated card briefs
    GET  /v2/en/cards/{id}     - Full card incl. pricing.cardmarket / pricing.tcgplayer
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List

import requests

from ....errors import UpstreamError
from ...chain import Candidate

logger = logging.getLogger(__name__)

UA = "tcg-movers-proxy/1.0"
DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": UA,
}


class TCGdexClient:
    def __init__(self, base_url: str = "https://api.tcgdex.net/v2/en", *,
                 timeout: float = 15, max_workers: int = 8, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_workers = max(1, int(max_workers))
        self.session = session or requests.Session()
        self.headers = dict(DEFAULT_HEADERS)

    def list_query(self, page: str, limit: str) -> Candidate:
        params = {
            "pagination:page": page,
            "pagination:itemsPerPage": limit,
        }
        return Candidate("tcgdex list", f"{self.base_url}/cards", params)

    def fetch(self, candidate: Candidate):
        logger.debug(f"GET {candidate.url} params={candidate.params}")
        return self.session.get(candidate.url, headers=self.headers,
                                params=candidate.params, timeout=self.timeout)

    # ------------------------------------------------------------------
    # Card detail (single + parallel fan-out)
    # ------------------------------------------------------------------

    def get_card(self, card_id: str) -> dict:
        url = f"{self.base_url}/cards/{requests.utils.quote(card_id, safe='')}"
        r = self.session.get(url, headers=self.headers, timeout=self.timeout)
        if not 200 <= r.status_code < 300:
            raise UpstreamError(f"tcgdex card {card_id} failed with {r.status_code}",
                                r.status_code, r.text, r.headers.get("Content-Type"))
        data = r.json()
        if not isinstance(data, dict):
            raise ValueError(f"tcgdex card {card_id}: expected an object")
        return data

    def get_cards_settled(self, card_ids: List[str]) -> List[dict]:
        """
        Fetch every card detail in parallel and wait for all of them to settle.
        A failed fetch drops that card; it never aborts the batch.
        Results keep the order of `card_ids`.
        """
        if not card_ids:
            return []

        settled: Dict[str, dict] = {}
        workers = min(self.max_workers, len(card_ids))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(self.get_card, cid): cid for cid in card_ids}
            for future in as_completed(futures):
                cid = futures[future]
                try:
                    settled[cid] = future.result()
                except (requests.exceptions.RequestException, UpstreamError, ValueError) as e:
                    logger.warning(f"tcgdex detail for {cid} dropped: {e}")

        return [settled[cid] for cid in card_ids if cid in settled]
