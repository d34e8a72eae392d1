import pytest
import requests

from apps.movers.errors import UpstreamError
from apps.movers.services.chain import FALL_THROUGH_ANY, Candidate, run_chain
from apps.movers.services.integrations.justtcg import adapter
from apps.movers.services.integrations.justtcg.client import JustTCGClient

from conftest import FakeResponse, FakeSession, justtcg_card

CARDS_URL = "https://justtcg.test/v1/cards"
PRICED = {"data": [justtcg_card("Charizard", {"price": 400.0, "priceChange30d": 12.0})]}


def _client(session):
    return JustTCGClient("key", "https://justtcg.test/v1", session=session)


def _rich_then_simple(rich_response, simple_response):
    def route(params):
        if params.get("include_price_history") == "true":
            return rich_response
        return simple_response
    return route


def test_rich_404_issues_exactly_one_simple_query():
    session = FakeSession({CARDS_URL: _rich_then_simple(FakeResponse(404, {"error": "bad param"}),
                                                        FakeResponse(200, PRICED))})
    client = _client(session)

    result = run_chain(client.fetch, [client.rich_query("30d", "40"), client.simple_query("30d", "40")],
                       adapter.parse_cards)

    assert len(session.calls) == 2
    assert "include_price_history" not in session.calls[1]["params"]
    assert result.candidate.label == "justtcg simple"
    assert [c.name for c in result.cards] == ["Charizard"]


def test_rich_success_stops_the_chain():
    session = FakeSession({CARDS_URL: FakeResponse(200, PRICED)})
    client = _client(session)

    result = run_chain(client.fetch, [client.rich_query("30d", "40"), client.simple_query("30d", "40")],
                       adapter.parse_cards)

    assert len(session.calls) == 1
    assert result.attempts == 1


def test_server_error_passes_through_without_fallback():
    session = FakeSession({CARDS_URL: FakeResponse(503, text="upstream down", content_type="text/plain")})
    client = _client(session)

    with pytest.raises(UpstreamError) as exc:
        run_chain(client.fetch, [client.rich_query("30d", "40"), client.simple_query("30d", "40")],
                  adapter.parse_cards)

    assert exc.value.status_code == 503
    assert exc.value.body == "upstream down"
    assert exc.value.content_type == "text/plain"
    assert len(session.calls) == 1


def test_client_error_on_last_candidate_is_raised():
    session = FakeSession({CARDS_URL: FakeResponse(401, {"error": "invalid key"})})
    client = _client(session)

    with pytest.raises(UpstreamError) as exc:
        run_chain(client.fetch, [client.rich_query("30d", "40"), client.simple_query("30d", "40")],
                  adapter.parse_cards)

    assert exc.value.status_code == 401
    assert len(session.calls) == 2


def test_empty_usable_result_moves_on_then_returns_empty():
    unpriced = {"data": [justtcg_card("Blank", {"price": None})]}
    session = FakeSession({CARDS_URL: FakeResponse(200, unpriced)})
    client = _client(session)

    result = run_chain(client.fetch, [client.rich_query("30d", "40"), client.simple_query("30d", "40")],
                       adapter.parse_cards)

    assert result.cards == []
    assert result.candidate is None
    assert len(session.calls) == 2


def test_malformed_json_raises_in_strict_mode():
    session = FakeSession({CARDS_URL: FakeResponse(200, text="<html>oops</html>")})
    client = _client(session)

    with pytest.raises(ValueError):
        run_chain(client.fetch, [client.rich_query("30d", "40")], adapter.parse_cards)


def test_tolerant_mode_skips_every_kind_of_failure():
    session = FakeSession({
        "https://a.test": FakeResponse(500, text="boom"),
        "https://b.test": requests.exceptions.ConnectionError("refused"),
        "https://c.test": FakeResponse(200, text="not json"),
        "https://d.test": FakeResponse(200, PRICED),
    })
    candidates = [Candidate(u, u, {}) for u in
                  ("https://a.test", "https://b.test", "https://c.test", "https://d.test")]

    result = run_chain(lambda c: session.get(c.url, params=c.params), candidates,
                       adapter.parse_cards, fall_through=FALL_THROUGH_ANY)

    assert result.candidate.url == "https://d.test"
    assert result.attempts == 4


def test_tolerant_mode_exhaustion_returns_empty():
    session = FakeSession({"https://a.test": FakeResponse(404, {})})
    result = run_chain(lambda c: session.get(c.url), [Candidate("a", "https://a.test", {})],
                       adapter.parse_cards, fall_through=FALL_THROUGH_ANY)
    assert result.cards == []


def test_unknown_policy_is_rejected():
    with pytest.raises(ValueError):
        run_chain(lambda c: None, [], adapter.parse_cards, fall_through="sometimes")


def test_client_sends_api_key_header():
    session = FakeSession({CARDS_URL: FakeResponse(200, PRICED)})
    client = _client(session)
    client.fetch(client.rich_query("7d", "10"))

    call = session.calls[0]
    assert call["headers"]["x-api-key"] == "key"
    assert call["params"] == {
        "game": "pokemon", "orderBy": "7d", "limit": "10",
        "include_price_history": "true", "include_statistics": "7d,30d",
    }
