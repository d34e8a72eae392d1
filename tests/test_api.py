"""HTTP surface and CLI, exercised through Flask's test client and CLI runner."""

import json

from apps.movers.app import create_app

from conftest import FakeResponse, FakeSession, justtcg_card

JUSTTCG_CARDS = "https://justtcg.test/v1/cards"
CACHE_CONTROL = "s-maxage=300, stale-while-revalidate=300"


def _justtcg_ok():
    return FakeSession({JUSTTCG_CARDS: FakeResponse(200, {"data": [
        justtcg_card("Up", {"price": 12.0, "priceChange30d": 40.0}),
        justtcg_card("Down", {"price": 8.0, "priceChange30d": -60.0}),
    ]})})


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}


def test_default_revision_envelope_and_cache_header(client, patch_session):
    session = patch_session(_justtcg_ok())

    resp = client.get("/api/movers?top=1&orderBy=7d&limit=10")

    assert resp.status_code == 200
    assert resp.headers["Cache-Control"] == CACHE_CONTROL
    body = resp.get_json()
    assert [c["name"] for c in body["data"]] == ["Down"]
    assert body["data"][0]["variants"][0] == {
        "price": 8.0, "priceChange30d": -60.0, "priceChange7d": None,
        "priceHistory": [8.0], "label": "",
    }
    assert session.calls[0]["params"]["orderBy"] == "7d"
    assert session.calls[0]["params"]["limit"] == "10"


def test_named_revision_route(client, patch_session):
    patch_session(_justtcg_ok())
    resp = client.get("/api/movers/justtcg-fallback")
    assert resp.status_code == 200
    assert [c["name"] for c in resp.get_json()["data"]] == ["Down", "Up"]


def test_missing_justtcg_key_is_a_500():
    app = create_app({"TESTING": True, "JUSTTCG_API_KEY": None})
    resp = app.test_client().get("/api/movers/justtcg")

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Missing API key", "details": "JUSTTCG_API_KEY is not configured"}
    assert "Cache-Control" not in resp.headers


def test_missing_ppt_key_serves_demo_data():
    app = create_app({"TESTING": True, "PPT_API_KEY": None})
    resp = app.test_client().get("/api/movers/ppt?top=3")

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert len(data) == 3
    assert all(c["id"].startswith("demo-") for c in data)


def test_upstream_error_is_passed_through(client, patch_session):
    patch_session(FakeSession({JUSTTCG_CARDS: FakeResponse(503, text="maintenance", content_type="text/plain")}))

    resp = client.get("/api/movers/justtcg")

    assert resp.status_code == 503
    assert resp.get_data(as_text=True) == "maintenance"
    assert resp.headers["Content-Type"].startswith("text/plain")


def test_malformed_upstream_json_is_a_500(client, patch_session):
    patch_session(FakeSession({JUSTTCG_CARDS: FakeResponse(200, text="<html>")}))

    resp = client.get("/api/movers/justtcg")

    assert resp.status_code == 500
    body = resp.get_json()
    assert body["error"] == "Proxy failed"
    assert "malformed upstream JSON" in body["details"]


def test_empty_upstream_is_an_empty_list(client, patch_session):
    patch_session(FakeSession({JUSTTCG_CARDS: FakeResponse(200, {"data": []})}))
    resp = client.get("/api/movers/justtcg")
    assert resp.status_code == 200
    assert resp.get_json() == {"data": []}


def test_unknown_revision_is_a_404(client):
    resp = client.get("/api/movers/nope")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Unknown revision"


def test_revisions_listing(client):
    resp = client.get("/api/movers/revisions")
    ids = [r["id"] for r in resp.get_json()["revisions"]]
    assert ids == ["justtcg", "justtcg-fallback", "justtcg-averages", "tcgdex", "ppt", "justtcg-tcgdex"]


def test_cors_header_is_a_wildcard_for_any_origin(client):
    for path in ("/health", "/api/movers/revisions"):
        resp = client.get(path, headers={"Origin": "https://frontend.example"})
        assert resp.headers["Access-Control-Allow-Origin"] == "*"


# ------------------------------------------------------------------
# CLI
# ------------------------------------------------------------------

def test_cli_fetch_prints_envelope(app, patch_session):
    patch_session(_justtcg_ok())

    result = app.test_cli_runner().invoke(args=["movers.fetch", "--top", "1"])

    assert result.exit_code == 0
    assert [c["name"] for c in json.loads(result.output)["data"]] == ["Down"]


def test_cli_fetch_fails_on_error_status(app, patch_session):
    patch_session(FakeSession({JUSTTCG_CARDS: FakeResponse(500, text="boom")}))

    result = app.test_cli_runner().invoke(args=["movers.fetch", "--revision", "justtcg"])

    assert result.exit_code == 1


def test_cli_lists_revisions(app):
    result = app.test_cli_runner().invoke(args=["movers.revisions"])
    assert result.exit_code == 0
    assert "justtcg-tcgdex" in result.output
