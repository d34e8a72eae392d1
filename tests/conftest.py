"""Pytest fixtures: fake HTTP sessions standing in for requests.Session."""

import json

import pytest

from apps.movers.app import create_app


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None, content_type="application/json"):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)
        self.headers = {"Content-Type": content_type} if content_type else {}

    def json(self):
        if self._payload is not None:
            return self._payload
        return json.loads(self.text)


class FakeSession:
    """
    routes: {url: FakeResponse | Exception | callable(params) -> FakeResponse}
    Unknown URLs answer 404. Every call is recorded in .calls.
    """

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append({"url": url, "params": dict(params or {}), "headers": dict(headers or {})})
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(404, {"error": "not found"})
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(params or {})
        return route

    def urls(self):
        return [c["url"] for c in self.calls]


def justtcg_card(name, *variants, set_name="Base Set", card_id=None):
    return {
        "id": card_id or f"pokemon-{name.lower().replace(' ', '-')}",
        "name": name,
        "set": "base-set-pokemon",
        "set_name": set_name,
        "number": "4/102",
        "variants": list(variants),
    }


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def app():
    return create_app({
        "TESTING": True,
        "JUSTTCG_API_KEY": "test-justtcg",
        "PPT_API_KEY": "test-ppt",
        "JUSTTCG_BASE_URL": "https://justtcg.test/v1",
        "TCGDEX_BASE_URL": "https://tcgdex.test/v2/en",
        "PPT_BASE_URL": "https://ppt.test/api",
        "MOVERS_DEFAULT_REVISION": "justtcg",
        "MOVERS_MAX_WORKERS": 4,
    })


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def patch_session(monkeypatch):
    """Make every client construct the given FakeSession instead of requests.Session."""
    def _install(session):
        monkeypatch.setattr("requests.Session", lambda: session)
        return session
    return _install
