"""
Pytest configuration and shared fixtures.

No test touches the network: the Carta client is given a fake session
that serves canned responses keyed by (path, pageToken).
"""
from unittest.mock import MagicMock

import pytest

from scripts.carta_connector.carta.client import CartaClient

BASE_URL = "https://carta.test/v1alpha1/"


def make_response(status_code=200, payload=None, json_error=False):
    """Build a requests.Response stand-in."""
    resp = MagicMock()
    resp.status_code = status_code
    if json_error:
        resp.json.side_effect = ValueError("Expecting value: line 1 column 1")
    else:
        resp.json.return_value = payload if payload is not None else {}
    return resp


class FakeSession:
    """Serves responses from a route table and records every call."""

    def __init__(self, routes=None):
        self.headers = {}
        self.routes = routes or {}
        self.calls = []

    def get(self, url, params=None, timeout=None):
        assert url.startswith(BASE_URL), url
        path = url[len(BASE_URL):]
        params = dict(params or {})
        self.calls.append((path, params))
        resp = self.routes[(path, params.get("pageToken", ""))]
        if isinstance(resp, Exception):
            raise resp
        return resp

    def calls_to(self, path):
        return [params for p, params in self.calls if p == path]


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def client(fake_session):
    return CartaClient("test-token", base_url=BASE_URL, session=fake_session)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove connector env vars and keep load_dotenv from reading a .env file."""
    for var in (
        "CARTA_ACCESS_TOKEN",
        "CARTA_API_BASE_URL",
        "CARTA_PAGE_SIZE",
        "CARTA_PORTFOLIO_ISSUERS_PAGE_SIZE",
        "CARTA_REQUEST_TIMEOUT",
        "SYNC_OUTPUT",
        "SYNC_INTERVAL_MIN",
        "SYNC_MISFIRE_GRACE_TIME",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr("scripts.carta_connector.config.load_dotenv", lambda: None)
    yield
