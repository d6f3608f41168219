import json
import os

import pytest

from tmdbkit.api_client import Executor
from tmdbkit.client import Client

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def load_fixture(name):
    """Load a JSON payload from tests/fixtures."""
    with open(os.path.join(FIXTURES_DIR, name), encoding="utf-8") as f:
        return json.load(f)


class FakeExecutor(Executor):
    """Executor returning canned payloads and recording every call."""

    def __init__(self, *payloads):
        self.payloads = list(payloads)
        self.calls = []
        self.closed = False

    def execute(self, url, params):
        self.calls.append((url, dict(params)))
        payload = self.payloads.pop(0) if len(self.payloads) > 1 else self.payloads[0]
        if isinstance(payload, Exception):
            raise payload
        return payload

    def close(self):
        self.closed = True

    @property
    def last_url(self):
        return self.calls[-1][0]

    @property
    def last_params(self):
        return self.calls[-1][1]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Ensure TMDB settings from the host never leak into tests."""
    for name in ("TMDB_API_KEY", "TMDB_BASE_URL", "TMDB_TIMEOUT",
                 "TMDB_RATE_LIMIT_CALLS", "TMDB_RATE_LIMIT_PERIOD"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def fake_client():
    """
    Build a client around a FakeExecutor serving the given fixture files.

    Usage:
        client, executor = fake_client("movie_details.json")
    """
    def _build(*fixtures):
        executor = FakeExecutor(*[load_fixture(name) for name in fixtures])
        return Client(api_key="test-key", executor=executor), executor
    return _build
