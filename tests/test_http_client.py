import sys
from pathlib import Path

import pytest
import requests


PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from truth_redacted.core import http_client as http_module  # noqa: E402
from truth_redacted.core.http_client import RetryableHTTPClient  # noqa: E402


def _response(status, body=b"", headers=None):
    r = requests.Response()
    r.status_code = status
    r._content = body
    r.url = "https://example.org/feed"
    if headers:
        r.headers.update(headers)
    return r


class ScriptedSession:
    """Stands in for requests.Session, replaying responses (or raising exceptions) in order."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls += 1
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        pass


@pytest.fixture
def sleeps(monkeypatch):
    recorded = []
    monkeypatch.setattr(http_module.time, "sleep", recorded.append)
    return recorded


def _client(*outcomes, max_retries=3):
    client = RetryableHTTPClient(max_retries=max_retries)
    client.min_interval = 0
    client.session = ScriptedSession(*outcomes)
    return client


def test_retries_server_error_then_returns_body(sleeps):
    client = _client(_response(503), _response(200, b"<rss/>"))

    assert client.fetch_bytes("https://example.org/feed") == b"<rss/>"
    assert client.session.calls == 2
    assert sleeps == [1.0]


def test_server_error_on_last_attempt_raises(sleeps):
    client = _client(_response(503), _response(503), _response(503))

    with pytest.raises(requests.HTTPError):
        client.fetch_bytes("https://example.org/feed")
    assert client.session.calls == 3
    assert sleeps == [1.0, 2.0]


def test_connection_error_is_retried(sleeps):
    client = _client(requests.ConnectionError("reset"), _response(200, b"ok"))

    assert client.fetch_bytes("https://example.org/feed") == b"ok"
    assert sleeps == [1.0]


def test_connection_error_after_retries_propagates(sleeps):
    client = _client(requests.ConnectionError("down"), requests.ConnectionError("down"), max_retries=2)

    with pytest.raises(requests.ConnectionError):
        client.fetch_bytes("https://example.org/feed")
    assert client.session.calls == 2


def test_retry_after_header_is_honored(sleeps):
    client = _client(_response(429, headers={"Retry-After": "5"}), _response(200, b"ok"))

    assert client.fetch_bytes("https://example.org/feed") == b"ok"
    assert sleeps == [5.0]


def test_client_error_is_not_retried(sleeps):
    client = _client(_response(404), _response(200, b"never"))

    with pytest.raises(requests.HTTPError):
        client.fetch_bytes("https://example.org/feed")
    assert client.session.calls == 1
    assert sleeps == []


def test_from_config_reads_feed_section():
    client = RetryableHTTPClient.from_config({"rps": 2, "max_retries": 5, "timeout": 30})
    assert client.max_retries == 5
    assert client.timeout == 30
    assert client.min_interval == 0.5
    client.close()
