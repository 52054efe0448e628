from __future__ import annotations

import json
from typing import Any

import pytest
import requests

from musical_zoe.config import AppConfig, ProviderConfig


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str | None = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """
    Stands in for requests.Session.

    Each get() pops the next queued item: a FakeResponse is returned, an
    exception is raised. The last item repeats once the queue runs dry.
    """

    def __init__(self, *items: FakeResponse | Exception):
        self.items = list(items)
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def get(self, url: str, headers: dict[str, str] | None = None, timeout: float | None = None):
        self.calls.append({"url": url, "headers": dict(headers or {}), "timeout": timeout})
        item = self.items.pop(0) if len(self.items) > 1 else self.items[0]
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        self.closed = True

    @property
    def urls(self) -> list[str]:
        return [c["url"] for c in self.calls]


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def response():
    return FakeResponse


@pytest.fixture
def no_sleep(monkeypatch):
    """Records backoff delays instead of sleeping."""
    delays: list[float] = []
    monkeypatch.setattr("musical_zoe.client.fetch.time.sleep", delays.append)
    return delays


@pytest.fixture
def cfg() -> AppConfig:
    return AppConfig(
        news_api_key="news-key",
        lastfm_api_key="lastfm-key",
        lyrics=ProviderConfig(base_url="https://lyrics.test/v1", timeout_s=5.0, max_attempts=2),
        news=ProviderConfig(base_url="https://news.test/v2", timeout_s=8.0, max_attempts=2),
        trends=ProviderConfig(base_url="https://lastfm.test/2.0", timeout_s=8.0, max_attempts=2),
        retry_backoff_s=1.0,
        user_agent="musical-zoe-tests",
    )


@pytest.fixture
def timeout_error():
    return requests.exceptions.ReadTimeout(
        "HTTPSConnectionPool(host='lyrics.test', port=443): Read timed out. (read timeout=5.0)"
    )
