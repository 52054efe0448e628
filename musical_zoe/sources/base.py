from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, TypeVar

from musical_zoe.client.errors import Classification, FetchError, classify
from musical_zoe.client.fetch import FetchClient, FetchRequest
from musical_zoe.errors import UpstreamFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Source:
    name: str
    # used in user-facing messages: "the <provider> service ..."
    provider: str

    def __init__(self, client: FetchClient):
        self.client = client

    def _get(self, url: str, decode: Callable[[Any], T], headers: Mapping[str, str] | None = None) -> T:
        """Fetch and decode, turning any fetch failure into UpstreamFailure."""
        try:
            return self.client.fetch(FetchRequest(url=url, headers=dict(headers or {})), decode)
        except FetchError as e:
            raise self._failure(classify(e, self.provider)) from e

    def _failure(self, c: Classification) -> UpstreamFailure:
        logger.info("%s failure: %s (%s)", self.name, c.kind.value, c.message)
        return UpstreamFailure(c.kind, c.message, provider=self.provider, status_code=c.status_code)
