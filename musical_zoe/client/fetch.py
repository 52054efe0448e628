from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, TypeVar
from urllib.parse import urlsplit

import requests

from .errors import FetchError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class FetchRequest:
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)


def _retryable_status(code: int) -> bool:
    # 501 means the upstream will never support the call.
    return code == 429 or (code >= 500 and code != 501)


def _identity(payload: Any) -> Any:
    return payload


def _transport_detail(e: requests.RequestException, url: str) -> str:
    # urllib3 repeats the request path in its messages ("Max retries exceeded
    # with url: /v1/<artist>/<title>"), so strip every form of it
    text = str(e)
    parts = urlsplit(url)
    path = parts.path + (f"?{parts.query}" if parts.query else "")
    for needle in (url, path, parts.path):
        if needle and needle != "/":
            text = text.replace(needle, "<url>")
    return text


class FetchClient:
    """
    GET-only JSON client with a fixed delay between attempts.

    The requests.Session is meant to be shared by every client built from the
    same service so connections get pooled.
    """

    def __init__(
        self,
        *,
        name: str,
        timeout_s: float,
        max_attempts: int,
        backoff_s: float = 1.0,
        session: requests.Session | None = None,
        default_headers: Mapping[str, str] | None = None,
    ):
        self.name = name
        self.timeout_s = timeout_s
        self.max_attempts = max(1, max_attempts)
        self.backoff_s = backoff_s
        self.session = session or requests.Session()
        self.default_headers = dict(default_headers or {})

    def fetch(
        self,
        request: FetchRequest,
        decode: Callable[[Any], T] = _identity,
        *,
        max_attempts: int | None = None,
        timeout_s: float | None = None,
    ) -> T:
        """
        Perform the GET and hand the parsed JSON body to `decode`.

        Raises FetchError once every attempt has failed, or straight away when
        a 2xx body cannot be decoded.
        """
        attempts = max(1, max_attempts if max_attempts is not None else self.max_attempts)
        timeout = timeout_s if timeout_s is not None else self.timeout_s
        headers = {**self.default_headers, **request.headers}

        attempt = 1
        while True:
            try:
                r = self.session.get(request.url, headers=headers, timeout=timeout)
            except requests.RequestException as e:
                error = FetchError(f"{e} | url: {request.url}", detail=_transport_detail(e, request.url))
            else:
                if 200 <= r.status_code < 300:
                    logger.debug("%s: %s -> %s", self.name, request.url, r.status_code)
                    return self._decode(r, request.url, decode)
                error = FetchError(
                    f"non-2xx response code: {r.status_code} | url: {request.url}",
                    status_code=r.status_code,
                )
                if not _retryable_status(r.status_code):
                    raise error

            logger.warning("%s error (attempt %s/%s): %s", self.name, attempt, attempts, error)
            if attempt >= attempts:
                raise error
            time.sleep(self.backoff_s)
            attempt += 1

    @staticmethod
    def _decode(r: requests.Response, url: str, decode: Callable[[Any], T]) -> T:
        try:
            payload = r.json()
        except ValueError as e:
            raise FetchError(f"invalid JSON body: {e} | url: {url}", decode_failed=True) from e
        try:
            return decode(payload)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise FetchError(f"unexpected response shape: {e} | url: {url}", decode_failed=True) from e
