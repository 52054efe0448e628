from __future__ import annotations

from typing import Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from musical_zoe.errors import InvalidBaseURL


def build_api_url(base_url: str, endpoint: str, params: Mapping[str, str] | None = None) -> str:
    """
    Join base URL and endpoint with exactly one "/" and attach the query string.

    Parameters with an empty value are omitted. Keys are sorted so the same
    input always produces the same URL.
    """
    try:
        parts = urlsplit(base_url)
    except ValueError as e:
        raise InvalidBaseURL(f"invalid base URL: {e}") from e
    if not parts.scheme or not parts.netloc:
        raise InvalidBaseURL(f"invalid base URL: {base_url!r} is not absolute")

    path = parts.path.rstrip("/") + "/" + endpoint.lstrip("/")

    query = dict(parse_qsl(parts.query))
    for key, value in (params or {}).items():
        if value != "":
            query[key] = value

    return urlunsplit((parts.scheme, parts.netloc, path, urlencode(sorted(query.items())), ""))
