from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from musical_zoe.client.errors import FetchError
from musical_zoe.client.fetch import FetchClient
from musical_zoe.client.urls import build_api_url
from musical_zoe.errors import InvalidPeriod

from .base import Source
from .types import Image, TrackMetadata, TrendArtist, TrendTrack

logger = logging.getLogger(__name__)

T = TypeVar("T")

VALID_PERIODS = ("7day", "1month", "3month", "6month", "12month", "overall")

# https://www.last.fm/api/errorcodes
_ERROR_MESSAGES = {
    6: "not found",
    10: "invalid api key",
    26: "invalid api key (suspended)",
    29: "rate limit exceeded",
}


def validate_period(period: str) -> str:
    if period and period not in VALID_PERIODS:
        raise InvalidPeriod(f"invalid period. Valid periods: {', '.join(VALID_PERIODS)}")
    return period


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _images(items: Any) -> tuple[Image, ...]:
    return tuple(
        Image(url=str(i.get("#text") or ""), size_label=str(i.get("size") or ""))
        for i in items or []
        if isinstance(i, dict)
    )


def _listify(value: Any) -> list[dict[str, Any]]:
    # Last.fm collapses one-element arrays into a bare object
    if isinstance(value, dict):
        return [value]
    return list(value or [])


def _checked(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise TypeError(f"expected an object, got {type(payload).__name__}")
    if "error" in payload:
        code = _int(payload.get("error"))
        detail = _ERROR_MESSAGES.get(code, "")
        message = f"last.fm error {code}: {payload.get('message', '')}"
        if detail:
            message = f"{message} ({detail})"
        raise FetchError(message)
    return payload


def _decode_tracks(payload: Any) -> list[TrendTrack]:
    items = _listify(_checked(payload)["tracks"].get("track"))
    return [
        TrendTrack(
            rank=rank,
            name=str(t.get("name") or ""),
            artist=str((t.get("artist") or {}).get("name") or ""),
            play_count=_int(t.get("playcount")),
            listener_count=_int(t.get("listeners")),
            duration_s=_int(t.get("duration")),
            musicbrainz_id=str(t.get("mbid") or ""),
            url=str(t.get("url") or ""),
            images=_images(t.get("image")),
        )
        for rank, t in enumerate(items, start=1)
    ]


def _decode_artists(payload: Any) -> list[TrendArtist]:
    items = _listify(_checked(payload)["artists"].get("artist"))
    return [
        TrendArtist(
            rank=rank,
            name=str(a.get("name") or ""),
            play_count=_int(a.get("playcount")),
            listener_count=_int(a.get("listeners")),
            musicbrainz_id=str(a.get("mbid") or ""),
            url=str(a.get("url") or ""),
            images=_images(a.get("image")),
        )
        for rank, a in enumerate(items, start=1)
    ]


def _decode_track_info(payload: Any) -> TrackMetadata:
    track = _checked(payload)["track"]
    album = track.get("album") or {}
    tags: list[str] = []
    for tag in _listify((track.get("toptags") or {}).get("tag")):
        name = str(tag.get("name") or "")
        if name and name not in tags:
            tags.append(name)
    return TrackMetadata(
        album=str(album.get("title") or ""),
        duration_ms=_int(track.get("duration")),
        play_count=_int(track.get("playcount")),
        listeners=_int(track.get("listeners")),
        url=str(track.get("url") or ""),
        images=_images(album.get("image")),
        tags=tuple(tags),
        summary=str((track.get("wiki") or {}).get("summary") or ""),
    )


class LastFmSource(Source):
    name = "lastfm"
    provider = "trends"

    def __init__(self, client: FetchClient, *, base_url: str, api_key: str):
        super().__init__(client)
        self.base_url = base_url
        self.api_key = api_key

    def _method_url(self, method: str, **params: str) -> str:
        return build_api_url(
            self.base_url,
            "",
            {"method": method, "api_key": self.api_key, "format": "json", **params},
        )

    def _chart(self, method: str, limit: int, period: str, decode: Callable[[Any], T]) -> T:
        # validated before anything touches the network
        period = validate_period(period)
        return self._get(self._method_url(method, limit=str(limit), period=period), decode)

    def top_tracks(self, limit: int = 50, period: str = "") -> list[TrendTrack]:
        return self._chart("chart.gettoptracks", limit, period, _decode_tracks)

    def top_artists(self, limit: int = 50, period: str = "") -> list[TrendArtist]:
        return self._chart("chart.gettopartists", limit, period, _decode_artists)

    def track_info(self, artist: str, title: str) -> TrackMetadata:
        url = self._method_url("track.getinfo", artist=artist.strip(), track=title.strip())
        return self._get(url, _decode_track_info)
