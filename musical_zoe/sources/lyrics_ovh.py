from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from musical_zoe.analysis.lyrics import analyze_lyrics
from musical_zoe.client.errors import FailureKind, FetchError, classify
from musical_zoe.client.fetch import FetchClient, FetchRequest
from musical_zoe.client.urls import build_api_url

from .base import Source
from .types import LYRICS_EMPTY, LYRICS_FOUND, LYRICS_NOT_FOUND, LyricsRecord

logger = logging.getLogger(__name__)


def _decode(payload: Any) -> tuple[str, str]:
    if not isinstance(payload, dict):
        raise TypeError(f"expected an object, got {type(payload).__name__}")
    return str(payload.get("lyrics") or ""), str(payload.get("error") or "")


class LyricsOvhSource(Source):
    name = "lyrics_ovh"
    provider = "lyrics"
    label = "lyrics.ovh"

    def __init__(self, client: FetchClient, *, base_url: str):
        super().__init__(client)
        self.base_url = base_url

    def url_for(self, artist: str, title: str) -> str:
        path = f"{quote(artist.strip(), safe='')}/{quote(title.strip(), safe='')}"
        return build_api_url(self.base_url, path)

    def fetch(self, artist: str, title: str) -> LyricsRecord:
        """
        A missing song is a normal answer here: HTTP 404 and the provider's
        own "error" field both come back as a not_found record.
        """
        try:
            lyrics, error = self.client.fetch(FetchRequest(url=self.url_for(artist, title)), _decode)
        except FetchError as e:
            c = classify(e, self.provider)
            if c.kind is FailureKind.UPSTREAM_NOT_FOUND:
                logger.debug("No lyrics for %s - %s", artist, title)
                return self._record(artist, title, LYRICS_NOT_FOUND)
            raise self._failure(c) from e

        if error:
            logger.debug("lyrics.ovh reported %r for %s - %s", error, artist, title)
            return self._record(artist, title, LYRICS_NOT_FOUND)
        return self.process(artist, title, lyrics)

    def process(self, artist: str, title: str, raw: str) -> LyricsRecord:
        if not raw.strip():
            return self._record(artist, title, LYRICS_EMPTY)

        stats = analyze_lyrics(raw)
        return LyricsRecord(
            artist=artist,
            title=title,
            status=LYRICS_FOUND,
            source=self.label,
            raw_lyrics=raw,
            cleaned_lyrics=stats.cleaned,
            lines=stats.lines,
            line_count=stats.line_count,
            verse_count=stats.verse_count,
            word_count=stats.word_count,
            has_chorus=stats.has_chorus,
        )

    def _record(self, artist: str, title: str, status: str) -> LyricsRecord:
        return LyricsRecord(artist=artist, title=title, status=status, source=self.label)
