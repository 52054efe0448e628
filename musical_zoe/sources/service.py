from __future__ import annotations

import dataclasses
import logging

import requests

from musical_zoe.client.fetch import FetchClient
from musical_zoe.config import AppConfig, ProviderConfig
from musical_zoe.errors import AggregatorError

from .lastfm import LastFmSource
from .lyrics_ovh import LyricsOvhSource
from .newsapi import EVERYTHING, NewsApiSource
from .types import LyricsRecord, NewsResult, TrackMetadata, TrendArtist, TrendTrack

logger = logging.getLogger(__name__)


class MusicService:
    """
    Entry point for callers. One requests.Session is shared by every upstream
    client, and instances hold no per-request state, so a single service can
    serve concurrent requests.
    """

    def __init__(self, cfg: AppConfig, session: requests.Session | None = None):
        self.cfg = cfg
        self.session = session or requests.Session()
        self.lyrics = LyricsOvhSource(self._client("lyrics", cfg.lyrics), base_url=cfg.lyrics.base_url)
        self.news = NewsApiSource(
            self._client("news", cfg.news), base_url=cfg.news.base_url, api_key=cfg.news_api_key
        )
        self.lastfm = LastFmSource(
            self._client("trends", cfg.trends), base_url=cfg.trends.base_url, api_key=cfg.lastfm_api_key
        )

    def _client(self, name: str, p: ProviderConfig) -> FetchClient:
        return FetchClient(
            name=name,
            timeout_s=p.timeout_s,
            max_attempts=p.max_attempts,
            backoff_s=self.cfg.retry_backoff_s,
            session=self.session,
            default_headers={"User-Agent": self.cfg.user_agent, "Accept": "application/json"},
        )

    def fetch_lyrics(self, artist: str, title: str) -> LyricsRecord:
        return self.lyrics.fetch(artist, title)

    def fetch_track_metadata(self, artist: str, title: str) -> TrackMetadata | None:
        """Never raises on upstream trouble; None means "no metadata"."""
        try:
            return self.lastfm.track_info(artist, title)
        except AggregatorError as e:
            # covers a bad Last.fm base URL as well as upstream failures
            logger.warning("Track metadata unavailable for %s - %s: %s", artist, title, e)
            return None

    def fetch_lyrics_with_metadata(self, artist: str, title: str, include_metadata: bool = True) -> LyricsRecord:
        # lyrics first: a metadata failure must not cost the caller the lyrics
        record = self.fetch_lyrics(artist, title)
        if not include_metadata:
            return record
        metadata = self.fetch_track_metadata(artist, title)
        if metadata is None:
            return record
        return dataclasses.replace(record, metadata=metadata)

    def fetch_music_news(
        self, news_type: str = EVERYTHING, country: str = "us", genre: str = "", limit: int = 20
    ) -> NewsResult:
        return self.news.fetch(news_type, country, genre, limit)

    def fetch_top_tracks(self, limit: int = 50, period: str = "") -> list[TrendTrack]:
        return self.lastfm.top_tracks(limit, period)

    def fetch_top_artists(self, limit: int = 50, period: str = "") -> list[TrendArtist]:
        return self.lastfm.top_artists(limit, period)

    def close(self) -> None:
        self.session.close()
