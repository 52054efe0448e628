from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

LYRICS_FOUND = "found"
LYRICS_NOT_FOUND = "not_found"
LYRICS_EMPTY = "empty"


@dataclass(frozen=True, slots=True)
class Image:
    url: str
    size_label: str


@dataclass(frozen=True, slots=True)
class TrackMetadata:
    album: str = ""
    duration_ms: int = 0
    play_count: int = 0
    listeners: int = 0
    url: str = ""
    images: tuple[Image, ...] = ()
    # ordered and de-duplicated, as Last.fm ranks tags by weight
    tags: tuple[str, ...] = ()
    summary: str = ""


@dataclass(frozen=True, slots=True)
class LyricsRecord:
    artist: str
    title: str
    status: str
    source: str
    raw_lyrics: str = ""
    cleaned_lyrics: str = ""
    lines: tuple[str, ...] = ()
    line_count: int = 0
    verse_count: int = 0
    word_count: int = 0
    has_chorus: bool = False
    metadata: TrackMetadata | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_raw_dict(self) -> dict[str, Any]:
        return {
            "artist": self.artist,
            "title": self.title,
            "lyrics": self.cleaned_lyrics,
            "source": self.source,
        }


@dataclass(frozen=True, slots=True)
class NewsArticle:
    source_id: str
    source_name: str
    author: str
    title: str
    description: str
    url: str
    image_url: str
    published_at: str
    content: str


@dataclass(slots=True)
class NewsResult:
    """Articles after local filtering. total_results always tracks len(articles)."""

    articles: list[NewsArticle] = field(default_factory=list)
    total_results: int = 0

    def __post_init__(self) -> None:
        self.total_results = len(self.articles)

    def replace_articles(self, articles: list[NewsArticle]) -> None:
        self.articles[:] = articles
        self.total_results = len(self.articles)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class TrendTrack:
    rank: int
    name: str
    artist: str
    play_count: int
    listener_count: int
    duration_s: int
    musicbrainz_id: str
    url: str
    images: tuple[Image, ...] = ()


@dataclass(frozen=True, slots=True)
class TrendArtist:
    rank: int
    name: str
    play_count: int
    listener_count: int
    musicbrainz_id: str
    url: str
    images: tuple[Image, ...] = ()
