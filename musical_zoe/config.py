from __future__ import annotations

from dataclasses import dataclass
import os

from musical_zoe import __version__


@dataclass(frozen=True)
class ProviderConfig:
    base_url: str
    timeout_s: float
    max_attempts: int


@dataclass(frozen=True)
class AppConfig:
    # Credentials
    news_api_key: str
    lastfm_api_key: str

    # Upstreams
    lyrics: ProviderConfig
    news: ProviderConfig
    trends: ProviderConfig

    # Fixed delay between attempts
    retry_backoff_s: float

    user_agent: str


def _provider(prefix: str, base_url: str, timeout_s: str, max_attempts: str) -> ProviderConfig:
    return ProviderConfig(
        base_url=os.getenv(f"MUSICALZOE_{prefix}_BASE_URL", base_url),
        timeout_s=float(os.getenv(f"MUSICALZOE_{prefix}_TIMEOUT", timeout_s)),
        max_attempts=int(os.getenv(f"MUSICALZOE_{prefix}_MAX_ATTEMPTS", max_attempts)),
    )


def load_config() -> AppConfig:
    return AppConfig(
        news_api_key=os.getenv("MUSICALZOE_NEWS_API_KEY", ""),
        lastfm_api_key=os.getenv("MUSICALZOE_LASTFM_API_KEY", ""),
        lyrics=_provider("LYRICS", "https://api.lyrics.ovh/v1", "5.0", "2"),
        news=_provider("NEWS", "https://newsapi.org/v2", "8.0", "2"),
        trends=_provider("TRENDS", "https://ws.audioscrobbler.com/2.0", "8.0", "2"),
        retry_backoff_s=float(os.getenv("MUSICALZOE_RETRY_BACKOFF", "1.0")),
        user_agent=os.getenv("MUSICALZOE_USER_AGENT", f"musical-zoe/{__version__}"),
    )
