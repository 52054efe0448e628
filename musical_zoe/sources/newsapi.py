from __future__ import annotations

import logging
from typing import Any

from musical_zoe.analysis.news import build_music_query, filter_music_articles
from musical_zoe.client.errors import FetchError
from musical_zoe.client.fetch import FetchClient
from musical_zoe.client.urls import build_api_url

from .base import Source
from .types import NewsArticle, NewsResult

logger = logging.getLogger(__name__)

HEADLINES = "headlines"
EVERYTHING = "everything"


def _text(value: Any) -> str:
    # NewsAPI sends null for missing author/description/etc.
    return "" if value is None else str(value)


def _article(item: dict[str, Any]) -> NewsArticle:
    source = item.get("source") or {}
    return NewsArticle(
        source_id=_text(source.get("id")),
        source_name=_text(source.get("name")),
        author=_text(item.get("author")),
        title=_text(item.get("title")),
        description=_text(item.get("description")),
        url=_text(item.get("url")),
        image_url=_text(item.get("urlToImage")),
        published_at=_text(item.get("publishedAt")),
        content=_text(item.get("content")),
    )


def _decode(payload: Any) -> NewsResult:
    if not isinstance(payload, dict):
        raise TypeError(f"expected an object, got {type(payload).__name__}")
    status = payload.get("status")
    if status != "ok":
        code = payload.get("code") or ""
        message = payload.get("message") or ""
        raise FetchError(f"news API error: {status} {code} {message}".strip())
    return NewsResult(articles=[_article(a) for a in payload.get("articles") or []])


class NewsApiSource(Source):
    name = "newsapi"
    provider = "news"

    def __init__(self, client: FetchClient, *, base_url: str, api_key: str):
        super().__init__(client)
        self.base_url = base_url
        self.api_key = api_key

    def request_url(self, news_type: str, country: str, genre: str, limit: int) -> str:
        """Anything other than "headlines" searches "everything"."""
        params = {"q": build_music_query(genre), "pageSize": str(limit), "apiKey": self.api_key}
        if news_type == HEADLINES:
            endpoint = "top-headlines"
            params["country"] = country
        else:
            endpoint = EVERYTHING
            params["sortBy"] = "publishedAt"
            params["language"] = "en"
        return build_api_url(self.base_url, endpoint, params)

    def fetch(self, news_type: str = EVERYTHING, country: str = "us", genre: str = "", limit: int = 20) -> NewsResult:
        url = self.request_url(news_type, country, genre, limit)
        result = self._get(url, _decode)

        upstream_count = len(result.articles)
        filter_music_articles(result)
        logger.debug("news: kept %s of %s articles", result.total_results, upstream_count)
        return result

