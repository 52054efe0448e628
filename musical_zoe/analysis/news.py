from __future__ import annotations

from musical_zoe.sources.types import NewsArticle, NewsResult

MUSIC_QUERY = (
    "(music OR musician OR singer OR band OR album OR concert OR festival "
    "OR artist OR song OR Grammy OR Billboard)"
)
OFF_TOPIC_QUERY = "(politics OR sports OR business OR technology OR health OR science)"

MUSIC_KEYWORDS = (
    "music", "musician", "singer", "band", "album", "song", "artist", "concert",
    "festival", "grammy", "billboard", "spotify", "apple music", "streaming",
    "tour", "recording", "label", "producer", "rapper", "hip hop", "rock", "pop",
    "jazz", "classical", "country", "r&b", "electronic", "indie", "metal",
)

EXCLUDE_KEYWORDS = (
    "politics", "election", "government", "sports", "football", "basketball",
    "baseball", "soccer", "business merger", "stock market", "economy",
)


def build_music_query(genre: str = "") -> str:
    query = MUSIC_QUERY
    genre = genre.strip()
    if genre:
        query = f"{query} AND {genre}"
    return f"{query} AND NOT {OFF_TOPIC_QUERY}"


def is_music_article(article: NewsArticle) -> bool:
    content = f"{article.title} {article.description}".lower()
    if not any(k in content for k in MUSIC_KEYWORDS):
        return False
    return not any(k in content for k in EXCLUDE_KEYWORDS)


def filter_music_articles(result: NewsResult) -> NewsResult:
    """
    Drop articles that fail the local relevance check, in place.

    The upstream keyword search lets false positives through, so every
    article is re-checked here and the total is recounted.
    """
    result.replace_articles([a for a in result.articles if is_music_article(a)])
    return result
