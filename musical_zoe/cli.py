from __future__ import annotations

import dataclasses
import json
from typing import Any

import typer

from musical_zoe.config import load_config
from musical_zoe.errors import InvalidBaseURL, InvalidPeriod, UpstreamFailure
from musical_zoe.logging_setup import setup_logging
from musical_zoe.sources.service import MusicService
from musical_zoe.sources.types import LYRICS_FOUND, LYRICS_NOT_FOUND


app = typer.Typer(no_args_is_help=True, add_completion=False)

# HTTP status class -> process exit code
_EXIT_CODES = {400: 2, 404: 4, 500: 1}


def _echo_json(envelope: dict[str, Any]) -> None:
    typer.echo(json.dumps(envelope, indent=2, ensure_ascii=False))


def _fail(message: str, http_status: int) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(code=_EXIT_CODES.get(http_status, 1))


def _limit(value: int | None, default: int, maximum: int) -> int:
    # out-of-range limits fall back to the default instead of failing
    if value is None or not 0 < value <= maximum:
        return default
    return value


def _service(debug: bool) -> MusicService:
    setup_logging(debug)
    return MusicService(load_config())


@app.command()
def lyrics(
    artist: str = typer.Option(..., "--artist", "-a", help="Artist name"),
    title: str | None = typer.Option(None, "--title", "-t", help="Song title"),
    song: str | None = typer.Option(None, "--song", help="Alias for --title"),
    metadata: bool = typer.Option(False, "--metadata", help="Attach Last.fm track info"),
    fmt: str = typer.Option("processed", "--format", case_sensitive=False, help="processed|raw"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Fetch lyrics for a song and print them with text statistics."""
    title = title or song
    if not artist.strip():
        raise _fail("artist parameter is required", 400)
    if not title or not title.strip():
        raise _fail("title or song parameter is required", 400)

    svc = _service(debug)
    try:
        record = svc.fetch_lyrics_with_metadata(artist, title, include_metadata=metadata)
    except UpstreamFailure as e:
        raise _fail(e.message, e.http_status)
    except InvalidBaseURL as e:
        raise _fail(str(e), 500)
    finally:
        svc.close()

    if record.status == LYRICS_NOT_FOUND:
        raise _fail(f"no lyrics found for {artist} - {title}", 404)

    if fmt.lower() == "raw" and record.status == LYRICS_FOUND:
        _echo_json(record.to_raw_dict())
    else:
        _echo_json({"lyrics": record.to_dict()})


@app.command()
def news(
    news_type: str = typer.Option("everything", "--type", help="everything|headlines"),
    country: str = typer.Option("us", "--country", help="Country code for headlines"),
    genre: str = typer.Option("", "--genre", help="Narrow the search to a genre"),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Articles to request (1-100)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Fetch recent music news."""
    svc = _service(debug)
    try:
        result = svc.fetch_music_news(news_type, country, genre, _limit(limit, 20, 100))
    except UpstreamFailure as e:
        raise _fail(e.message, e.http_status)
    except InvalidBaseURL as e:
        raise _fail(str(e), 500)
    finally:
        svc.close()

    _echo_json({"news": result.to_dict()})


@app.command()
def trends(
    trend_type: str = typer.Option("tracks", "--type", help="tracks|artists"),
    period: str = typer.Option("", "--period", help="7day|1month|3month|6month|12month|overall"),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Items to request (1-200)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Fetch the current Last.fm charts."""
    svc = _service(debug)
    n = _limit(limit, 50, 200)
    try:
        if trend_type == "artists":
            items = svc.fetch_top_artists(n, period)
        else:
            items = svc.fetch_top_tracks(n, period)
    except InvalidPeriod as e:
        raise _fail(str(e), 400)
    except UpstreamFailure as e:
        raise _fail(e.message, e.http_status)
    except InvalidBaseURL as e:
        raise _fail(str(e), 500)
    finally:
        svc.close()

    _echo_json({"trends": [dataclasses.asdict(i) for i in items]})


def main() -> None:
    app()


if __name__ == "__main__":
    main()
