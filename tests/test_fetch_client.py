from __future__ import annotations

import pytest
import requests

from musical_zoe.client.errors import FailureKind, FetchError, classify
from musical_zoe.client.fetch import FetchClient, FetchRequest


def _client(session, attempts=2):
    return FetchClient(name="test", timeout_s=5.0, max_attempts=attempts, backoff_s=1.0, session=session)


def test_success_decodes_body(fake_session, response, no_sleep):
    session = fake_session(response(200, {"lyrics": "la la"}))
    out = _client(session).fetch(FetchRequest("https://x.test/a", {"X-Test": "1"}), lambda p: p["lyrics"])
    assert out == "la la"
    assert session.calls[0]["headers"]["X-Test"] == "1"
    assert session.calls[0]["timeout"] == 5.0
    assert no_sleep == []


def test_timeout_on_every_attempt(fake_session, timeout_error, no_sleep):
    session = fake_session(timeout_error)
    with pytest.raises(FetchError) as exc:
        _client(session, attempts=2).fetch(FetchRequest("https://x.test/a"))

    assert len(session.calls) == 2
    assert no_sleep == [1.0]
    assert classify(exc.value, "lyrics").kind is FailureKind.TIMEOUT


def test_retry_then_success(fake_session, response, no_sleep):
    session = fake_session(
        requests.exceptions.ConnectionError("Connection refused"),
        response(200, {"ok": True}),
    )
    assert _client(session, attempts=3).fetch(FetchRequest("https://x.test/a")) == {"ok": True}
    assert len(session.calls) == 2
    assert no_sleep == [1.0]


def test_backoff_is_fixed(fake_session, response, no_sleep):
    session = fake_session(response(503, {}))
    with pytest.raises(FetchError):
        _client(session, attempts=4).fetch(FetchRequest("https://x.test/a"))
    assert len(session.calls) == 4
    assert no_sleep == [1.0, 1.0, 1.0]


def test_non_2xx_message_format(fake_session, response, no_sleep):
    session = fake_session(response(500, {}))
    with pytest.raises(FetchError) as exc:
        _client(session).fetch(FetchRequest("https://x.test/a"))
    assert exc.value.status_code == 500
    assert exc.value.message == "non-2xx response code: 500 | url: https://x.test/a"


def test_404_is_not_retried(fake_session, response, no_sleep):
    session = fake_session(response(404, {"error": "No lyrics found"}))
    with pytest.raises(FetchError) as exc:
        _client(session).fetch(FetchRequest("https://x.test/a"))
    assert exc.value.status_code == 404
    assert len(session.calls) == 1
    assert no_sleep == []


def test_bad_json_is_decode_error(fake_session, response, no_sleep):
    session = fake_session(response(200, text="<html>oops</html>"))
    with pytest.raises(FetchError) as exc:
        _client(session).fetch(FetchRequest("https://x.test/a"))
    assert exc.value.decode_failed
    assert len(session.calls) == 1
    assert classify(exc.value, "news").kind is FailureKind.DECODE_ERROR


def test_shape_mismatch_is_decode_error(fake_session, response, no_sleep):
    session = fake_session(response(200, ["not", "an", "object"]))
    with pytest.raises(FetchError) as exc:
        _client(session).fetch(FetchRequest("https://x.test/a"), lambda p: p["tracks"])
    assert exc.value.decode_failed


def test_per_call_overrides(fake_session, response, no_sleep):
    session = fake_session(response(502, {}))
    with pytest.raises(FetchError):
        _client(session, attempts=5).fetch(FetchRequest("https://x.test/a"), max_attempts=1, timeout_s=0.5)
    assert len(session.calls) == 1
    assert session.calls[0]["timeout"] == 0.5


def test_transport_detail_drops_url(fake_session, no_sleep):
    session = fake_session(
        requests.exceptions.ConnectionError(
            "Max retries exceeded with url: /v1/Timeout/Song?x=1 (Caused by Connection refused)"
        )
    )
    with pytest.raises(FetchError) as exc:
        _client(session, attempts=1).fetch(FetchRequest("https://x.test/v1/Timeout/Song?x=1"))
    assert "Timeout" not in exc.value.detail
    assert "Connection refused" in exc.value.detail
    assert exc.value.message.endswith("| url: https://x.test/v1/Timeout/Song?x=1")


def test_single_attempt_raises_without_sleeping(fake_session, timeout_error, no_sleep):
    session = fake_session(timeout_error)
    with pytest.raises(FetchError):
        _client(session, attempts=1).fetch(FetchRequest("https://x.test/a"))
    assert len(session.calls) == 1
    assert no_sleep == []
