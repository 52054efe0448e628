from __future__ import annotations

import enum
from dataclasses import dataclass


class FailureKind(enum.Enum):
    TIMEOUT = "timeout"
    NETWORK_UNREACHABLE = "network_unreachable"
    UPSTREAM_NOT_FOUND = "upstream_not_found"
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    UPSTREAM_ERROR = "upstream_error"
    DECODE_ERROR = "decode_error"


class FetchError(RuntimeError):
    """
    Raw outcome of a failed fetch, before classification.

    status_code is set only when the upstream answered with a non-2xx code.
    detail is the part of the failure that classification reads; it never
    holds the request URL, which carries caller input. It defaults to message.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        decode_failed: bool = False,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.detail = message if detail is None else detail
        self.status_code = status_code
        self.decode_failed = decode_failed


@dataclass(frozen=True, slots=True)
class Classification:
    kind: FailureKind
    message: str
    status_code: int | None = None


_TIMEOUT_SIGNALS = ("timeout", "timed out", "deadline exceeded")
_NETWORK_SIGNALS = (
    "connection refused",
    "no such host",
    "name or service not known",
    "failed to resolve",
    "temporary failure in name resolution",
    "nodename nor servname",
    "failed to establish a new connection",
    "network is unreachable",
)
_AUTH_SIGNALS = ("unauthorized", "invalid api key", "authentication", "apikeyinvalid", "apikeymissing")
_RATE_SIGNALS = ("rate limit", "ratelimited", "too many requests")
_NOT_FOUND_SIGNALS = ("not found",)


def _contains_any(text: str, needles: tuple[str, ...]) -> bool:
    return any(n in text for n in needles)


def classify(error: FetchError, provider: str) -> Classification:
    """
    Reduce a fetch failure to one FailureKind plus a message for the caller.

    Status codes win when present. Without one, the message text decides,
    since transports and providers report timeouts and DNS trouble in
    different shapes.
    """
    code = error.status_code

    def timeout() -> Classification:
        return Classification(
            FailureKind.TIMEOUT,
            f"request timeout: the {provider} service is taking too long to respond. Please try again later.",
            code,
        )

    def unauthorized() -> Classification:
        return Classification(FailureKind.UNAUTHORIZED, f"{provider} service authentication error", code)

    def rate_limited() -> Classification:
        return Classification(
            FailureKind.RATE_LIMITED,
            f"{provider} service rate limit exceeded. Please try again later.",
            code,
        )

    def not_found() -> Classification:
        return Classification(FailureKind.UPSTREAM_NOT_FOUND, f"{provider} resource not found", code)

    if error.decode_failed:
        return Classification(
            FailureKind.DECODE_ERROR,
            f"{provider} service returned an unreadable response: {error.message}",
            code,
        )

    if code is not None:
        if code in (408, 504):
            return timeout()
        if code == 404:
            return not_found()
        if code in (401, 403):
            return unauthorized()
        if code == 429:
            return rate_limited()
        return Classification(FailureKind.UPSTREAM_ERROR, f"{provider} service error: {error.message}", code)

    text = error.detail.lower()
    if _contains_any(text, _TIMEOUT_SIGNALS):
        return timeout()
    if _contains_any(text, _NETWORK_SIGNALS):
        return Classification(
            FailureKind.NETWORK_UNREACHABLE,
            f"network error: unable to connect to {provider} service. Please try again later.",
        )
    if _contains_any(text, _AUTH_SIGNALS):
        return unauthorized()
    if _contains_any(text, _RATE_SIGNALS):
        return rate_limited()
    if _contains_any(text, _NOT_FOUND_SIGNALS):
        return not_found()
    return Classification(FailureKind.UPSTREAM_ERROR, f"{provider} service error: {error.message}")
