from __future__ import annotations

from musical_zoe.client.errors import FailureKind


class AggregatorError(RuntimeError):
    pass


class InvalidBaseURL(AggregatorError, ValueError):
    pass


class InvalidPeriod(AggregatorError, ValueError):
    pass


_RETRYABLE = (FailureKind.TIMEOUT, FailureKind.NETWORK_UNREACHABLE, FailureKind.RATE_LIMITED)


class UpstreamFailure(AggregatorError):
    """A classified upstream failure with a provider-scoped, user-facing message."""

    def __init__(self, kind: FailureKind, message: str, *, provider: str, status_code: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.provider = provider
        self.status_code = status_code

    @property
    def http_status(self) -> int:
        if self.kind in _RETRYABLE:
            return 400
        if self.kind is FailureKind.UPSTREAM_NOT_FOUND:
            return 404
        return 500
