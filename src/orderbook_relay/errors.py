"""Error kinds raised by the relay.

Every error carries the HTTP status and the client-facing message the API
answers with, so handlers never leak upstream details to the browser.
"""

from __future__ import annotations


class RelayError(Exception):
    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(
        self,
        detail: str | None = None,
        status_code: int | None = None,
        public_message: str | None = None,
    ) -> None:
        super().__init__(detail or self.public_message)
        if status_code is not None:
            self.status_code = status_code
        if public_message is not None:
            self.public_message = public_message


class InvalidInputError(RelayError):
    """Level data that cannot be aggregated (negative or non-finite values)."""

    status_code = 502
    public_message = "Upstream returned invalid orderbook data"


class BadRequestError(RelayError):
    status_code = 400
    public_message = "Chain parameter is required"


class UnauthorizedError(RelayError):
    """Missing server-side credential, or the upstream rejected it."""

    status_code = 500
    public_message = "API key not configured"


class UpstreamUnavailableError(RelayError):
    """Upstream answered non-2xx, timed out, or returned an unusable body."""

    status_code = 502
    public_message = "Failed to fetch orderbook data"

    @property
    def transient(self) -> bool:
        return self.status_code >= 500


class PairNotFoundError(RelayError):
    status_code = 404
    public_message = "Pair not found"
