"""Blocking client for the upstream swap API orderbook endpoint."""

from __future__ import annotations

import logging

import requests
from pydantic import ValidationError

from orderbook_relay.errors import UnauthorizedError, UpstreamUnavailableError
from orderbook_relay.models.orderbook import Snapshot, snapshot_adapter

logger = logging.getLogger(__name__)


class OrderbookClient:
    """Fetches raw orderbook snapshots for a chain using the server-held API key."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url
        self._api_key = api_key
        self._timeout = timeout
        self._session = session or requests.Session()

    def fetch_snapshot(self, chain: str) -> Snapshot:
        if not self._api_key:
            raise UnauthorizedError("upstream API key is not configured")

        try:
            resp = self._session.get(
                self._base_url,
                params={"chain": chain},
                headers={"apiKey": self._api_key},
                timeout=self._timeout,
            )
        except requests.Timeout as exc:
            raise UpstreamUnavailableError(f"upstream timed out: {exc}", status_code=504) from exc
        except requests.RequestException as exc:
            raise UpstreamUnavailableError(f"upstream request failed: {exc}") from exc

        if resp.status_code in (401, 403):
            raise UnauthorizedError(
                f"upstream rejected credentials ({resp.status_code})",
                status_code=resp.status_code,
                public_message=UpstreamUnavailableError.public_message,
            )
        if not resp.ok:
            raise UpstreamUnavailableError(
                f"upstream answered {resp.status_code} for chain {chain}", status_code=resp.status_code
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise UpstreamUnavailableError(f"upstream body is not JSON: {exc}") from exc

        try:
            snapshot = snapshot_adapter.validate_python(payload)
        except ValidationError as exc:
            raise UpstreamUnavailableError(
                f"upstream snapshot failed validation: {exc.error_count()} errors"
            ) from exc

        logger.debug("Fetched %d orderbook entries for chain %s", len(snapshot), chain)
        return snapshot

    def close(self) -> None:
        self._session.close()
