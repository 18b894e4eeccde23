"""Tests for upstream retry with backoff."""

from unittest.mock import MagicMock

import pytest

from orderbook_relay.errors import UnauthorizedError, UpstreamUnavailableError
from orderbook_relay.upstream.retry import retry_with_backoff


@pytest.mark.asyncio
async def test_returns_first_success():
    fn = MagicMock(return_value="ok")
    assert await retry_with_backoff(fn, base_delay=0) == "ok"
    assert fn.call_count == 1


@pytest.mark.asyncio
async def test_retries_transient_errors():
    fn = MagicMock(side_effect=[UpstreamUnavailableError("down"), UpstreamUnavailableError("down"), "ok"])
    assert await retry_with_backoff(fn, max_retries=2, base_delay=0) == "ok"
    assert fn.call_count == 3


@pytest.mark.asyncio
async def test_raises_after_retries_exhausted():
    fn = MagicMock(side_effect=UpstreamUnavailableError("down", status_code=503))
    with pytest.raises(UpstreamUnavailableError):
        await retry_with_backoff(fn, max_retries=2, base_delay=0)
    assert fn.call_count == 3


@pytest.mark.asyncio
async def test_client_errors_not_retried():
    fn = MagicMock(side_effect=UpstreamUnavailableError("gone", status_code=404))
    with pytest.raises(UpstreamUnavailableError):
        await retry_with_backoff(fn, max_retries=2, base_delay=0)
    assert fn.call_count == 1


@pytest.mark.asyncio
async def test_credential_errors_not_retried():
    fn = MagicMock(side_effect=UnauthorizedError("no key"))
    with pytest.raises(UnauthorizedError):
        await retry_with_backoff(fn, max_retries=2, base_delay=0)
    assert fn.call_count == 1
