"""Retry with exponential backoff for transient upstream errors."""

import asyncio
import logging
from collections.abc import Callable
from typing import TypeVar

from orderbook_relay.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_RETRIES = 2
BASE_DELAY = 0.5


async def retry_with_backoff(
    fn: Callable[[], T],
    max_retries: int = MAX_RETRIES,
    base_delay: float = BASE_DELAY,
    description: str = "operation",
) -> T:
    """Run a blocking callable in the executor, retrying transient upstream failures.

    Only UpstreamUnavailableError with a 5xx status (or no status, i.e. a
    network error) is retried. Raises the last exception if all retries are
    exhausted.
    """
    loop = asyncio.get_running_loop()
    attempt = 0
    while True:
        try:
            return await loop.run_in_executor(None, fn)
        except UpstreamUnavailableError as exc:
            if not exc.transient or attempt >= max_retries:
                raise
            delay = base_delay * (2**attempt)
            attempt += 1
            logger.warning(
                "Retry %d/%d for %s after error: %s (backoff %.1fs)",
                attempt,
                max_retries,
                description,
                exc,
                delay,
            )
            await asyncio.sleep(delay)
