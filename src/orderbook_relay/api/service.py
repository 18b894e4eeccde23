"""Request pipeline: delay → fetch (cache, retry) → aggregate."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Awaitable, Callable

from orderbook_relay.aggregation.engine import aggregate_snapshot
from orderbook_relay.config.settings import Settings
from orderbook_relay.errors import BadRequestError, PairNotFoundError, RelayError
from orderbook_relay.metrics import (
    aggregation_duration_seconds,
    aggregation_levels_total,
    relay_cache_hits_total,
    relay_cache_misses_total,
    relay_upstream_errors_total,
)
from orderbook_relay.models.enums import AggregationPolicy
from orderbook_relay.models.orderbook import Level, OrderbookEntry, Snapshot
from orderbook_relay.pairs import invert_levels, select_pair_view, unique_pairs
from orderbook_relay.upstream.cache import SnapshotCache
from orderbook_relay.upstream.client import OrderbookClient
from orderbook_relay.upstream.retry import retry_with_backoff

logger = logging.getLogger(__name__)


class OrderbookRelay:
    """Serves delayed, aggregated orderbook snapshots for a chain.

    Delay, credential and policy are passed in explicitly; nothing here reads
    the environment.
    """

    def __init__(
        self,
        client: OrderbookClient,
        policy: AggregationPolicy = AggregationPolicy.PRICE_IMPACT_THRESHOLD,
        delay_seconds: float = 2.0,
        delay_jitter_seconds: float = 0.0,
        cache: SnapshotCache | None = None,
        max_retries: int = 2,
        retry_base_delay: float = 0.5,
        legacy_equal_volume_field_order: bool = False,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self.policy = AggregationPolicy(policy)
        self._delay = delay_seconds
        self._jitter = delay_jitter_seconds
        self._cache = cache or SnapshotCache(ttl=0)
        self._max_retries = max_retries
        self._retry_base_delay = retry_base_delay
        self._price_first = (
            legacy_equal_volume_field_order and self.policy is AggregationPolicy.EQUAL_VOLUME_BUCKET
        )
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings) -> OrderbookRelay:
        client = OrderbookClient(
            base_url=settings.upstream_url,
            api_key=settings.api_key,
            timeout=settings.upstream_timeout_seconds,
        )
        return cls(
            client=client,
            policy=settings.aggregation_policy,
            delay_seconds=settings.response_delay_seconds,
            delay_jitter_seconds=settings.response_delay_jitter_seconds,
            cache=SnapshotCache(ttl=settings.cache_ttl_seconds),
            max_retries=settings.upstream_max_retries,
            retry_base_delay=settings.upstream_retry_base_delay,
            legacy_equal_volume_field_order=settings.legacy_equal_volume_field_order,
        )

    def response_delay(self) -> float:
        if self._jitter > 0:
            return self._delay + random.uniform(0, self._jitter)
        return self._delay

    async def fetch(self, chain: str | None) -> Snapshot:
        """Return the raw upstream snapshot for a chain, after the response delay."""
        if chain is None or not chain.strip():
            raise BadRequestError("missing chain parameter")
        chain = chain.strip()

        delay = self.response_delay()
        if delay > 0:
            await self._sleep(delay)

        cached = await self._cache.get(chain)
        if cached is not None:
            relay_cache_hits_total.inc()
            return cached
        relay_cache_misses_total.inc()

        try:
            snapshot = await retry_with_backoff(
                lambda: self._client.fetch_snapshot(chain),
                max_retries=self._max_retries,
                base_delay=self._retry_base_delay,
                description=f"orderbook fetch for {chain}",
            )
        except RelayError as exc:
            relay_upstream_errors_total.labels(error_type=type(exc).__name__).inc()
            logger.warning("Upstream fetch for %s failed: %s", chain, exc)
            raise

        await self._cache.set(chain, snapshot)
        return snapshot

    async def aggregated(self, chain: str | None) -> list[dict]:
        """Fetch, aggregate and encode a chain's snapshot as JSON-ready dicts."""
        snapshot = await self.fetch(chain)

        start = time.monotonic()
        result = aggregate_snapshot(snapshot, self.policy)
        aggregation_duration_seconds.labels(policy=self.policy.value).observe(time.monotonic() - start)

        levels_in = sum(len(entry.levels) for entry in snapshot)
        levels_out = sum(len(entry.levels) for entry in result)
        aggregation_levels_total.labels(policy=self.policy.value, stage="input").inc(levels_in)
        aggregation_levels_total.labels(policy=self.policy.value, stage="output").inc(levels_out)
        logger.info(
            "Aggregated %d entries for %s with %s: %d -> %d levels",
            len(result),
            chain,
            self.policy.value,
            levels_in,
            levels_out,
        )
        return encode_snapshot(result, price_first=self._price_first)

    async def pairs(self, chain: str | None) -> list[str]:
        return unique_pairs(await self.fetch(chain))

    async def pair_view(self, chain: str | None, pair: str) -> dict:
        """Aggregated book of one ``BASE/QUOTE`` pair.

        Bids are the pair's own bid levels; asks come from the reversed
        direction's bid entry, inverted into the pair's units.
        """
        base, sep, quote = pair.strip().partition("/")
        if not sep or not base or not quote:
            raise BadRequestError(f"malformed pair {pair!r}", public_message="Pair must be BASE/QUOTE")

        view = select_pair_view(await self.fetch(chain), base, quote)
        if view.bid is None and view.ask is None:
            raise PairNotFoundError(f"no entries for {base}/{quote}")

        bids = self._aggregate_entry(view.bid)
        asks = invert_levels(self._aggregate_entry(view.ask))
        return {
            "pair": f"{base}/{quote}",
            "bids": [[amount, price] for amount, price in bids],
            "asks": [[amount, price] for amount, price in asks],
        }

    def _aggregate_entry(self, entry: OrderbookEntry | None) -> list[Level]:
        if entry is None:
            return []
        return aggregate_snapshot([entry], self.policy)[0].levels

    def close(self) -> None:
        self._client.close()


def encode_snapshot(snapshot: Snapshot, price_first: bool = False) -> list[dict]:
    """Dump entries to plain dicts; ``price_first`` writes levels as [price, amount]."""
    encoded = []
    for entry in snapshot:
        data = entry.model_dump(mode="json")
        if price_first:
            data["levels"] = [[price, amount] for amount, price in entry.levels]
        else:
            data["levels"] = [[amount, price] for amount, price in entry.levels]
        encoded.append(data)
    return encoded
