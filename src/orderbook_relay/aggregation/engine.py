"""Apply an aggregation policy across every entry of a snapshot."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from orderbook_relay.aggregation.levels import validate_levels
from orderbook_relay.aggregation.mid_price import resolve_mid_price
from orderbook_relay.aggregation.policies import apply_policy, get_policy
from orderbook_relay.errors import InvalidInputError
from orderbook_relay.models.enums import AggregationPolicy, Side
from orderbook_relay.models.orderbook import OrderbookEntry, Snapshot

logger = logging.getLogger(__name__)

PairKey = tuple[str, str, str, str]


def group_pairs(snapshot: Sequence[OrderbookEntry]) -> dict[PairKey, dict[Side, OrderbookEntry]]:
    """Index entries by pair and side. The first entry seen for a side wins."""
    pairs: dict[PairKey, dict[Side, OrderbookEntry]] = {}
    for entry in snapshot:
        sides = pairs.setdefault(entry.pair_key, {})
        if entry.side in sides:
            logger.debug("Duplicate %s entry for %s/%s", entry.side.value, entry.base_symbol, entry.quote_symbol)
            continue
        sides[entry.side] = entry
    return pairs


def aggregate_snapshot(
    snapshot: Sequence[OrderbookEntry],
    policy: AggregationPolicy | str = AggregationPolicy.PRICE_IMPACT_THRESHOLD,
) -> Snapshot:
    """Return a new snapshot whose entries carry aggregated levels.

    Entry order and every field other than ``levels`` are preserved. Raises
    InvalidInputError if any level is negative or non-finite.
    """
    spec = get_policy(policy)
    for index, entry in enumerate(snapshot):
        try:
            validate_levels(entry.levels)
        except InvalidInputError as exc:
            raise InvalidInputError(
                f"entry {index} ({entry.base_symbol}/{entry.quote_symbol} {entry.side.value}): {exc}"
            ) from exc

    pairs = group_pairs(snapshot) if spec.needs_mid_price else {}
    result: Snapshot = []
    for entry in snapshot:
        mid_price = None
        if spec.needs_mid_price:
            sides = pairs[entry.pair_key]
            mid_price = resolve_mid_price(sides.get(Side.BID), sides.get(Side.ASK), entry)
            if mid_price is None:
                logger.debug("No mid price for %s/%s, passing levels through", entry.base_symbol, entry.quote_symbol)

        levels = apply_policy(spec.policy, entry.levels, entry.side, mid_price)
        result.append(entry.model_copy(update={"levels": levels}))
    return result
