"""Price-impact bucketing: group levels by their relative distance from mid price.

Two variants exist. ``price_impact_threshold`` partitions the book into three
disjoint buckets and conserves volume. ``price_impact_range`` keeps the band
arithmetic of the first deployed version: each band runs from the previous
band's impact out to twice its own impact, so bands overlap (a level can be
counted twice) and leave gaps (a level can be dropped). Consumers that were
calibrated against that output still select it explicitly.
"""

from __future__ import annotations

from collections.abc import Sequence

from orderbook_relay.aggregation.levels import BucketAccumulator
from orderbook_relay.models.enums import Side
from orderbook_relay.models.orderbook import Level

RANGE_IMPACTS = (0.001, 0.005, 0.02)
THRESHOLD_IMPACTS = (0.001, 0.01)


def price_impact(price: float, mid_price: float, side: Side) -> float:
    """Relative distance from mid, positive on the far side of the book."""
    if side is Side.BID:
        return (mid_price - price) / mid_price
    return (price - mid_price) / mid_price


def price_impact_range(levels: Sequence[Level], side: Side, mid_price: float) -> list[Level]:
    if len(levels) <= 1:
        return list(levels)

    buckets: list[Level] = []
    previous = 0.0
    for impact in RANGE_IMPACTS:
        outer = impact * 2
        if side is Side.BID:
            low, high = mid_price * (1 - outer), mid_price * (1 - previous)
        else:
            low, high = mid_price * (1 + previous), mid_price * (1 + outer)

        acc = BucketAccumulator()
        for amount, price in levels:
            if low <= price <= high:
                acc.add(amount, price)
        if not acc.empty:
            buckets.append(acc.close())
        previous = impact

    return buckets


def price_impact_threshold(levels: Sequence[Level], side: Side, mid_price: float) -> list[Level]:
    """Bucket levels by impact: below 0.1%, 0.1% to 1%, and 1% or more."""
    if len(levels) <= 1:
        return list(levels)

    accumulators = [BucketAccumulator() for _ in range(len(THRESHOLD_IMPACTS) + 1)]
    for amount, price in levels:
        impact = price_impact(price, mid_price, side)
        slot = 0
        while slot < len(THRESHOLD_IMPACTS) and impact >= THRESHOLD_IMPACTS[slot]:
            slot += 1
        accumulators[slot].add(amount, price)

    return [acc.close() for acc in accumulators if not acc.empty]
