"""Count bucketing: merge runs of consecutive levels into a fixed number of buckets."""

from __future__ import annotations

from collections.abc import Sequence

from orderbook_relay.aggregation.levels import EPSILON, BucketAccumulator, target_bucket_count
from orderbook_relay.models.orderbook import Level


def count_bucket(levels: Sequence[Level]) -> list[Level]:
    """Collapse levels into 2 or 3 buckets of roughly equal level count.

    Buckets follow input order. Each bucket is (total amount, volume-weighted
    price). Sets no longer than the target count come back unchanged.
    """
    target = target_bucket_count(len(levels))
    if len(levels) <= target:
        return list(levels)

    levels_per_bucket = len(levels) / target
    buckets: list[Level] = []
    acc = BucketAccumulator()
    last_index = len(levels) - 1

    for index, (amount, price) in enumerate(levels):
        acc.add(amount, price)
        if acc.count >= levels_per_bucket - EPSILON or index == last_index:
            buckets.append(acc.close())
            acc = BucketAccumulator()
            if len(buckets) == target:
                break

    return buckets
