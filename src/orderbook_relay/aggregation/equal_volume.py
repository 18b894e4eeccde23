"""Equal-volume bucketing: split the book into buckets holding the same volume."""

from __future__ import annotations

from collections.abc import Sequence

from orderbook_relay.aggregation.levels import (
    EPSILON,
    BucketAccumulator,
    target_bucket_count,
    total_amount,
)
from orderbook_relay.models.orderbook import Level


def equal_volume_bucket(levels: Sequence[Level]) -> list[Level]:
    """Collapse levels into 2 or 3 buckets of equal total amount.

    Sets no longer than the target count come back unchanged.
    """
    target = target_bucket_count(len(levels))
    if len(levels) <= target:
        return list(levels)
    return split_equal_volume(levels, target)


def split_equal_volume(levels: Sequence[Level], target: int) -> list[Level]:
    """Split levels into ``target`` buckets of equal volume.

    A level larger than the remaining room in a bucket is split: the part
    that fits closes the bucket and the rest spills into the next ones. The
    last bucket takes whatever is left, so the total amount is preserved.
    """
    if target <= 0:
        return []
    total = total_amount(levels)
    if total <= 0:
        return list(levels)

    per_bucket = total / target
    tolerance = EPSILON * per_bucket
    buckets: list[Level] = []
    acc = BucketAccumulator()

    for amount, price in levels:
        remaining = amount
        while remaining > 0:
            if len(buckets) == target - 1:
                acc.add(remaining, price)
                remaining = 0.0
                break
            capacity = per_bucket - acc.amount
            if remaining <= capacity + tolerance:
                acc.add(remaining, price)
                remaining = 0.0
            else:
                acc.add(capacity, price)
                remaining -= capacity
            if acc.amount >= per_bucket - tolerance:
                buckets.append(acc.close())
                acc = BucketAccumulator()

    if acc.amount > 0 and len(buckets) < target:
        buckets.append(acc.close())
    return buckets
