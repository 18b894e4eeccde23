"""Level set helpers shared by the aggregation policies."""

from __future__ import annotations

import math
from collections.abc import Sequence

from orderbook_relay.errors import InvalidInputError
from orderbook_relay.models.orderbook import Level

EPSILON = 1e-10


def validate_levels(levels: Sequence[Level]) -> None:
    """Reject levels with negative or non-finite amounts or prices."""
    for index, (amount, price) in enumerate(levels):
        if not (math.isfinite(amount) and math.isfinite(price)):
            raise InvalidInputError(f"level {index} is not finite: ({amount}, {price})")
        if amount < 0 or price < 0:
            raise InvalidInputError(f"level {index} is negative: ({amount}, {price})")


def total_amount(levels: Sequence[Level]) -> float:
    return math.fsum(amount for amount, _ in levels)


def target_bucket_count(length: int) -> int:
    """Bucket count for the count and equal-volume policies."""
    if length <= 1:
        return length
    if length <= 5:
        return 2
    return 3


class BucketAccumulator:
    """Running amount and amount*price for one output bucket."""

    __slots__ = ("amount", "value", "last_price", "count")

    def __init__(self) -> None:
        self.amount = 0.0
        self.value = 0.0
        self.last_price: float | None = None
        self.count = 0

    def add(self, amount: float, price: float) -> None:
        self.amount += amount
        self.value += amount * price
        self.last_price = price
        self.count += 1

    @property
    def empty(self) -> bool:
        return self.count == 0

    def close(self) -> Level:
        # Zero accumulated volume has no weighted price; fall back to the raw one.
        if self.amount == 0:
            return (0.0, self.last_price if self.last_price is not None else 0.0)
        return (self.amount, self.value / self.amount)
