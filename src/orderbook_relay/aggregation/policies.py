"""Registry mapping each aggregation policy to its level function."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from orderbook_relay.aggregation.count_bucket import count_bucket
from orderbook_relay.aggregation.equal_volume import equal_volume_bucket
from orderbook_relay.aggregation.price_impact import price_impact_range, price_impact_threshold
from orderbook_relay.models.enums import AggregationPolicy, Side
from orderbook_relay.models.orderbook import Level

LevelFn = Callable[[Sequence[Level], Side, float | None], list[Level]]


@dataclass(frozen=True)
class PolicySpec:
    policy: AggregationPolicy
    aggregate: LevelFn
    needs_mid_price: bool


def _ignore_context(fn: Callable[[Sequence[Level]], list[Level]]) -> LevelFn:
    def _apply(levels: Sequence[Level], side: Side, mid_price: float | None) -> list[Level]:
        return fn(levels)

    return _apply


_POLICIES: dict[AggregationPolicy, PolicySpec] = {
    AggregationPolicy.COUNT_BUCKET: PolicySpec(
        AggregationPolicy.COUNT_BUCKET, _ignore_context(count_bucket), needs_mid_price=False
    ),
    AggregationPolicy.EQUAL_VOLUME_BUCKET: PolicySpec(
        AggregationPolicy.EQUAL_VOLUME_BUCKET, _ignore_context(equal_volume_bucket), needs_mid_price=False
    ),
    AggregationPolicy.PRICE_IMPACT_RANGE: PolicySpec(
        AggregationPolicy.PRICE_IMPACT_RANGE, price_impact_range, needs_mid_price=True
    ),
    AggregationPolicy.PRICE_IMPACT_THRESHOLD: PolicySpec(
        AggregationPolicy.PRICE_IMPACT_THRESHOLD, price_impact_threshold, needs_mid_price=True
    ),
}


def get_policy(policy: AggregationPolicy | str) -> PolicySpec:
    """Look up a policy by enum member or by its configured name."""
    return _POLICIES[AggregationPolicy(policy)]


def apply_policy(
    policy: AggregationPolicy | str,
    levels: Sequence[Level],
    side: Side,
    mid_price: float | None = None,
) -> list[Level]:
    """Aggregate one level set; impact policies pass levels through without a mid price."""
    spec = get_policy(policy)
    if spec.needs_mid_price and (mid_price is None or mid_price <= 0):
        return list(levels)
    return spec.aggregate(levels, side, mid_price)
