"""Level aggregation engine and its policies."""

from orderbook_relay.aggregation.count_bucket import count_bucket
from orderbook_relay.aggregation.engine import aggregate_snapshot, group_pairs
from orderbook_relay.aggregation.equal_volume import equal_volume_bucket, split_equal_volume
from orderbook_relay.aggregation.mid_price import resolve_mid_price
from orderbook_relay.aggregation.policies import PolicySpec, apply_policy, get_policy
from orderbook_relay.aggregation.price_impact import (
    price_impact,
    price_impact_range,
    price_impact_threshold,
)

__all__ = [
    "aggregate_snapshot",
    "apply_policy",
    "count_bucket",
    "equal_volume_bucket",
    "get_policy",
    "group_pairs",
    "price_impact",
    "price_impact_range",
    "price_impact_threshold",
    "PolicySpec",
    "resolve_mid_price",
    "split_equal_volume",
]
