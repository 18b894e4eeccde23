"""Shared enums for orderbook snapshots and aggregation."""

from enum import Enum


class Side(str, Enum):
    BID = "bid"
    ASK = "ask"


class AggregationPolicy(str, Enum):
    COUNT_BUCKET = "count_bucket"
    EQUAL_VOLUME_BUCKET = "equal_volume_bucket"
    PRICE_IMPACT_RANGE = "price_impact_range"  # legacy bands, not volume conserving
    PRICE_IMPACT_THRESHOLD = "price_impact_threshold"
