"""Prometheus metrics for the orderbook relay."""

from prometheus_client import Counter, Histogram

relay_requests_total = Counter(
    "orderbook_relay_requests_total",
    "Total orderbook requests",
    ["endpoint", "status"],
)

relay_upstream_errors_total = Counter(
    "orderbook_relay_upstream_errors_total",
    "Total failed upstream fetches",
    ["error_type"],
)

relay_cache_hits_total = Counter(
    "orderbook_relay_cache_hits_total",
    "Total upstream snapshots served from cache",
)

relay_cache_misses_total = Counter(
    "orderbook_relay_cache_misses_total",
    "Total upstream snapshots fetched",
)

aggregation_duration_seconds = Histogram(
    "orderbook_relay_aggregation_duration_seconds",
    "Time spent aggregating one snapshot",
    ["policy"],
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1],
)

aggregation_levels_total = Counter(
    "orderbook_relay_aggregation_levels_total",
    "Levels seen by the aggregation engine",
    ["policy", "stage"],
)
