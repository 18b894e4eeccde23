"""Orderbook relay: fetches swap orderbook snapshots and serves them with aggregated levels."""

__version__ = "1.0.0"
