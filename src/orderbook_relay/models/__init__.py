"""Pydantic models for orderbook snapshots."""

from orderbook_relay.models.enums import AggregationPolicy, Side
from orderbook_relay.models.orderbook import Level, OrderbookEntry, Snapshot, snapshot_adapter

__all__ = [
    "AggregationPolicy",
    "Side",
    "Level",
    "OrderbookEntry",
    "Snapshot",
    "snapshot_adapter",
]
