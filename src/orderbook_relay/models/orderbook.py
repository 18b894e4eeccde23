"""Orderbook snapshot models as served by the upstream swap API."""

from pydantic import BaseModel, ConfigDict, TypeAdapter

from orderbook_relay.models.enums import Side

# (amount, price)
Level = tuple[float, float]


class OrderbookEntry(BaseModel):
    """One side of one trading pair."""

    # Fields the relay does not know about are passed through untouched.
    model_config = ConfigDict(extra="allow")

    base_symbol: str
    quote_symbol: str
    base_address: str
    quote_address: str
    side: Side
    levels: list[Level]

    @property
    def pair_key(self) -> tuple[str, str, str, str]:
        return (self.base_symbol, self.quote_symbol, self.base_address, self.quote_address)


Snapshot = list[OrderbookEntry]

snapshot_adapter = TypeAdapter(Snapshot)
