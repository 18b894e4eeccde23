from orderbook_relay.config.settings import Settings

__all__ = ["Settings"]
