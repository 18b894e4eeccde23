"""Configuration via environment variables with ORDERBOOK_RELAY_ prefix."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from orderbook_relay.models.enums import AggregationPolicy


class Settings(BaseSettings):
    model_config = {"env_prefix": "ORDERBOOK_RELAY_", "env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore", "populate_by_name": True}

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_allow_origins: list[str] = ["*"]

    # Upstream swap API; the key is never sent to the browser
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ORDERBOOK_RELAY_API_KEY", "NATIVE_API_KEY"),
    )
    upstream_url: str = "https://v2.api.native.org/swap-api-v2/v1/orderbook"
    upstream_timeout_seconds: float = 10.0
    upstream_max_retries: int = 2
    upstream_retry_base_delay: float = 0.5

    # Responses are held back so the page never shows live levels
    response_delay_seconds: float = 2.0
    response_delay_jitter_seconds: float = 0.0

    # Aggregation
    aggregation_policy: AggregationPolicy = AggregationPolicy.PRICE_IMPACT_THRESHOLD
    legacy_equal_volume_field_order: bool = False

    # Cache TTL (seconds), 0 disables
    cache_ttl_seconds: int = 1

    # Logging
    log_level: str = "INFO"
