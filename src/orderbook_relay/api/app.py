"""FastAPI application serving delayed, aggregated orderbook snapshots."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from orderbook_relay import __version__
from orderbook_relay.api.service import OrderbookRelay
from orderbook_relay.config.settings import Settings
from orderbook_relay.errors import RelayError
from orderbook_relay.metrics import relay_requests_total

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, relay: OrderbookRelay | None = None) -> FastAPI:
    settings = settings or Settings()
    relay = relay or OrderbookRelay.from_settings(settings)

    app = FastAPI(
        title="Orderbook Relay",
        version=__version__,
        description="Delayed, level-aggregated orderbook snapshots from the swap API",
    )
    app.state.settings = settings
    app.state.relay = relay

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
        relay_requests_total.labels(endpoint=request.url.path, status=str(exc.status_code)).inc()
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        relay_requests_total.labels(endpoint=request.url.path, status="500").inc()
        logger.exception("Unhandled error serving %s", request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/api/orderbook")
    async def get_orderbook(request: Request, chain: str | None = Query(default=None)) -> list[dict]:
        """Aggregated snapshot for ``chain``, same shape as the upstream body."""
        body = await request.app.state.relay.aggregated(chain)
        relay_requests_total.labels(endpoint="/api/orderbook", status="200").inc()
        return body

    @app.get("/api/pairs")
    async def get_pairs(
        request: Request,
        chain: str | None = Query(default=None),
        pair: str | None = Query(default=None),
    ) -> dict:
        """Unique pairs of a chain, or the aggregated book of one ``pair=BASE/QUOTE``."""
        relay = request.app.state.relay
        if pair is not None:
            body = await relay.pair_view(chain, pair)
        else:
            pairs = await relay.pairs(chain)
            body = {"chain": chain.strip(), "pairs": pairs}
        relay_requests_total.labels(endpoint="/api/pairs", status="200").inc()
        return body

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "service": "orderbook-relay"}

    @app.get("/metrics")
    async def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.on_event("startup")
    async def on_startup() -> None:
        logger.info(
            "Orderbook relay starting on %s:%d (policy=%s, delay=%.1fs)",
            settings.host,
            settings.port,
            relay.policy.value,
            settings.response_delay_seconds,
        )
        if not settings.api_key:
            logger.warning("No upstream API key configured; orderbook requests will fail")

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        app.state.relay.close()

    return app
