"""Entry point: run the HTTP relay or aggregate a saved snapshot offline."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from orderbook_relay.aggregation.engine import aggregate_snapshot
from orderbook_relay.api.service import encode_snapshot
from orderbook_relay.config.settings import Settings
from orderbook_relay.errors import InvalidInputError
from orderbook_relay.models.enums import AggregationPolicy
from orderbook_relay.models.orderbook import snapshot_adapter

logger = logging.getLogger("orderbook_relay")


def _serve(settings: Settings, args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "orderbook_relay.api.app:create_app",
        factory=True,
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
    return 0


def _aggregate(settings: Settings, args: argparse.Namespace) -> int:
    policy = AggregationPolicy(args.policy) if args.policy else settings.aggregation_policy
    try:
        if args.file == "-":
            raw = sys.stdin.read()
        else:
            with open(args.file) as f:
                raw = f.read()
    except OSError as exc:
        logger.error("Cannot read snapshot from %s: %s", args.file, exc)
        return 1

    try:
        snapshot = snapshot_adapter.validate_json(raw)
        result = aggregate_snapshot(snapshot, policy)
    except ValidationError as exc:
        logger.error("Snapshot in %s is malformed: %s", args.file, exc)
        return 1
    except InvalidInputError as exc:
        logger.error("Snapshot in %s cannot be aggregated: %s", args.file, exc)
        return 1

    price_first = settings.legacy_equal_volume_field_order and policy is AggregationPolicy.EQUAL_VOLUME_BUCKET
    json.dump(encode_snapshot(result, price_first=price_first), sys.stdout, indent=2 if args.pretty else None)
    sys.stdout.write("\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="orderbook_relay", description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP relay")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(handler=_serve)

    aggregate = sub.add_parser("aggregate", help="Aggregate a snapshot JSON file and print the result")
    aggregate.add_argument("file", help="Snapshot JSON file, or - for stdin")
    aggregate.add_argument("--policy", choices=[p.value for p in AggregationPolicy], default=None)
    aggregate.add_argument("--pretty", action="store_true", help="Indent the JSON output")
    aggregate.set_defaults(handler=_aggregate)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
        stream=sys.stderr if args.command == "aggregate" else sys.stdout,
    )
    return args.handler(settings, args)


if __name__ == "__main__":
    sys.exit(main())
