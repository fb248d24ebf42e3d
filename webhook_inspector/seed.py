"""
Seed the database with synthetic Stripe webhook deliveries.

Each record looks like a Stripe POST to /webhook: realistic headers,
a signature header and a JSON event body.
"""

import argparse
import json
import sys
from datetime import datetime
from typing import Any, Optional

from .catalog import STRIPE_EVENTS
from .config import Settings
from .exceptions import ConfigError, StorageError
from .payloads import generate_payload
from .randomness import RandomSource
from .store import WebhookStore

USER_AGENT = "Stripe/1.0 (+https://stripe.com/docs/webhooks)"
CLIENT_USER_AGENT = {
    "bindings_version": "5.4.0",
    "lang": "ruby",
    "platform": "x86_64-linux",
}


def _compact(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def build_delivery(
    rng: RandomSource, event_type: Optional[str] = None, now: Optional[datetime] = None
) -> dict[str, Any]:
    """Wrap a generated payload in the HTTP metadata of a Stripe delivery."""
    if event_type is None:
        event_type = rng.choice(STRIPE_EVENTS)
    payload = generate_payload(event_type, rng)
    created_at = rng.recent_date(days=30, now=now)

    return {
        "method": "POST",
        "pathname": "/webhook",
        "ip": rng.ipv4(),
        "status_code": 200,
        "content_type": "application/json",
        "content_length": len(_compact(payload)),
        "query_params": None,
        "headers": {
            "content-type": "application/json",
            "stripe-signature": f"t={int(created_at.timestamp())},v1={rng.hexadecimal(64)}",
            "user-agent": USER_AGENT,
            "accept": "*/*",
            "x-stripe-client-user-agent": _compact(CLIENT_USER_AGENT),
        },
        "body": json.dumps(payload, indent=2),
        "created_at": created_at,
    }


def seed(store: WebhookStore, count: int = 65, rng: Optional[RandomSource] = None) -> int:
    """Write `count` synthetic deliveries to the store as a single batch."""
    if rng is None:
        rng = RandomSource()
    records = [build_delivery(rng) for _ in range(count)]
    return store.insert_many(records)


def parse_args(argv: Optional[list[str]], settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="webhook-inspector-seed",
        description="Seed the database with synthetic Stripe webhook deliveries.",
    )
    parser.add_argument("--count", type=int, default=settings.seed_count,
                        help=f"number of records to create (default: {settings.seed_count})")
    parser.add_argument("--seed", type=int, default=settings.seed,
                        help="random seed for reproducible data")
    parser.add_argument("--database-url", default=settings.database_url,
                        help="SQLAlchemy database URL")
    parser.add_argument("--reset", action="store_true",
                        help="drop and recreate the webhooks table first")
    args = parser.parse_args(argv)
    if args.count <= 0:
        parser.error("--count must be positive")
    return args


def main(argv: Optional[list[str]] = None) -> int:
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    args = parse_args(argv, settings)

    print("Seeding database with Stripe webhooks...")
    try:
        store = WebhookStore(args.database_url)
        if args.reset:
            store.drop_schema()
        store.create_schema()
        written = seed(store, args.count, RandomSource(args.seed))
    except StorageError as e:
        print(f"Error seeding database: {e}", file=sys.stderr)
        return 1

    print(f"Successfully seeded {written} Stripe webhook records")
    return 0


if __name__ == "__main__":
    sys.exit(main())
