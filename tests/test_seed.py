import json
from datetime import datetime, timedelta, timezone

import pytest

from webhook_inspector import seed as seed_module
from webhook_inspector.catalog import STRIPE_EVENTS
from webhook_inspector.exceptions import StorageError
from webhook_inspector.randomness import RandomSource
from webhook_inspector.seed import build_delivery, seed

NOW = datetime(2025, 3, 7, 12, 0, tzinfo=timezone.utc)


def test_delivery_metadata(rng):
    record = build_delivery(rng, "invoice.paid", now=NOW)
    assert record["method"] == "POST"
    assert record["pathname"] == "/webhook"
    assert record["status_code"] == 200
    assert record["content_type"] == "application/json"
    assert record["query_params"] is None
    assert NOW - timedelta(days=30) <= record["created_at"] <= NOW


def test_delivery_body_is_indented_json(rng):
    record = build_delivery(rng, "charge.failed", now=NOW)
    payload = json.loads(record["body"])
    assert payload["type"] == "charge.failed"
    assert record["body"].startswith('{\n  "id": "evt_')
    compact = json.dumps(payload, separators=(",", ":"))
    assert record["content_length"] == len(compact)


def test_delivery_headers(rng):
    record = build_delivery(rng, "customer.created", now=NOW)
    headers = record["headers"]
    assert headers["content-type"] == "application/json"
    assert headers["accept"] == "*/*"
    assert headers["user-agent"] == "Stripe/1.0 (+https://stripe.com/docs/webhooks)"
    assert json.loads(headers["x-stripe-client-user-agent"]) == {
        "bindings_version": "5.4.0",
        "lang": "ruby",
        "platform": "x86_64-linux",
    }

    timestamp, signature = headers["stripe-signature"].split(",")
    assert timestamp == f"t={int(record['created_at'].timestamp())}"
    assert signature.startswith("v1=")
    assert len(signature) == len("v1=") + 64
    int(signature[3:], 16)


def test_delivery_picks_catalog_event(rng):
    for _ in range(50):
        payload = json.loads(build_delivery(rng)["body"])
        assert payload["type"] in STRIPE_EVENTS


def test_seed_writes_batch(store, rng):
    assert seed(store, 65, rng) == 65
    assert store.count() == 65


def test_seed_propagates_storage_error(store, rng, monkeypatch):
    def broken_insert(records):
        raise StorageError("disk full")

    monkeypatch.setattr(store, "insert_many", broken_insert)
    with pytest.raises(StorageError):
        seed(store, 5, rng)


def test_main_seeds_database(database_url, capsys, monkeypatch):
    monkeypatch.delenv("SEED_COUNT", raising=False)
    rc = seed_module.main(["--count", "12", "--seed", "3", "--database-url", database_url])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Seeding database with Stripe webhooks..." in out
    assert "Successfully seeded 12 Stripe webhook records" in out


def test_main_reset_replaces_rows(database_url, store):
    seed(store, 4, RandomSource(1))
    rc = seed_module.main(["--count", "2", "--reset", "--database-url", database_url])
    assert rc == 0
    assert store.count() == 2


def test_main_reports_storage_failure(capsys, monkeypatch):
    def fail(self):
        raise StorageError("connection refused")

    monkeypatch.setattr(seed_module.WebhookStore, "create_schema", fail)
    rc = seed_module.main(["--database-url", "sqlite://"])
    assert rc == 1
    assert "Error seeding database: connection refused" in capsys.readouterr().err


def test_main_rejects_bad_count():
    with pytest.raises(SystemExit):
        seed_module.main(["--count", "0"])


def test_main_reports_unparseable_database_url(capsys):
    rc = seed_module.main(["--database-url", "not a url"])
    assert rc == 1
    assert "Error seeding database: invalid database URL" in capsys.readouterr().err
