from datetime import datetime, timedelta, timezone

import pytest

from webhook_inspector.exceptions import StorageError
from webhook_inspector.seed import build_delivery
from webhook_inspector.store import WebhookStore

NOW = datetime(2025, 3, 7, 12, 0, tzinfo=timezone.utc)


def _record(rng, minutes_ago):
    record = build_delivery(rng, "charge.succeeded", now=NOW)
    record["created_at"] = NOW - timedelta(minutes=minutes_ago)
    return record


def test_insert_and_count(store, rng):
    assert store.count() == 0
    assert store.insert_many([_record(rng, i) for i in range(5)]) == 5
    assert store.count() == 5


def test_list_newest_first(store, rng):
    store.insert_many([_record(rng, minutes) for minutes in (30, 10, 20)])
    created = [webhook.to_summary()["created_at"] for webhook in store.list()]
    assert created == [
        (NOW - timedelta(minutes=minutes)).isoformat() for minutes in (10, 20, 30)
    ]


def test_list_limit_and_offset(store, rng):
    store.insert_many([_record(rng, i) for i in range(10)])
    first_page = store.list(limit=4)
    second_page = store.list(limit=4, offset=4)
    assert len(first_page) == 4
    assert len(second_page) == 4
    assert not {w.id for w in first_page} & {w.id for w in second_page}


def test_get_round_trips_columns(store, rng):
    record = _record(rng, 5)
    store.insert_many([record])
    webhook = store.list()[0]
    loaded = store.get(webhook.id).to_dict()
    assert loaded["method"] == "POST"
    assert loaded["pathname"] == "/webhook"
    assert loaded["ip"] == record["ip"]
    assert loaded["headers"] == record["headers"]
    assert loaded["body"] == record["body"]
    assert loaded["query_params"] is None
    assert loaded["created_at"] == record["created_at"].isoformat()


def test_get_missing_returns_none(store):
    assert store.get("does-not-exist") is None


def test_delete(store, rng):
    store.insert_many([_record(rng, 1), _record(rng, 2)])
    target = store.list()[0].id
    assert store.delete(target) is True
    assert store.get(target) is None
    assert store.delete(target) is False
    assert store.count() == 1


def test_clear(store, rng):
    store.insert_many([_record(rng, i) for i in range(3)])
    assert store.clear() == 3
    assert store.count() == 0


def test_failed_batch_writes_nothing(store, rng):
    records = [_record(rng, 1), _record(rng, 2)]
    records[1]["method"] = None
    with pytest.raises(StorageError):
        store.insert_many(records)
    assert store.count() == 0


def test_missing_table_raises_storage_error(database_url):
    store = WebhookStore(database_url)
    with pytest.raises(StorageError, match="could not count webhooks"):
        store.count()


def test_unparseable_url_raises_storage_error():
    with pytest.raises(StorageError, match="invalid database URL"):
        WebhookStore("not a url")
