import pytest

from webhook_inspector.app import create_app
from webhook_inspector.config import Settings
from webhook_inspector.randomness import RandomSource
from webhook_inspector.store import WebhookStore


@pytest.fixture
def rng():
    return RandomSource(1234)


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'webhooks.db'}"


@pytest.fixture
def store(database_url):
    store = WebhookStore(database_url)
    store.create_schema()
    yield store
    store.engine.dispose()


@pytest.fixture
def app(store, database_url):
    app = create_app(Settings(database_url=database_url), store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
