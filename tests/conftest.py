"""Pytest fixtures: a fresh store, notifier and app per test."""

import pytest
from fastapi.testclient import TestClient

from storefront.api.main import create_app
from storefront.catalog.store import CatalogStore
from storefront.notifier.broadcaster import ChangeNotifier
from storefront.utils.config_loader import StorefrontConfig


@pytest.fixture
def config():
    """Built-in defaults, independent of config files and env."""
    return StorefrontConfig()


@pytest.fixture
def store():
    """Empty in-memory catalog."""
    return CatalogStore()


@pytest.fixture
def notifier():
    return ChangeNotifier()


@pytest.fixture
def app(config, store, notifier):
    return create_app(config=config, store=store, notifier=notifier)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def broadcasts(notifier, monkeypatch):
    """Record every broadcast instead of fanning it out."""
    calls = []

    def record(event_kind, payload):
        calls.append((event_kind, payload))
        return 0

    monkeypatch.setattr(notifier, "broadcast", record)
    return calls
