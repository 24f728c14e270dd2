"""Pytest configuration for the catalog service tests."""

import os
from datetime import datetime, timezone
from types import SimpleNamespace

# Settings are read at import time by storefront.main; never talk to a real project.
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")

import pytest

from storefront.config import get_settings
from storefront.models import NormalizedProduct, Source


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_product():
    """Factory for normalized products with sensible defaults."""

    def _make(id, name="", price=0, category="", source=Source.DATABASE, **kwargs):
        return NormalizedProduct(id=id, name=name, price=price, category=category, source=source, **kwargs)

    return _make


@pytest.fixture
def suit_and_shirt_catalog(make_product):
    return [
        make_product("s1", "Navy Classic Suit", 25000, "suits", colors=["navy"]),
        make_product("s2", "Charcoal Business Suit", 35000, "suits", colors=["charcoal"]),
        make_product("s3", "Black Designer Suit", 50000, "suits", colors=["black"]),
        make_product("sh1", "White Dress Shirt", 7000, "shirts", colors=["white"]),
        make_product("sh2", "Light Blue Dress Shirt", 9000, "shirts", colors=["blue"]),
    ]


class FakeQuery:
    """Chainable stand-in for a postgrest query builder; records every call."""

    def __init__(self, client):
        self._client = client

    def __getattr__(self, name):
        def method(*args, **kwargs):
            self._client.calls.append((name, args, kwargs))
            return self

        return method

    def execute(self):
        if self._client.raises is not None:
            raise self._client.raises
        return SimpleNamespace(data=self._client.rows, error=self._client.error)


class FakeSupabase:
    def __init__(self, rows=None, error=None, raises=None):
        self.rows = rows or []
        self.error = error
        self.raises = raises
        self.calls = []

    def table(self, name):
        self.calls.append(("table", (name,), {}))
        return FakeQuery(self)

    def call_names(self):
        return [name for name, _, _ in self.calls]


@pytest.fixture
def fake_supabase():
    return FakeSupabase


def db_row(id, name, base_price, category="Suits", **kwargs):
    row = {
        "id": id,
        "name": name,
        "base_price": base_price,
        "category": category,
        "status": "active",
        "created_at": datetime(2025, 1, 1, tzinfo=timezone.utc).isoformat(),
    }
    row.update(kwargs)
    return row


@pytest.fixture
def make_row():
    return db_row
