"""Tests for the database and curated bundle sources."""

import asyncio

from storefront.catalog.adapters import CuratedBundleSource, DatabaseSource, default_sources
from storefront.catalog.adapters.adapter_database import PRODUCT_SELECT
from storefront.catalog.aggregate import collect_products
from storefront.catalog.bundle_catalog import BUNDLES
from storefront.config import get_settings
from storefront.models import CuratedBundleRecord, DatabaseRecord, FilterCriteria, Season, Source


def _run(coro):
    return asyncio.run(coro)


class TestDatabaseSource:
    def test_fetch_returns_records(self, fake_supabase, make_row):
        client = fake_supabase(rows=[make_row("1", "Navy Suit", 25000), make_row("2", "Black Suit", 30000)])
        records = _run(DatabaseSource(client_factory=lambda: client).fetch(FilterCriteria()))

        assert [r.id for r in records] == ["1", "2"]
        assert all(isinstance(r, DatabaseRecord) for r in records)
        assert client.calls[:3] == [
            ("table", ("products",), {}),
            ("select", (PRODUCT_SELECT,), {}),
            ("eq", ("status", "active"), {}),
        ]
        assert client.calls[-1] == ("order", ("created_at",), {"desc": True})

    def test_category_and_price_are_pushed_down(self, fake_supabase):
        client = fake_supabase()
        criteria = FilterCriteria(categories={"suit"}, min_price=20000, max_price=40000)
        _run(DatabaseSource(client_factory=lambda: client, table="catalog_products").fetch(criteria))

        assert ("table", ("catalog_products",), {}) in client.calls
        assert ("ilike", ("category", "%suit%"), {}) in client.calls
        assert ("gte", ("base_price", 20000), {}) in client.calls
        assert "lte" not in client.call_names()

    def test_zero_floor_is_not_pushed_down(self, fake_supabase):
        client = fake_supabase()
        _run(DatabaseSource(client_factory=lambda: client).fetch(FilterCriteria(min_price=0, max_price=5000)))
        assert "gte" not in client.call_names()
        assert "lte" not in client.call_names()

    def test_null_price_row_kept_under_ceiling(self, fake_supabase, make_row):
        client = fake_supabase(rows=[make_row("free", "Pocket Square", None), make_row("dear", "Suit", 90000)])
        source = DatabaseSource(client_factory=lambda: client)
        products, warnings = _run(collect_products(FilterCriteria(min_price=0, max_price=5000), [source]))
        assert [p.id for p in products] == ["free"]
        assert products[0].price == 0
        assert any("free: missing or unparseable price" in w for w in warnings)

    def test_several_categories_become_an_or_filter(self, fake_supabase):
        client = fake_supabase()
        _run(DatabaseSource(client_factory=lambda: client).fetch(FilterCriteria(categories={"suit", "blazer"})))
        assert ("or_", ("category.ilike.*blazer*,category.ilike.*suit*",), {}) in client.calls

    def test_unsafe_category_is_not_pushed_down(self, fake_supabase):
        client = fake_supabase()
        _run(DatabaseSource(client_factory=lambda: client).fetch(FilterCriteria(categories={"suit,shirt"})))
        names = client.call_names()
        assert "ilike" not in names
        assert "or_" not in names

    def test_search_and_colour_stay_client_side(self, fake_supabase):
        client = fake_supabase()
        _run(DatabaseSource(client_factory=lambda: client).fetch(FilterCriteria(search_term="navy", colors={"navy"})))
        assert client.call_names() == ["table", "select", "eq", "order"]

    def test_query_error_degrades_to_empty(self, fake_supabase):
        client = fake_supabase(raises=ConnectionError("timeout"))
        assert _run(DatabaseSource(client_factory=lambda: client).fetch(FilterCriteria())) == []

    def test_error_in_response_degrades_to_empty(self, fake_supabase, make_row):
        client = fake_supabase(rows=[make_row("1", "Navy Suit", 100)], error={"message": "permission denied"})
        assert _run(DatabaseSource(client_factory=lambda: client).fetch(FilterCriteria())) == []

    def test_client_factory_failure_degrades_to_empty(self):
        def broken():
            raise RuntimeError("SUPABASE_URL is still the placeholder")

        assert _run(DatabaseSource(client_factory=broken).fetch(FilterCriteria())) == []

    def test_rows_without_id_are_skipped(self, fake_supabase, make_row):
        client = fake_supabase(rows=[{"name": "No id"}, make_row("ok", "Suit", 100)])
        records = _run(DatabaseSource(client_factory=lambda: client).fetch(FilterCriteria()))
        assert [r.id for r in records] == ["ok"]

    def test_rows_with_bad_columns_are_kept_with_defaults(self, fake_supabase, make_row):
        client = fake_supabase(
            rows=[
                make_row("1", "Navy Suit", 25000, tags="wedding"),
                make_row("2", 12345, 25000),
                make_row("3", "Grey Vest", 9000, variants=[{"color": "grey", "inventory_count": "ten"}]),
                make_row("4", "White Shirt", 7000),
                make_row("5", "Tan Blazer", 19000, trending="sometimes", images=[{"url": "/a.jpg", "position": "first"}]),
            ]
        )
        source = DatabaseSource(client_factory=lambda: client)
        products, warnings = _run(collect_products(FilterCriteria(), [source]))

        assert [p.id for p in products] == ["1", "2", "3", "4", "5"]
        by_id = {p.id: p for p in products}
        assert "wedding" not in by_id["1"].tags
        assert by_id["2"].name == ""
        assert by_id["3"].colors == ["grey"]
        assert by_id["3"].in_stock is False
        assert by_id["5"].images == ["/a.jpg"]
        assert "trending" not in by_id["5"].tags
        assert "1: unparseable tags, ignored" in warnings
        assert "2: unparseable name, ignored" in warnings
        assert "2: missing name" in warnings
        assert "3: unparseable variants[0].inventory_count, ignored" in warnings
        assert "5: unparseable images[0].position, ignored" in warnings
        assert "5: unparseable trending, ignored" in warnings
        assert not any(w.startswith("4:") for w in warnings)

    def test_get_by_id(self, fake_supabase, make_row):
        client = fake_supabase(rows=[make_row("abc", "Navy Suit", 100)])
        record = _run(DatabaseSource(client_factory=lambda: client).get("abc"))
        assert record.id == "abc"
        assert ("eq", ("id", "abc"), {}) in client.calls
        assert ("limit", (1,), {}) in client.calls

    def test_get_missing_or_failing(self, fake_supabase):
        assert _run(DatabaseSource(client_factory=lambda: fake_supabase()).get("nope")) is None
        failing = fake_supabase(raises=RuntimeError("down"))
        assert _run(DatabaseSource(client_factory=lambda: failing).get("abc")) is None


class TestCuratedBundleSource:
    def test_unfiltered_returns_every_bundle(self):
        records = _run(CuratedBundleSource().fetch(FilterCriteria()))
        assert len(records) == len(BUNDLES)
        assert all(isinstance(r, CuratedBundleRecord) for r in records)

    def test_criteria_are_applied_to_bundles(self):
        criteria = FilterCriteria(max_price=20000)
        records = _run(CuratedBundleSource().fetch(criteria))
        assert {r.id for r in records} == {"bundle-indigo-dusty-pink", "bundle-navy-casual"}

    def test_season_and_trending(self):
        source = CuratedBundleSource()
        summer = _run(source.fetch(FilterCriteria(seasonal=Season.SUMMER, trending_only=True)))
        assert [r.id for r in summer] == ["bundle-tan-summer"]

    def test_get(self):
        source = CuratedBundleSource()
        assert _run(source.get("bundle-black-tuxedo-gala")).name
        assert _run(source.get("missing")) is None

    def test_custom_bundle_list(self):
        source = CuratedBundleSource(bundles=[{"id": "only", "name": "Only Bundle", "bundle_price": 100}])
        assert [r.id for r in _run(source.fetch(FilterCriteria()))] == ["only"]


def test_default_sources_order():
    sources = default_sources(get_settings())
    assert [s.source for s in sources] == [Source.DATABASE, Source.CURATED_BUNDLE]
    assert sources[0].table == "products"
