"""Unit tests for the price table cache."""

import threading
from decimal import Decimal
from unittest.mock import patch

import pytest

from cabinet_pricing.application import CatalogChangeEvent, PriceTableCache


@pytest.fixture
def cache() -> PriceTableCache:
    return PriceTableCache()


class TestPriceTableCache:
    """Tests for caching and LRU eviction."""

    def test_miss_then_hit(self, cache, catalog) -> None:
        first = cache.get_or_generate(catalog, "base-2door")
        second = cache.get_or_generate(catalog, "base-2door")

        assert first is second
        assert (cache.hits, cache.misses) == (1, 1)
        assert first.price("ctf-shaker-white", "r-600") == Decimal("152.11")

    def test_keyed_by_hardware_brand(self, cache, catalog) -> None:
        plain = cache.get_or_generate(catalog, "base-2door")
        blum = cache.get_or_generate(catalog, "base-2door", "hb-blum")

        assert plain is not blum
        assert len(cache) == 2
        assert ("base-2door", "hb-blum") in cache

    def test_generates_once(self, cache, catalog) -> None:
        with patch.object(
            cache.generator, "generate_for_catalog", wraps=cache.generator.generate_for_catalog
        ) as generate:
            cache.get_or_generate(catalog, "base-2door")
            cache.get_or_generate(catalog, "base-2door")
        assert generate.call_count == 1

    def test_unknown_cabinet_type_not_cached(self, cache, catalog) -> None:
        with pytest.raises(KeyError):
            cache.get_or_generate(catalog, "tall")
        assert len(cache) == 0

    def test_lru_eviction(self, catalog) -> None:
        cache = PriceTableCache(max_entries=2)
        cache.get_or_generate(catalog, "base-2door")
        cache.get_or_generate(catalog, "drawer-3")
        cache.get("base-2door")  # refresh
        cache.get_or_generate(catalog, "base-2door", "hb-blum")

        assert ("drawer-3", None) not in cache
        assert ("base-2door", None) in cache

    def test_max_entries_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            PriceTableCache(max_entries=0)


class TestInvalidation:
    """Tests for change-event invalidation."""

    @pytest.fixture
    def warm_cache(self, cache, catalog) -> PriceTableCache:
        cache.get_or_generate(catalog, "base-2door")
        cache.get_or_generate(catalog, "base-2door", "hb-blum")
        cache.get_or_generate(catalog, "drawer-3")
        return cache

    def test_scoped_change(self, warm_cache) -> None:
        removed = warm_cache.invalidate(CatalogChangeEvent("price_ranges", "base-2door"))

        assert removed == 2
        assert ("drawer-3", None) in warm_cache

    def test_shared_table_change_clears_all(self, warm_cache) -> None:
        assert warm_cache.invalidate(CatalogChangeEvent("door_styles")) == 3
        assert len(warm_cache) == 0

    def test_unscoped_change_to_scoped_table_clears_all(self, warm_cache) -> None:
        assert warm_cache.invalidate(CatalogChangeEvent("cabinet_parts")) == 3

    def test_scoped_id_ignored_for_shared_table(self, warm_cache) -> None:
        assert warm_cache.invalidate(CatalogChangeEvent("global_settings", "base-2door")) == 3

    def test_regenerates_after_invalidation(self, warm_cache, catalog) -> None:
        warm_cache.invalidate(CatalogChangeEvent("colors"))
        warm_cache.get_or_generate(catalog, "base-2door")
        assert warm_cache.misses == 4

    def test_invalidation_logged(self, warm_cache, caplog) -> None:
        with caplog.at_level("INFO", logger="cabinet_pricing.application.cache"):
            warm_cache.invalidate(CatalogChangeEvent("cabinet_types", "drawer-3"))
        assert "Invalidated 1 price table(s) after change to cabinet_types (drawer-3)" in caplog.text

    def test_table_generated_across_invalidation_not_stored(self, cache, catalog) -> None:
        started = threading.Event()
        release = threading.Event()
        generate = cache.generator.generate_for_catalog

        def slow_generate(*args):
            started.set()
            release.wait(timeout=5)
            return generate(*args)

        results = []
        with patch.object(cache.generator, "generate_for_catalog", side_effect=slow_generate):
            worker = threading.Thread(
                target=lambda: results.append(cache.get_or_generate(catalog, "base-2door"))
            )
            worker.start()
            assert started.wait(timeout=5)
            cache.invalidate(CatalogChangeEvent("door_styles"))
            release.set()
            worker.join(timeout=5)

        assert results[0].price("ctf-shaker-white", "r-600") == Decimal("152.11")
        assert len(cache) == 0

    def test_table_generated_across_clear_not_stored(self, cache, catalog) -> None:
        generate = cache.generator.generate_for_catalog

        def generate_then_clear(*args):
            table = generate(*args)
            cache.clear()
            return table

        with patch.object(cache.generator, "generate_for_catalog", side_effect=generate_then_clear):
            cache.get_or_generate(catalog, "base-2door")
        assert len(cache) == 0
