import pytest

from routeplanner.config import BrandSetting
from routeplanner.models.domain import Coordinate
from routeplanner.services.geocoding.brands import BrandRegistry
from routeplanner.services.geocoding.cache import GeoCache, cache_key


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


START = Coordinate(lat=36.1147, lon=-115.1728)
STORE = Coordinate(lat=36.1201, lon=-115.1699)


def test_cache_key_uses_two_decimal_cell():
    assert cache_key("Starbucks", START) == "Starbucks:36.11,-115.17"


def test_cache_hit_within_same_cell_and_ttl():
    clock = FakeClock()
    cache = GeoCache(ttl_seconds=60, clock=clock)
    cache.put("Starbucks", START, STORE)

    clock.now += 59
    nearby = Coordinate(lat=36.1149, lon=-115.1731)
    assert cache.get("Starbucks", nearby) == STORE


def test_cache_miss_for_other_brand_or_cell():
    cache = GeoCache(ttl_seconds=60, clock=FakeClock())
    cache.put("Starbucks", START, STORE)

    assert cache.get("Chipotle", START) is None
    assert cache.get("Starbucks", Coordinate(lat=36.20, lon=-115.17)) is None


def test_stale_entry_is_a_miss():
    clock = FakeClock()
    cache = GeoCache(ttl_seconds=60, clock=clock)
    cache.put("Starbucks", START, STORE)

    clock.now += 60
    assert cache.get("Starbucks", START) is None
    assert len(cache) == 0


def test_expired_entries_do_not_accumulate():
    clock = FakeClock()
    cache = GeoCache(ttl_seconds=60, clock=clock)
    for index in range(1000):
        cache.put("Starbucks", Coordinate(lat=index / 100, lon=-115.0), STORE)
    assert len(cache) == 1000

    clock.now += 61
    cache.put("Chipotle", START, STORE)

    assert len(cache) == 1


def test_cache_is_bounded():
    cache = GeoCache(clock=FakeClock(), max_entries=2)
    for brand in ("Starbucks", "Chipotle", "Nothing Bundt Cakes"):
        cache.put(brand, START, STORE)

    assert len(cache) == 2
    assert cache.get("Nothing Bundt Cakes", START) == STORE


def test_last_writer_wins():
    cache = GeoCache(clock=FakeClock())
    other = Coordinate(lat=36.13, lon=-115.16)
    cache.put("Starbucks", START, STORE)
    cache.put("Starbucks", START, other)
    assert cache.get("Starbucks", START) == other


def test_brand_registry_matches_case_insensitively_in_order():
    registry = BrandRegistry()
    registry.register("Nothing Bundt Cakes", ["Nothing Bundt"])
    registry.register("Bundt Shop", ["bundt"])

    assert registry.match("NOTHING BUNDT near me").name == "Nothing Bundt Cakes"
    assert registry.match("bundt shop").name == "Bundt Shop"
    assert registry.match("Main Street Library") is None


def test_brand_registry_from_settings():
    registry = BrandRegistry.from_settings([BrandSetting(name="Starbucks", keywords=("starbucks",))])
    assert len(registry) == 1
    assert registry.match("Starbucks Reserve").name == "Starbucks"


def test_brand_registry_rejects_empty_keywords():
    with pytest.raises(ValueError):
        BrandRegistry().register("Nameless", [" "])
