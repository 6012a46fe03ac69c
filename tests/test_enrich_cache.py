from ddgenrich.enrich.cache import ExpiringCache, process_cache


class FakeClock:
    def __init__(self, t: float = 1000.0) -> None:
        self.t = t

    def __call__(self) -> float:
        return self.t


def test_get_before_and_after_expiry():
    clock = FakeClock()
    cache = ExpiringCache(clock=clock)
    cache.set("k", "v", ttl_s=60)

    clock.t += 59.9
    assert cache.get("k") == "v"

    clock.t += 0.1
    assert cache.get("k") is None
    # expired entries are dropped on read
    assert len(cache) == 0


def test_missing_key():
    assert ExpiringCache().get("nope") is None


def test_set_overwrites_and_extends():
    clock = FakeClock()
    cache = ExpiringCache(clock=clock)
    cache.set("k", 1, ttl_s=10)
    clock.t += 5
    cache.set("k", 2, ttl_s=10)
    clock.t += 9
    assert cache.get("k") == 2


def test_falsy_values_are_hits():
    cache = ExpiringCache(clock=FakeClock())
    cache.set("k", False, ttl_s=10)
    assert cache.get("k") is False


def test_clear():
    cache = ExpiringCache()
    cache.set("a", 1, ttl_s=60)
    cache.set("b", 2, ttl_s=60)
    cache.clear()
    assert len(cache) == 0


def test_process_cache_is_shared():
    assert process_cache() is process_cache()


def test_len_counts_only_live_entries():
    clock = FakeClock()
    cache = ExpiringCache(clock=clock)
    cache.set("short", 1, ttl_s=5)
    cache.set("long", 2, ttl_s=60)
    assert len(cache) == 2

    clock.t += 10
    assert len(cache) == 1
