import pytest

from taxoga.services.cache import ReferenceDataCache


class _Clock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_cache_serves_within_ttl_and_reloads_after():
    clock = _Clock()
    cache = ReferenceDataCache(ttl_seconds=600, clock=clock)
    loads = []

    def loader():
        loads.append(clock.now)
        return ["industry"]

    assert cache.get_or_load("industries", loader) == ["industry"]
    clock.now += 599
    assert cache.get_or_load("industries", loader) == ["industry"]
    assert len(loads) == 1

    clock.now += 1
    cache.get_or_load("industries", loader)
    assert len(loads) == 2


def test_empty_results_are_cached():
    cache = ReferenceDataCache(ttl_seconds=60, clock=_Clock())
    calls = []

    def loader():
        calls.append(1)
        return []

    cache.get_or_load("industries", loader)
    cache.get_or_load("industries", loader)
    assert len(calls) == 1


def test_failed_loads_are_not_cached():
    cache = ReferenceDataCache(ttl_seconds=60, clock=_Clock())

    def failing():
        raise RuntimeError("upstream down")

    with pytest.raises(RuntimeError):
        cache.get_or_load("config", failing)
    assert cache.get_cached("config") is None
    assert cache.get_or_load("config", lambda: "fresh") == "fresh"

