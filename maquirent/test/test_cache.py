"""
Test the TTL caches and the cache registry cleanup.
"""

from maquirent.utils.cache import CacheRegistry, TTLCache


class Clock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_get_evicts_expired_entries():
    clock = Clock()
    cache = TTLCache(10, clock)
    cache.set('machinery', [1, 2])
    assert cache.get('machinery') == [1, 2]

    clock.now += 10
    assert cache.has('machinery'), "An entry is still valid at exactly its TTL"
    clock.now += 0.01
    assert cache.get('machinery') is None
    assert cache.size() == 0


def test_per_entry_ttl():
    clock = Clock()
    cache = TTLCache(10, clock)
    cache.set('short', 'a', ttl=1)
    cache.set('long', 'b')
    clock.now += 5
    assert not cache.has('short')
    assert cache.has('long')


def test_delete_clear_cleanup():
    clock = Clock()
    cache = TTLCache(10, clock)
    cache.set('a', 1)
    cache.set('b', 2, ttl=1)
    cache.set('c', 3, ttl=1)
    assert cache.delete('a')
    assert not cache.delete('a')

    clock.now += 2
    assert cache.cleanup() == 2
    assert cache.size() == 0

    cache.set('d', 4)
    cache.clear()
    assert cache.size() == 0


def test_registry_ttls_and_cleanup_interval():
    clock = Clock()
    registry = CacheRegistry(clock=clock, cleanup_interval=300)
    assert registry.data_cache.default_ttl == 600
    assert registry.search_cache.default_ttl == 300

    registry.search_cache.set('search:lima', [])
    clock.now += 299
    assert registry.cleanup_if_due() is False

    clock.now += 2
    assert registry.cleanup_if_due() is True
    assert registry.search_cache.size() == 0
    assert registry.cleanup_if_due() is False
