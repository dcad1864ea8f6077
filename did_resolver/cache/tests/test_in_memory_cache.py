import asyncio

import pytest

from ..base import CacheError
from ..in_memory import InMemoryCache


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return InMemoryCache(clock=clock)


class TestInMemoryCache:
    @pytest.mark.asyncio
    async def test_get_none(self, cache):
        item = await cache.get("doesn't exist")
        assert item is None

    @pytest.mark.asyncio
    async def test_set_get(self, cache):
        await cache.set("did:test:123", {"dictkey": "dval"})
        assert await cache.get("did:test:123") == {"dictkey": "dval"}

    @pytest.mark.asyncio
    async def test_set_overwrites(self, cache):
        await cache.set("key", "value")
        await cache.set("key", "newval")
        assert await cache.get("key") == "newval"
        assert await cache.size() == 1

    @pytest.mark.asyncio
    async def test_default_ttl_expiry(self, cache, clock):
        await cache.set("key", "value")
        entry = cache._cache.get("key")
        assert entry.cached_at == clock.now
        assert entry.expires_at == clock.now + InMemoryCache.DEFAULT_TTL

        clock.advance(InMemoryCache.DEFAULT_TTL)
        assert await cache.get("key") == "value"

        clock.advance(1)
        assert await cache.get("key") is None
        assert cache._cache.get("key") is None

    @pytest.mark.asyncio
    async def test_explicit_ttl(self, cache, clock):
        await cache.set("key", "value", ttl=5)
        clock.advance(6)
        assert await cache.get("key") is None

    @pytest.mark.asyncio
    async def test_never_expires(self, clock):
        cache = InMemoryCache(None, clock=clock)
        await cache.set("key", "value")
        assert cache._cache.get("key").expires_at is None
        clock.advance(10**9)
        assert await cache.get("key") == "value"

    @pytest.mark.asyncio
    async def test_real_clock_expiry(self):
        cache = InMemoryCache()
        await cache.set("key", "value", 0.05)
        await asyncio.sleep(0.1)
        assert await cache.get("key") is None

    @pytest.mark.asyncio
    async def test_delete(self, cache):
        await cache.set("key", "value")
        await cache.delete("key")
        assert await cache.get("key") is None
        await cache.delete("key")

    @pytest.mark.asyncio
    async def test_clear(self, cache):
        await cache.set("key1", "value")
        await cache.set("key2", "value")
        await cache.clear()
        assert await cache.size() == 0

    @pytest.mark.asyncio
    async def test_size_sweeps_expired(self, cache, clock):
        await cache.set("short", "value", ttl=1)
        await cache.set("long", "value", ttl=100)
        assert await cache.size() == 2
        clock.advance(2)
        assert await cache.size() == 1
        assert cache._cache.get("short") is None

    @pytest.mark.asyncio
    async def test_concurrent_set_get(self, cache):
        async def worker(index: int):
            await cache.set(f"key{index % 5}", index)
            await cache.get(f"key{index % 5}")

        await asyncio.gather(*(worker(i) for i in range(50)))
        assert await cache.size() == 5

    def test_negative_ttl_x(self):
        with pytest.raises(CacheError):
            InMemoryCache(-1)
