import redis

from tubetutor.services.cache import MemoryTranscriptCache, RedisTranscriptCache, build_transcript_cache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_entry_is_served_within_ttl():
    clock = FakeClock()
    cache = MemoryTranscriptCache(ttl_sec=3600, clock=clock)
    cache.set("abc", {"text": "hi"})
    clock.now += 3599
    assert cache.get("abc") == {"text": "hi"}


def test_entry_expires_at_ttl_and_is_evicted():
    clock = FakeClock()
    cache = MemoryTranscriptCache(ttl_sec=3600, clock=clock)
    cache.set("abc", {"text": "hi"})
    clock.now += 3600
    assert cache.get("abc") is None
    assert cache.stats()["size"] == 0


def test_last_writer_wins():
    cache = MemoryTranscriptCache()
    cache.set("abc", {"text": "first"})
    cache.set("abc", {"text": "second"})
    assert cache.get("abc") == {"text": "second"}


def test_delete_clear_and_stats():
    cache = MemoryTranscriptCache()
    cache.set("a", {"text": "1"})
    cache.set("b", {"text": "2"})
    assert cache.stats() == {"backend": "memory", "size": 2, "videos": ["a", "b"]}

    assert cache.delete("a") is True
    assert cache.delete("a") is False
    assert cache.clear() == 1
    assert cache.stats()["size"] == 0


def test_memory_backend_without_url():
    assert isinstance(build_transcript_cache(None, 60), MemoryTranscriptCache)
    assert isinstance(build_transcript_cache("", 60), MemoryTranscriptCache)


def test_expired_entries_are_purged_without_a_read():
    clock = FakeClock()
    cache = MemoryTranscriptCache(ttl_sec=60, clock=clock)
    cache.set("old", {"text": "1"})
    clock.now += 61
    assert cache.stats() == {"backend": "memory", "size": 0, "videos": []}

    cache.set("old", {"text": "1"})
    clock.now += 61
    cache.set("new", {"text": "2"})
    assert cache.stats()["videos"] == ["new"]


class DownRedis:
    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise redis.ConnectionError("connection refused")

        return fail


def test_redis_outage_degrades_to_cold_cache():
    cache = RedisTranscriptCache("redis://localhost:6379/0", ttl_sec=60)
    cache.redis_client = DownRedis()

    assert cache.get("abc") is None
    cache.set("abc", {"text": "hi"})
    assert cache.delete("abc") is False
    assert cache.clear() == 0
    stats = cache.stats()
    assert stats["size"] == 0
    assert "connection refused" in stats["error"]
