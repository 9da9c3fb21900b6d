"""
Transcript cache backends.

Entries are idempotent per video id within the TTL window, so both backends
use overwrite-on-miss writes with no locking: concurrent misses for the same
video may both fetch, and the last writer wins.
"""
from __future__ import annotations

import json
import time
from typing import Any, Callable, Optional, Protocol

import redis
import structlog

logger = structlog.get_logger(__name__)


class TranscriptCache(Protocol):
    ttl_sec: int

    def get(self, key: str) -> Optional[dict[str, Any]]: ...

    def set(self, key: str, value: dict[str, Any]) -> None: ...

    def delete(self, key: str) -> bool: ...

    def clear(self) -> int: ...

    def stats(self) -> dict[str, Any]: ...


class MemoryTranscriptCache:
    """Process-local cache; expired entries are evicted on read, write and stats."""

    def __init__(self, ttl_sec: int = 3600, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_sec = ttl_sec
        self._clock = clock
        self._entries: dict[str, tuple[float, dict[str, Any]]] = {}

    def _expired(self, stored_at: float) -> bool:
        return self._clock() - stored_at >= self.ttl_sec

    def purge_expired(self) -> int:
        stale = [k for k, (stored_at, _) in self._entries.items() if self._expired(stored_at)]
        for k in stale:
            del self._entries[k]
        if stale:
            logger.info("transcript_cache_purged", count=len(stale))
        return len(stale)

    def get(self, key: str) -> Optional[dict[str, Any]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._expired(stored_at):
            self._entries.pop(key, None)
            logger.info("transcript_cache_expired", video_id=key)
            return None
        return value

    def set(self, key: str, value: dict[str, Any]) -> None:
        self.purge_expired()
        self._entries[key] = (self._clock(), value)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        n = len(self._entries)
        self._entries.clear()
        return n

    def stats(self) -> dict[str, Any]:
        self.purge_expired()
        return {"backend": "memory", "size": len(self._entries), "videos": list(self._entries.keys())}


class RedisTranscriptCache:
    """
    Redis-backed cache; TTL is enforced by the server via SETEX.

    A Redis outage degrades to a cold cache: reads miss, writes and deletes
    are skipped, and stats report the error.
    """

    def __init__(self, redis_url: str, ttl_sec: int = 3600, prefix: str = "transcript:") -> None:
        self.ttl_sec = ttl_sec
        self.prefix = prefix
        self.redis_client = redis.from_url(redis_url, decode_responses=True)

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Optional[dict[str, Any]]:
        try:
            value = self.redis_client.get(self._key(key))
        except redis.RedisError as e:
            logger.error("transcript_cache_get_failed", video_id=key, error=str(e))
            return None
        return json.loads(value) if value else None

    def set(self, key: str, value: dict[str, Any]) -> None:
        try:
            self.redis_client.setex(self._key(key), self.ttl_sec, json.dumps(value))
        except redis.RedisError as e:
            logger.error("transcript_cache_set_failed", video_id=key, error=str(e))

    def delete(self, key: str) -> bool:
        try:
            return bool(self.redis_client.delete(self._key(key)))
        except redis.RedisError as e:
            logger.error("transcript_cache_delete_failed", video_id=key, error=str(e))
            return False

    def _keys(self) -> list[str]:
        return list(self.redis_client.scan_iter(match=f"{self.prefix}*"))

    def clear(self) -> int:
        try:
            keys = self._keys()
            return self.redis_client.delete(*keys) if keys else 0
        except redis.RedisError as e:
            logger.error("transcript_cache_clear_failed", error=str(e))
            return 0

    def stats(self) -> dict[str, Any]:
        try:
            videos = [k[len(self.prefix):] for k in self._keys()]
        except redis.RedisError as e:
            logger.error("transcript_cache_stats_failed", error=str(e))
            return {"backend": "redis", "size": 0, "videos": [], "error": str(e)}
        return {"backend": "redis", "size": len(videos), "videos": videos}


def build_transcript_cache(cache_url: str | None, ttl_sec: int) -> TranscriptCache:
    if cache_url and cache_url.startswith(("redis://", "rediss://", "unix://")):
        logger.info("transcript_cache_backend", backend="redis")
        return RedisTranscriptCache(cache_url, ttl_sec=ttl_sec)
    return MemoryTranscriptCache(ttl_sec=ttl_sec)
