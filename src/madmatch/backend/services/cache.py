"""Thread-safe in-memory cache with per-entry expiry."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Any, Callable, Generic, TypeVar

V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """Cached value together with its storage and expiry timestamps."""

    value: V
    stored_at: datetime
    expires_at: datetime

    def is_expired(self, *, now: datetime) -> bool:
        return now >= self.expires_at

    def age(self, *, now: datetime) -> timedelta:
        return now - self.stored_at


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    keys: int

    def as_dict(self) -> dict[str, int]:
        return {"hits": self.hits, "misses": self.misses, "keys": self.keys}


class TTLCache:
    """Key/value store whose entries expire after a configurable lifetime."""

    def __init__(
        self,
        *,
        ttl_seconds: int = 3600,
        max_items: int | None = 256,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_items is not None and max_items <= 0:
            raise ValueError("max_items must be positive when provided")

        self._ttl = timedelta(seconds=ttl_seconds)
        self._max_items = max_items
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._entries: "OrderedDict[str, CacheEntry[Any]]" = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._lock = Lock()

    def _cleanup_locked(self, now: datetime) -> None:
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now=now)]
        for key in expired:
            self._entries.pop(key, None)

        if self._max_items is not None:
            while len(self._entries) > self._max_items:
                self._entries.popitem(last=False)

    def set(self, key: str, value: Any, *, ttl_seconds: int | None = None) -> CacheEntry[Any]:
        now = self._clock()
        ttl = timedelta(seconds=ttl_seconds) if ttl_seconds is not None else self._ttl
        entry = CacheEntry(value=value, stored_at=now, expires_at=now + ttl)
        with self._lock:
            self._entries[key] = entry
            self._entries.move_to_end(key)
            self._cleanup_locked(now)
        return entry

    def get_entry(self, key: str) -> CacheEntry[Any] | None:
        """Return the live entry for ``key`` or ``None`` when absent or expired."""

        now = self._clock()
        with self._lock:
            self._cleanup_locked(now)
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            return entry

    def get(self, key: str, default: Any = None) -> Any:
        entry = self.get_entry(key)
        return default if entry is None else entry.value

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def keys(self) -> list[str]:
        now = self._clock()
        with self._lock:
            self._cleanup_locked(now)
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> CacheStats:
        now = self._clock()
        with self._lock:
            self._cleanup_locked(now)
            return CacheStats(hits=self._hits, misses=self._misses, keys=len(self._entries))

    def now(self) -> datetime:
        return self._clock()


__all__ = ["CacheEntry", "CacheStats", "TTLCache"]
