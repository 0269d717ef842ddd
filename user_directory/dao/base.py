"""
In-process storage primitives shared by the DAOs.

ConcurrentMap  — dict split into shards, each guarded by its own lock.
                 Every single-key operation is atomic; there is no
                 cross-key transaction and no ordering across keys.
AtomicCounter  — lock-guarded integer with fetch-and-add.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, Hashable, Iterable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

DEFAULT_SHARDS = 16


class ConcurrentMap(Generic[K, V]):

    def __init__(self, shards: int = DEFAULT_SHARDS) -> None:
        if shards < 1:
            raise ValueError("shards must be >= 1")
        self._shards: list[dict[K, V]] = [{} for _ in range(shards)]
        self._locks = [threading.Lock() for _ in range(shards)]

    def _slot(self, key: Hashable) -> int:
        return hash(key) % len(self._shards)

    # ── Single-key operations ─────────────────────────────────────────────────

    def get(self, key: K) -> V | None:
        i = self._slot(key)
        with self._locks[i]:
            return self._shards[i].get(key)

    def set(self, key: K, value: V) -> None:
        i = self._slot(key)
        with self._locks[i]:
            self._shards[i][key] = value

    def pop(self, key: K) -> V | None:
        i = self._slot(key)
        with self._locks[i]:
            return self._shards[i].pop(key, None)

    def replace(self, key: K, fn: Callable[[V], V]) -> V | None:
        """
        Atomically swap the value at ``key`` for ``fn(current)``.

        Returns the new value, or None (and calls nothing) if the key is absent.
        """
        i = self._slot(key)
        with self._locks[i]:
            shard = self._shards[i]
            if key not in shard:
                return None
            shard[key] = new = fn(shard[key])
            return new

    def __contains__(self, key: Hashable) -> bool:
        i = self._slot(key)
        with self._locks[i]:
            return key in self._shards[i]

    # ── Whole-map views ───────────────────────────────────────────────────────

    def values(self) -> list[V]:
        """Snapshot of the stored values. Each shard is copied under its own lock."""
        out: list[V] = []
        for shard, lock in zip(self._shards, self._locks):
            with lock:
                out.extend(shard.values())
        return out

    def __len__(self) -> int:
        total = 0
        for shard, lock in zip(self._shards, self._locks):
            with lock:
                total += len(shard)
        return total


class AtomicCounter:

    def __init__(self, start: int = 0) -> None:
        self._value = start
        self._lock = threading.Lock()

    def increment(self) -> int:
        """Add one and return the new value."""
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class BaseDAO(Generic[K, V]):
    """Owns one ConcurrentMap; subclasses add entity-specific operations."""

    def __init__(self, items: Iterable[tuple[K, V]] = ()) -> None:
        self._table: ConcurrentMap[K, V] = ConcurrentMap()
        for key, value in items:
            self._table.set(key, value)

    def count(self) -> int:
        return len(self._table)
