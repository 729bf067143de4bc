"""Thread-safe in-process lookup cache."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LookupCache(Generic[K, V]):
    """Key/value cache safe for concurrent reads and writes.

    ``warm`` loads every missing key with a single call to the loader, so
    callers can resolve a whole batch of ids up front instead of one at a
    time. Keys the loader does not return stay missing.
    """

    def __init__(self, name: str = "lookup") -> None:
        self.name = name
        self._items: dict[K, V] = {}
        self._lock = threading.RLock()
        self.hits = 0
        self.misses = 0

    def get(self, key: K) -> V | None:
        with self._lock:
            if key in self._items:
                self.hits += 1
                return self._items[key]
            self.misses += 1
        logger.warning("%s cache miss for %s", self.name, key)
        return None

    def get_many(self, keys: Iterable[K]) -> dict[K, V]:
        """Cached values for ``keys``; missing keys are omitted."""
        with self._lock:
            return {key: self._items[key] for key in keys if key in self._items}

    def put(self, key: K, value: V) -> None:
        with self._lock:
            self._items[key] = value

    def put_many(self, items: Mapping[K, V]) -> None:
        with self._lock:
            self._items.update(items)

    def invalidate(self, key: K) -> None:
        with self._lock:
            self._items.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
            self.hits = 0
            self.misses = 0

    def warm(
        self, keys: Iterable[K], loader: Callable[[set[K]], Mapping[K, V]]
    ) -> dict[K, V]:
        """Load missing ``keys`` in one batch and return all cached values for them."""
        wanted = set(keys)
        with self._lock:
            missing = {key for key in wanted if key not in self._items}

        if missing:
            loaded = loader(missing)
            not_found = missing - set(loaded)
            if not_found:
                logger.warning(
                    "%s cache warm: %d of %d ids not found",
                    self.name,
                    len(not_found),
                    len(missing),
                )
            self.put_many({key: value for key, value in loaded.items() if key in missing})

        return self.get_many(wanted)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
