# ABOUTME: Fixed-capacity in-memory cache used by the ephemeris calculations
# ABOUTME: Evicts the oldest inserted entry once the size cap is exceeded

from typing import Any, Callable, Hashable, Optional


class CacheManager:
    """
    Bounded memo cache.

    Entries are kept in insertion order. When a new entry pushes the cache
    past max_entries, the oldest inserted entry is dropped. Reads do not
    refresh an entry's position.
    """

    def __init__(self, max_entries: int = 100):
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self.max_entries = max_entries
        self._entries: dict = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable) -> Optional[Any]:
        """Return the cached value, or None if the key is not cached."""
        if key in self._entries:
            self.hits += 1
            return self._entries[key]
        self.misses += 1
        return None

    def set(self, key: Hashable, value: Any) -> None:
        """
        Store a value, evicting the oldest entry if over capacity.

        Re-setting an existing key replaces its value in place.
        """
        self._entries[key] = value

        while len(self._entries) > self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        """Return the cached value for key, computing and storing it on a miss."""
        if key in self._entries:
            self.hits += 1
            return self._entries[key]

        self.misses += 1
        value = compute()
        self.set(key, value)
        return value

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Clear all entries and counters."""
        self._entries = {}
        self.hits = 0
        self.misses = 0
