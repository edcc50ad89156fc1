# file_switcher/components/cache.py
"""
Bounded path cache.

Maps a source file path to its previously resolved friend path. Eviction is
strict FIFO by insertion order; reading an entry never changes that order.
"""
from typing import Dict, Iterator, Optional, Tuple


class PathCache:
    """Fixed-capacity, insertion-ordered ``str -> str`` store."""

    def __init__(self, capacity: int):
        self._entries: Dict[str, str] = {}
        self._capacity = capacity

    def _pop_oldest(self) -> None:
        if not self._entries:
            return
        oldest = next(iter(self._entries))
        del self._entries[oldest]

    def get(self, key: str) -> Optional[str]:
        """Return the cached friend path for ``key``, or None."""
        return self._entries.get(key)

    def set(self, key: str, value: str) -> None:
        """
        Insert or overwrite an entry.

        When the cache is full the single oldest entry is evicted first.
        Overwriting an existing key keeps its original position. With a
        capacity of 0 nothing is stored.
        """
        if self._capacity <= 0:
            return

        if key not in self._entries and len(self._entries) >= self._capacity:
            self._pop_oldest()

        self._entries[key] = value

    @property
    def capacity(self) -> int:
        """Maximum number of entries."""
        return self._capacity

    @capacity.setter
    def capacity(self, capacity: int) -> None:
        self._capacity = capacity
        while len(self._entries) > max(capacity, 0):
            self._pop_oldest()

    @property
    def is_disabled(self) -> bool:
        """True when caching is turned off (capacity 0)."""
        return self._capacity == 0

    def estimated_byte_size(self) -> int:
        """
        Estimate the memory held by the cache.

        Returns:
            Sum of the UTF-8 byte lengths of every key and value.
        """
        size = 0
        for key, value in self._entries.items():
            size += len(key.encode("utf-8"))
            size += len(value.encode("utf-8"))
        return size

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def items(self) -> Iterator[Tuple[str, str]]:
        """Iterate over entries, oldest first."""
        return iter(list(self._entries.items()))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
