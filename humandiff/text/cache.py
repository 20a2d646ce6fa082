"""Caller-side memoization for diff results.

The alignment engine is a pure function with no cache of its own. Callers
that redraw the same comparison repeatedly wrap it in a DiffCache, which
recomputes only when the (original, transformed) pair changes.
"""

import threading
from collections import OrderedDict
from typing import Callable, Hashable, List, Optional

from humandiff.text.diff import Segment, compute_diff


def default_key(original: str, transformed: str) -> Hashable:
    """Key a comparison by the exact pair of strings."""
    return (original, transformed)


class DiffCache:
    """Least-recently-used memo around a diff function.

    With the default maxsize of 1 the cache holds only the latest pair, so any
    change to either string triggers a recomputation.

    Attributes:
        hits: Number of lookups served from the cache
        misses: Number of lookups that ran the compute function
    """

    def __init__(
        self,
        compute: Callable[[str, str], List[Segment]] = compute_diff,
        key: Callable[[str, str], Hashable] = default_key,
        maxsize: int = 1,
    ):
        """Initialize the cache.

        Args:
            compute: Function producing segments for an (original, transformed) pair
            key: Function deriving the cache key from the pair
            maxsize: Maximum number of cached pairs (at least 1)

        Raises:
            ValueError: If maxsize is less than 1
        """
        if maxsize < 1:
            raise ValueError(f"maxsize must be at least 1, got {maxsize}")
        self.compute = compute
        self.key = key
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        self._entries: "OrderedDict[Hashable, List[Segment]]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, original: str, transformed: str) -> List[Segment]:
        """Return segments for the pair, computing them on a miss.

        Callers receive a new list each time, so mutating it does not affect
        the cached entry.
        """
        cache_key = self.key(original, transformed)
        with self._lock:
            if cache_key in self._entries:
                self._entries.move_to_end(cache_key)
                self.hits += 1
                return list(self._entries[cache_key])

        segments = self.compute(original, transformed)

        with self._lock:
            self.misses += 1
            self._entries[cache_key] = segments
            self._entries.move_to_end(cache_key)
            while len(self._entries) > self.maxsize:
                self._entries.popitem(last=False)
        return list(segments)

    def invalidate(
        self, original: Optional[str] = None, transformed: Optional[str] = None
    ) -> None:
        """Drop a single pair, or everything when no pair is given."""
        with self._lock:
            if original is None and transformed is None:
                self._entries.clear()
                return
            self._entries.pop(self.key(original or "", transformed or ""), None)
