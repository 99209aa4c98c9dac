"""Bounded LRU cache of file contents.

Reference scans read the same scene and prefab files once per asset being
checked; this cache keeps their text in memory between lookups. It is
bounded both by entry count and by an approximate memory estimate of two
bytes per character.
"""

from collections import OrderedDict
from pathlib import Path
from typing import Any

from .constants import DEFAULT_CACHE_MAX_BYTES, DEFAULT_CACHE_MAX_ENTRIES

BYTES_PER_CHAR = 2


def estimate_size(content: str) -> int:
    """Approximate in-memory size of a string in bytes."""
    return len(content) * BYTES_PER_CHAR


class ContentCache:
    """Least-recently-used map of file path to file text.

    Both ``get`` and ``put`` refresh an entry's recency. Eviction runs
    before insertion until the entry count is below ``max_entries`` and the
    incoming content fits under ``max_bytes``.

    Example:
        >>> cache = ContentCache(max_entries=2)
        >>> cache.put(Path("a.prefab"), "...")
        >>> cache.get(Path("a.prefab"))
        '...'
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
        max_bytes: int = DEFAULT_CACHE_MAX_BYTES,
    ):
        self.max_entries = max_entries
        self.max_bytes = max_bytes
        self._entries: OrderedDict[Path, str] = OrderedDict()
        self._estimated_bytes = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    @property
    def estimated_bytes(self) -> int:
        return self._estimated_bytes

    def get(self, path: Path) -> str | None:
        """Return cached content and mark it most recently used."""
        content = self._entries.get(path)
        if content is not None:
            self._entries.move_to_end(path)
        return content

    def put(self, path: Path, content: str) -> None:
        """Insert or replace content, evicting old entries as needed.

        Content larger than ``max_bytes`` on its own is not cached.
        """
        if path in self._entries:
            self._estimated_bytes -= estimate_size(self._entries.pop(path))

        incoming = estimate_size(content)
        if incoming > self.max_bytes or self.max_entries < 1:
            return

        while len(self._entries) >= self.max_entries:
            self._evict_oldest()

        while self._entries and self._estimated_bytes + incoming > self.max_bytes:
            self._evict_oldest()

        self._entries[path] = content
        self._estimated_bytes += incoming

    def clear(self) -> None:
        self._entries.clear()
        self._estimated_bytes = 0

    def stats(self) -> dict[str, Any]:
        """Entry count and memory use (MiB) against their limits."""
        mib = 1024 * 1024
        return {
            "size": len(self._entries),
            "max_size": self.max_entries,
            "memory": round(self._estimated_bytes / mib),
            "max_memory": round(self.max_bytes / mib),
        }

    def _evict_oldest(self) -> None:
        _, content = self._entries.popitem(last=False)
        self._estimated_bytes -= estimate_size(content)
