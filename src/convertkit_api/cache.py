"""Per-client cache for resource lookups and fetched markup."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any


class ResourceCache:
    """Thread-safe key/value cache with explicit invalidation.

    Entries live until :meth:`invalidate` is called; there is no expiry.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, Any] = {}

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._entries.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = value

    def get_or_load(self, key: str, loader: Callable[[], Any]) -> Any:
        """Return the cached value, calling ``loader`` and storing its result on a miss.

        The loader runs outside the lock; concurrent misses may both load and the
        last write wins. Exceptions from the loader propagate and nothing is stored.
        """
        with self._lock:
            if key in self._entries:
                return self._entries[key]
        value = loader()
        self.set(key, value)
        return value

    def invalidate(self, key: str | None = None) -> None:
        """Drop one entry, or every entry when ``key`` is None."""
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)


__all__ = ["ResourceCache"]
