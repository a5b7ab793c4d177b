"""In-process cache for data shown on list pages.

Entries are grouped by the URL path of the page that displays them so a
mutation can mark everything under that path as stale with one call to
:meth:`ViewCache.invalidate`.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Hashable, Optional, Tuple

from flask import current_app

INVOICES_PATH = "/dashboard/invoices"


class ViewCache:
    """Path-scoped cache stored on ``app.extensions["view_cache"]``.

    At most ``max_entries`` values are kept; the oldest are evicted first.
    """

    def __init__(
        self,
        app=None,
        timeout: Optional[float] = None,
        max_entries: Optional[int] = None,
    ) -> None:
        self.timeout = timeout
        self.max_entries = max_entries
        self._entries: "OrderedDict[Tuple[str, Hashable], Tuple[float, Any]]" = OrderedDict()
        # Bumped by every invalidate so an in-flight load can tell it is stale.
        self._generation = 0
        self._lock = threading.Lock()
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        if self.timeout is None:
            self.timeout = app.config.get("VIEW_CACHE_TIMEOUT", 300)
        if self.max_entries is None:
            self.max_entries = app.config.get("VIEW_CACHE_MAX_ENTRIES", 256)
        app.extensions["view_cache"] = self

    def _expired(self, stored_at: float, now: float) -> bool:
        return bool(self.timeout) and now - stored_at >= self.timeout

    # ------------------------------------------------------------------
    def get_or_load(self, path: str, key: Hashable, loader: Callable[[], Any]) -> Any:
        """Return the cached value for ``key`` under ``path``.

        ``loader`` runs outside the lock on a miss or an expired entry. Its
        result is only stored when no invalidation happened meanwhile.
        """
        with self._lock:
            entry = self._entries.get((path, key))
            generation = self._generation
        if entry is not None:
            stored_at, value = entry
            if not self._expired(stored_at, time.monotonic()):
                return value

        value = loader()
        with self._lock:
            if generation == self._generation:
                self._store((path, key), value)
        return value

    def _store(self, cache_key: Tuple[str, Hashable], value: Any) -> None:
        now = time.monotonic()
        self._entries.pop(cache_key, None)
        for stale in [k for k, (stored_at, _) in self._entries.items() if self._expired(stored_at, now)]:
            del self._entries[stale]
        if self.max_entries:
            while len(self._entries) >= self.max_entries:
                self._entries.popitem(last=False)
        self._entries[cache_key] = (now, value)

    def invalidate(self, path: str) -> None:
        """Drop every entry stored under ``path`` or one of its sub-paths."""
        prefix = path.rstrip("/") + "/"
        with self._lock:
            self._generation += 1
            for cached_path, key in list(self._entries):
                if cached_path == path or cached_path.startswith(prefix):
                    del self._entries[(cached_path, key)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, path: str) -> bool:
        with self._lock:
            return any(cached_path == path for cached_path, _ in self._entries)


def get_view_cache() -> ViewCache:
    """Return the cache bound to the current application."""
    app = current_app._get_current_object()
    cache = app.extensions.get("view_cache")
    if cache is None:
        cache = ViewCache(app)
    return cache


def revalidate_path(path: str) -> None:
    """Mark cached data for ``path`` as stale."""
    get_view_cache().invalidate(path)
