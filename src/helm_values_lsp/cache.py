"""Process-wide cache of fetched chart values."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ObjectNode
    from .provider import ValueTreeProvider

logger = logging.getLogger(__name__)


class ValueCache:
    """Memo of chart reference to values tree.

    Successful fetches live for the lifetime of the process. Failures are not
    stored, so the next request for the same chart calls the provider again.
    At most one fetch per chart reference runs at a time.
    """

    def __init__(self):
        self._values: dict[str, ObjectNode] = {}
        self._lock = threading.Lock()
        self._fetch_locks: dict[str, threading.Lock] = {}

    def __contains__(self, chart_ref: str) -> bool:
        with self._lock:
            return chart_ref in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def get(self, chart_ref: str) -> ObjectNode | None:
        with self._lock:
            return self._values.get(chart_ref)

    def _fetch_lock(self, chart_ref: str) -> threading.Lock:
        with self._lock:
            return self._fetch_locks.setdefault(chart_ref, threading.Lock())

    def get_or_fetch(self, chart_ref: str, provider: ValueTreeProvider) -> ObjectNode:
        """Return the cached tree for a chart, fetching it on a miss.

        Raises:
            ValueFetchError: If the provider fails; nothing is cached
        """
        cached = self.get(chart_ref)
        if cached is not None:
            logger.debug(f"Cache hit for chart {chart_ref}")
            return cached

        with self._fetch_lock(chart_ref):
            # Another request may have filled the entry while we waited
            cached = self.get(chart_ref)
            if cached is not None:
                return cached

            logger.debug(f"Cache miss for chart {chart_ref}")
            tree = provider.fetch(chart_ref)
            with self._lock:
                self._values[chart_ref] = tree
            return tree


# Global cache instance
values_cache = ValueCache()
