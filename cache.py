# cache.py
"""Single-slot, time-boxed cache for the last successful remote read."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

import config
from models import LawyerRecord

logger = logging.getLogger(__name__)


def epoch_millis() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class CacheEntry:
    """Snapshot of one remote read, in remote order.

    ``categories`` is the filter the read was made with (empty means
    unfiltered) and ``complete`` is True when the remote returned fewer rows
    than asked for, i.e. the payload is every matching lawyer.
    """

    payload: tuple[LawyerRecord, ...]
    fetched_at_ms: int
    categories: frozenset[str] = frozenset()
    complete: bool = False

    def covers(self, categories: Iterable[str], offset: int, page_size: int) -> bool:
        """Can a page for this request be cut from the payload?"""
        wanted = frozenset(categories)
        if self.categories and not (wanted and wanted <= self.categories):
            return False
        if self.complete:
            return True
        return wanted == self.categories and offset + page_size <= len(self.payload)


class LawyerCache:
    """Holds at most one :class:`CacheEntry`.

    The entry is replaced wholesale on every :meth:`put` and treated as
    absent once ``now - fetched_at_ms >= duration_ms``. The clock is
    injectable so expiry can be driven from tests.
    """

    def __init__(
        self,
        duration_ms: int | None = None,
        clock: Callable[[], int] = epoch_millis,
    ) -> None:
        self.duration_ms = duration_ms if duration_ms is not None else config.CACHE_DURATION_MS
        self._clock = clock
        self._entry: Optional[CacheEntry] = None

    def get(self) -> Optional[CacheEntry]:
        """Return the live entry, or None if empty or expired."""
        entry = self._entry
        if entry is None:
            return None
        age = self._clock() - entry.fetched_at_ms
        if age >= self.duration_ms:
            logger.debug("Cache expired (age %dms >= %dms)", age, self.duration_ms)
            return None
        return entry

    def put(
        self,
        payload: Sequence[LawyerRecord],
        categories: Iterable[str] = (),
        complete: bool = False,
    ) -> CacheEntry:
        entry = CacheEntry(
            payload=tuple(payload),
            fetched_at_ms=self._clock(),
            categories=frozenset(categories),
            complete=complete,
        )
        self._entry = entry
        logger.debug("Cached %d lawyers (complete=%s)", len(entry.payload), complete)
        return entry

    def clear(self) -> None:
        self._entry = None
        logger.info("Lawyer cache cleared")

    def stats(self) -> dict:
        entry = self._entry
        if entry is None:
            return {
                "has_cache": False,
                "cache_size": 0,
                "last_fetch": "Never",
                "cache_age_seconds": None,
            }
        return {
            "has_cache": True,
            "cache_size": len(entry.payload),
            "last_fetch": datetime.fromtimestamp(entry.fetched_at_ms / 1000).strftime("%H:%M:%S"),
            "cache_age_seconds": (self._clock() - entry.fetched_at_ms) // 1000,
        }
