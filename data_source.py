# data_source.py
"""Hybrid lawyer data source: Firestore first, static dataset second.

Every read tries the remote store (through a :class:`RemoteReader`) and
silently falls back to the in-process dataset when the remote raises, times
out or comes back empty. Successful first-page reads are kept in a
short-lived :class:`LawyerCache` so repeat visits skip the network.

Callers that only want lawyers use :meth:`HybridDataSource.list_lawyers`.
Callers that need to tell "service down" from "no matches" use
:meth:`HybridDataSource.fetch_lawyers`, whose :class:`DirectoryPage` records
the source and the fallback reason.

Usage:
    async with FirestoreClient() as remote:
        source = HybridDataSource(remote)
        lawyers = await source.list_lawyers(categories=["Family Law"])
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import AsyncIterator, Awaitable, Optional, Sequence, TypeVar

import config
import shaping
from cache import LawyerCache
from models import (
    CategoryCount,
    DirectoryPage,
    DirectoryStats,
    FetchSource,
    LawyerId,
    LawyerLookup,
    LawyerRecord,
    ListOptions,
    PageCursor,
)
from remote_client import RemoteReader

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HybridDataSource:
    """Read-only lawyer directory with remote/fallback/cache semantics.

    Args:
        remote: Remote reader, or None to always serve the fallback.
        fallback: Static records; defaults to ``fallback_data.FALLBACK_LAWYERS``.
        cache: Cache slot; a fresh :class:`LawyerCache` when omitted.
        timeout: Seconds before a remote read counts as failed.
    """

    def __init__(
        self,
        remote: Optional[RemoteReader] = None,
        fallback: Optional[Sequence[LawyerRecord]] = None,
        cache: Optional[LawyerCache] = None,
        timeout: float | None = None,
    ) -> None:
        if fallback is None:
            from fallback_data import FALLBACK_LAWYERS

            fallback = FALLBACK_LAWYERS
        self._remote = remote
        self._fallback = tuple(fallback)
        self._cache = cache if cache is not None else LawyerCache()
        self._timeout = timeout if timeout is not None else config.REMOTE_TIMEOUT

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    async def list_lawyers(
        self, options: Optional[ListOptions] = None, **kwargs
    ) -> list[LawyerRecord]:
        """Return one page of lawyers, verified first then by rating.

        Accepts a :class:`ListOptions` or its fields as keyword arguments.
        Never raises on remote failure; an empty list may mean "no matches"
        or "nothing available".
        """
        page = await self.fetch_lawyers(options, **kwargs)
        return page.lawyers

    async def fetch_lawyers(
        self, options: Optional[ListOptions] = None, **kwargs
    ) -> DirectoryPage:
        """Like :meth:`list_lawyers` but report where the page came from."""
        if options is None:
            options = ListOptions(**kwargs)
        elif kwargs:
            options = replace(options, **kwargs)

        cursor = options.cursor
        remote_cursor = cursor is None or cursor.source is not FetchSource.FALLBACK
        offset = cursor.offset if cursor is not None and remote_cursor else 0

        if options.use_cache and remote_cursor:
            entry = self._cache.get()
            if entry is not None and entry.covers(options.categories, offset, options.page_size):
                logger.debug("Serving lawyers from cache")
                return self._memory_page(
                    entry.payload, options, offset, FetchSource.CACHE, entry.complete
                )

        if self._remote is None:
            return self._fallback_page(options, "remote not configured")

        reset = not remote_cursor
        if reset:
            logger.info("Fallback cursor presented to remote read; restarting pagination")

        try:
            lawyers, rows_read = await self._bounded(
                self._remote.query_lawyers(options.categories, options.page_size, offset)
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Remote lawyer query timed out after %.1fs, using static fallback",
                self._timeout,
            )
            return self._fallback_page(options, "timeout")
        except Exception as exc:
            logger.warning("Remote lawyer query failed, using static fallback: %s", exc)
            return self._fallback_page(options, f"error: {exc}")

        if not lawyers and (offset == 0 or rows_read == 0):
            if offset:
                # Ran off the end of a remote sequence
                return DirectoryPage(lawyers=[], source=FetchSource.REMOTE)
            logger.info("Remote store has no usable lawyers, using static fallback")
            return self._fallback_page(options, "empty")

        # Paging follows remote positions, which include skipped documents
        complete = rows_read < options.page_size
        if offset == 0 and (complete or len(lawyers) == rows_read):
            self._cache.put(lawyers, categories=options.categories, complete=complete)

        next_cursor = None
        if not complete:
            next_cursor = PageCursor(FetchSource.REMOTE, offset=offset + rows_read)
        return DirectoryPage(
            lawyers=shaping.order_for_directory(lawyers),
            source=FetchSource.REMOTE,
            next_cursor=next_cursor,
            pagination_reset=reset,
        )

    async def iter_pages(
        self, options: Optional[ListOptions] = None, max_pages: int | None = None
    ) -> AsyncIterator[DirectoryPage]:
        """Yield successive pages until the directory is exhausted.

        Stops early (after yielding it) on a page whose pagination was reset
        by a source switch, since continuing would repeat records.
        """
        options = options or ListOptions()
        max_pages = max_pages or config.MAX_PAGES
        cursor = options.cursor

        for page_num in range(1, max_pages + 1):
            page = await self.fetch_lawyers(replace(options, cursor=cursor))
            yield page
            if page.pagination_reset and page_num > 1:
                logger.warning("Source switched on page %d; stopping iteration", page_num)
                return
            if page.next_cursor is None:
                return
            cursor = page.next_cursor

        logger.warning("Reached MAX_PAGES (%d), stopping iteration", max_pages)

    # ------------------------------------------------------------------
    # Single lawyer
    # ------------------------------------------------------------------

    async def get_lawyer_by_id(self, lawyer_id: LawyerId) -> Optional[LawyerRecord]:
        """Return the lawyer, or None if neither source has it."""
        lookup = await self.fetch_lawyer(lawyer_id)
        return lookup.lawyer

    async def fetch_lawyer(self, lawyer_id: LawyerId) -> LawyerLookup:
        if self._remote is not None:
            try:
                lawyer = await self._bounded(self._remote.get_lawyer(lawyer_id))
            except asyncio.TimeoutError:
                logger.warning("Remote read of lawyer %s timed out", lawyer_id)
            except Exception as exc:
                logger.warning("Remote read of lawyer %s failed: %s", lawyer_id, exc)
            else:
                if lawyer is not None:
                    return LawyerLookup(lawyer=lawyer, source=FetchSource.REMOTE)
                logger.debug("Lawyer %s not in remote store, checking static data", lawyer_id)

        wanted = str(lawyer_id)
        for lawyer in self._fallback:
            if str(lawyer.id) == wanted:
                return LawyerLookup(lawyer=lawyer, source=FetchSource.FALLBACK)
        return LawyerLookup(lawyer=None)

    async def get_similar_lawyers(
        self, lawyer_id: LawyerId, limit: int | None = None
    ) -> list[LawyerRecord]:
        """Lawyers sharing a practice area with *lawyer_id*, best rated first."""
        if limit is None:
            limit = config.SIMILAR_COUNT
        target = await self.get_lawyer_by_id(lawyer_id)
        if target is None or not target.categories:
            return []
        peers = shaping.filter_by_categories(await self.list_all_lawyers(), target.categories)
        peers = [l for l in peers if str(l.id) != str(target.id)]
        return shaping.sort_by(peers, "rating")[:limit]

    # ------------------------------------------------------------------
    # Whole-directory views
    # ------------------------------------------------------------------

    async def list_all_lawyers(self) -> list[LawyerRecord]:
        """Every lawyer, walked page by page in FULL_LIST_PAGE_SIZE reads."""
        lawyers: list[LawyerRecord] = []
        options = ListOptions(page_size=config.FULL_LIST_PAGE_SIZE)
        async for page in self.iter_pages(options):
            if page.pagination_reset:
                # Source switched: the restarted sequence replaces what we had
                lawyers = []
            lawyers.extend(page.lawyers)
        return lawyers

    async def list_categories_with_counts(self) -> list[CategoryCount]:
        """Category tag counts; highest first, ties by name."""
        return shaping.count_categories(await self.list_all_lawyers())

    async def search_lawyers(self, term: str, limit: int | None = None) -> list[LawyerRecord]:
        """Substring search over the full list, at most *limit* results."""
        if limit is None:
            limit = config.DEFAULT_SEARCH_LIMIT
        matches = shaping.filter_by_search_term(await self.list_all_lawyers(), term)
        return matches[:limit]

    async def get_featured_lawyers(self, count: int | None = None) -> list[LawyerRecord]:
        """Top-rated verified lawyers for the home page."""
        if count is None:
            count = config.FEATURED_COUNT
        if count <= 0:
            return []
        if self._remote is not None:
            try:
                lawyers = await self._bounded(self._remote.query_featured(count))
            except asyncio.TimeoutError:
                logger.warning("Featured lawyers query timed out, using static fallback")
            except Exception as exc:
                logger.warning("Featured lawyers query failed, using static fallback: %s", exc)
            else:
                if lawyers:
                    return shaping.sort_by(lawyers, "rating")[:count]
                logger.info("No featured lawyers in remote store, using static fallback")

        verified = [l for l in self._fallback if l.verified]
        verified.sort(key=lambda l: (not l.featured, -l.rating))
        return verified[:count]

    async def get_directory_stats(self) -> DirectoryStats:
        lawyers = await self.list_all_lawyers()
        total = len(lawyers)
        locations = Counter(l.display_location or "Unknown" for l in lawyers)
        return DirectoryStats(
            total_lawyers=total,
            verified_count=sum(1 for l in lawyers if l.verified),
            average_rating=round(sum(l.rating for l in lawyers) / total, 2) if total else 0.0,
            total_reviews=sum(l.review_count for l in lawyers),
            categories=shaping.count_categories(lawyers),
            tiers=dict(Counter(l.tier or "unknown" for l in lawyers)),
            top_locations=locations.most_common(10),
        )

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_stats(self) -> dict:
        return self._cache.stats()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _bounded(self, awaitable: Awaitable[T]) -> T:
        return await asyncio.wait_for(awaitable, timeout=self._timeout)

    def _memory_page(
        self,
        lawyers: Sequence[LawyerRecord],
        options: ListOptions,
        offset: int,
        source: FetchSource,
        complete: bool,
    ) -> DirectoryPage:
        ordered = shaping.order_for_directory(
            shaping.filter_by_categories(lawyers, options.categories)
        )
        window = shaping.paginate(ordered, options.page_size, offset)
        end = offset + len(window)
        next_cursor = None
        if end < len(ordered) or (not complete and len(window) == options.page_size):
            next_cursor = PageCursor(FetchSource.REMOTE, offset=end)
        return DirectoryPage(lawyers=window, source=source, next_cursor=next_cursor)

    def _fallback_page(self, options: ListOptions, reason: str) -> DirectoryPage:
        ordered = shaping.order_for_directory(
            shaping.filter_by_categories(self._fallback, options.categories)
        )

        cursor = options.cursor
        start = 0
        reset = False
        if cursor is not None:
            if cursor.source is FetchSource.FALLBACK:
                ids = [str(l.id) for l in ordered]
                try:
                    start = ids.index(str(cursor.after_id)) + 1
                except ValueError:
                    logger.info("Cursor record %s no longer present; restarting", cursor.after_id)
                    reset = True
            else:
                logger.info("Remote cursor presented to static fallback; restarting pagination")
                reset = True

        window = shaping.paginate(ordered, options.page_size, start)
        next_cursor = None
        if window and start + len(window) < len(ordered):
            next_cursor = PageCursor(FetchSource.FALLBACK, after_id=window[-1].id)

        return DirectoryPage(
            lawyers=window,
            source=FetchSource.FALLBACK,
            reason=reason,
            next_cursor=next_cursor,
            pagination_reset=reset,
        )


@asynccontextmanager
async def open_data_source(
    offline: bool = False, cache: Optional[LawyerCache] = None
) -> AsyncIterator[HybridDataSource]:
    """Yield a data source wired to Firestore when a project is configured.

    With ``offline`` or no ``FIRESTORE_PROJECT_ID`` the source serves the
    static dataset only.
    """
    if offline or not config.FIRESTORE_PROJECT_ID:
        if not offline:
            logger.info("FIRESTORE_PROJECT_ID not set; serving static directory")
        yield HybridDataSource(None, cache=cache)
        return

    from remote_client import FirestoreClient

    async with FirestoreClient() as remote:
        yield HybridDataSource(remote, cache=cache)
