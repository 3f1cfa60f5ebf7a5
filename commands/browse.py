"""List the directory one page at a time, verified lawyers first."""

from __future__ import annotations

import logging

import config
from categories import resolve_categories
from data_source import open_data_source
from models import DirectoryPage, ListOptions
from render import console, lawyer_table, source_note

log = logging.getLogger(__name__)


async def run(
    categories: list[str] | None = None,
    page_size: int | None = None,
    page: int = 1,
    offline: bool = False,
) -> DirectoryPage:
    """Fetch and print page *page* (1-based) of the directory.

    Earlier pages are walked through their cursors, so a source switch part
    way through restarts the listing and is reported on the result.
    """
    if page < 1:
        raise ValueError("page must be >= 1")

    options = ListOptions(
        categories=resolve_categories(categories or []),
        page_size=page_size or config.DEFAULT_PAGE_SIZE,
    )

    result: DirectoryPage | None = None
    seen = 0
    async with open_data_source(offline=offline) as source:
        async for current in source.iter_pages(options):
            result = current
            seen += 1
            if seen == page or current.pagination_reset:
                break

    if seen < page and not result.pagination_reset:
        # Asked for a page past the end
        result = DirectoryPage(lawyers=[], source=result.source, reason=result.reason)
    log.info("Listed %d lawyers from %s", len(result.lawyers), result.source.value)

    title = "Lawyers"
    if options.categories:
        title += f" - {', '.join(options.categories)}"
    console.print(lawyer_table(result.lawyers, title=f"{title} (page {page})"))
    console.print(source_note(result))
    return result
