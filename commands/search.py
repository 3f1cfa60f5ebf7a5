"""Substring search with optional attribute filters, sorting and paging."""

from __future__ import annotations

import logging

import shaping
from data_source import open_data_source
from render import console, lawyer_table

log = logging.getLogger(__name__)


async def run(
    term: str,
    limit: int | None = None,
    location: str | None = None,
    min_rating: float | None = None,
    max_hourly_rate: float | None = None,
    languages: list[str] | None = None,
    sort: str | None = None,
    direction: str | None = None,
    page: int = 1,
    page_size: int = 12,
    offline: bool = False,
) -> shaping.NumberedPage:
    async with open_data_source(offline=offline) as source:
        matches = await source.search_lawyers(term, limit=limit)

    matches = shaping.filter_by_attributes(
        matches,
        location=location,
        min_rating=min_rating,
        max_hourly_rate=max_hourly_rate,
        languages=languages or (),
    )
    if sort:
        matches = shaping.sort_by(matches, sort, direction)

    result = shaping.paginate_numbered(matches, page, page_size)
    log.info("Search %r: %d matches", term, result.total)

    console.print(lawyer_table(result.items, title=f"Search: {term!r}"))
    console.print(
        f"{result.total} {'lawyer' if result.total == 1 else 'lawyers'} found"
        f" - page {result.page} of {max(result.total_pages, 1)}"
    )
    return result
