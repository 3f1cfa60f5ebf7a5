"""Directory-wide views: category counts, statistics, featured lawyers."""

from __future__ import annotations

from data_source import open_data_source
from models import CategoryCount, DirectoryStats, LawyerRecord
from render import category_table, console, lawyer_table, stats_panel


async def run_categories(offline: bool = False) -> list[CategoryCount]:
    async with open_data_source(offline=offline) as source:
        counts = await source.list_categories_with_counts()
    console.print(category_table(counts))
    return counts


async def run_stats(offline: bool = False) -> DirectoryStats:
    async with open_data_source(offline=offline) as source:
        stats = await source.get_directory_stats()
    console.print(stats_panel(stats))
    console.print(category_table(stats.categories))
    return stats


async def run_featured(count: int | None = None, offline: bool = False) -> list[LawyerRecord]:
    async with open_data_source(offline=offline) as source:
        lawyers = await source.get_featured_lawyers(count)
    console.print(lawyer_table(lawyers, title="Featured lawyers"))
    return lawyers
