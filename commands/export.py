"""Export the whole directory to CSV or JSON."""

import csv
import json
import logging
import os
from datetime import datetime

import config
from categories import resolve_categories
from data_source import open_data_source
from models import LawyerRecord, ListOptions
from progress import PageProgress, is_progress_enabled

log = logging.getLogger(__name__)

FORMATS = ("csv", "json")


def dedupe(lawyers: list[LawyerRecord]) -> list[LawyerRecord]:
    """Drop repeated ids, keeping the first occurrence."""
    seen = set()
    unique = []
    for lawyer in lawyers:
        key = str(lawyer.id)
        if key in seen:
            continue
        seen.add(key)
        unique.append(lawyer)
    return unique


def write_csv(lawyers: list[LawyerRecord], path: str) -> None:
    with open(path, "w", newline="", encoding=config.CSV_ENCODING) as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL)
        writer.writerow(LawyerRecord.csv_headers())
        for lawyer in lawyers:
            writer.writerow(lawyer.to_csv_row())


def write_json(lawyers: list[LawyerRecord], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump([l.to_dict() for l in lawyers], f, indent=2, ensure_ascii=False)


async def collect(
    categories: list[str] | None = None,
    page_size: int | None = None,
    offline: bool = False,
) -> list[LawyerRecord]:
    """Walk every page of the directory and return the lawyers in order."""
    options = ListOptions(
        categories=resolve_categories(categories or []),
        page_size=page_size or config.DEFAULT_PAGE_SIZE,
        use_cache=False,
    )
    lawyers: list[LawyerRecord] = []
    progress = PageProgress("Exporting") if is_progress_enabled() else None
    if progress:
        progress.start()
    try:
        async with open_data_source(offline=offline) as source:
            async for page in source.iter_pages(options):
                if page.pagination_reset:
                    # Source switched mid-way: keep only the restarted sequence
                    log.warning("Directory source changed during export; restarting")
                    lawyers = []
                lawyers.extend(page.lawyers)
                if progress:
                    progress.page_read(len(page.lawyers), page.source.value)
    finally:
        if progress:
            progress.stop()
    return dedupe(lawyers)


async def run(
    output_dir: str | None = None,
    fmt: str = "csv",
    categories: list[str] | None = None,
    offline: bool = False,
) -> str:
    """Export lawyers to a timestamped file and return its path.

    Args:
        output_dir: Directory for the file. Falls back to config.OUTPUT_DIR.
        fmt: "csv" or "json".
        categories: Optional practice areas (names or slugs) to restrict to.
        offline: Skip Firestore and export the static directory.
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unknown export format {fmt!r}; expected one of {FORMATS}")

    lawyers = await collect(categories=categories, offline=offline)

    if not output_dir:
        output_dir = config.OUTPUT_DIR
    os.makedirs(output_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    path = os.path.join(output_dir, f"lawyers_{timestamp}.{fmt}")

    if fmt == "csv":
        write_csv(lawyers, path)
    else:
        write_json(lawyers, path)

    log.info(f"Exported {len(lawyers)} lawyers to {path}")
    return path
