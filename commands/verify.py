"""Run LSA format checks over some or all lawyers (admin review queue)."""

from __future__ import annotations

import json
import logging

from rich.table import Table

from data_source import open_data_source
from render import console
from verification import VerificationResult, check_lawyers

log = logging.getLogger(__name__)


async def run(
    lawyer_ids: list[str] | None = None,
    output_path: str | None = None,
    offline: bool = False,
) -> list[VerificationResult]:
    """Check the given lawyers (default: the whole directory).

    Unknown ids are logged and skipped. With *output_path* the results are
    also written as JSON.
    """
    async with open_data_source(offline=offline) as source:
        if lawyer_ids:
            lawyers = []
            for lawyer_id in lawyer_ids:
                lawyer = await source.get_lawyer_by_id(lawyer_id)
                if lawyer is None:
                    log.warning("Lawyer %s not found, skipping", lawyer_id)
                    continue
                lawyers.append(lawyer)
        else:
            lawyers = await source.list_all_lawyers()

    results = check_lawyers(lawyers)

    table = Table(title="LSA verification")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("LSA id")
    table.add_column("Format ok", justify="center")
    table.add_column("Name ok", justify="center")
    table.add_column("Status")
    for r in results:
        table.add_row(
            r.lawyer_id,
            r.name,
            r.lsa_id or "-",
            "✓" if r.lsa_format_valid else "✗",
            "✓" if r.name_match else "✗",
            r.status,
        )
    console.print(table)

    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump([r.to_dict() for r in results], f, indent=2)
        log.info("Wrote %d verification results to %s", len(results), output_path)
    return results
