"""Show one lawyer's profile and similar lawyers."""

from __future__ import annotations

import logging

from data_source import open_data_source
from models import LawyerLookup
from render import console, lawyer_table, profile_panel

log = logging.getLogger(__name__)


async def run(lawyer_id: str, similar: bool = True, offline: bool = False) -> LawyerLookup:
    async with open_data_source(offline=offline) as source:
        lookup = await source.fetch_lawyer(lawyer_id)
        peers = []
        if lookup.found and similar:
            peers = await source.get_similar_lawyers(lawyer_id)

    if not lookup.found:
        log.warning("Lawyer %s not found", lawyer_id)
        console.print(f"[red]No lawyer with id {lawyer_id}[/red]")
        return lookup

    console.print(profile_panel(lookup.lawyer))
    if lookup.source is not None:
        console.print(f"[dim]Source: {lookup.source.value}[/dim]")
    if peers:
        console.print(lawyer_table(peers, title="Similar lawyers"))
    return lookup
