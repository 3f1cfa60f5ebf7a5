# render.py
"""Rich tables and panels for printing directory results to the terminal."""

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from models import CategoryCount, DirectoryPage, DirectoryStats, FetchSource, LawyerRecord

console = Console()


def lawyer_table(lawyers: Sequence[LawyerRecord], title: str = "Lawyers") -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Firm")
    table.add_column("Practice areas")
    table.add_column("Rating", justify="right")
    table.add_column("Reviews", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Verified", justify="center")

    for l in lawyers:
        table.add_row(
            str(l.id),
            l.name,
            l.firm,
            ", ".join(l.categories),
            f"{l.rating:.1f}",
            str(l.review_count),
            f"${l.hourly_rate:,.0f}/h" if l.hourly_rate else "-",
            "✓" if l.verified else "",
        )
    return table


def source_note(page: DirectoryPage) -> str:
    """One line telling the user where results came from."""
    if page.source is FetchSource.FALLBACK:
        note = f"[yellow]Showing offline directory ({page.reason})[/yellow]"
    elif page.source is FetchSource.CACHE:
        note = "[dim]Served from cache[/dim]"
    else:
        note = "[dim]Live results[/dim]"
    if page.pagination_reset:
        note += " [yellow]- results restarted from the first page[/yellow]"
    return note


def category_table(counts: Sequence[CategoryCount]) -> Table:
    table = Table(title="Practice areas")
    table.add_column("Category")
    table.add_column("Lawyers", justify="right")
    for c in counts:
        table.add_row(c.name, str(c.count))
    return table


def profile_panel(lawyer: LawyerRecord) -> Panel:
    lines = [
        f"[bold]{lawyer.name}[/bold]  {lawyer.title}",
        lawyer.firm,
        lawyer.display_location,
        "",
        lawyer.bio,
        "",
        f"Practice areas: {', '.join(lawyer.categories) or '-'}",
        f"Languages: {', '.join(lawyer.languages) or '-'}",
        f"Experience: {lawyer.years_experience} years",
        f"Rating: {lawyer.rating:.1f} ({lawyer.review_count} reviews)",
        f"Hourly rate: ${lawyer.hourly_rate:,.0f}",
        f"Consultation: {lawyer.consultation_fee or '-'}",
        f"Verified: {'yes' if lawyer.verified else 'no'}   Tier: {lawyer.tier}",
        f"Photo: {lawyer.image_url}",
    ]
    return Panel("\n".join(lines), title=f"Lawyer {lawyer.id}")


def stats_panel(stats: DirectoryStats) -> Panel:
    lines = [
        f"Lawyers: {stats.total_lawyers} ({stats.verified_count} verified)",
        f"Average rating: {stats.average_rating:.2f}",
        f"Total reviews: {stats.total_reviews:,}",
        "Tiers: " + ", ".join(f"{k} {v}" for k, v in sorted(stats.tiers.items())),
        "Top locations: " + ", ".join(f"{loc} ({n})" for loc, n in stats.top_locations),
    ]
    return Panel("\n".join(lines), title="Directory statistics")
