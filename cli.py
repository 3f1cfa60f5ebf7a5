#!/usr/bin/env python3
# cli.py
"""CLI for the Calgary lawyer directory data layer.

Subcommands:

    list        - Browse the directory, verified lawyers first
    search      - Substring search with optional filters
    show        - One lawyer's profile and similar lawyers
    categories  - Practice areas with lawyer counts
    stats       - Directory statistics
    featured    - Featured lawyers for the home page
    export      - Write the whole directory to CSV or JSON
    verify      - LSA format checks for the admin review queue

Every command reads Firestore when FIRESTORE_PROJECT_ID is set and falls
back to the built-in directory otherwise (or with --offline).

Usage examples:
    python cli.py list --categories family-law --page 2
    python cli.py search corporate --min-rating 4.5 --sort hourly_rate
    python cli.py show 3
    python cli.py --offline export -o output/ --format json
    python cli.py -v verify 1 2 5
"""

from __future__ import annotations

import argparse
import asyncio
import os

from log_setup import setup_logging


def _split(value: str | None) -> list[str] | None:
    if not value:
        return None
    return [s.strip() for s in value.split(",") if s.strip()]


# ---------------------------------------------------------------------------
# Subcommand handlers (lazy imports to keep startup fast)
# ---------------------------------------------------------------------------


def cmd_list(args: argparse.Namespace) -> None:
    """Print one page of the directory."""
    setup_logging(verbose=args.verbose, command_name="list")

    from commands import browse

    if args.page < 1:
        print("Error: --page must be >= 1")
        raise SystemExit(1)
    if args.page_size is not None and args.page_size < 1:
        print("Error: --page-size must be >= 1")
        raise SystemExit(1)

    asyncio.run(
        browse.run(
            categories=_split(args.categories),
            page_size=args.page_size,
            page=args.page,
            offline=args.offline,
        )
    )


def cmd_search(args: argparse.Namespace) -> None:
    """Search by name, firm, bio or practice area."""
    setup_logging(verbose=args.verbose, command_name="search")

    from commands import search

    if args.page < 1 or args.page_size < 1:
        print("Error: --page and --page-size must be >= 1")
        raise SystemExit(1)

    asyncio.run(
        search.run(
            args.term,
            limit=args.limit,
            location=args.location,
            min_rating=args.min_rating,
            max_hourly_rate=args.max_rate,
            languages=_split(args.languages),
            sort=args.sort,
            direction=args.direction,
            page=args.page,
            page_size=args.page_size,
            offline=args.offline,
        )
    )


def cmd_show(args: argparse.Namespace) -> None:
    """Print a lawyer profile."""
    setup_logging(verbose=args.verbose, command_name="show")

    from commands import profile

    lookup = asyncio.run(
        profile.run(args.lawyer_id, similar=not args.no_similar, offline=args.offline)
    )
    if not lookup.found:
        raise SystemExit(1)


def cmd_categories(args: argparse.Namespace) -> None:
    setup_logging(verbose=args.verbose, command_name="categories")

    from commands import summary

    asyncio.run(summary.run_categories(offline=args.offline))


def cmd_stats(args: argparse.Namespace) -> None:
    setup_logging(verbose=args.verbose, command_name="stats")

    from commands import summary

    asyncio.run(summary.run_stats(offline=args.offline))


def cmd_featured(args: argparse.Namespace) -> None:
    setup_logging(verbose=args.verbose, command_name="featured")

    from commands import summary

    asyncio.run(summary.run_featured(count=args.count, offline=args.offline))


def cmd_export(args: argparse.Namespace) -> None:
    """Export the directory and print the output path."""
    from progress import is_progress_enabled

    use_progress = is_progress_enabled()
    setup_logging(
        verbose=args.verbose,
        data_dir=args.output,
        command_name="export",
        use_rich=use_progress,
        quiet_console=use_progress,
    )

    from commands import export

    result = asyncio.run(
        export.run(
            args.output,
            fmt=args.format,
            categories=_split(args.categories),
            offline=args.offline,
        )
    )
    print(f"Output: {result}")


def cmd_verify(args: argparse.Namespace) -> None:
    """Run LSA checks and optionally write them to JSON."""
    data_dir = os.path.dirname(args.output) if args.output else None
    setup_logging(verbose=args.verbose, data_dir=data_dir, command_name="verify")

    from commands import verify

    asyncio.run(
        verify.run(args.lawyer_ids or None, output_path=args.output, offline=args.offline)
    )


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cli.py",
        description="Calgary lawyer directory CLI",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable verbose (DEBUG) logging",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        default=False,
        help="Skip Firestore and use the built-in directory",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # -- list --
    sp_list = subparsers.add_parser("list", help="Browse the directory")
    sp_list.add_argument(
        "--categories",
        default=None,
        help='Comma-separated practice areas or slugs (e.g. "family-law,real-estate")',
    )
    sp_list.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    sp_list.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Lawyers per page (default: 50)",
    )
    sp_list.set_defaults(func=cmd_list)

    # -- search --
    sp_search = subparsers.add_parser("search", help="Search lawyers")
    sp_search.add_argument("term", help="Text to look for in name, firm, bio or practice area")
    sp_search.add_argument("--limit", type=int, default=None, help="Max matches (default: 50)")
    sp_search.add_argument("--location", default=None, help="City or province code")
    sp_search.add_argument("--min-rating", type=float, default=None)
    sp_search.add_argument("--max-rate", type=float, default=None, help="Max hourly rate")
    sp_search.add_argument("--languages", default=None, help="Comma-separated languages")
    sp_search.add_argument(
        "--sort",
        default=None,
        help="rating, name, review_count, years_experience or hourly_rate",
    )
    sp_search.add_argument("--direction", choices=("asc", "desc"), default=None)
    sp_search.add_argument("--page", type=int, default=1)
    sp_search.add_argument("--page-size", type=int, default=12)
    sp_search.set_defaults(func=cmd_search)

    # -- show --
    sp_show = subparsers.add_parser("show", help="Show a lawyer profile")
    sp_show.add_argument("lawyer_id", help="Lawyer id")
    sp_show.add_argument(
        "--no-similar",
        action="store_true",
        default=False,
        help="Do not list similar lawyers",
    )
    sp_show.set_defaults(func=cmd_show)

    # -- categories / stats / featured --
    sp_cat = subparsers.add_parser("categories", help="Practice areas with counts")
    sp_cat.set_defaults(func=cmd_categories)

    sp_stats = subparsers.add_parser("stats", help="Directory statistics")
    sp_stats.set_defaults(func=cmd_stats)

    sp_feat = subparsers.add_parser("featured", help="Featured lawyers")
    sp_feat.add_argument("--count", type=int, default=None, help="How many (default: 6)")
    sp_feat.set_defaults(func=cmd_featured)

    # -- export --
    sp_export = subparsers.add_parser("export", help="Export the directory")
    sp_export.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output directory (defaults to config.OUTPUT_DIR)",
    )
    sp_export.add_argument("--format", choices=("csv", "json"), default="csv")
    sp_export.add_argument("--categories", default=None, help="Comma-separated practice areas")
    sp_export.set_defaults(func=cmd_export)

    # -- verify --
    sp_verify = subparsers.add_parser("verify", help="LSA format checks")
    sp_verify.add_argument("lawyer_ids", nargs="*", help="Lawyer ids (default: all)")
    sp_verify.add_argument("-o", "--output", default=None, help="Write results to this JSON file")
    sp_verify.set_defaults(func=cmd_verify)

    return parser


def main() -> None:
    """Parse CLI arguments and dispatch to the appropriate subcommand."""
    args = build_parser().parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
