# categories.py
"""Practice-area names <-> URL slugs ("Family Law" <-> "family-law")."""

from __future__ import annotations

from typing import Iterable, Optional

from slugify import slugify

# Practice areas with their own landing pages
PRACTICE_AREAS = (
    "Family Law",
    "Criminal Defense",
    "Corporate Law",
    "Employment Law",
    "Real Estate",
    "Civil Litigation",
    "Immigration Law",
    "Personal Injury",
    "Wills & Estates",
)


def category_slug(name: str) -> str:
    return slugify(name, replacements=[["&", "and"]])


def resolve_category(value: str, known: Iterable[str] = PRACTICE_AREAS) -> Optional[str]:
    """Map a slug or loosely typed name to a known category name."""
    wanted = category_slug(value)
    if not wanted:
        return None
    for name in known:
        if category_slug(name) == wanted:
            return name
    return None


def resolve_categories(values: Iterable[str], known: Iterable[str] = PRACTICE_AREAS) -> list[str]:
    """Resolve each value; unknown values pass through unchanged."""
    known = tuple(known)
    resolved = []
    for value in values:
        value = value.strip()
        if value:
            resolved.append(resolve_category(value, known) or value)
    return resolved
