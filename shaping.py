# shaping.py
"""Pure filter / sort / paginate helpers over in-memory lawyer lists.

Used by the fallback path of the hybrid data source and directly by callers
that want to re-filter a page they already hold. Nothing here does I/O or
mutates its input.

Callers compose them in a fixed order: category filter -> search term ->
sort -> paginate. :func:`shape` does exactly that.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from models import CategoryCount, LawyerRecord

ASC = "asc"
DESC = "desc"

# key -> (attribute, default direction)
SORT_KEYS = {
    "rating": ("rating", DESC),
    "name": ("name", ASC),
    "review_count": ("review_count", DESC),
    "years_experience": ("years_experience", DESC),
    "hourly_rate": ("hourly_rate", ASC),
}

_SORT_ALIASES = {
    "reviewCount": "review_count",
    "reviews": "review_count",
    "experience": "years_experience",
    "yearsExperience": "years_experience",
    "hourlyRate": "hourly_rate",
}


@dataclass
class NumberedPage:
    items: list[LawyerRecord]
    total: int
    page: int
    page_size: int
    total_pages: int


def filter_by_categories(
    lawyers: Sequence[LawyerRecord], selected: Iterable[str]
) -> list[LawyerRecord]:
    """Keep lawyers practising in any of *selected*. Empty selection is a no-op."""
    wanted = set(selected or ())
    if not wanted:
        return list(lawyers)
    return [l for l in lawyers if wanted.intersection(l.categories or ())]


def matches_term(lawyer: LawyerRecord, term_lower: str) -> bool:
    haystacks = (
        lawyer.name,
        lawyer.firm,
        lawyer.title,
        lawyer.bio,
        " ".join(lawyer.categories or ()),
    )
    return any(term_lower in (h or "").lower() for h in haystacks)


def filter_by_search_term(
    lawyers: Sequence[LawyerRecord], term: Optional[str]
) -> list[LawyerRecord]:
    """Case-insensitive substring match on name, firm, title, bio and categories."""
    if not term or not term.strip():
        return list(lawyers)
    needle = term.strip().lower()
    return [l for l in lawyers if matches_term(l, needle)]


def filter_by_attributes(
    lawyers: Sequence[LawyerRecord],
    location: Optional[str] = None,
    min_rating: Optional[float] = None,
    max_hourly_rate: Optional[float] = None,
    languages: Iterable[str] = (),
) -> list[LawyerRecord]:
    """Narrow by location, rating floor, rate ceiling and spoken languages.

    Each criterion left as None/empty is skipped. ``languages`` matches when
    the lawyer speaks any of them.
    """
    result = list(lawyers)
    if location:
        loc = location.strip().lower()
        result = [
            l for l in result
            if loc in (l.location or "").lower() or loc == (l.province or "").lower()
        ]
    if min_rating is not None:
        result = [l for l in result if l.rating >= min_rating]
    if max_hourly_rate is not None:
        result = [l for l in result if l.hourly_rate <= max_hourly_rate]
    spoken = {s.lower() for s in languages or ()}
    if spoken:
        result = [
            l for l in result
            if spoken.intersection(lang.lower() for lang in l.languages or ())
        ]
    return result


def sort_by(
    lawyers: Sequence[LawyerRecord], key: str, direction: Optional[str] = None
) -> list[LawyerRecord]:
    """Sort by a known key; unknown keys return the input order unchanged."""
    key = _SORT_ALIASES.get(key, key)
    if key not in SORT_KEYS:
        return list(lawyers)
    attr, default_direction = SORT_KEYS[key]
    reverse = (direction or default_direction).lower() == DESC

    if attr == "name":
        return sorted(lawyers, key=lambda l: (l.name or "").casefold(), reverse=reverse)
    return sorted(lawyers, key=lambda l: getattr(l, attr) or 0, reverse=reverse)


def order_for_directory(lawyers: Sequence[LawyerRecord]) -> list[LawyerRecord]:
    """Verified lawyers first, then by rating, highest first."""
    return sorted(lawyers, key=lambda l: (not l.verified, -(l.rating or 0)))


def paginate(
    lawyers: Sequence[LawyerRecord], page_size: int, offset: int = 0
) -> list[LawyerRecord]:
    """Slice a window out of *lawyers*; an offset past the end gives []."""
    offset = max(offset or 0, 0)
    return list(lawyers[offset:offset + page_size])


def paginate_numbered(
    lawyers: Sequence[LawyerRecord], page: int, page_size: int
) -> NumberedPage:
    """1-based page numbering with totals, as the directory pager shows it."""
    page = max(page, 1)
    total = len(lawyers)
    return NumberedPage(
        items=paginate(lawyers, page_size, (page - 1) * page_size),
        total=total,
        page=page,
        page_size=page_size,
        total_pages=math.ceil(total / page_size) if page_size else 0,
    )


def count_categories(lawyers: Iterable[LawyerRecord]) -> list[CategoryCount]:
    """Count category tags; highest count first, ties by name."""
    counts: Counter[str] = Counter()
    for lawyer in lawyers:
        counts.update(lawyer.categories or ())
    return [
        CategoryCount(name=name, count=count)
        for name, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    ]


def shape(
    lawyers: Sequence[LawyerRecord],
    categories: Iterable[str] = (),
    term: Optional[str] = None,
    sort_key: Optional[str] = None,
    direction: Optional[str] = None,
    page_size: Optional[int] = None,
    offset: int = 0,
) -> list[LawyerRecord]:
    result = filter_by_categories(lawyers, categories)
    result = filter_by_search_term(result, term)
    if sort_key:
        result = sort_by(result, sort_key, direction)
    if page_size:
        result = paginate(result, page_size, offset)
    return result
