# models.py
"""LawyerRecord and the typed results returned by the hybrid data source."""

from __future__ import annotations

import enum
import re
from dataclasses import asdict, dataclass, field, fields
from typing import Optional, Union

import config

LawyerId = Union[str, int]

_YEARS_RE = re.compile(r"\d+")


def _as_list(value) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    return [str(v) for v in value if v is not None and str(v).strip()]


def _as_text(value) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_int(value, default: int = 0) -> int:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return max(int(value), 0)
    match = _YEARS_RE.search(str(value))
    return int(match.group()) if match else default


def _as_float(value, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _first(data: dict, *keys, default=None):
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


@dataclass
class LawyerRecord:
    """A lawyer profile as shown in the directory."""

    # Identity
    id: LawyerId = ""
    name: str = ""
    title: str = ""
    firm: str = ""
    bio: str = ""

    # Location
    location: str = ""
    province: str = ""

    # Practice
    categories: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)
    years_experience: int = 0

    # Reputation
    rating: float = 0.0
    review_count: int = 0

    # Commercial
    hourly_rate: float = 0.0
    consultation_fee: Union[str, float] = ""

    # Trust
    verified: bool = False
    featured: bool = False
    tier: str = config.DEFAULT_TIER
    lsa_id: str = ""

    # Media
    image: str = ""

    def __post_init__(self) -> None:
        # Collections drive filtering and must never be None
        self.categories = _as_list(self.categories)
        self.languages = _as_list(self.languages)

    @classmethod
    def from_dict(cls, data: dict) -> LawyerRecord:
        """Build a record from a stored document, accepting camelCase keys.

        Missing collections become empty lists and ``rating`` is clamped to
        [0, 5]. ``location`` may be a "City, PROV" string or a mapping with
        ``city`` and ``province``.
        """
        location = data.get("location") or data.get("address") or ""
        province = data.get("province") or ""
        if isinstance(location, dict):
            province = province or location.get("province", "")
            location = location.get("city", "")
        location, province = _as_text(location), _as_text(province)
        if "," in location and not province:
            city, _, prov = location.partition(",")
            location, province = city.strip(), prov.strip()

        rating = _as_float(data.get("rating"))
        fee = _first(data, "consultationFee", "consultation_fee", default="")

        return cls(
            id=data.get("id", ""),
            name=_as_text(data.get("name")),
            title=_as_text(data.get("title")),
            firm=_as_text(data.get("firm")),
            bio=_as_text(_first(data, "bio", "description")),
            location=location,
            province=province,
            categories=data.get("categories"),
            languages=data.get("languages"),
            years_experience=_as_int(
                _first(data, "yearsExperience", "years_experience", "experience")
            ),
            rating=min(max(rating, 0.0), 5.0),
            review_count=_as_int(
                _first(data, "reviewCount", "review_count", "reviews")
            ),
            hourly_rate=max(
                _as_float(_first(data, "hourlyRate", "hourly_rate")), 0.0
            ),
            consultation_fee=fee,
            verified=bool(_first(data, "verified", "is_verified", default=False)),
            featured=bool(data.get("featured", False)),
            tier=_as_text(data.get("tier")) or config.DEFAULT_TIER,
            lsa_id=_as_text(_first(data, "lsa_id", "lsaId")),
            image=_as_text(data.get("image")),
        )

    @property
    def image_url(self) -> str:
        return self.image or config.DEFAULT_IMAGE_URL

    @property
    def display_location(self) -> str:
        if self.location and self.province:
            return f"{self.location}, {self.province}"
        return self.location or self.province

    @classmethod
    def csv_headers(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def to_csv_row(self) -> list[str]:
        row = []
        for f in fields(self):
            val = getattr(self, f.name)
            if isinstance(val, list):
                val = config.MULTIVALUE_DELIMITER.join(val)
            row.append(str(val))
        return row

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class CategoryCount:
    name: str
    count: int


class FetchSource(enum.Enum):
    CACHE = "cache"
    REMOTE = "remote"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class PageCursor:
    """Opaque resume token handed back with each page.

    Remote cursors carry an offset into the remote ordering; fallback cursors
    carry the id of the last record returned. A cursor is only honoured by
    the source that issued it.
    """

    source: FetchSource
    offset: int = 0
    after_id: Optional[LawyerId] = None


@dataclass(frozen=True)
class ListOptions:
    categories: tuple[str, ...] = ()
    page_size: int = config.DEFAULT_PAGE_SIZE
    cursor: Optional[PageCursor] = None
    use_cache: bool = True

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError(f"page_size must be > 0, got {self.page_size}")
        # Accept any iterable of category names
        object.__setattr__(self, "categories", tuple(self.categories or ()))


@dataclass
class DirectoryPage:
    """One page of lawyers plus where it came from.

    ``reason`` explains a fallback ("empty", "timeout", "error: ...",
    "remote not configured") and is None for cache and remote pages.
    """

    lawyers: list[LawyerRecord]
    source: FetchSource
    reason: Optional[str] = None
    next_cursor: Optional[PageCursor] = None
    pagination_reset: bool = False

    @property
    def is_fallback(self) -> bool:
        return self.source is FetchSource.FALLBACK


@dataclass
class LawyerLookup:
    lawyer: Optional[LawyerRecord]
    source: Optional[FetchSource] = None

    @property
    def found(self) -> bool:
        return self.lawyer is not None


@dataclass
class DirectoryStats:
    total_lawyers: int = 0
    verified_count: int = 0
    average_rating: float = 0.0
    total_reviews: int = 0
    categories: list[CategoryCount] = field(default_factory=list)
    tiers: dict[str, int] = field(default_factory=dict)
    top_locations: list[tuple[str, int]] = field(default_factory=list)
