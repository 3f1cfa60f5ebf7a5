# fallback_data.py
"""Static lawyer dataset served when Firestore is empty or unreachable.

Loaded once at import. Set ``LAWYERS_FALLBACK_PATH`` to a JSON file holding a
list of lawyer dicts to replace the built-in records.
"""

from __future__ import annotations

import json
import logging

import config
from models import LawyerRecord

log = logging.getLogger(__name__)

_BUILTIN_LAWYERS = [
    {
        "id": 1,
        "name": "Sarah Mitchell",
        "title": "Senior Partner",
        "firm": "Mitchell Family Law LLP",
        "bio": "Sarah has guided Calgary families through divorce, custody and "
               "support disputes for two decades, with a focus on mediation.",
        "location": "Calgary, AB",
        "categories": ["Family Law"],
        "languages": ["English", "French"],
        "yearsExperience": 20,
        "rating": 4.9,
        "reviewCount": 127,
        "hourlyRate": 425,
        "consultationFee": "Free 30-minute consultation",
        "verified": True,
        "featured": True,
        "tier": "premium",
        "lsa_id": "123456",
        "image": "https://images.unsplash.com/photo-1573496359142-b8d87734a5a2?w=400",
    },
    {
        "id": 2,
        "name": "David Chen",
        "title": "Partner",
        "firm": "Chen Criminal Defence",
        "bio": "Former Crown prosecutor defending impaired driving, assault and "
               "drug charges in the Alberta Court of Justice.",
        "location": "Calgary, AB",
        "categories": ["Criminal Defense"],
        "languages": ["English", "Mandarin", "Cantonese"],
        "yearsExperience": 15,
        "rating": 4.8,
        "reviewCount": 98,
        "hourlyRate": 375,
        "consultationFee": 0,
        "verified": True,
        "featured": True,
        "tier": "premium",
        "lsa_id": "CHN482",
        "image": "https://images.unsplash.com/photo-1560250097-0b93528c311a?w=400",
    },
    {
        "id": 3,
        "name": "Emily Rodriguez",
        "title": "Associate",
        "firm": "Bow Valley Employment Law",
        "bio": "Represents employees in wrongful dismissal, workplace harassment "
               "and human rights complaints.",
        "location": "Calgary, AB",
        "categories": ["Employment Law"],
        "languages": ["English", "Spanish"],
        "yearsExperience": 8,
        "rating": 4.7,
        "reviewCount": 64,
        "hourlyRate": 295,
        "consultationFee": "$150",
        "verified": True,
        "featured": False,
        "tier": "standard",
        "lsa_id": "54321R",
        "image": "",
    },
    {
        "id": 4,
        "name": "Michael Thompson",
        "title": "Managing Partner",
        "firm": "Thompson Energy & Corporate",
        "bio": "Advises oil and gas producers and technology start-ups on "
               "mergers, financing and corporate governance.",
        "location": "Calgary, AB",
        "categories": ["Corporate Law", "Real Estate"],
        "languages": ["English"],
        "yearsExperience": 25,
        "rating": 4.6,
        "reviewCount": 52,
        "hourlyRate": 550,
        "consultationFee": "$250",
        "verified": True,
        "featured": True,
        "tier": "premium",
        "lsa_id": "T20417",
        "image": "",
    },
    {
        "id": 5,
        "name": "Priya Sharma",
        "title": "Barrister & Solicitor",
        "firm": "Sharma Immigration & Family",
        "bio": "Helps newcomers with sponsorship, work permits and related "
               "family matters.",
        "location": "Calgary, AB",
        "categories": ["Immigration Law", "Family Law"],
        "languages": ["English", "Hindi", "Punjabi"],
        "yearsExperience": 11,
        "rating": 4.8,
        "reviewCount": 143,
        "hourlyRate": 300,
        "consultationFee": "$100",
        "verified": False,
        "featured": False,
        "tier": "standard",
        "lsa_id": "",
        "image": "",
    },
    {
        "id": 6,
        "name": "James O'Connor",
        "title": "Partner",
        "firm": "O'Connor Civil Litigation",
        "bio": "Civil litigator handling contract disputes, personal injury "
               "claims and estate litigation.",
        "location": "Calgary, AB",
        "categories": ["Civil Litigation", "Personal Injury"],
        "languages": ["English"],
        "yearsExperience": 18,
        "rating": 4.5,
        "reviewCount": 77,
        "hourlyRate": 400,
        "consultationFee": "Free",
        "verified": True,
        "featured": False,
        "tier": "standard",
        "lsa_id": "OCN118",
        "image": "",
    },
    {
        "id": 7,
        "name": "Linda Nguyen",
        "title": "Associate",
        "firm": "Nguyen Real Estate Law",
        "bio": "Residential and commercial real estate closings, condo "
               "disputes and landlord-tenant matters.",
        "location": "Calgary, AB",
        "categories": ["Real Estate"],
        "languages": ["English", "Vietnamese"],
        "yearsExperience": 6,
        "rating": 4.4,
        "reviewCount": 39,
        "hourlyRate": 250,
        "consultationFee": "$75",
        "verified": False,
        "featured": False,
        "tier": "standard",
        "lsa_id": "",
        "image": "",
    },
    {
        "id": 8,
        "name": "Robert Blackfoot",
        "title": "Counsel",
        "firm": "Treaty 7 Legal Services",
        "bio": "Indigenous rights, land claims and criminal defence for "
               "southern Alberta communities.",
        "location": "Calgary, AB",
        "categories": ["Indigenous Law", "Criminal Defense"],
        "languages": ["English", "Blackfoot"],
        "yearsExperience": 22,
        "rating": 4.9,
        "reviewCount": 58,
        "hourlyRate": 350,
        "consultationFee": "Free",
        "verified": True,
        "featured": True,
        "tier": "premium",
        "lsa_id": "B77310",
        "image": "",
    },
    {
        "id": 9,
        "name": "Amanda Kowalski",
        "title": "Associate",
        "firm": "Kowalski Wills & Estates",
        "bio": "Drafts wills, powers of attorney and personal directives and "
               "administers estates.",
        "location": "Calgary, AB",
        "categories": ["Wills & Estates"],
        "languages": ["English", "Polish"],
        "yearsExperience": 9,
        "rating": 4.6,
        "reviewCount": 45,
        "hourlyRate": 275,
        "consultationFee": "$100",
        "verified": True,
        "featured": False,
        "tier": "standard",
        "lsa_id": "KOW905",
        "image": "",
    },
    {
        "id": 10,
        "name": "Marcus Williams",
        "title": "Sole Practitioner",
        "firm": "Williams Law Office",
        "bio": "General practice covering small business, employment and "
               "civil matters in Airdrie and north Calgary.",
        "location": "Airdrie, AB",
        "categories": ["Corporate Law", "Employment Law", "Civil Litigation"],
        "languages": ["English"],
        "yearsExperience": 4,
        "rating": 4.1,
        "reviewCount": 17,
        "hourlyRate": 225,
        "consultationFee": "$50",
        "verified": False,
        "featured": False,
        "tier": "basic",
        "lsa_id": "",
        "image": "",
    },
]


def load_fallback_lawyers(path: str | None = None) -> tuple[LawyerRecord, ...]:
    """Load the fallback dataset from *path*, or the built-in records."""
    if path:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, list):
            raise ValueError(f"{path} must contain a JSON list of lawyers")
        log.info("Loaded %d fallback lawyers from %s", len(raw), path)
    else:
        raw = _BUILTIN_LAWYERS
    return tuple(LawyerRecord.from_dict(d) for d in raw)


FALLBACK_LAWYERS: tuple[LawyerRecord, ...] = load_fallback_lawyers(config.LAWYERS_FALLBACK_PATH)
