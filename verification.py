# verification.py
"""Law Society of Alberta (LSA) membership checks for the admin panel.

Only format checks are possible without an LSA API: a lawyer passes when
the LSA id matches one of the known member-number patterns and the listed
name has at least a first and last name. Anything else goes to manual
review. Nothing is written back to the directory.
"""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from models import LawyerRecord

log = logging.getLogger(__name__)

LSA_ID_PATTERNS = (
    re.compile(r"^\d{6}$"),            # 123456
    re.compile(r"^[A-Z]{3}\d{3}$"),    # ABC123
    re.compile(r"^\d{5}[A-Z]$"),       # 12345A
    re.compile(r"^[A-Z]\d{5}$"),       # A12345
)

STATUS_VERIFIED = "verified"
STATUS_PENDING = "pending_review"


@dataclass
class VerificationResult:
    lawyer_id: str
    name: str
    lsa_id: str
    verified: bool
    lsa_format_valid: bool
    name_match: bool
    status: str
    verification_method: str = "format"
    checked_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> dict:
        return asdict(self)


def validate_lsa_id(lsa_id: str | None) -> bool:
    if not lsa_id:
        return False
    candidate = lsa_id.strip().upper()
    return any(p.match(candidate) for p in LSA_ID_PATTERNS)


def validate_name(name: str | None) -> bool:
    """At least two name parts, each two or more characters."""
    if not name:
        return False
    parts = name.split()
    return len(parts) >= 2 and all(len(p) >= 2 for p in parts)


def check_lawyer(lawyer: LawyerRecord) -> VerificationResult:
    lsa_ok = validate_lsa_id(lawyer.lsa_id)
    name_ok = validate_name(lawyer.name)
    verified = lsa_ok and name_ok
    if not verified:
        log.debug(
            "Lawyer %s needs review (lsa_format_valid=%s, name_match=%s)",
            lawyer.id, lsa_ok, name_ok,
        )
    return VerificationResult(
        lawyer_id=str(lawyer.id),
        name=lawyer.name,
        lsa_id=lawyer.lsa_id,
        verified=verified,
        lsa_format_valid=lsa_ok,
        name_match=name_ok,
        status=STATUS_VERIFIED if verified else STATUS_PENDING,
    )


def check_lawyers(lawyers: list[LawyerRecord]) -> list[VerificationResult]:
    results = [check_lawyer(l) for l in lawyers]
    passed = sum(1 for r in results if r.verified)
    log.info("LSA check: %d/%d lawyers pass format checks", passed, len(results))
    return results
