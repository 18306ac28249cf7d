# core/redaction.py
import re
from enum import Enum
from typing import Any, Dict, Mapping
from model.resume import ParsedResume, PiiFlags
from util.constants import ADDRESS_REDACTED, REDACTED
from util.enums import Role

# House number followed by words, e.g. "221 Baker Street".
_ADDRESS_RE = re.compile(r"\d+\s+[A-Za-z\s]+")
_SSN_RE = re.compile(r"\b\d{3}-\d{2}-\d{4}\b")

_CONTACT_FIELDS = ("email", "phone")


class Privilege(str, Enum):
    ELEVATED = "elevated"
    RESTRICTED = "restricted"


def privilege_for(role: Role | str | None) -> Privilege:
    if role in (Role.RECRUITER, Role.ADMIN):
        return Privilege.ELEVATED
    return Privilege.RESTRICTED


def redact_fields(fields: Mapping[str, Any], privilege: Privilege) -> Dict[str, Any]:
    """
    Copy of `fields` fit for `privilege`.

    Restricted callers lose contact details: email and phone become a marker
    and house-number addresses inside location are masked. Nothing else is
    touched, absent keys stay absent, and a second pass changes nothing.
    """
    out = dict(fields)
    if privilege == Privilege.ELEVATED:
        return out

    for key in _CONTACT_FIELDS:
        if out.get(key):
            out[key] = REDACTED

    location = out.get("location")
    if isinstance(location, str) and location:
        out["location"] = _ADDRESS_RE.sub(ADDRESS_REDACTED, location)
    return out


def detect_pii(raw_text: str, parsed: ParsedResume) -> PiiFlags:
    return PiiFlags(
        hasEmail=bool(parsed.email),
        hasPhone=bool(parsed.phone),
        hasAddress=bool(parsed.location),
        hasSocialSecurity=bool(_SSN_RE.search(raw_text or "")),
    )
