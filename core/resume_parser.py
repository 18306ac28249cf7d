# core/resume_parser.py
"""
Rule-based structuring of plain resume text.

Used at ingestion when the caller does not supply structured fields. The
heuristics look for common section headers and contact patterns; anything
not found is left empty.
"""
import re
from typing import List, Optional
from model.resume import EducationEntry, ExperienceEntry, ParsedResume
from util.timing import timed
import logging

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"^[A-Z][a-z]+ [A-Z][a-z]+")
_EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
_PHONE_RE = re.compile(r"(\+\d{1,3}[-.\s]?)?(\(?\d{3}\)?[-.\s]?)?\d{3}[-.\s]?\d{4}")
_LOCATION_RE = re.compile(r"([A-Z][a-z]+(?:\s[A-Z][a-z]+)*),\s*([A-Z]{2})\b")
_SUMMARY_RE = re.compile(
    r"(summary|objective|profile)[\s:]+([^\n]+(?:\n[^\n]+){0,3})", re.IGNORECASE
)
_SKILLS_RE = re.compile(
    r"(skills|technologies|expertise)[\s:]+([^\n]+(?:\n[^\n]+){0,5})", re.IGNORECASE
)
_CERTS_RE = re.compile(
    r"(certifications|certificates|licenses)[\s:]+([^\n]+(?:\n[^\n]+){0,5})",
    re.IGNORECASE,
)
_LANGUAGES_RE = re.compile(r"(languages)[\s:]+([^\n]+)", re.IGNORECASE)
_EXPERIENCE_RE = re.compile(
    r"(experience|work history|employment)[\s:]+(.+?)(?=education|skills|certifications|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_EDUCATION_RE = re.compile(
    r"(education|academic)[\s:]+(.+?)(?=experience|skills|certifications|\Z)",
    re.IGNORECASE | re.DOTALL,
)

_LIST_SPLIT_RE = re.compile(r"[,;•·\n]")
_BLOCK_SPLIT_RE = re.compile(r"\n\s*\n+")


def _first(pattern: re.Pattern, text: str) -> str:
    m = pattern.search(text)
    return m.group(0).strip() if m else ""


def _section(pattern: re.Pattern, text: str) -> Optional[str]:
    m = pattern.search(text)
    return m.group(2) if m else None


def _split_list(block: Optional[str], max_len: Optional[int] = None) -> List[str]:
    if not block:
        return []
    items = [s.strip() for s in _LIST_SPLIT_RE.split(block)]
    return [s for s in items if s and (max_len is None or len(s) < max_len)]


def extract_name(text: str) -> str:
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        if len(line) < 50 and _NAME_RE.match(line):
            return line
        return ""
    return ""


def extract_experience(text: str) -> List[ExperienceEntry]:
    block = _section(_EXPERIENCE_RE, text)
    if not block:
        return []
    return [
        ExperienceEntry(description=entry.strip()[:500])
        for entry in _BLOCK_SPLIT_RE.split(block)
        if len(entry.strip()) > 20
    ]


def extract_education(text: str) -> List[EducationEntry]:
    block = _section(_EDUCATION_RE, text)
    if not block:
        return []
    entries: List[EducationEntry] = []
    for entry in _BLOCK_SPLIT_RE.split(block):
        entry = entry.strip()
        if len(entry) <= 10:
            continue
        lines = [ln.strip() for ln in entry.splitlines() if ln.strip()]
        entries.append(
            EducationEntry(
                institution=lines[0] if lines else "",
                degree=lines[1] if len(lines) > 1 else "",
            )
        )
    return entries


def parse_resume_text(text: str) -> ParsedResume:
    """Best-effort structured fields from plain resume text."""
    text = text or ""
    with timed(logger, "parse.resume", chars=len(text)):
        summary = _section(_SUMMARY_RE, text)
        parsed = ParsedResume(
            name=extract_name(text),
            email=_first(_EMAIL_RE, text),
            phone=_first(_PHONE_RE, text),
            location=_first(_LOCATION_RE, text),
            summary=summary.strip() if summary else "",
            skills=_split_list(_section(_SKILLS_RE, text), max_len=50),
            experience=extract_experience(text),
            education=extract_education(text),
            certifications=_split_list(_section(_CERTS_RE, text)),
            languages=[
                s.strip()
                for s in re.split(r"[,;]", _section(_LANGUAGES_RE, text) or "")
                if s.strip()
            ],
        )
    logger.info(
        "parse.resume.fields skills=%d experience=%d education=%d",
        len(parsed.skills),
        len(parsed.experience),
        len(parsed.education),
    )
    return parsed
