# model/resume.py
from datetime import datetime, timezone
from pydantic import BaseModel, Field
from util.constants import UNKNOWN_CANDIDATE


class ExperienceEntry(BaseModel):
    company: str = ""
    position: str = ""
    startDate: str = ""
    endDate: str = ""
    description: str = ""


class EducationEntry(BaseModel):
    institution: str = ""
    degree: str = ""
    field: str = ""
    graduationDate: str = ""


class ParsedResume(BaseModel):
    """Structured fields exposed in results; contact fields are PII."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    summary: str | None = None
    skills: list[str] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)


class PiiFlags(BaseModel):
    hasEmail: bool = False
    hasPhone: bool = False
    hasAddress: bool = False
    hasSocialSecurity: bool = False


class Chunk(BaseModel):
    text: str = ""
    embedding: list[float] = Field(default_factory=list)
    startChar: int = 0
    endChar: int = 0


class Resume(BaseModel):
    id: str
    fileName: str | None = None
    rawText: str
    parsedData: ParsedResume = Field(default_factory=ParsedResume)
    pii: PiiFlags = Field(default_factory=PiiFlags)
    embedding: list[float] = Field(default_factory=list)
    chunks: list[Chunk] = Field(default_factory=list)
    uploadedAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def display_name(self) -> str:
        return self.parsedData.name or UNKNOWN_CANDIDATE

    def mentions(self, q: str | None) -> bool:
        """Case-insensitive substring match over name, skills and raw text."""
        needle = (q or "").strip().lower()
        if not needle:
            return True
        haystacks = [self.parsedData.name or "", self.rawText, *self.parsedData.skills]
        return any(needle in h.lower() for h in haystacks)
