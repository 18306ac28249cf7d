# model/job.py
from datetime import datetime, timezone
from typing import Literal
from pydantic import BaseModel, Field

JobStatus = Literal["open", "closed", "draft"]


class ExperienceRequirement(BaseModel):
    minYears: float = 0
    maxYears: float | None = None


class StructuredRequirements(BaseModel):
    skills: list[str] = Field(default_factory=list)
    experience: ExperienceRequirement = Field(default_factory=ExperienceRequirement)
    education: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    mustHave: list[str] = Field(default_factory=list)
    niceToHave: list[str] = Field(default_factory=list)


class Salary(BaseModel):
    min: float | None = None
    max: float | None = None
    currency: str | None = None


class JobPosting(BaseModel):
    id: str
    title: str
    company: str
    description: str
    requirements: str
    structuredRequirements: StructuredRequirements = Field(
        default_factory=StructuredRequirements
    )
    location: str | None = None
    salary: Salary | None = None
    embedding: list[float] = Field(default_factory=list)
    status: JobStatus = "open"
    createdAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def embedding_text(self) -> str:
        return f"{self.title} {self.description} {self.requirements}"
