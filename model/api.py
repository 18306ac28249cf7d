# model/api.py
from datetime import datetime
from typing import Any
from pydantic import BaseModel, Field
from model.job import JobStatus, Salary, StructuredRequirements
from model.resume import ParsedResume, PiiFlags


class Evidence(BaseModel):
    snippet: str
    score: float


class MissingRequirement(BaseModel):
    category: str
    items: list[str]


# ---------------- Query search ----------------


class SearchRequest(BaseModel):
    query: str = Field(min_length=1)
    k: int | None = Field(default=None, gt=0)


class SearchResult(BaseModel):
    documentId: str
    displayName: str
    score: float
    evidence: list[Evidence]
    fields: dict[str, Any]


class SearchResponse(BaseModel):
    query: str
    k: int
    results: list[SearchResult]
    totalSearched: int


# ---------------- Job match ----------------


class MatchRequest(BaseModel):
    topN: int | None = Field(default=None, gt=0)


class ScoreBreakdown(BaseModel):
    semantic: float
    skills: float
    experience: float


class CandidateMatch(BaseModel):
    documentId: str
    displayName: str
    compositeScore: float
    breakdown: ScoreBreakdown
    matchedSkills: list[str]
    evidence: list[Evidence]
    missingRequirements: list[MissingRequirement]
    fields: dict[str, Any]


class MatchResponse(BaseModel):
    jobId: str
    jobTitle: str
    totalCandidates: int
    topN: int
    matches: list[CandidateMatch]


# ---------------- Resumes ----------------


class IngestResumeRequest(BaseModel):
    text: str = Field(min_length=1)
    fileName: str | None = None
    parsedData: ParsedResume | None = None


class IngestResumeResponse(BaseModel):
    id: str
    displayName: str
    chunkCount: int
    pii: PiiFlags


class ResumeView(BaseModel):
    id: str
    fileName: str | None = None
    displayName: str
    fields: dict[str, Any]
    uploadedAt: datetime


class ResumeListResponse(BaseModel):
    total: int
    limit: int
    offset: int
    resumes: list[ResumeView]


# ---------------- Jobs ----------------


class CreateJobRequest(BaseModel):
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    description: str = Field(min_length=1)
    requirements: str = Field(min_length=1)
    structuredRequirements: StructuredRequirements | None = None
    location: str | None = None
    salary: Salary | None = None
    status: JobStatus = "open"


class CreateJobResponse(BaseModel):
    id: str
    title: str
    company: str
    status: JobStatus
    createdAt: datetime


class JobView(BaseModel):
    id: str
    title: str
    company: str
    description: str
    requirements: str
    structuredRequirements: StructuredRequirements
    location: str | None = None
    salary: Salary | None = None
    status: JobStatus
    createdAt: datetime


class JobListResponse(BaseModel):
    total: int
    limit: int
    offset: int
    jobs: list[JobView]
