"""Job-description match contracts."""

from typing import Literal

from pydantic import BaseModel, Field


class KeywordRecord(BaseModel):
    """A normalised token and how often it occurs in one text."""
    word: str
    count: int


class MatchedKeyword(BaseModel):
    word: str
    resume_frequency: int
    jd_frequency: int
    importance: float


class MissingKeyword(BaseModel):
    word: str
    frequency: int
    importance: float


class MatchSuggestion(BaseModel):
    priority: Literal["critical", "important", "suggested"]
    category: str  # keywords | optimization
    message: str
    action: str


class ExperienceRequirement(BaseModel):
    min_years: int | None = None
    found: bool = False


class JDRequirements(BaseModel):
    total_keywords: int = 0
    skills: list[str] = []
    experience: ExperienceRequirement = ExperienceRequirement()
    education: list[str] = []


class MatchResult(BaseModel):
    match_percentage: int = Field(0, ge=0, le=100)
    matched_keywords: list[MatchedKeyword] = []
    missing_keywords: list[MissingKeyword] = []
    suggestions: list[MatchSuggestion] = []
    jd_requirements: JDRequirements = JDRequirements()
