"""Score breakdown and recommendation contracts."""

from typing import Literal

from pydantic import BaseModel, Field

Category = Literal["structure", "keywords", "readability", "formatting"]
Priority = Literal["critical", "important", "suggested"]
Impact = Literal["high", "medium", "low"]


class StructureDetails(BaseModel):
    has_contact: bool = False
    has_summary: bool = False
    has_experience: bool = False
    has_education: bool = False
    has_skills: bool = False
    proper_headings: bool = False
    logical_order: bool = False


class KeywordDetails(BaseModel):
    action_verb_count: int = 0
    industry_keyword_count: int = 0
    technical_skill_count: int = 0
    quantifiable_achievements: int = 0
    keyword_density: float = 0.0  # percent of total words


class ReadabilityDetails(BaseModel):
    flesch_score: float = 0.0
    avg_sentence_length: float = 0.0
    avg_word_length: float = 0.0
    complex_word_percentage: float = 0.0
    readability_level: str = ""


class FormattingDetails(BaseModel):
    has_bullet_points: bool = False
    has_consistent_dates: bool = False
    has_consistent_formatting: bool = False
    proper_length: bool = False
    no_special_characters: bool = False


class BreakdownDetails(BaseModel):
    structure: StructureDetails = StructureDetails()
    keywords: KeywordDetails = KeywordDetails()
    readability: ReadabilityDetails = ReadabilityDetails()
    formatting: FormattingDetails = FormattingDetails()


class ScoreBreakdown(BaseModel):
    """Per-category ATS scores and the detail metrics behind them.

    ``total_score`` is the rounded sum of the four category scores.
    """
    structure_score: int = Field(0, ge=0, le=25)
    keyword_score: int = Field(0, ge=0, le=30)
    readability_score: int = Field(0, ge=0, le=25)
    formatting_score: int = Field(0, ge=0, le=20)
    total_score: int = Field(0, ge=0, le=100)
    breakdown: BreakdownDetails = BreakdownDetails()


class Recommendation(BaseModel):
    category: Category
    priority: Priority
    title: str
    description: str
    impact: Impact
    action_items: list[str] = []
