"""Orchestrator: rule-based resume analysis pipeline.

Pipeline:
1. Section segmentation + contact extraction
2. ATS scoring (structure, keywords, readability, formatting)
3. Recommendation synthesis from the score breakdown
4. Job-description keyword match (only when a job description is given)

Every stage is a pure function over in-memory data; callers handle text
extraction, persistence and rendering.
"""

import logging

from config import settings
from models.matching import MatchResult
from models.responses import AnalysisResponse, DocumentMetadata
from services import ats_scorer, jd_matcher, recommendation_engine, section_parser
from services.errors import ValidationError

logger = logging.getLogger(__name__)


def validate_resume_text(resume_text: str | None) -> None:
    if resume_text is None:
        raise ValidationError("Resume text is required")
    if len(resume_text) > settings.max_resume_chars:
        raise ValidationError(
            f"Resume text exceeds maximum length of {settings.max_resume_chars:,} characters"
        )


def analyze(resume_text: str, job_description: str | None = None) -> AnalysisResponse:
    """Run the full analysis pipeline.

    Raises:
        ValidationError: resume text is missing or too long, or the job
            description fails the matcher's validation.
    """
    validate_resume_text(resume_text)

    # --- Stage 1: Segmentation ---
    sections = section_parser.segment(resume_text)
    degraded = section_parser.is_degenerate(sections)
    if degraded:
        logger.warning("Resume text yielded no sections or contact details, scoring anyway")

    # --- Stage 2: Scoring ---
    ats_score = ats_scorer.score(sections)

    # --- Stage 3: Recommendations ---
    recommendations = recommendation_engine.recommend(ats_score, sections)
    critical = recommendation_engine.get_critical_issues(recommendations)

    # --- Stage 4: Job description match ---
    match_result = None
    if job_description is not None:
        match_result = jd_matcher.match(sections, job_description)

    return AnalysisResponse(
        sections=sections,
        ats_score=ats_score,
        recommendations=recommendations,
        critical_issue_count=len(critical),
        match_result=match_result,
        metadata=DocumentMetadata(
            text_length=len(sections.raw_text),
            word_count=len(sections.raw_text.split()),
        ),
        degraded=degraded,
    )


def match_text(resume_text: str, job_description: str) -> MatchResult:
    """Segment a plain-text resume and match it against a job description."""
    validate_resume_text(resume_text)
    return jd_matcher.match(section_parser.segment(resume_text), job_description)
