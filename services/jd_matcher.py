"""Frequency-weighted keyword matching between a resume and a job description.

Both texts are reduced to token frequency maps. Each job-description keyword
carries weight ``min(count, 5)``; a keyword present in the resume earns
``weight * min(resume_freq / jd_freq, 1)``. The match percentage is the
earned share of the total weight.
"""

import logging
import re
from collections import Counter

from config import settings
from models.matching import (
    ExperienceRequirement,
    JDRequirements,
    KeywordRecord,
    MatchedKeyword,
    MatchResult,
    MatchSuggestion,
    MissingKeyword,
)
from models.resume import SectionMap
from services.errors import ValidationError
from services.text_utils import round_half_up

logger = logging.getLogger(__name__)

STOPWORDS: frozenset[str] = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
    "has", "he", "in", "is", "it", "its", "of", "on", "that", "the",
    "to", "was", "will", "with", "this", "but", "they", "have",
    "had", "what", "when", "where", "who", "which", "why", "how",
})

# Word characters plus ".", "+" and "#" so "node.js", "c++" and "c#" survive.
_TOKEN_RE = re.compile(r"[a-z0-9_.+#]+")

# Each family is searched independently; matches are lowercased and deduplicated.
SKILL_PATTERNS: dict[str, re.Pattern] = {
    family: re.compile(rf"(?<![\w.+#])(?:{alternatives})(?![\w+#])", re.IGNORECASE)
    for family, alternatives in {
        "languages": r"javascript|typescript|python|java|c\+\+|c#|ruby|php|swift|kotlin|go|rust|scala",
        "frameworks": r"react|angular|vue|node\.?js|express|django|flask|spring|\.net|laravel",
        "databases": r"mongodb|mysql|postgresql|redis|elasticsearch|dynamodb|sql|nosql",
        "cloud": r"aws|azure|gcp|google cloud|amazon web services|kubernetes|docker",
        "tools": r"git|jenkins|jira|confluence|slack|figma|sketch|photoshop",
        "methodologies": r"agile|scrum|kanban|devops|ci/cd|tdd|bdd",
    }.items()
}

EXPERIENCE_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"(\d+)\+?\s*years?\s+(?:of\s+)?experience", re.IGNORECASE),
    re.compile(r"experience\s+of\s+(\d+)\+?\s*years?", re.IGNORECASE),
    re.compile(r"minimum\s+(\d+)\s*years?", re.IGNORECASE),
)

EDUCATION_KEYWORDS: tuple[str, ...] = (
    "bachelor", "master", "phd", "doctorate", "degree",
    "diploma", "certification", "certified",
)

MAX_KEYWORD_WEIGHT = 5
SKILL_BOOST = 2
REPEAT_BOOST = 1.5  # applied when a keyword appears more than 3 times


def tokenize(text: str) -> list[str]:
    """Lowercase tokens, with sentence punctuation trimmed from the ends."""
    tokens = (raw.strip(".") for raw in _TOKEN_RE.findall(text.lower()))
    return [t for t in tokens if t]


def extract_keywords(text: str) -> list[KeywordRecord]:
    """Keyword frequencies sorted by count, most frequent first.

    Stopwords and tokens of two characters or fewer are dropped. Ties keep
    first-occurrence order.
    """
    if not text:
        return []
    counts = Counter(
        token for token in tokenize(text)
        if token not in STOPWORDS and len(token) > 2
    )
    return [KeywordRecord(word=word, count=count) for word, count in counts.most_common()]


def extract_skills(text: str) -> list[str]:
    skills: dict[str, None] = {}
    for pattern in SKILL_PATTERNS.values():
        for match in pattern.finditer(text):
            skills.setdefault(match.group().lower().strip(), None)
    return list(skills)


def extract_experience(text: str) -> ExperienceRequirement:
    """Smallest "N years experience" figure mentioned, if any."""
    years = [
        int(match.group(1))
        for pattern in EXPERIENCE_PATTERNS
        for match in pattern.finditer(text)
    ]
    if not years:
        return ExperienceRequirement()
    return ExperienceRequirement(min_years=min(years), found=True)


def extract_education(text: str) -> list[str]:
    lowered = text.lower()
    return [keyword for keyword in EDUCATION_KEYWORDS if keyword in lowered]


def extract_jd_requirements(job_description: str) -> tuple[list[KeywordRecord], JDRequirements]:
    keywords = extract_keywords(job_description)
    requirements = JDRequirements(
        total_keywords=len(keywords),
        skills=extract_skills(job_description),
        experience=extract_experience(job_description),
        education=extract_education(job_description),
    )
    return keywords, requirements


def calculate_importance(keyword: KeywordRecord, skills: list[str]) -> float:
    score = float(keyword.count)
    if keyword.word in skills:
        score *= SKILL_BOOST
    if keyword.count > 3:
        score *= REPEAT_BOOST
    return round_half_up(score, 1)


def calculate_match_percentage(
    resume_frequencies: dict[str, int], jd_keywords: list[KeywordRecord]
) -> int:
    """Weighted share of job-description keywords covered by the resume."""
    weights = [(kw, min(kw.count, MAX_KEYWORD_WEIGHT)) for kw in jd_keywords]
    total_weight = sum(weight for _, weight in weights)
    if total_weight == 0:
        return 0
    matched_weight = sum(
        weight * min(resume_frequencies[kw.word] / kw.count, 1)
        for kw, weight in weights
        if kw.word in resume_frequencies
    )
    percentage = int(round_half_up(matched_weight / total_weight * 100))
    return max(0, min(percentage, 100))


def identify_missing_keywords(
    resume_frequencies: dict[str, int],
    jd_keywords: list[KeywordRecord],
    skills: list[str],
    limit: int,
) -> list[MissingKeyword]:
    missing = [
        MissingKeyword(
            word=kw.word,
            frequency=kw.count,
            importance=calculate_importance(kw, skills),
        )
        for kw in jd_keywords
        if kw.word not in resume_frequencies
    ]
    missing.sort(key=lambda m: m.importance, reverse=True)
    return missing[:limit]


def identify_matched_keywords(
    resume_frequencies: dict[str, int],
    jd_keywords: list[KeywordRecord],
    skills: list[str],
) -> list[MatchedKeyword]:
    matched = [
        MatchedKeyword(
            word=kw.word,
            resume_frequency=resume_frequencies[kw.word],
            jd_frequency=kw.count,
            importance=calculate_importance(kw, skills),
        )
        for kw in jd_keywords
        if kw.word in resume_frequencies
    ]
    matched.sort(key=lambda m: m.importance, reverse=True)
    return matched


def generate_suggestions(
    match_percentage: int, missing_keywords: list[MissingKeyword]
) -> list[MatchSuggestion]:
    suggestions: list[MatchSuggestion] = []

    if match_percentage < 70:
        suggestions.append(MatchSuggestion(
            priority="critical",
            category="keywords",
            message=(
                "Your resume match is below 70%. Consider adding more relevant "
                "keywords from the job description."
            ),
            action="Review the missing keywords list and incorporate relevant ones into your resume.",
        ))

    if len(missing_keywords) > 10:
        top_missing = ", ".join(k.word for k in missing_keywords[:5])
        suggestions.append(MatchSuggestion(
            priority="important",
            category="keywords",
            message=f"You're missing several important keywords: {top_missing}",
            action="Add these keywords naturally in your experience and skills sections.",
        ))

    if 70 <= match_percentage < 85:
        suggestions.append(MatchSuggestion(
            priority="suggested",
            category="optimization",
            message="Good match! You can improve further by emphasizing matched keywords.",
            action="Increase the frequency of matched keywords in your resume where relevant.",
        ))
    elif match_percentage >= 85:
        suggestions.append(MatchSuggestion(
            priority="suggested",
            category="optimization",
            message="Excellent match! Your resume aligns well with the job description.",
            action="Review the formatting and ensure your resume is ATS-friendly.",
        ))

    return suggestions


def resume_text(section_map: SectionMap) -> str:
    """Text the resume keywords are counted over: summary, skills, then the raw text."""
    parts = [section_map.summary, " ".join(section_map.skills), section_map.raw_text]
    return " ".join(part for part in parts if part)


def compare_resume_to_jd(section_map: SectionMap | None, job_description: str | None) -> MatchResult:
    """Match a segmented resume against a job description.

    Raises:
        ValidationError: either input is missing, or the job description is
            longer than ``settings.max_job_description_chars``.
    """
    if section_map is None or not job_description:
        raise ValidationError("Resume and job description are required")
    if len(job_description) > settings.max_job_description_chars:
        raise ValidationError(
            f"Job description exceeds maximum length of "
            f"{settings.max_job_description_chars:,} characters"
        )

    jd_keywords, requirements = extract_jd_requirements(job_description)
    resume_frequencies = {
        kw.word: kw.count for kw in extract_keywords(resume_text(section_map))
    }

    match_percentage = calculate_match_percentage(resume_frequencies, jd_keywords)
    missing = identify_missing_keywords(
        resume_frequencies, jd_keywords, requirements.skills, settings.missing_keywords_limit
    )
    matched = identify_matched_keywords(resume_frequencies, jd_keywords, requirements.skills)

    logger.debug(
        "JD match %d%% (%d matched, %d missing, %d jd keywords)",
        match_percentage, len(matched), len(missing), len(jd_keywords),
    )
    return MatchResult(
        match_percentage=match_percentage,
        matched_keywords=matched,
        missing_keywords=missing,
        suggestions=generate_suggestions(match_percentage, missing),
        jd_requirements=requirements,
    )


def match(section_map: SectionMap, job_description: str) -> MatchResult:
    return compare_resume_to_jd(section_map, job_description)
