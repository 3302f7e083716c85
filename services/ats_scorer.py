"""ATS compatibility scoring.

Four independent scorers, each returning ``(score, details)``:

1. Structure   (max 25) - which sections exist and how they are laid out
2. Keywords    (max 30) - action verbs, industry/technical terms, metrics
3. Readability (max 25) - Flesch Reading Ease, sentence length, complex words
4. Formatting  (max 20) - bullets, date/heading consistency, length, symbols

``score()`` runs all four and sums them into a ``ScoreBreakdown``.
"""

import logging
import re

from models.resume import SectionKind, SectionMap
from models.scoring import (
    BreakdownDetails,
    FormattingDetails,
    KeywordDetails,
    ReadabilityDetails,
    ScoreBreakdown,
    StructureDetails,
)
from services.readability import (
    count_syllables,
    count_word_syllables,
    flesch_reading_ease,
    split_sentences,
)
from services.text_utils import non_empty_lines, round_half_up, split_whitespace

logger = logging.getLogger(__name__)

MAX_STRUCTURE = 25
MAX_KEYWORDS = 30
MAX_READABILITY = 25
MAX_FORMATTING = 20

# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------

STRUCTURE_POINTS: dict[str, int] = {
    "contact": 4,
    "summary": 3,
    "experience": 6,
    "education": 4,
    "skills": 4,
    "proper_headings": 2,
    "logical_order": 2,
}

IDEAL_SECTION_ORDER: tuple[SectionKind, ...] = (
    "contact", "summary", "experience", "education", "skills",
)

CANONICAL_HEADING_RE = re.compile(
    r"^(?:contact|summary|objective|experience|work history|education|skills|certifications)",
    re.IGNORECASE,
)


def _ordered_pairs(order: tuple[SectionKind, ...]) -> int:
    """Adjacent section pairs that follow the ideal order."""
    count = 0
    for current, following in zip(order, order[1:]):
        if (
            current in IDEAL_SECTION_ORDER
            and following in IDEAL_SECTION_ORDER
            and IDEAL_SECTION_ORDER.index(current) < IDEAL_SECTION_ORDER.index(following)
        ):
            count += 1
    return count


def score_structure(section_map: SectionMap) -> tuple[int, StructureDetails]:
    details = StructureDetails(
        has_contact=section_map.contact.is_reachable,
        has_summary=bool(section_map.summary),
        has_experience=bool(section_map.experience),
        has_education=bool(section_map.education),
        has_skills=bool(section_map.skills),
        proper_headings=any(
            CANONICAL_HEADING_RE.match(line.strip())
            for line in section_map.raw_text.split("\n")
        ),
        # Pairs are counted over the section map's key order, not the order the
        # sections appear in the document.
        logical_order=_ordered_pairs(SectionMap.SECTION_KEYS) >= 2,
    )

    flags = {
        "contact": details.has_contact,
        "summary": details.has_summary,
        "experience": details.has_experience,
        "education": details.has_education,
        "skills": details.has_skills,
        "proper_headings": details.proper_headings,
        "logical_order": details.logical_order,
    }
    score = sum(STRUCTURE_POINTS[name] for name, present in flags.items() if present)
    return min(score, MAX_STRUCTURE), details


# ---------------------------------------------------------------------------
# Keywords
# ---------------------------------------------------------------------------

ACTION_VERBS: tuple[str, ...] = (
    "achieved", "improved", "trained", "managed", "created", "designed",
    "developed", "implemented", "increased", "decreased", "reduced",
    "led", "coordinated", "executed", "launched", "established",
    "streamlined", "optimized", "resolved", "generated", "delivered",
    "built", "initiated", "spearheaded", "transformed", "accelerated",
)

INDUSTRY_KEYWORDS: tuple[str, ...] = (
    "project management", "agile", "scrum", "leadership", "strategy",
    "analysis", "collaboration", "communication", "problem solving",
    "innovation", "customer service", "sales", "marketing", "finance",
    "operations", "quality assurance", "compliance", "budget", "roi",
)

TECHNICAL_TERMS: tuple[str, ...] = (
    "python", "java", "javascript", "sql", "aws", "azure", "docker",
    "kubernetes", "react", "angular", "node", "api", "database",
    "cloud", "devops", "ci/cd", "git", "linux", "excel", "tableau",
    "powerbi", "salesforce", "sap", "erp", "crm",
)

QUANTIFIABLE_RE = re.compile(
    r"\d+%|\$\d+|\d+\+|increased by \d+|reduced by \d+|saved (?:by )?\d+",
    re.IGNORECASE,
)

# (vocabulary, saturation count, max points)
_VOCABULARY_WEIGHTS = {
    "action_verbs": (ACTION_VERBS, 10, 8),
    "industry": (INDUSTRY_KEYWORDS, 8, 8),
    "technical": (TECHNICAL_TERMS, 8, 7),
}
QUANTIFIABLE_SATURATION = 5
QUANTIFIABLE_POINTS = 5

OPTIMAL_DENSITY = (2.0, 5.0)  # inclusive, +2
ACCEPTABLE_DENSITY = (1.0, 6.0)  # exclusive, +1


def count_vocabulary(text: str, vocabulary: tuple[str, ...]) -> int:
    """Number of vocabulary entries contained anywhere in ``text``."""
    return sum(1 for term in vocabulary if term in text)


def _saturating(count: int, saturation: int, points: int) -> float:
    return min(count / saturation * points, points)


def score_keywords(section_map: SectionMap) -> tuple[int, KeywordDetails]:
    text = section_map.raw_text.lower()

    counts = {
        name: count_vocabulary(text, vocabulary)
        for name, (vocabulary, _, _) in _VOCABULARY_WEIGHTS.items()
    }
    achievements = len(QUANTIFIABLE_RE.findall(text))

    score = sum(
        _saturating(counts[name], saturation, points)
        for name, (_, saturation, points) in _VOCABULARY_WEIGHTS.items()
    )
    score += _saturating(achievements, QUANTIFIABLE_SATURATION, QUANTIFIABLE_POINTS)

    total_words = len(split_whitespace(text))
    density = sum(counts.values()) / total_words * 100 if total_words > 0 else 0.0
    if OPTIMAL_DENSITY[0] <= density <= OPTIMAL_DENSITY[1]:
        score += 2
    elif ACCEPTABLE_DENSITY[0] < density < ACCEPTABLE_DENSITY[1]:
        score += 1

    details = KeywordDetails(
        action_verb_count=counts["action_verbs"],
        industry_keyword_count=counts["industry"],
        technical_skill_count=counts["technical"],
        quantifiable_achievements=achievements,
        keyword_density=density,
    )
    return min(int(round_half_up(score)), MAX_KEYWORDS), details


# ---------------------------------------------------------------------------
# Readability
# ---------------------------------------------------------------------------

# (low, high, points, label); checked in order, first hit wins
FLESCH_BANDS: tuple[tuple[float, float, int, str], ...] = (
    (60, 70, 15, "Excellent"),
    (50, 80, 12, "Good"),
    (40, 90, 9, "Fair"),
)
FLESCH_FALLBACK = (5, "Needs Improvement")


def _flesch_band(flesch: float) -> tuple[int, str]:
    low, high, points, label = FLESCH_BANDS[0]
    if low <= flesch <= high:
        return points, label
    for low, high, points, label in FLESCH_BANDS[1:]:
        if low <= flesch < high:
            return points, label
    return FLESCH_FALLBACK


def score_readability(section_map: SectionMap) -> tuple[int, ReadabilityDetails]:
    text = section_map.raw_text
    sentences = split_sentences(text)
    words = text.split()

    score = 0
    flesch = 0.0
    avg_sentence_length = 0.0
    avg_word_length = 0.0
    level = ""

    if sentences and words:
        avg_sentence_length = len(words) / len(sentences)
        avg_word_length = len(re.sub(r"\s", "", text)) / len(words)
        avg_syllables = count_syllables(text) / len(words)
        flesch = flesch_reading_ease(avg_sentence_length, avg_syllables)
        points, level = _flesch_band(flesch)
        score += points

    if 15 <= avg_sentence_length <= 20:
        score += 5
    elif 12 <= avg_sentence_length <= 25:
        score += 3
    else:
        score += 1

    complex_words = [w for w in words if count_word_syllables(w) >= 3]
    complex_pct = len(complex_words) / len(words) * 100 if words else 0.0
    if complex_pct <= 15:
        score += 5
    elif complex_pct <= 25:
        score += 3
    else:
        score += 1

    details = ReadabilityDetails(
        flesch_score=flesch,
        avg_sentence_length=avg_sentence_length,
        avg_word_length=avg_word_length,
        complex_word_percentage=complex_pct,
        readability_level=level,
    )
    return min(score, MAX_READABILITY), details


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

BULLET_RE = re.compile(r"^\s*[•\-*◦▪]\s", re.MULTILINE)

DATE_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\d{4}\s*-\s*\d{4}", re.ASCII),   # 2020 - 2023
    re.compile(r"\d{4}\s*–\s*\d{4}", re.ASCII),   # 2020 – 2023
    re.compile(r"\w+\s+\d{4}", re.ASCII),         # January 2020
    re.compile(r"\d{1,2}/\d{4}", re.ASCII),       # 01/2020
)
_YEAR_RANGE_RE = re.compile(r"\d{4}\s*[-–]\s*\d{4}", re.ASCII)
_MONTH_YEAR_RE = re.compile(r"\w+\s+\d{4}", re.ASCII)
_NUMERIC_DATE_RE = re.compile(r"\d{1,2}/\d{4}", re.ASCII)

_ALL_CAPS_RE = re.compile(r"[A-Z\s]+")
_TITLE_RE = re.compile(r"[A-Z][a-z\s]+")

SPECIAL_CHAR_RE = re.compile(r"[^A-Za-z0-9_\s\-.,;:()\[\]/]")


def date_format(date: str) -> str:
    """Classify a date string's shape."""
    if _YEAR_RANGE_RE.search(date):
        return "year-range"
    if _MONTH_YEAR_RE.search(date):
        return "month-year"
    if _NUMERIC_DATE_RE.search(date):
        return "numeric"
    return "unknown"


def find_dates(text: str) -> list[str]:
    """All date-shaped matches, grouped by pattern in DATE_PATTERNS order."""
    return [m for pattern in DATE_PATTERNS for m in pattern.findall(text)]


def is_heading_line(line: str) -> bool:
    return bool(_ALL_CAPS_RE.fullmatch(line) or _TITLE_RE.fullmatch(line))


def score_formatting(section_map: SectionMap) -> tuple[int, FormattingDetails]:
    text = section_map.raw_text
    details = FormattingDetails()
    score = 0

    if BULLET_RE.search(text):
        details.has_bullet_points = True
        score += 5

    dates = find_dates(text)
    if len(dates) >= 2:
        first = date_format(dates[0])
        if all(date_format(d) == first for d in dates[1:]):
            details.has_consistent_dates = True
            score += 5
        else:
            score += 2

    headings = [line for line in non_empty_lines(text) if is_heading_line(line)]
    if len(headings) >= 3:
        details.has_consistent_formatting = True
        score += 4
    elif headings:
        score += 2

    word_count = len(text.split())
    if 300 <= word_count <= 800:
        details.proper_length = True
        score += 3
    elif 200 <= word_count <= 1000:
        score += 2
    else:
        score += 1

    special_ratio = len(SPECIAL_CHAR_RE.findall(text)) / len(text) if text else None
    if special_ratio is not None and special_ratio < 0.01:
        details.no_special_characters = True
        score += 3
    elif special_ratio is not None and special_ratio < 0.02:
        score += 2
    else:
        score += 1

    return min(score, MAX_FORMATTING), details


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------


def score(section_map: SectionMap) -> ScoreBreakdown:
    """Run all four scorers and sum them into a ScoreBreakdown."""
    structure_score, structure = score_structure(section_map)
    keyword_score, keywords = score_keywords(section_map)
    readability_score, readability = score_readability(section_map)
    formatting_score, formatting = score_formatting(section_map)

    total = int(round_half_up(
        structure_score + keyword_score + readability_score + formatting_score
    ))
    logger.debug(
        "ATS score %d (structure=%d keywords=%d readability=%d formatting=%d)",
        total, structure_score, keyword_score, readability_score, formatting_score,
    )
    return ScoreBreakdown(
        structure_score=structure_score,
        keyword_score=keyword_score,
        readability_score=readability_score,
        formatting_score=formatting_score,
        total_score=total,
        breakdown=BreakdownDetails(
            structure=structure,
            keywords=keywords,
            readability=readability,
            formatting=formatting,
        ),
    )
